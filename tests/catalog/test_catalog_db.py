"""Tests for the SQLite catalog."""

import pytest

from nihonto.catalog.db import CatalogDB
from nihonto.catalog.models import CatalogError, NewCatalogItem


def new_item(volume=1, item_number=1, **overrides):
    values = dict(
        volume=volume,
        item_number=item_number,
        oshigata_url=f"https://cdn.test/vol{volume}/item_{item_number:03d}_oshigata.jpg",
        setsumei_url=f"https://cdn.test/vol{volume}/item_{item_number:03d}_setsumei.jpg",
        pdf_page_oshigata=5,
        pdf_page_setsumei=6,
    )
    values.update(overrides)
    return NewCatalogItem(**values)


def test_insert_returns_item_with_id(catalog):
    item = catalog.insert(new_item())

    assert item.id is not None
    assert item.label == "Vol1 Item 1"
    assert not item.is_translated
    assert catalog.get(item.id) == item


def test_new_item_requires_every_field():
    with pytest.raises(ValueError):
        new_item(setsumei_url="")
    with pytest.raises(ValueError):
        new_item(pdf_page_oshigata=None)


def test_select_untranslated_order(catalog):
    """Pending items come back by volume, then item number, regardless of insert order."""
    catalog.insert(new_item(2, 1))
    catalog.insert(new_item(1, 2))
    catalog.insert(new_item(1, 1))

    pending = catalog.select_untranslated()

    assert [(i.volume, i.item_number) for i in pending] == [(1, 1), (1, 2), (2, 1)]


def test_update_sets_translation_fields(catalog):
    item = catalog.insert(new_item())
    other = catalog.insert(new_item(1, 2))

    catalog.update(
        item.id,
        {
            "setsumei_japanese": "重要刀剣",
            "setsumei_english": "## Juyo Token",
            "translated_at": "2024-01-01T00:00:00+00:00",
        },
    )

    stored = catalog.get(item.id)
    assert stored.setsumei_japanese == "重要刀剣"
    assert stored.is_translated
    assert [i.id for i in catalog.select_untranslated()] == [other.id]


def test_update_rejects_other_columns(catalog):
    item = catalog.insert(new_item())

    with pytest.raises(CatalogError):
        catalog.update(item.id, {"volume": 9})


def test_update_missing_item(catalog):
    with pytest.raises(CatalogError):
        catalog.update(999, {"setsumei_english": "x"})


def test_duplicate_numbers_allowed(catalog):
    """The table has no uniqueness on (volume, item_number)."""
    catalog.insert(new_item())
    catalog.insert(new_item())

    assert len(catalog.select_all()) == 2


def test_persists_across_connections(tmp_dir):
    db = CatalogDB(tmp_dir / "nested" / "catalog.db")
    db.insert(new_item())
    db.close()

    reopened = CatalogDB(tmp_dir / "nested" / "catalog.db")
    try:
        assert len(reopened.select_all()) == 1
    finally:
        reopened.close()
