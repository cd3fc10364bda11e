"""Shared fixtures: rendered pages of known sizes and a local catalog."""

import tempfile
from pathlib import Path

import pytest
from PIL import Image

from nihonto.catalog.db import CatalogDB
from nihonto.catalog.models import NewCatalogItem
from nihonto.extraction.rasterize import RasterizedPage, list_pages
from nihonto.storage import LocalAssetStore


def write_pages(pages_dir: Path, sizes_kb: list, start_page: int = 1) -> list[RasterizedPage]:
    """Write page-NN.jpg files of the given sizes and list them like the rasterizer does."""
    pages_dir.mkdir(parents=True, exist_ok=True)
    for i, size_kb in enumerate(sizes_kb):
        (pages_dir / f"page-{start_page + i:02d}.jpg").write_bytes(b"\xff" * int(size_kb * 1024))
    return list_pages(pages_dir, start_page)


def fake_rasterizer(sizes_kb: list):
    """Rasterizer stand-in producing pages of the given sizes for any volume."""

    def rasterize(volume, output_dir):
        return write_pages(output_dir, sizes_kb, volume.content_start)

    return rasterize


def write_jpeg(path: Path, color=(255, 255, 255)) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    img = Image.new("RGB", (120, 200), color=color)
    img.save(path, format="JPEG")
    return path


@pytest.fixture
def tmp_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def catalog(tmp_dir):
    db = CatalogDB(tmp_dir / "catalog.db")
    yield db
    db.close()


@pytest.fixture
def store(tmp_dir):
    return LocalAssetStore(tmp_dir / "assets")


@pytest.fixture
def stored_items(tmp_dir, catalog):
    """Three untranslated items whose setsumei images exist on disk."""
    items = []
    for volume, item_number in ((1, 1), (1, 2), (2, 1)):
        setsumei = write_jpeg(tmp_dir / "assets" / f"vol{volume}" / f"item_{item_number:03d}_setsumei.jpg")
        oshigata = write_jpeg(
            tmp_dir / "assets" / f"vol{volume}" / f"item_{item_number:03d}_oshigata.jpg", color=(0, 0, 0)
        )
        items.append(
            catalog.insert(
                NewCatalogItem(
                    volume=volume,
                    item_number=item_number,
                    oshigata_url=oshigata.resolve().as_uri(),
                    setsumei_url=setsumei.resolve().as_uri(),
                    pdf_page_oshigata=5 + 2 * (item_number - 1),
                    pdf_page_setsumei=6 + 2 * (item_number - 1),
                )
            )
        )
    return items


@pytest.fixture
def make_pages():
    return write_pages


@pytest.fixture
def make_rasterizer():
    return fake_rasterizer


@pytest.fixture
def make_jpeg():
    return write_jpeg
