"""Catalog repository contract and the hosted (Supabase/PostgREST) implementation."""

import logging
from typing import List, Protocol

import httpx
from postgrest.exceptions import APIError

from .models import TABLE_NAME, CatalogError, CatalogItem, ItemId, NewCatalogItem


logger = logging.getLogger(__name__)


class CatalogRepository(Protocol):
    """Durable storage of one record per catalog item."""

    def insert(self, item: NewCatalogItem) -> CatalogItem:
        """Create a record; raises CatalogError."""
        ...

    def update(self, item_id: ItemId, values: dict) -> None:
        """Set fields on an existing record; raises CatalogError."""
        ...

    def select_untranslated(self) -> List[CatalogItem]:
        """Records whose setsumei_english is null, ordered by volume, item_number."""
        ...

    def select_all(self) -> List[CatalogItem]:
        """Every record, ordered by volume, item_number."""
        ...


class SupabaseCatalog:
    """The nihonto_items table behind Supabase's REST API."""

    def __init__(self, client):
        self._client = client

    def _table(self):
        return self._client.table(TABLE_NAME)

    def insert(self, item: NewCatalogItem) -> CatalogItem:
        row = item.to_row()
        try:
            response = self._table().insert(row).execute()
        except (APIError, httpx.HTTPError) as e:
            raise CatalogError(f"Database insert failed: {_message(e)}") from e

        if not response.data:
            raise CatalogError("Database insert returned no row")
        return CatalogItem.from_row(response.data[0])

    def update(self, item_id: ItemId, values: dict) -> None:
        try:
            response = self._table().update(values).eq("id", item_id).execute()
        except (APIError, httpx.HTTPError) as e:
            raise CatalogError(f"Database update failed: {_message(e)}") from e

        if not response.data:
            raise CatalogError(f"No catalog item with id {item_id}")

    def select_untranslated(self) -> List[CatalogItem]:
        query = self._table().select("*").is_("setsumei_english", "null")
        return self._fetch(query)

    def select_all(self) -> List[CatalogItem]:
        return self._fetch(self._table().select("*"))

    def _fetch(self, query) -> List[CatalogItem]:
        try:
            response = query.order("volume").order("item_number").execute()
        except (APIError, httpx.HTTPError) as e:
            raise CatalogError(f"Database error: {_message(e)}") from e

        return [CatalogItem.from_row(row) for row in response.data or []]


def _message(error: Exception) -> str:
    return getattr(error, "message", None) or str(error)
