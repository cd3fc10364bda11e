"""Catalog record datastructures."""

from dataclasses import asdict, dataclass, fields
from typing import Any, Optional, Union


TABLE_NAME = "nihonto_items"

ItemId = Union[int, str]


class CatalogError(Exception):
    """Raised when the catalog cannot be read or written."""

    pass


@dataclass
class NewCatalogItem:
    """Fields required to create a record; all must be populated."""

    volume: int
    item_number: int
    oshigata_url: str
    setsumei_url: str
    pdf_page_oshigata: int
    pdf_page_setsumei: int

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None or value == "":
                raise ValueError(f"CatalogItem field '{f.name}' must be populated")

    def to_row(self) -> dict:
        return asdict(self)


@dataclass
class CatalogItem:
    """One sword entry as stored in the catalog."""

    id: ItemId
    volume: int
    item_number: int
    oshigata_url: str
    setsumei_url: str
    pdf_page_oshigata: int
    pdf_page_setsumei: int
    setsumei_japanese: Optional[str] = None
    setsumei_english: Optional[str] = None
    translated_at: Optional[str] = None

    @property
    def label(self) -> str:
        return f"Vol{self.volume} Item {self.item_number}"

    @property
    def is_translated(self) -> bool:
        return self.setsumei_english is not None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "CatalogItem":
        """Build from a database row, ignoring columns the model does not know."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in row.items() if k in known})
