"""SQLite catalog for the local backend."""

import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import List

from .models import TABLE_NAME, CatalogError, CatalogItem, ItemId, NewCatalogItem


UPDATABLE_COLUMNS = {"setsumei_japanese", "setsumei_english", "translated_at"}


class CatalogDB:
    """Local catalog with the same contract as the hosted table."""

    def __init__(self, db_path: Path):
        """Initialize database connection and create schema if needed."""
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(str(self.db_path))
        self.conn.row_factory = sqlite3.Row
        self._create_schema()

    def _create_schema(self):
        """Create database schema if it doesn't exist."""
        cursor = self.conn.cursor()

        # no UNIQUE(volume, item_number): re-running extraction duplicates rows
        # exactly as the hosted table does
        cursor.execute(f"""
            CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                volume INTEGER NOT NULL,
                item_number INTEGER NOT NULL,
                oshigata_url TEXT NOT NULL,
                setsumei_url TEXT NOT NULL,
                pdf_page_oshigata INTEGER NOT NULL,
                pdf_page_setsumei INTEGER NOT NULL,
                setsumei_japanese TEXT,
                setsumei_english TEXT,
                translated_at TEXT,
                created_at TEXT NOT NULL
            )
        """)

        cursor.execute(f"""
            CREATE INDEX IF NOT EXISTS idx_{TABLE_NAME}_volume_item
            ON {TABLE_NAME} (volume, item_number)
        """)

        self.conn.commit()

    def insert(self, item: NewCatalogItem) -> CatalogItem:
        """Insert a new record and return it with its assigned id."""
        created_at = datetime.now(timezone.utc).isoformat()
        row = item.to_row()

        try:
            cursor = self.conn.cursor()
            cursor.execute(
                f"""
                INSERT INTO {TABLE_NAME}
                (volume, item_number, oshigata_url, setsumei_url,
                 pdf_page_oshigata, pdf_page_setsumei, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
                (
                    row["volume"],
                    row["item_number"],
                    row["oshigata_url"],
                    row["setsumei_url"],
                    row["pdf_page_oshigata"],
                    row["pdf_page_setsumei"],
                    created_at,
                ),
            )
            self.conn.commit()
        except sqlite3.Error as e:
            raise CatalogError(f"Database insert failed: {e}") from e

        return CatalogItem(id=cursor.lastrowid, **row)

    def update(self, item_id: ItemId, values: dict) -> None:
        """Set transcription fields on one record."""
        unknown = set(values) - UPDATABLE_COLUMNS
        if unknown:
            raise CatalogError(f"Cannot update columns: {', '.join(sorted(unknown))}")

        assignments = ", ".join(f"{column} = ?" for column in values)
        try:
            cursor = self.conn.cursor()
            cursor.execute(
                f"UPDATE {TABLE_NAME} SET {assignments} WHERE id = ?",
                (*values.values(), item_id),
            )
            self.conn.commit()
        except sqlite3.Error as e:
            raise CatalogError(f"Database update failed: {e}") from e

        if cursor.rowcount == 0:
            raise CatalogError(f"No catalog item with id {item_id}")

    def select_untranslated(self) -> List[CatalogItem]:
        """Records without an English translation, by volume then item number."""
        return self._select("WHERE setsumei_english IS NULL")

    def select_all(self) -> List[CatalogItem]:
        return self._select("")

    def get(self, item_id: ItemId) -> CatalogItem | None:
        items = self._select("WHERE id = ?", (item_id,))
        return items[0] if items else None

    def _select(self, where: str, params: tuple = ()) -> List[CatalogItem]:
        try:
            cursor = self.conn.cursor()
            cursor.execute(
                f"SELECT * FROM {TABLE_NAME} {where} ORDER BY volume ASC, item_number ASC, id ASC",
                params,
            )
            return [CatalogItem.from_row(dict(row)) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            raise CatalogError(f"Database query failed: {e}") from e

    def close(self):
        """Close database connection."""
        self.conn.close()
