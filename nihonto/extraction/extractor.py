"""Volume extraction: rasterize, pair, upload, and record each item."""

import logging
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from ..catalog.models import CatalogError, NewCatalogItem
from ..catalog.repository import CatalogRepository
from ..events import EventSink, LoggingSink
from ..storage import CONTENT_TYPE_JPEG, AssetStore, StorageError, get_item_image_path
from .classify import PageCategory, classify_page
from .pairing import ResolvedItem, resolve_pairs
from .rasterize import RasterizedPage, RasterizeError, rasterize_volume
from .volumes import VolumeSpec


logger = logging.getLogger(__name__)

Rasterizer = Callable[[VolumeSpec, Path], List[RasterizedPage]]


@dataclass
class VolumeResult:
    """Outcome of extracting one volume."""

    volume: int
    pages: int = 0
    created: int = 0
    failed: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=list)
    error: Optional[str] = None  # set when the volume could not be processed at all

    @property
    def success(self) -> bool:
        return self.error is None and self.failed == 0


def _store_item(
    volume: VolumeSpec,
    item: ResolvedItem,
    item_number: int,
    store: AssetStore,
    catalog: CatalogRepository,
) -> None:
    """Upload both images then insert the catalog record."""
    urls = {}
    for category, local_path in (
        (PageCategory.ILLUSTRATION, item.oshigata_path),
        (PageCategory.DESCRIPTION, item.setsumei_path),
    ):
        storage_path = get_item_image_path(volume.number, item_number, category.storage_label)
        logger.info(f"Uploading {storage_path}...")
        store.upload(storage_path, Path(local_path).read_bytes(), CONTENT_TYPE_JPEG, overwrite=True)
        urls[category] = store.get_public_url(storage_path)

    logger.info(f"Creating database record for Vol{volume.number} Item {item_number}...")
    catalog.insert(
        NewCatalogItem(
            volume=volume.number,
            item_number=item_number,
            oshigata_url=urls[PageCategory.ILLUSTRATION],
            setsumei_url=urls[PageCategory.DESCRIPTION],
            pdf_page_oshigata=item.pdf_page_oshigata,
            pdf_page_setsumei=item.pdf_page_setsumei,
        )
    )


def extract_volume(
    volume: VolumeSpec,
    store: AssetStore,
    catalog: CatalogRepository,
    events: Optional[EventSink] = None,
    rasterize: Optional[Rasterizer] = None,
    classify: Optional[Callable[[Path], PageCategory]] = None,
    dry_run: bool = False,
) -> VolumeResult:
    """Extract every oshigata/setsumei pair of one volume.

    A failed upload or insert is reported and the volume continues. Item
    numbers advance only when a record is created, so stored numbers stay
    dense. Raises RasterizeError if the PDF cannot be rendered.
    """
    events = events or LoggingSink()
    rasterize = rasterize or rasterize_volume
    classify = classify or classify_page
    result = VolumeResult(volume=volume.number)
    events.emit(
        "volume.started",
        volume=volume.number,
        first_page=volume.content_start,
        last_page=volume.content_end,
    )

    with tempfile.TemporaryDirectory(prefix=f"vol{volume.number}_") as tmpdir:
        pages = rasterize(volume, Path(tmpdir))
        result.pages = len(pages)
        events.emit("volume.rasterized", volume=volume.number, pages=len(pages))

        pairing = resolve_pairs(pages, classify)
        for pair in pairing.skipped:
            result.skipped += 1
            events.emit(
                "pair.skipped",
                volume=volume.number,
                first_page=pair.first_page,
                second_page=pair.second_page,
                category=pair.category.value,
            )
        if pairing.dropped_page is not None:
            logger.debug(f"Dropping unpaired trailing page {pairing.dropped_page}")

        item_number = 1
        for item in pairing.items:
            if dry_run:
                events.emit(
                    "item.resolved",
                    volume=volume.number,
                    item_number=item_number,
                    pdf_page_oshigata=item.pdf_page_oshigata,
                    pdf_page_setsumei=item.pdf_page_setsumei,
                )
                item_number += 1
                continue

            try:
                _store_item(volume, item, item_number, store, catalog)
            except (StorageError, CatalogError, OSError, ValueError) as e:
                result.failed += 1
                result.errors.append(f"Item {item_number}: {e}")
                events.emit("item.failed", volume=volume.number, item_number=item_number, error=str(e))
                continue

            result.created += 1
            events.emit(
                "item.created",
                volume=volume.number,
                item_number=item_number,
                pdf_page_oshigata=item.pdf_page_oshigata,
                pdf_page_setsumei=item.pdf_page_setsumei,
            )
            item_number += 1

    events.emit(
        "volume.completed",
        volume=volume.number,
        created=result.created,
        failed=result.failed,
        skipped=result.skipped,
    )
    return result


def extract_volumes(
    volumes: Iterable[VolumeSpec],
    store: AssetStore,
    catalog: CatalogRepository,
    events: Optional[EventSink] = None,
    **kwargs,
) -> List[VolumeResult]:
    """Process volumes in order; a volume that cannot be rendered does not stop the rest."""
    events = events or LoggingSink()
    results = []
    for volume in volumes:
        try:
            results.append(extract_volume(volume, store, catalog, events=events, **kwargs))
        except RasterizeError as e:
            events.emit("volume.failed", volume=volume.number, error=str(e))
            results.append(VolumeResult(volume=volume.number, error=str(e)))
    return results
