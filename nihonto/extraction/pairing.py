"""Group rendered pages into oshigata/setsumei pairs."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Sequence

from .classify import PageCategory, classify_page
from .rasterize import RasterizedPage


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedItem:
    """A pair whose two pages were classified differently.

    Catalog item numbers are assigned by the extractor as records are created.
    """

    oshigata_path: Path
    setsumei_path: Path
    pdf_page_oshigata: int
    pdf_page_setsumei: int


@dataclass(frozen=True)
class SkippedPair:
    """A pair whose pages share a category and cannot be assigned."""

    first_page: int
    second_page: int
    category: PageCategory


@dataclass
class PairingResult:
    items: List[ResolvedItem] = field(default_factory=list)
    skipped: List[SkippedPair] = field(default_factory=list)
    dropped_page: int | None = None  # trailing unpaired page, if any


def iter_pairs(pages: Sequence[RasterizedPage]) -> Iterable[tuple[RasterizedPage, RasterizedPage]]:
    """Yield non-overlapping consecutive pairs; an odd trailing page is left out."""
    for i in range(0, len(pages) - 1, 2):
        yield pages[i], pages[i + 1]


def resolve_pairs(
    pages: Sequence[RasterizedPage],
    classify: Callable[[Path], PageCategory] = classify_page,
) -> PairingResult:
    """Assign each pair's pages to the oshigata and setsumei slots.

    Resolved items come back in document order; skipped pairs are reported
    separately and contribute no item.
    """
    result = PairingResult()
    if len(pages) % 2:
        result.dropped_page = pages[-1].page_number

    for first, second in iter_pairs(pages):
        first_type = classify(first.path)
        second_type = classify(second.path)
        logger.debug(
            f"Pages {first.page_number}/{second.page_number} -> {first_type.value}/{second_type.value}"
        )

        if first_type == second_type:
            logger.debug(
                f"Could not determine page types for pages {first.page_number} and "
                f"{second.page_number} (both {first_type.value}), skipping"
            )
            result.skipped.append(SkippedPair(first.page_number, second.page_number, first_type))
            continue

        if first_type is PageCategory.ILLUSTRATION:
            oshigata, setsumei = first, second
        else:
            oshigata, setsumei = second, first

        result.items.append(
            ResolvedItem(
                oshigata_path=oshigata.path,
                setsumei_path=setsumei.path,
                pdf_page_oshigata=oshigata.page_number,
                pdf_page_setsumei=setsumei.page_number,
            )
        )

    return result
