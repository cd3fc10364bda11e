"""File-size heuristic separating oshigata pages from setsumei pages.

At 300 DPI the sword rubbings and measurement annotations compress to much
larger JPEGs than the text-only description pages.
"""

from enum import Enum
from pathlib import Path


THRESHOLD_KB = 150


class PageCategory(str, Enum):
    ILLUSTRATION = "illustration"  # oshigata
    DESCRIPTION = "description"  # setsumei

    @property
    def storage_label(self) -> str:
        return "oshigata" if self is PageCategory.ILLUSTRATION else "setsumei"


def classify_size(size_bytes: int) -> PageCategory:
    """Strictly greater than the threshold is an illustration; 150 KB itself is not."""
    size_kb = size_bytes / 1024
    if size_kb > THRESHOLD_KB:
        return PageCategory.ILLUSTRATION
    return PageCategory.DESCRIPTION


def classify_page(image_path: Path) -> PageCategory:
    """Classify a rendered page by its encoded size on disk."""
    return classify_size(Path(image_path).stat().st_size)
