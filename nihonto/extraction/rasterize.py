"""PDF page rasterization via poppler (pdf2image)."""

import logging
from dataclasses import dataclass
from pathlib import Path

from pdf2image import convert_from_path
from pdf2image.exceptions import PDFInfoNotInstalledError, PDFPageCountError, PDFSyntaxError

from .volumes import VolumeSpec


DPI = 300
PAGE_PREFIX = "page"

logger = logging.getLogger(__name__)


class RasterizeError(Exception):
    """Raised when a source PDF cannot be rendered."""

    pass


@dataclass(frozen=True)
class RasterizedPage:
    """One rendered page on local disk."""

    index: int  # position within the rendered range
    page_number: int  # 1-based page in the source PDF
    path: Path

    @property
    def size_bytes(self) -> int:
        return self.path.stat().st_size


def rasterize_volume(volume: VolumeSpec, output_dir: Path, dpi: int = DPI) -> list[RasterizedPage]:
    """Render the volume's content range to sequential JPEGs in output_dir.

    Pages are listed back in filename order; the n-th file corresponds to
    source page ``content_start + n``.
    """
    pdf_path = Path(volume.filename)
    if not pdf_path.exists():
        raise RasterizeError(f"Source PDF not found: {pdf_path}")

    output_dir.mkdir(parents=True, exist_ok=True)
    logger.info(
        f"Extracting pages {volume.content_start}-{volume.content_end} from {pdf_path} at {dpi} DPI"
    )

    try:
        convert_from_path(
            str(pdf_path),
            dpi=dpi,
            first_page=volume.content_start,
            last_page=volume.content_end,
            fmt="jpeg",
            output_folder=str(output_dir),
            output_file=PAGE_PREFIX,
            paths_only=True,
        )
    except (PDFInfoNotInstalledError, PDFPageCountError, PDFSyntaxError) as e:
        raise RasterizeError(f"Failed to rasterize {pdf_path}: {e}") from e

    return list_pages(output_dir, volume.content_start)


def list_pages(pages_dir: Path, start_page: int) -> list[RasterizedPage]:
    """Return rendered pages sorted by filename with their source page numbers."""
    files = sorted(p for p in pages_dir.iterdir() if p.suffix.lower() in (".jpg", ".jpeg"))
    return [
        RasterizedPage(index=i, page_number=start_page + i, path=path)
        for i, path in enumerate(files)
    ]
