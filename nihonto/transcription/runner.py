"""Translation run over every untranslated catalog item."""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ..catalog.repository import CatalogRepository
from ..events import EventSink, LoggingSink
from .pipeline import TranscriptionPipeline, TranscriptionResult


ITEM_DELAY_SECONDS = 2.0

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    """Per-item results of one translation run."""

    results: List[TranscriptionResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def successful(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failures(self) -> List[TranscriptionResult]:
        return [r for r in self.results if not r.success]

    @property
    def failed(self) -> int:
        return len(self.failures)


def translate_pending(
    catalog: CatalogRepository,
    pipeline: TranscriptionPipeline,
    events: Optional[EventSink] = None,
    delay: float = ITEM_DELAY_SECONDS,
    limit: Optional[int] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> RunSummary:
    """Transcribe untranslated items one at a time, pausing between items.

    Raises CatalogError if the work list cannot be fetched; per-item failures
    are collected in the summary instead.
    """
    events = events or LoggingSink()

    items = catalog.select_untranslated()
    if limit is not None:
        items = items[:limit]
    events.emit("run.started", items=len(items))

    summary = RunSummary()
    for index, item in enumerate(items):
        if index:
            sleep(delay)

        events.emit("item.started", volume=item.volume, item_number=item.item_number)
        result = pipeline.process(item)
        summary.results.append(result)

        if result.success:
            events.emit("item.translated", volume=item.volume, item_number=item.item_number)
        else:
            events.emit(
                "item.failed",
                volume=item.volume,
                item_number=item.item_number,
                stage=result.stage,
                error=result.error,
            )

    events.emit("run.completed", successful=summary.successful, failed=summary.failed, total=summary.total)
    return summary
