"""Structured progress events emitted by the orchestrators.

Business code calls ``sink.emit(name, **fields)`` instead of printing, so the
CLI can log events while tests inspect them directly.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol


WARNING_EVENTS = {"pair.skipped"}
ERROR_EVENTS = {"item.failed", "volume.failed"}


@dataclass
class Event:
    name: str
    fields: dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.fields[key]


class EventSink(Protocol):
    """Anything that accepts progress events."""

    def emit(self, name: str, **fields: Any) -> None:
        ...


class LoggingSink:
    """Default sink: one log line per event."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("nihonto.events")

    def emit(self, name: str, **fields: Any) -> None:
        if name in ERROR_EVENTS:
            level = logging.ERROR
        elif name in WARNING_EVENTS:
            level = logging.WARNING
        else:
            level = logging.INFO

        details = " ".join(f"{key}={value}" for key, value in fields.items())
        self.logger.log(level, f"{name} {details}".rstrip())


class RecordingSink:
    """Keeps every event in memory."""

    def __init__(self):
        self.events: list[Event] = []

    def emit(self, name: str, **fields: Any) -> None:
        self.events.append(Event(name, dict(fields)))

    def named(self, name: str) -> list[Event]:
        return [e for e in self.events if e.name == name]

    @property
    def names(self) -> list[str]:
        return [e.name for e in self.events]
