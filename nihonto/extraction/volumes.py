"""Volume descriptors with a JSON registry for volumes beyond the built-ins."""

import json
import logging
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Dict, Optional


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VolumeSpec:
    """One source catalog PDF and its inclusive content page range (1-based)."""

    number: int
    filename: str
    content_start: int
    content_end: int

    def __post_init__(self):
        if self.content_start < 1 or self.content_end < self.content_start:
            raise ValueError(
                f"Invalid page range for volume {self.number}: "
                f"{self.content_start}-{self.content_end}"
            )

    @property
    def page_count(self) -> int:
        return self.content_end - self.content_start + 1

    def bounded(self, start: Optional[int] = None, end: Optional[int] = None) -> "VolumeSpec":
        """Return a copy restricted to a test range."""
        return replace(
            self,
            content_start=start if start is not None else self.content_start,
            content_end=end if end is not None else self.content_end,
        )


BUILTIN_VOLUMES: Dict[int, VolumeSpec] = {
    1: VolumeSpec(1, "data/1　第一回重要刀剣等図譜.pdf", 5, 66),
    # page bounds not yet verified against the scan
    2: VolumeSpec(2, "data/2　第二回重要刀剣等図譜.pdf", 5, 82),
}


def registry_path(data_dir: Path) -> Path:
    return data_dir / "volumes.json"


def load_volumes(data_dir: Path) -> Dict[int, VolumeSpec]:
    """Built-in volumes overlaid with any registered in the data directory."""
    volumes = dict(BUILTIN_VOLUMES)
    path = registry_path(data_dir)
    if not path.exists():
        return volumes

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Failed to load volume registry {path}: {e}")
        return volumes

    for key, entry in raw.items():
        try:
            spec = VolumeSpec(**entry)
        except (TypeError, ValueError) as e:
            logger.warning(f"Skipping invalid volume entry {key!r} in {path}: {e}")
            continue
        volumes[spec.number] = spec

    return dict(sorted(volumes.items()))


def add_volume(data_dir: Path, spec: VolumeSpec) -> None:
    """Add or replace a volume in the registry file."""
    path = registry_path(data_dir)
    raw: dict = {}
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)

    raw[str(spec.number)] = asdict(spec)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(raw, f, indent=2, ensure_ascii=False)


def get_volume(data_dir: Path, number: int) -> Optional[VolumeSpec]:
    return load_volumes(data_dir).get(number)
