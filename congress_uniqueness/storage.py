"""JSON file storage for fetched datasets and analysis reports.

Every file is wrapped in an envelope recording when it was fetched::

    {"fetchedAt": "2024-01-15T12:00:00+00:00", "data": ...}
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from congress_uniqueness.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredData:
    fetched_at: datetime
    data: Any

    @property
    def age_seconds(self) -> float:
        return (datetime.now(timezone.utc) - self.fetched_at).total_seconds()


class JsonStore:
    """Reads and writes enveloped JSON files under one directory."""

    def __init__(self, directory: Path | None = None) -> None:
        self.directory = Path(directory or settings.data_dir)

    def path(self, filename: str) -> Path:
        return self.directory / filename

    def save(self, filename: str, data: Any) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        envelope = {"fetchedAt": datetime.now(timezone.utc).isoformat(), "data": data}
        path = self.path(filename)
        path.write_text(json.dumps(envelope, indent=2, default=str), encoding="utf-8")
        logger.debug("Saved %s", path)
        return path

    def load(self, filename: str) -> StoredData | None:
        """Load a file; None if it is missing or not a valid envelope."""
        path = self.path(filename)
        if not path.exists():
            return None
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            fetched_at = datetime.fromisoformat(raw["fetchedAt"])
        except (OSError, ValueError, KeyError, TypeError):
            logger.warning("Ignoring unreadable data file %s", path)
            return None
        if fetched_at.tzinfo is None:
            fetched_at = fetched_at.replace(tzinfo=timezone.utc)
        return StoredData(fetched_at=fetched_at, data=raw.get("data"))

    def save_report(self, base_name: str, data: Any) -> Path:
        """Save under a timestamped name, e.g. unique-trades-20240115T120000Z.json."""
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        return self.save(f"{base_name}-{stamp}.json", data)

    def list_reports(self) -> list[str]:
        """Report file names, newest first."""
        if not self.directory.exists():
            return []
        return sorted((p.name for p in self.directory.glob("*.json")), reverse=True)

    def latest_report(self, base_name: str) -> str | None:
        return next((name for name in self.list_reports() if name.startswith(base_name)), None)


def format_duration(seconds: float) -> str:
    """Human-readable duration, e.g. ``2d 3h`` or ``45s``."""
    seconds = int(seconds)
    minutes, secs = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    days, hours = divmod(hours, 24)
    if days:
        return f"{days}d {hours}h"
    if hours:
        return f"{hours}h {minutes}m"
    if minutes:
        return f"{minutes}m {secs}s"
    return f"{secs}s"
