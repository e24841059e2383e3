"""JSON-lines error sink — one file per day under a configured directory."""

from __future__ import annotations

import asyncio
import json
from datetime import datetime, timezone
from pathlib import Path

from ticketflow.application.ports.error_log_port import ErrorLogSink


class JsonlErrorLogSink(ErrorLogSink):
    """Appends entries to ``<directory>/errors-YYYY-MM-DD.jsonl``."""

    def __init__(self, directory: str | Path):
        self._dir = Path(directory)

    def path_for(self, when: datetime) -> Path:
        return self._dir / f"errors-{when.strftime('%Y-%m-%d')}.jsonl"

    async def write(self, entry: dict) -> None:
        line = json.dumps(entry, default=str, ensure_ascii=False)
        path = self.path_for(datetime.now(timezone.utc))
        await asyncio.to_thread(self._append, path, line)

    def _append(self, path: Path, line: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(line + "\n")
