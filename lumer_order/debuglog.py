"""Append-only debug log shared by the cart, workflows and app."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path


class DebugLog:
    """Write timestamped `event key=value` lines to a file."""

    def __init__(self, path: str | Path | None) -> None:
        self.path = Path(path) if path is not None else None

    def write(self, message: str) -> None:
        if self.path is None:
            return
        try:
            ts = datetime.now(timezone.utc).isoformat()
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(f"{ts} {message}\n")
        except OSError:
            # Logging must never interfere with app flow.
            return


NULL_LOG = DebugLog(None)
