"""
Append-only plain-text log of every processed memo.
"""
from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import Optional


def append_memo(path: str, text: str, timestamp: Optional[datetime] = None) -> None:
    """Append ``<ISO timestamp> | <text>`` as one line to *path*."""
    timestamp = timestamp or datetime.now(timezone.utc)
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "a", encoding="utf-8") as fh:
        fh.write(f"{timestamp.isoformat()} | {text}\n")
