from __future__ import annotations

"""Process configuration.

Values are module-level constants read once from the environment at import
time. Callers that need a different db path at runtime (tests, CLI) pass it
explicitly instead of mutating these.
"""

import os
from pathlib import Path
from typing import List, Optional

BASE_DIR = str(Path(__file__).resolve().parent)

DEFAULT_DB_PATH = os.path.join(BASE_DIR, "data", "draft.sqlite3")

DB_PATH = (os.environ.get("DRAFT_DB_PATH") or "").strip() or DEFAULT_DB_PATH

LOG_LEVEL = (os.environ.get("DRAFT_LOG_LEVEL") or "INFO").strip().upper()


def _parse_origins(raw: Optional[str]) -> List[str]:
    s = (raw or "").strip()
    if not s:
        return ["*"]
    return [o.strip() for o in s.split(",") if o.strip()]


CORS_ORIGINS = _parse_origins(os.environ.get("DRAFT_CORS_ORIGINS"))


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    s = (raw or "").strip()
    if not s:
        return None
    try:
        return float(s)
    except ValueError as exc:
        raise ValueError(f"DRAFT_LOCK_TIMEOUT_S must be a number of seconds, got: {raw!r}") from exc


LOCK_TIMEOUT_S = _parse_timeout(os.environ.get("DRAFT_LOCK_TIMEOUT_S"))
