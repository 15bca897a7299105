from __future__ import annotations

"""Canonical identifiers.

- draft_id   : "D" + 32 hex chars (uuid4), e.g. "D3f2c..."
- trade_id   : "T" + 32 hex chars
- manager_id : "M" + 32 hex chars for generated ids; imported ids are kept
               as-is after stripping (any non-empty string without spaces)
- player_id  : opaque, owned by the player-record collaborator

All normalizers fail loud with ValueError; they never invent a value.
"""

import re
import uuid
from typing import Any

SCHEMA_VERSION = "1.0"

DRAFT_ID_PREFIX = "D"
TRADE_ID_PREFIX = "T"
MANAGER_ID_PREFIX = "M"

_TOKEN_RE = re.compile(r"^[A-Za-z0-9_\-:.]+$")


def new_id(prefix: str) -> str:
    return f"{prefix}{uuid.uuid4().hex}"


def _normalize_token(value: Any, *, field: str) -> str:
    if value is None or isinstance(value, bool):
        raise ValueError(f"{field} is required")
    s = str(value).strip()
    if not s:
        raise ValueError(f"{field} is required")
    if not _TOKEN_RE.match(s):
        raise ValueError(f"{field} has invalid characters: {value!r}")
    return s


def normalize_manager_id(value: Any) -> str:
    return _normalize_token(value, field="manager_id")


def normalize_draft_id(value: Any) -> str:
    return _normalize_token(value, field="draft_id")


def normalize_trade_id(value: Any) -> str:
    return _normalize_token(value, field="trade_id")


def normalize_player_id(value: Any) -> str:
    return _normalize_token(value, field="player_id")
