from __future__ import annotations

"""Draft error taxonomy.

Every failure that a caller can act on is a DraftError carrying:
  - code    : stable machine-readable string (constants below)
  - message : human-readable summary
  - details : dict with the identities involved (draft_id, pick, trade_id, ...)

The subclass decides the category (and therefore the HTTP status used by the
API layer):
  - NotFoundError  : referenced draft / round / pick / trade / manager missing
  - RuleViolation  : business rule rejected the request (client error)
  - ConflictError  : the request collides with recorded state
  - InternalError  : persistence failure; logged, surfaced generically
"""

from typing import Any, Dict, Optional

NOT_FOUND = "NOT_FOUND"
RULE_VIOLATION = "RULE_VIOLATION"
CONFLICT = "CONFLICT"
INTERNAL = "INTERNAL"

# Not found
DRAFT_NOT_FOUND = "DRAFT_NOT_FOUND"
NO_ACTIVE_DRAFT = "NO_ACTIVE_DRAFT"
PICK_NOT_FOUND = "PICK_NOT_FOUND"
MANAGER_NOT_FOUND = "MANAGER_NOT_FOUND"

# Rule violations
EMPTY_DRAFT_ORDER = "EMPTY_DRAFT_ORDER"
DUPLICATE_MANAGER_IN_ORDER = "DUPLICATE_MANAGER_IN_ORDER"
INVALID_ROUND = "INVALID_ROUND"
INVALID_REQUEST = "INVALID_REQUEST"
CANNOT_ADVANCE_PAST_FINAL_PICK = "CANNOT_ADVANCE_PAST_FINAL_PICK"
NO_INCOMPLETE_PICKS = "NO_INCOMPLETE_PICKS"
CANNOT_REMOVE_ONLY_ROUND = "CANNOT_REMOVE_ONLY_ROUND"
ROUND_HAS_COMPLETED_PICKS = "ROUND_HAS_COMPLETED_PICKS"
ROUND_HAS_TRADED_PICKS = "ROUND_HAS_TRADED_PICKS"
ROUND_CONTAINS_CURRENT_PICK = "ROUND_CONTAINS_CURRENT_PICK"
DRAFT_NOT_ACTIVE = "DRAFT_NOT_ACTIVE"
PICK_NOT_OWNED = "PICK_NOT_OWNED"

# Conflicts
PICK_ALREADY_COMPLETE = "PICK_ALREADY_COMPLETE"
PLAYER_ALREADY_DRAFTED = "PLAYER_ALREADY_DRAFTED"
WRITE_LOCK_TIMEOUT = "WRITE_LOCK_TIMEOUT"

# Internal
PERSISTENCE_FAILED = "PERSISTENCE_FAILED"
INTEGRITY_CHECK_FAILED = "INTEGRITY_CHECK_FAILED"


class DraftError(Exception):
    kind = INTERNAL

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.code = str(code)
        self.message = str(message)
        self.details: Dict[str, Any] = dict(details or {})

    def to_payload(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "kind": self.kind,
            "message": self.message,
            "details": dict(self.details),
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, {self.message!r}, {self.details!r})"


class NotFoundError(DraftError):
    kind = NOT_FOUND


class RuleViolation(DraftError):
    kind = RULE_VIOLATION


class ConflictError(DraftError):
    kind = CONFLICT


class InternalError(DraftError):
    kind = INTERNAL


__all__ = [
    "DraftError",
    "NotFoundError",
    "RuleViolation",
    "ConflictError",
    "InternalError",
]
