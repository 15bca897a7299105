"""Draft sequencing package.

Modules:
  - types     : core domain dataclasses (PickRef, DraftPosition, DraftRound, Draft)
  - errors    : DraftError taxonomy (NotFound / RuleViolation / Conflict / Internal)
  - order     : round construction, overall numbering, snake display numbers (pure)
  - cursor    : current/active pick cursor state machine (pure)
  - locks     : process-local write lock for draft mutations
  - lifecycle : create / toggle active / add+remove round / reset / delete (DB)
  - picks     : pick completion + cursor auto-advance + player status (DB)
"""

from __future__ import annotations

from .errors import ConflictError, DraftError, InternalError, NotFoundError, RuleViolation
from .types import Draft, DraftPosition, DraftRound, PickRef

__all__ = [
    "Draft",
    "DraftPosition",
    "DraftRound",
    "PickRef",
    "DraftError",
    "NotFoundError",
    "RuleViolation",
    "ConflictError",
    "InternalError",
]
