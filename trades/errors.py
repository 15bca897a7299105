from __future__ import annotations

"""Trade error codes.

TradeError is the business-rule failure raised by trade validation and
cancellation; it is a RuleViolation so the API maps it like any other draft
rule failure. Missing trades, picks and managers use NotFoundError with the
codes below.
"""

from draft.errors import (  # noqa: F401
    MANAGER_NOT_FOUND,
    NO_ACTIVE_DRAFT,
    PICK_ALREADY_COMPLETE,
    PICK_NOT_FOUND,
    ConflictError,
    DraftError,
    NotFoundError,
    RuleViolation,
)

TRADE_NOT_FOUND = "TRADE_NOT_FOUND"

# Shape / parsing
DEAL_INVALIDATED = "DEAL_INVALIDATED"
TOO_FEW_PARTIES = "TOO_FEW_PARTIES"
DUPLICATE_PARTY = "DUPLICATE_PARTY"
PARTY_HAS_NO_ASSETS = "PARTY_HAS_NO_ASSETS"
DUPLICATE_ASSET = "DUPLICATE_ASSET"

# Receivers
RECEIVER_REQUIRED = "RECEIVER_REQUIRED"
INVALID_RECEIVER = "INVALID_RECEIVER"

# Picks
PICK_NOT_IN_ACTIVE_DRAFT = "PICK_NOT_IN_ACTIVE_DRAFT"
NOT_PICK_OWNER = "NOT_PICK_OWNER"

# Cancellation
TRADE_ALREADY_CANCELLED = "TRADE_ALREADY_CANCELLED"
TRADE_UNWIND_OUT_OF_ORDER = "TRADE_UNWIND_OUT_OF_ORDER"


class TradeError(RuleViolation):
    pass
