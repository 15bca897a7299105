from __future__ import annotations

import logging

from .errors import DEAL_INVALIDATED, DraftError, TradeError
from .models import TradeProposal
from .rules import TradeContext, validate_all

logger = logging.getLogger(__name__)


def validate_trade(proposal: TradeProposal, ctx: TradeContext) -> None:
    try:
        validate_all(proposal, ctx)
    except DraftError:
        raise
    except (TypeError, ValueError, KeyError) as exc:
        # Corrupt payloads or legacy rows surface as a rule failure, never a 500.
        logger.warning("trade validation failed on malformed input: %s", exc)
        raise TradeError(
            DEAL_INVALIDATED,
            "Trade validation failed due to invalid state",
            {"exc_type": type(exc).__name__, "error": str(exc)},
        ) from exc
