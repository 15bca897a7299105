from __future__ import annotations

from dataclasses import dataclass

from ...errors import (
    NO_ACTIVE_DRAFT,
    PICK_ALREADY_COMPLETE,
    PICK_NOT_FOUND,
    PICK_NOT_IN_ACTIVE_DRAFT,
    NotFoundError,
    TradeError,
)
from ...models import TradeProposal
from ..base import TradeContext


@dataclass
class PickAvailabilityRule:
    """Traded picks must be unmade picks of the active draft."""

    rule_id: str = "pick_availability"
    priority: int = 40
    enabled: bool = True

    def validate(self, proposal: TradeProposal, ctx: TradeContext) -> None:
        picks = proposal.pick_assets()
        if not picks:
            return

        draft = ctx.active_draft
        if draft is None:
            raise NotFoundError(
                NO_ACTIVE_DRAFT,
                "Draft picks can only be traded while a draft is active",
                {"rule": self.rule_id},
            )

        for sender, asset in picks:
            details = {
                "rule": self.rule_id,
                "sender": sender,
                "draft_id": asset.draft_id,
                "overall_pick_number": int(asset.overall_pick_number),
            }
            if asset.draft_id != draft.draft_id:
                raise TradeError(
                    PICK_NOT_IN_ACTIVE_DRAFT,
                    "Pick does not belong to the active draft",
                    dict(details, active_draft_id=draft.draft_id),
                )
            found = draft.find_pick(asset.overall_pick_number)
            if found is None:
                raise NotFoundError(PICK_NOT_FOUND, "Pick not found", details)
            _, pick = found
            if pick.is_complete:
                raise TradeError(PICK_ALREADY_COMPLETE, "A completed pick cannot be traded", details)
