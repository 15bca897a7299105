from __future__ import annotations

from dataclasses import dataclass

from ...models import TradeProposal, resolve_asset_receiver
from ..base import TradeContext


@dataclass
class ReceiverRule:
    rule_id: str = "receiver"
    priority: int = 20
    enabled: bool = True

    def validate(self, proposal: TradeProposal, ctx: TradeContext) -> None:
        # resolve_asset_receiver raises RECEIVER_REQUIRED / INVALID_RECEIVER.
        for sender, asset in proposal.iter_assets():
            resolve_asset_receiver(proposal, sender, asset)
