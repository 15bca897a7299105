from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...errors import DUPLICATE_ASSET, TradeError
from ...models import DraftPickAsset, PlayerAsset, TradeProposal
from ..base import TradeContext


@dataclass
class DuplicateAssetRule:
    rule_id: str = "duplicate_asset"
    priority: int = 30
    enabled: bool = True

    def validate(self, proposal: TradeProposal, ctx: TradeContext) -> None:
        seen: dict[Any, str] = {}
        for sender, asset in proposal.iter_assets():
            if isinstance(asset, DraftPickAsset):
                key: Any = ("pick",) + asset.pick_key
            elif isinstance(asset, PlayerAsset):
                key = ("player", asset.player_id)
            else:
                continue
            if key in seen:
                raise TradeError(
                    DUPLICATE_ASSET,
                    "An asset can appear only once in a trade",
                    {
                        "rule": self.rule_id,
                        "asset": list(key),
                        "first_sender": seen[key],
                        "second_sender": sender,
                    },
                )
            seen[key] = sender
