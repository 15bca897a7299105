from __future__ import annotations

"""Trade domain models + payload parsing.

A trade is a list of parties; each party lists the assets it sends. Every
asset goes to exactly one other party (its receiver):
  - 2-party trades: the receiver defaults to the other party.
  - 3+ party trades: the receiver must be given explicitly (to_manager_id).

resolve_asset_receiver() is the only place that infers a receiver. Stored
trades always carry explicit receivers (canonicalize_parties).
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from schema import normalize_draft_id, normalize_manager_id, normalize_player_id

from .errors import DEAL_INVALIDATED, INVALID_RECEIVER, RECEIVER_REQUIRED, TradeError

TRADE_STATUS_ACTIVE = "active"
TRADE_STATUS_CANCELLED = "cancelled"

ASSET_DRAFT_PICK = "DraftPick"
ASSET_PLAYER = "Player"
ASSET_OTHER = "Other"


@dataclass(frozen=True)
class DraftPickAsset:
    draft_id: str
    overall_pick_number: int
    to_manager_id: Optional[str] = None
    kind: str = ASSET_DRAFT_PICK

    @property
    def pick_key(self) -> Tuple[str, int]:
        return (self.draft_id, int(self.overall_pick_number))


@dataclass(frozen=True)
class PlayerAsset:
    player_id: str
    to_manager_id: Optional[str] = None
    kind: str = ASSET_PLAYER


@dataclass(frozen=True)
class OtherAsset:
    description: str
    to_manager_id: Optional[str] = None
    kind: str = ASSET_OTHER


Asset = Union[DraftPickAsset, PlayerAsset, OtherAsset]


@dataclass(frozen=True)
class TradeParty:
    manager_id: str
    assets: Tuple[Asset, ...]


@dataclass(frozen=True)
class TradeProposal:
    parties: Tuple[TradeParty, ...]
    notes: Optional[str] = None

    @property
    def manager_ids(self) -> List[str]:
        return [p.manager_id for p in self.parties]

    def iter_assets(self):
        for party in self.parties:
            for asset in party.assets:
                yield party.manager_id, asset

    def pick_assets(self) -> List[Tuple[str, DraftPickAsset]]:
        return [(sender, a) for sender, a in self.iter_assets() if isinstance(a, DraftPickAsset)]


@dataclass(frozen=True)
class Trade:
    trade_id: str
    parties: Tuple[TradeParty, ...]
    notes: Optional[str]
    status: str
    created_at: str
    cancelled_at: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == TRADE_STATUS_ACTIVE

    def as_proposal(self) -> TradeProposal:
        return TradeProposal(parties=self.parties, notes=self.notes)


# ----------------------------
# Parsing
# ----------------------------

def _invalid(message: str, details: Optional[Dict[str, Any]] = None) -> TradeError:
    return TradeError(DEAL_INVALIDATED, message, details)


def _opt_manager_id(value: Any) -> Optional[str]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return normalize_manager_id(value)


def parse_asset(raw: Mapping[str, Any]) -> Asset:
    if not isinstance(raw, Mapping):
        raise _invalid("Asset must be an object", {"asset": raw})
    kind = str(raw.get("type") or raw.get("kind") or "").strip()
    try:
        to_manager_id = _opt_manager_id(raw.get("to_manager_id"))
        if kind == ASSET_DRAFT_PICK:
            overall = raw.get("overall_pick_number")
            if overall is None or isinstance(overall, bool):
                raise _invalid("DraftPick asset requires overall_pick_number", {"asset": dict(raw)})
            return DraftPickAsset(
                draft_id=normalize_draft_id(raw.get("draft_id")),
                overall_pick_number=int(overall),
                to_manager_id=to_manager_id,
            )
        if kind == ASSET_PLAYER:
            return PlayerAsset(player_id=normalize_player_id(raw.get("player_id")), to_manager_id=to_manager_id)
        if kind == ASSET_OTHER:
            description = str(raw.get("description") or "").strip()
            if not description:
                raise _invalid("Other asset requires a description", {"asset": dict(raw)})
            return OtherAsset(description=description, to_manager_id=to_manager_id)
    except (TypeError, ValueError) as exc:
        raise _invalid(str(exc), {"asset": dict(raw)}) from exc
    raise _invalid(
        "Unknown asset type",
        {"type": kind, "allowed": [ASSET_DRAFT_PICK, ASSET_PLAYER, ASSET_OTHER]},
    )


def parse_trade_parties(raw_parties: Any) -> Tuple[TradeParty, ...]:
    if not isinstance(raw_parties, (list, tuple)):
        raise _invalid("parties must be a list", {"parties_type": type(raw_parties).__name__})
    parties: List[TradeParty] = []
    for raw in raw_parties:
        if not isinstance(raw, Mapping):
            raise _invalid("Party must be an object", {"party": raw})
        try:
            manager_id = normalize_manager_id(raw.get("manager_id"))
        except ValueError as exc:
            raise _invalid(str(exc), {"party": dict(raw)}) from exc
        raw_assets = raw.get("assets") or []
        if not isinstance(raw_assets, (list, tuple)):
            raise _invalid("Party assets must be a list", {"manager_id": manager_id})
        parties.append(TradeParty(manager_id=manager_id, assets=tuple(parse_asset(a) for a in raw_assets)))
    return tuple(parties)


def parse_trade_proposal(raw_parties: Any, notes: Any = None) -> TradeProposal:
    text = str(notes).strip() if notes is not None else ""
    return TradeProposal(parties=parse_trade_parties(raw_parties), notes=text or None)


# ----------------------------
# Receivers
# ----------------------------

def resolve_asset_receiver(proposal: TradeProposal, sender_manager_id: str, asset: Asset) -> str:
    """Return the manager receiving `asset` from `sender_manager_id`.

    Raises TradeError when the receiver is missing in a 3+ party trade, is not
    a party of the trade, or is the sender itself.
    """
    parties = proposal.manager_ids
    sender = str(sender_manager_id)
    receiver = asset.to_manager_id
    if receiver is None:
        if len(parties) != 2:
            raise TradeError(
                RECEIVER_REQUIRED,
                "Trades with more than two parties must name a receiver for every asset",
                {"sender": sender, "parties": parties, "asset_kind": asset.kind},
            )
        others = [m for m in parties if m != sender]
        if len(others) != 1:
            raise TradeError(
                INVALID_RECEIVER,
                "Receiver cannot be inferred",
                {"sender": sender, "parties": parties},
            )
        return others[0]
    if receiver == sender or receiver not in parties:
        raise TradeError(
            INVALID_RECEIVER,
            "Receiver must be a different party of the trade",
            {"sender": sender, "receiver": receiver, "parties": parties},
        )
    return receiver


def canonicalize_parties(proposal: TradeProposal) -> TradeProposal:
    """Same proposal with every asset's receiver made explicit."""
    parties = tuple(
        TradeParty(
            manager_id=party.manager_id,
            assets=tuple(
                replace(asset, to_manager_id=resolve_asset_receiver(proposal, party.manager_id, asset))
                for asset in party.assets
            ),
        )
        for party in proposal.parties
    )
    return replace(proposal, parties=parties)


# ----------------------------
# Serialization
# ----------------------------

def serialize_asset(asset: Asset) -> Dict[str, Any]:
    out: Dict[str, Any] = {"type": asset.kind, "to_manager_id": asset.to_manager_id}
    if isinstance(asset, DraftPickAsset):
        out["draft_id"] = asset.draft_id
        out["overall_pick_number"] = int(asset.overall_pick_number)
    elif isinstance(asset, PlayerAsset):
        out["player_id"] = asset.player_id
    else:
        out["description"] = asset.description
    return out


def serialize_parties(parties: Sequence[TradeParty]) -> List[Dict[str, Any]]:
    return [
        {"manager_id": p.manager_id, "assets": [serialize_asset(a) for a in p.assets]}
        for p in parties
    ]


def serialize_trade(trade: Trade) -> Dict[str, Any]:
    return {
        "id": trade.trade_id,
        "created_at": trade.created_at,
        "status": trade.status,
        "cancelled_at": trade.cancelled_at,
        "notes": trade.notes,
        "parties": serialize_parties(trade.parties),
    }


def trade_from_row(row: Mapping[str, Any]) -> Trade:
    return Trade(
        trade_id=str(row["trade_id"]),
        parties=parse_trade_parties(row.get("parties") or []),
        notes=row.get("notes"),
        status=str(row.get("status") or TRADE_STATUS_ACTIVE),
        created_at=str(row.get("created_at") or ""),
        cancelled_at=row.get("cancelled_at"),
    )
