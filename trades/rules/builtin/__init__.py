from __future__ import annotations

from .deal_shape_rule import DealShapeRule
from .duplicate_asset_rule import DuplicateAssetRule
from .manager_exists_rule import ManagerExistsRule
from .ownership_rule import OwnershipRule
from .pick_availability_rule import PickAvailabilityRule
from .receiver_rule import ReceiverRule

BUILTIN_RULES = [
    DealShapeRule(),
    ReceiverRule(),
    ManagerExistsRule(),
    DuplicateAssetRule(),
    PickAvailabilityRule(),
    OwnershipRule(),
]
