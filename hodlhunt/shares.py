"""Conversions between pool shares and lamport values, and feeding requirements."""

from hodlhunt import constants
from hodlhunt.fish import Fish
from hodlhunt.ocean import Ocean

_U64_MASK = constants.U64_MAX


def share_to_value(ocean: Ocean, share: int) -> int:
    """Value in lamports of a share amount, rounded to the nearest lamport."""
    if ocean.total_shares == 0:
        return 0
    denom = ocean.total_shares
    return ((share * ocean.balance_fishes + denom // 2) // denom) & _U64_MASK


def new_share(ocean: Ocean, value: int) -> int:
    """Shares granted for a value that has already been added to the pool balance."""
    if ocean.total_shares == 0:
        return value
    denom = max(ocean.balance_fishes - value, 0)
    if denom == 0:
        return 0
    return ((value * ocean.total_shares + denom // 2) // denom) & _U64_MASK


def base_feeding_requirement(ocean: Ocean, share: int) -> int:
    """Feeding cost for a share at the ocean's current feeding rate, with no floor."""
    value = share_to_value(ocean, share)
    return min(value * ocean.feeding_percentage, constants.U64_MAX) // 10_000


def min_feeding_amount(ocean: Ocean, fish: Fish) -> int:
    """Lamports needed to feed a fish, after hunt income and with the global minimum."""
    required = max(base_feeding_requirement(ocean, fish.share) - fish.received_from_hunt_value, 0)
    return max(required, constants.MIN_FEED_LAMPORTS)