"""Steps shared by fish creation and resurrection."""

from __future__ import annotations

from hodlhunt import constants
from hodlhunt.errors import ErrorCode, GameError
from hodlhunt.fish import Fish
from hodlhunt.ledger import (
    ACCOUNT_STORAGE_OVERHEAD,
    EXEMPTION_THRESHOLD,
    LAMPORTS_PER_BYTE_YEAR,
    Ledger,
)
from hodlhunt.ocean import Ocean
from hodlhunt.seeds import PROGRAM_ID, SYSTEM_PROGRAM_ID, Pubkey, derive_name_registry_pda
from hodlhunt.shares import new_share

MAX_NAME_LEN = 32
NAME_REGISTRY_SPACE = 8
NAME_REGISTRY_RENT = (
    (ACCOUNT_STORAGE_OVERHEAD + NAME_REGISTRY_SPACE) * LAMPORTS_PER_BYTE_YEAR * EXEMPTION_THRESHOLD
)


def _saturating_add(a: int, b: int) -> int:
    return min(a + b, constants.U64_MAX)


def apply_creation_finance(
    ledger: Ledger, owner: Pubkey, vault: Pubkey, admin: Pubkey, deposit: int
) -> tuple[int, int, int]:
    """Charge the deposit plus creation fees; returns (admin_fee, pool_fee, deposit).

    The deposit and pool fee go to the vault, the admin fee to the admin.
    """
    if deposit < constants.MIN_DEPOSIT_LAMPORTS:
        raise GameError(ErrorCode.MINIMUM_DEPOSIT)
    admin_fee = deposit // constants.CREATION_FEE_DIVISOR
    pool_fee = deposit // constants.CREATION_FEE_DIVISOR
    total_cost = deposit + admin_fee + pool_fee
    if ledger.balance(owner) < total_cost:
        raise GameError(ErrorCode.INSUFFICIENT_FUNDS)
    ledger.transfer(owner, vault, deposit + pool_fee)
    ledger.transfer(owner, admin, admin_fee)
    return admin_fee, pool_fee, deposit


def mint_fish_share(ocean: Ocean, fish: Fish, value: int) -> int:
    """Add the value to the pool and grant the fish the matching shares."""
    ocean.balance_fishes = _saturating_add(ocean.balance_fishes, value)
    share = new_share(ocean, value)
    fish.share = _saturating_add(fish.share, share)
    ocean.total_shares = _saturating_add(ocean.total_shares, share)
    return share


def init_new_fish_meta(ocean: Ocean, fish: Fish, owner: Pubkey, name: str, now: int) -> None:
    """Give a new fish its id, owner, name, timers and zeroed counters."""
    fish.id = ocean.next_fish_id
    fish.owner = owner
    fish.name = name
    fish.created_at = now
    fish.last_fed_at = now
    fish.last_hunt_at = now
    fish.can_hunt_after = now + Fish.CREATION_HUNTING_COOLDOWN
    fish.is_protected = True
    fish.protection_ends_at = now + Fish.PROTECTION_PERIOD
    fish.total_hunts = 0
    fish.total_hunt_income = 0
    fish.received_from_hunt_value = 0
    fish.hunting_marks_placed = 0
    fish.last_mark_reset = now
    ocean.total_fish_count = _saturating_add(ocean.total_fish_count, 1)
    ocean.next_fish_id = _saturating_add(ocean.next_fish_id, 1)


def _validate_name(trimmed: str) -> None:
    if not trimmed:
        raise GameError(ErrorCode.INVALID_NAME)
    if len(trimmed.encode("utf-8")) > MAX_NAME_LEN:
        raise GameError(ErrorCode.NAME_TOO_LONG)
    if not all(32 <= ord(ch) < 127 for ch in trimmed):
        raise GameError(ErrorCode.INVALID_NAME)


def reserve_name_registry(ledger: Ledger, owner: Pubkey, name_registry: Pubkey, name: str) -> None:
    """Claim the registry account for a name, paid by the owner.

    Fails if the name is invalid, the registry key does not belong to the name,
    or the name is held by a living fish.
    """
    trimmed = name.strip()
    _validate_name(trimmed)

    expected, _name_hash, _bump = derive_name_registry_pda(PROGRAM_ID, trimmed)
    if name_registry != expected:
        raise GameError(ErrorCode.INVALID_NAME)

    registry = ledger.account(name_registry)
    if registry.lamports > 0:
        raise GameError(ErrorCode.NAME_ALREADY_TAKEN)

    if registry.owner == SYSTEM_PROGRAM_ID and registry.space == 0:
        ledger.create_account(
            owner, expected, NAME_REGISTRY_RENT, NAME_REGISTRY_SPACE, PROGRAM_ID
        )
    elif registry.owner == PROGRAM_ID and registry.space == NAME_REGISTRY_SPACE:
        if ledger.balance(owner) < NAME_REGISTRY_RENT:
            raise GameError(ErrorCode.INSUFFICIENT_FUNDS)
        ledger.transfer(owner, name_registry, NAME_REGISTRY_RENT)
    else:
        raise GameError(ErrorCode.NAME_ALREADY_TAKEN)


def release_name_if_dead(
    ledger: Ledger, fish: Fish, name_registry: Pubkey, refund_to: Pubkey
) -> None:
    """Free a dead fish's name by moving the registry's lamports to refund_to."""
    if fish.share != 0:
        return
    expected, _name_hash, _bump = derive_name_registry_pda(PROGRAM_ID, fish.name)
    if name_registry != expected:
        raise GameError(ErrorCode.INVALID_NAME)
    lamports = ledger.balance(name_registry)
    if lamports > 0:
        ledger.transfer(name_registry, refund_to, lamports)