"""Setting up the ocean and creating, resurrecting and transferring fish."""

from __future__ import annotations

import copy
import dataclasses
from contextlib import contextmanager
from typing import Iterator

from hodlhunt import constants
from hodlhunt.common import (
    apply_creation_finance,
    init_new_fish_meta,
    mint_fish_share,
    reserve_name_registry,
)
from hodlhunt.errors import ErrorCode, GameError
from hodlhunt.events import FishCreated, FishResurrected, FishTransferred
from hodlhunt.fish import Fish
from hodlhunt.ledger import (
    ACCOUNT_STORAGE_OVERHEAD,
    EXEMPTION_THRESHOLD,
    LAMPORTS_PER_BYTE_YEAR,
    Ledger,
)
from hodlhunt.ocean import Ocean, current_day_start, next_midnight
from hodlhunt.seeds import (
    PROGRAM_ID,
    SEED_OCEAN,
    Pubkey,
    derive_fish_pda,
    derive_name_registry_pda,
    derive_vault_pda,
    find_program_address,
)

ACCOUNT_DISCRIMINATOR_LEN = 8
OCEAN_SPACE = ACCOUNT_DISCRIMINATOR_LEN + 128
FISH_SPACE = ACCOUNT_DISCRIMINATOR_LEN + Fish.INIT_SPACE
UNSET_CYCLE_MODE = 255


def _rent(space: int) -> int:
    return (ACCOUNT_STORAGE_OVERHEAD + space) * LAMPORTS_PER_BYTE_YEAR * EXEMPTION_THRESHOLD


@contextmanager
def _all_or_nothing(*states: object) -> Iterator[None]:
    """Restore the given objects' state if the block raises."""
    saved = [copy.deepcopy(vars(state)) for state in states]
    try:
        yield
    except BaseException:
        for state, snapshot in zip(states, saved):
            vars(state).clear()
            vars(state).update(snapshot)
        raise


def initialize_ocean(ledger: Ledger, admin: Pubkey, declared_admin: Pubkey, now: int) -> Ocean:
    """Create the ocean and its vault, paid by admin; may run only once per ledger."""
    ocean_key, _ = find_program_address([SEED_OCEAN], PROGRAM_ID)
    vault_key, vault_bump = derive_vault_pda(PROGRAM_ID, ocean_key)
    with _all_or_nothing(ledger):
        ledger.create_account(admin, ocean_key, _rent(OCEAN_SPACE), OCEAN_SPACE, PROGRAM_ID)
        ledger.create_account(admin, vault_key, _rent(0), 0, PROGRAM_ID)
    return Ocean(
        admin=declared_admin,
        total_fish_count=0,
        total_shares=0,
        balance_fishes=0,
        vault_bump=vault_bump,
        last_feeding_update=now,
        next_fish_id=1,
        vault=vault_key,
        is_storm=False,
        feeding_percentage=constants.CALM_FEEDING_BPS,
        storm_probability_bps=constants.INITIAL_STORM_PROBABILITY_BPS,
        last_cycle_mode=UNSET_CYCLE_MODE,
        cycle_start_time=current_day_start(now),
        next_mode_change_time=next_midnight(now),
    )


def _open_fish_account(ledger: Ledger, ocean: Ocean, owner: Pubkey) -> None:
    fish_key, _ = derive_fish_pda(PROGRAM_ID, owner, ocean.next_fish_id)
    ledger.create_account(owner, fish_key, _rent(FISH_SPACE), FISH_SPACE, PROGRAM_ID)


def _spawn(
    ledger: Ledger, ocean: Ocean, owner: Pubkey, trimmed: str, deposit: int, now: int
) -> tuple[Fish, int, int, int, int]:
    registry, _, _ = derive_name_registry_pda(PROGRAM_ID, trimmed)
    reserve_name_registry(ledger, owner, registry, trimmed)
    admin_fee, pool_fee, value = apply_creation_finance(
        ledger, owner, ocean.vault, ocean.admin, deposit
    )
    ocean.balance_fishes = min(ocean.balance_fishes + pool_fee, constants.U64_MAX)
    fish = Fish()
    share = mint_fish_share(ocean, fish, value)
    init_new_fish_meta(ocean, fish, owner, trimmed, now)
    return fish, share, value, admin_fee, pool_fee


def create_fish(
    ledger: Ledger, ocean: Ocean, owner: Pubkey, name: str, deposit: int, now: int
) -> tuple[Fish, FishCreated]:
    """Reserve the name, charge the deposit and fees, and mint a new protected fish."""
    with _all_or_nothing(ledger, ocean):
        _open_fish_account(ledger, ocean, owner)
        fish, share, value, admin_fee, pool_fee = _spawn(
            ledger, ocean, owner, name.strip(), deposit, now
        )
    event = FishCreated(
        fish_id=fish.id,
        owner=fish.owner,
        share=share,
        deposit=value,
        admin_fee=admin_fee,
        pool_fee=pool_fee,
        name=fish.name,
    )
    return fish, event


def resurrect_fish(
    ledger: Ledger,
    ocean: Ocean,
    old_fish: Fish,
    owner: Pubkey,
    name: str,
    deposit: int,
    now: int,
) -> tuple[Fish, FishResurrected]:
    """Replace the owner's dead fish with a new one, charged like a fresh creation."""
    with _all_or_nothing(ledger, ocean):
        old_fish.ensure_owned_by(owner)
        _open_fish_account(ledger, ocean, owner)
        trimmed = name.strip()
        if deposit < constants.MIN_DEPOSIT_LAMPORTS:
            raise GameError(ErrorCode.MINIMUM_DEPOSIT)
        if ledger.balance(owner) < deposit:
            raise GameError(ErrorCode.INSUFFICIENT_FUNDS)
        old_fish.ensure_dead()
        fish, share, value, admin_fee, pool_fee = _spawn(
            ledger, ocean, owner, trimmed, deposit, now
        )
    event = FishResurrected(
        old_fish_id=old_fish.id,
        new_fish_id=fish.id,
        owner=owner,
        name=trimmed,
        share=share,
        deposit=value,
        admin_fee=admin_fee,
        pool_fee=pool_fee,
    )
    return fish, event


def transfer_fish(
    fish: Fish, current_owner: Pubkey, new_owner: Pubkey
) -> tuple[Fish, FishTransferred]:
    """Return a copy of the living fish owned by new_owner, with every other field kept."""
    fish.ensure_owned_by(current_owner)
    if current_owner == new_owner:
        raise GameError(ErrorCode.CANNOT_TRANSFER_TO_SELF)
    fish.ensure_alive()
    moved = dataclasses.replace(fish, owner=new_owner)
    event = FishTransferred(fish_id=moved.id, from_owner=current_owner, to_owner=new_owner)
    return moved, event