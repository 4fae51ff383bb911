"""Feeding, hunting and leaving the game, plus read-only queries on fish value."""

from __future__ import annotations

import copy
import logging
from contextlib import contextmanager
from typing import Iterator

from hodlhunt import constants
from hodlhunt.common import release_name_if_dead
from hodlhunt.errors import ErrorCode, GameError
from hodlhunt.events import FishExited, FishFed, FishHunted
from hodlhunt.fish import Fish
from hodlhunt.ledger import Ledger, transfer_to_admin
from hodlhunt.marks import check_hunting_mark_exclusivity
from hodlhunt.ocean import Ocean
from hodlhunt.seeds import PROGRAM_ID, Pubkey, derive_fish_pda, derive_name_registry_pda
from hodlhunt.shares import (
    base_feeding_requirement,
    min_feeding_amount,
    new_share,
    share_to_value,
)

log = logging.getLogger(__name__)


def _sat_add(a: int, b: int) -> int:
    return min(a + b, constants.U64_MAX)


def _sat_mul(a: int, b: int) -> int:
    return min(a * b, constants.U64_MAX)


def _checked_sub(a: int, b: int) -> int:
    if b > a:
        raise GameError(ErrorCode.MATH_OVERFLOW)
    return a - b


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


def feed_fish(
    ledger: Ledger, ocean: Ocean, fish: Fish, owner: Pubkey, feeding_amount: int, now: int
) -> FishFed:
    """Pay for feeding, grow the fish's share and restart its feeding timers."""
    with _all_or_nothing(ledger, ocean, fish):
        fish.ensure_alive()
        fish.ensure_owned_by(owner)

        if feeding_amount < min_feeding_amount(ocean, fish):
            raise GameError(ErrorCode.INSUFFICIENT_FEEDING_AMOUNT)

        commission = feeding_amount // constants.FEED_COMMISSION_DIVISOR
        admin_fee = commission // constants.FEE_SPLIT_DIVISOR
        pool_fee = commission - admin_fee
        total_cost = feeding_amount + commission
        if ledger.balance(owner) < total_cost:
            raise GameError(ErrorCode.INSUFFICIENT_FUNDS)

        ledger.transfer(owner, ocean.vault, feeding_amount + pool_fee)
        ledger.transfer(owner, ocean.admin, admin_fee)

        ocean.balance_fishes = _sat_add(ocean.balance_fishes, feeding_amount + pool_fee)
        added_share = new_share(ocean, feeding_amount)
        fish.share = _sat_add(fish.share, added_share)
        ocean.total_shares = _sat_add(ocean.total_shares, added_share)

        fish.last_fed_at = now
        fish.marked_by_hunter_id = 0
        fish.mark_placed_at = 0
        fish.mark_expires_at = 0
        fish.mark_cost = 0
        fish.can_hunt_after = now + Fish.FEEDING_COOLDOWN
        fish.received_from_hunt_value = 0

    return FishFed(
        fish_id=fish.id,
        owner=fish.owner,
        added_share=added_share,
        base_cost=feeding_amount,
        admin_fee=admin_fee,
        pool_fee=pool_fee,
        new_share=fish.share,
        new_value=share_to_value(ocean, fish.share),
    )


def hunt_fish(
    ledger: Ledger,
    ocean: Ocean,
    hunter: Fish,
    prey: Fish,
    hunter_owner: Pubkey,
    expected_prey_share: int,
    now: int,
) -> FishHunted:
    """Let the hunter eat the prey whole, splitting its share among hunter, pool and admin."""
    with _all_or_nothing(ledger, ocean, hunter, prey):
        hunter.ensure_alive()
        prey.ensure_alive()
        hunter.ensure_owned_by(hunter_owner)
        if hunter.id == prey.id or hunter.owner == prey.owner:
            raise GameError(ErrorCode.INVALID_PREY)
        if hunter.share <= prey.share:
            raise GameError(ErrorCode.PREY_TOO_HEAVY)
        if not hunter.can_hunt(now):
            raise GameError(ErrorCode.HUNTING_ON_COOLDOWN)
        if not prey.is_valid_prey(now):
            raise GameError(ErrorCode.INVALID_PREY)

        check_hunting_mark_exclusivity(prey, hunter.id, now)

        lower_bound = _sat_mul(expected_prey_share, 95) // 100
        upper_bound = _sat_mul(expected_prey_share, 105) // 100
        if not lower_bound <= prey.share <= upper_bound:
            raise GameError(ErrorCode.SLIPPAGE_EXCEEDED)

        bite_share = prey.share
        to_hunter = _sat_mul(bite_share, 80) // 100
        to_pool = _sat_mul(bite_share, 10) // 100
        to_admin_share = _sat_mul(bite_share, 10) // 100

        to_pool_value = share_to_value(ocean, to_pool)
        to_admin_value = share_to_value(ocean, to_admin_share)

        prey.share = 0
        hunter.share = _sat_add(hunter.share, to_hunter)

        ocean.total_shares = _checked_sub(ocean.total_shares, to_admin_share + to_pool)
        ocean.balance_fishes = _checked_sub(ocean.balance_fishes, to_admin_value)

        if to_admin_value > 0:
            transfer_to_admin(ledger, ocean.vault, ocean.admin, to_admin_value)

        min_feeding_value = max(
            base_feeding_requirement(ocean, hunter.share), constants.MIN_FEED_LAMPORTS
        )
        received_from_hunt_value = share_to_value(ocean, to_hunter)

        hunter.last_hunt_at = now
        hunter.can_hunt_after = now + Fish.POST_HUNT_COOLDOWN
        if received_from_hunt_value >= min_feeding_value:
            hunter.last_fed_at = now
            hunter.received_from_hunt_value = 0
        else:
            hunter.received_from_hunt_value = received_from_hunt_value

        hunter.total_hunts = _sat_add(hunter.total_hunts, 1)
        hunter.total_hunt_income = _sat_add(hunter.total_hunt_income, received_from_hunt_value)

        prey_registry, _, _ = derive_name_registry_pda(PROGRAM_ID, prey.name)
        prey_account, _ = derive_fish_pda(PROGRAM_ID, prey.owner, prey.id)
        release_name_if_dead(ledger, prey, prey_registry, prey_account)

        ocean.total_fish_count = max(ocean.total_fish_count - 1, 0)

    return FishHunted(
        hunter_id=hunter.id,
        prey_id=prey.id,
        hunter_owner=hunter.owner,
        prey_owner=prey.owner,
        bite_share=bite_share,
        to_hunter=to_hunter,
        to_pool=to_pool,
        to_admin=to_admin_share,
        enhanced=False,
        hunter_new_share=hunter.share,
        prey_new_share=prey.share,
        received_from_hunt_value=received_from_hunt_value,
        to_admin_value=to_admin_value,
        to_pool_value=to_pool_value,
        bite_percent=100,
        bite_fee_percent=0,
        bite_fee=0,
    )


def exit_game(ledger: Ledger, ocean: Ocean, fish: Fish, owner: Pubkey) -> FishExited:
    """Cash out a fish, less an exit fee split between the pool and the admin."""
    with _all_or_nothing(ledger, ocean, fish):
        fish.ensure_alive()
        fish.ensure_owned_by(owner)
        if ocean.is_storm:
            raise GameError(ErrorCode.EXIT_DURING_STORM)

        total_value = share_to_value(ocean, fish.share)
        fee_component = _sat_mul(total_value, constants.EXIT_FEE_BPS) // (
            constants.BASIS_POINTS_DIVISOR
        )
        fee_fishes = fee_component
        fee_admin = fee_component
        withdrawal = max(total_value - fee_fishes - fee_admin, 0)

        if ledger.balance(ocean.vault) < withdrawal:
            raise GameError(ErrorCode.INSUFFICIENT_VAULT_BALANCE)
        ledger.transfer(ocean.vault, owner, withdrawal)

        if fee_admin > 0:
            transfer_to_admin(ledger, ocean.vault, ocean.admin, fee_admin)

        ocean.total_shares = _checked_sub(ocean.total_shares, fish.share)
        ocean.balance_fishes = _checked_sub(ocean.balance_fishes, withdrawal)
        ocean.balance_fishes = _checked_sub(ocean.balance_fishes, fee_admin)
        ocean.total_fish_count = _checked_sub(ocean.total_fish_count, 1)

        exited_share = fish.share
        fish.share = 0

        registry, _, _ = derive_name_registry_pda(PROGRAM_ID, fish.name)
        release_name_if_dead(ledger, fish, registry, owner)

    return FishExited(
        fish_id=fish.id,
        owner=fish.owner,
        exited_share=exited_share,
        payout=total_value,
        admin_fee=fee_admin,
        pool_fee=fee_fishes,
        to_player=withdrawal,
        new_balance=ocean.balance_fishes,
    )


def _flag(value: bool) -> str:
    return "true" if value else "false"


def fish_info(fish: Fish) -> list[str]:
    """Describe the fish's state line by line, and log the description."""
    lines = [
        "Fish Info:",
        f"ID: {fish.id}",
        f"Owner: {fish.owner}",
        f"Weight: {fish.share} lamports",
        f"Name: {fish.name}",
        f"Created at: {fish.created_at}",
        f"Last fed at: {fish.last_fed_at}",
        f"Status: {_flag(fish.share > 0)}",
        f"Total hunts: {fish.total_hunts}",
        f"Total hunt income: {fish.total_hunt_income} lamports",
        f"Is protected: {_flag(fish.is_protected)}",
        f"Protection ends at: {fish.protection_ends_at}",
    ]
    for line in lines:
        log.info("%s", line)
    return lines


def get_share_value(ocean: Ocean, fish: Fish) -> int:
    """Current value in lamports of the fish's share."""
    return share_to_value(ocean, fish.share)


def get_new_share(ocean: Ocean, value: int) -> int:
    """Shares a deposit of the given value would mint in the current ocean."""
    return new_share(ocean, value)