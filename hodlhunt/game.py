"""A whole game world: one ocean, its ledger, every fish and a clock."""

from __future__ import annotations

import logging

from hodlhunt import actions, lifecycle
from hodlhunt.daily import update_ocean_daily
from hodlhunt.events import (
    FishCreated,
    FishExited,
    FishFed,
    FishHunted,
    FishResurrected,
    FishTransferred,
    OceanModeChanged,
)
from hodlhunt.fish import Fish
from hodlhunt.ledger import (
    ACCOUNT_STORAGE_OVERHEAD,
    EXEMPTION_THRESHOLD,
    LAMPORTS_PER_BYTE_YEAR,
    Ledger,
)
from hodlhunt.seeds import PROGRAM_ID, Pubkey, derive_fish_pda

log = logging.getLogger(__name__)


def _rent(space: int) -> int:
    return (ACCOUNT_STORAGE_OVERHEAD + space) * LAMPORTS_PER_BYTE_YEAR * EXEMPTION_THRESHOLD


class Game:
    """Runs every game operation against one ocean at the game's current time.

    The admin is credited exactly the rent needed to open the ocean and vault
    accounts, then pays for them. Every event produced is kept in ``events``.
    """

    def __init__(self, admin: Pubkey, now: int) -> None:
        self.now = now
        self.ledger = Ledger()
        self.ledger.credit(admin, _rent(lifecycle.OCEAN_SPACE) + _rent(0))
        self.ocean = lifecycle.initialize_ocean(self.ledger, admin, admin, now)
        self.fishes: dict[int, Fish] = {}
        self.events: list[object] = []

    def _fish(self, fish_id: int) -> Fish:
        try:
            return self.fishes[fish_id]
        except KeyError:
            raise KeyError(f"no fish with id {fish_id}") from None

    def _record(self, event):
        self.events.append(event)
        return event

    def advance(self, seconds: int) -> int:
        """Move the clock forward and return the new time."""
        if seconds < 0:
            raise ValueError("time cannot move backwards")
        self.now += seconds
        return self.now

    def create_fish(self, owner: Pubkey, name: str, deposit: int) -> FishCreated:
        fish, event = lifecycle.create_fish(
            self.ledger, self.ocean, owner, name, deposit, self.now
        )
        self.fishes[fish.id] = fish
        return self._record(event)

    def feed_fish(self, owner: Pubkey, fish_id: int, feeding_amount: int) -> FishFed:
        fish = self._fish(fish_id)
        event = actions.feed_fish(self.ledger, self.ocean, fish, owner, feeding_amount, self.now)
        return self._record(event)

    def hunt_fish(
        self, hunter_owner: Pubkey, hunter_id: int, prey_id: int, expected_prey_share: int
    ) -> FishHunted:
        hunter = self._fish(hunter_id)
        prey = self._fish(prey_id)
        event = actions.hunt_fish(
            self.ledger, self.ocean, hunter, prey, hunter_owner, expected_prey_share, self.now
        )
        return self._record(event)

    def exit_game(self, owner: Pubkey, fish_id: int) -> FishExited:
        fish = self._fish(fish_id)
        return self._record(actions.exit_game(self.ledger, self.ocean, fish, owner))

    def get_fish_info(self, fish_id: int) -> list[str]:
        return actions.fish_info(self._fish(fish_id))

    def transfer_fish(
        self, current_owner: Pubkey, fish_id: int, new_owner: Pubkey
    ) -> FishTransferred:
        """Hand a fish to a new owner; its old account's rent returns to the current owner."""
        fish = self._fish(fish_id)
        moved, event = lifecycle.transfer_fish(fish, current_owner, new_owner)
        old_key, _ = derive_fish_pda(PROGRAM_ID, current_owner, fish.id)
        new_key, _ = derive_fish_pda(PROGRAM_ID, new_owner, fish.id)
        self.ledger.create_account(
            current_owner, new_key, _rent(lifecycle.FISH_SPACE), lifecycle.FISH_SPACE, PROGRAM_ID
        )
        remaining = self.ledger.balance(old_key)
        if remaining:
            self.ledger.transfer(old_key, current_owner, remaining)
        self.ledger.accounts.pop(old_key, None)
        self.fishes[fish.id] = moved
        return self._record(event)

    def get_share_value(self, fish_id: int) -> int:
        return actions.get_share_value(self.ocean, self._fish(fish_id))

    def get_new_share(self, value: int) -> int:
        return actions.get_new_share(self.ocean, value)

    def resurrect_fish(
        self, owner: Pubkey, old_fish_id: int, name: str, deposit: int
    ) -> FishResurrected:
        old_fish = self._fish(old_fish_id)
        fish, event = lifecycle.resurrect_fish(
            self.ledger, self.ocean, old_fish, owner, name, deposit, self.now
        )
        self.fishes[fish.id] = fish
        return self._record(event)

    def update_ocean_daily(
        self, slot: int, recent_hash: bytes | None = None
    ) -> OceanModeChanged | None:
        event = update_ocean_daily(self.ocean, self.now, slot, recent_hash)
        if event is not None:
            self._record(event)
        return event