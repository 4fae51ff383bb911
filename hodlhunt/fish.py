"""Fish account state and its rule checks."""

from dataclasses import dataclass, field
from typing import ClassVar

from hodlhunt import constants
from hodlhunt.errors import ErrorCode, GameError
from hodlhunt.seeds import Pubkey


@dataclass
class Fish:
    """A player's fish: its share of the ocean, timers and hunting-mark state."""

    id: int = 0
    owner: Pubkey = field(default_factory=lambda: Pubkey(bytes(32)))
    share: int = 0
    name: str = ""
    created_at: int = 0
    last_fed_at: int = 0
    last_hunt_at: int = 0
    can_hunt_after: int = 0
    is_protected: bool = False
    protection_ends_at: int = 0
    total_hunts: int = 0
    total_hunt_income: int = 0
    received_from_hunt_value: int = 0
    hunting_marks_placed: int = 0
    last_mark_reset: int = 0
    marked_by_hunter_id: int = 0
    mark_placed_at: int = 0
    mark_expires_at: int = 0
    mark_cost: int = 0

    INIT_SPACE: ClassVar[int] = 190
    PROTECTION_PERIOD: ClassVar[int] = 7 * constants.DAY_DURATION
    CREATION_HUNTING_COOLDOWN: ClassVar[int] = 2 * constants.DAY_DURATION
    POST_HUNT_COOLDOWN: ClassVar[int] = 2 * constants.DAY_DURATION
    PREY_COOLDOWN: ClassVar[int] = 7 * constants.DAY_DURATION
    FEEDING_COOLDOWN: ClassVar[int] = 2 * constants.DAY_DURATION
    MARK_EXCLUSIVITY_PERIOD: ClassVar[int] = constants.EXCLUSIVITY_SECONDS

    def can_hunt(self, current_time: int) -> bool:
        """True when the fish is alive and its hunting cooldown has passed."""
        return current_time >= self.can_hunt_after and self.share > 0

    def is_mark_expired(self, current_time: int) -> bool:
        return self.marked_by_hunter_id > 0 and current_time > self.mark_expires_at

    def clear_expired_mark(self, current_time: int) -> None:
        """Drop the hunting mark once its window has passed."""
        if self.is_mark_expired(current_time):
            self.marked_by_hunter_id = 0
            self.mark_placed_at = 0
            self.mark_expires_at = 0
            self.mark_cost = 0

    def is_valid_prey(self, current_time: int) -> bool:
        """True when the fish is alive, unprotected and long enough unfed."""
        if self.share == 0:
            return False
        if self.is_protected and current_time < self.protection_ends_at:
            return False
        return current_time - self.last_fed_at >= self.PREY_COOLDOWN

    def ensure_alive(self) -> None:
        if self.share <= 0:
            raise GameError(ErrorCode.FISH_ALREADY_DEAD)

    def ensure_dead(self) -> None:
        if self.share != 0:
            raise GameError(ErrorCode.FISH_ALREADY_DEAD)

    def ensure_owned_by(self, owner: Pubkey) -> None:
        if self.owner != owner:
            raise GameError(ErrorCode.NOT_FISH_OWNER)