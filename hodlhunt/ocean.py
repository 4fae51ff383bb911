"""Ocean state: the shared pool and its daily calm/storm cycle."""

import logging
from dataclasses import dataclass, field

from hodlhunt import constants
from hodlhunt.events import OceanModeChanged
from hodlhunt.seeds import Pubkey

log = logging.getLogger(__name__)


def current_day_start(timestamp: int) -> int:
    """Start of the day that contains the timestamp."""
    return timestamp - timestamp % constants.DAY_DURATION


def next_midnight(timestamp: int) -> int:
    """First midnight strictly after the timestamp."""
    remainder = timestamp % constants.DAY_DURATION
    if remainder == 0:
        return timestamp + constants.DAY_DURATION
    return timestamp + (constants.DAY_DURATION - remainder)


def _mode_name(storm: bool) -> str:
    return "STORM" if storm else "CALM"


@dataclass
class Ocean:
    """The global game state shared by all fish."""

    admin: Pubkey = field(default_factory=lambda: Pubkey(bytes(32)))
    total_fish_count: int = 0
    total_shares: int = 0
    balance_fishes: int = 0
    vault_bump: int = 0
    last_feeding_update: int = 0
    next_fish_id: int = 0
    vault: Pubkey = field(default_factory=lambda: Pubkey(bytes(32)))
    is_storm: bool = False
    feeding_percentage: int = 0
    storm_probability_bps: int = 0
    last_cycle_mode: int = 0
    cycle_start_time: int = 0
    next_mode_change_time: int = 0

    def should_change_mode(self, current_time: int) -> bool:
        return current_time >= self.next_mode_change_time

    def determine_next_mode(self, random_seed: int) -> bool:
        """Roll the seed against the storm chance; True means storm."""
        storm_chance = constants.INITIAL_STORM_PROBABILITY_BPS
        random_roll = random_seed % 1000
        will_storm = random_roll < storm_chance
        log.info(
            "Mode decision: random %d vs storm chance %d, result: %s",
            random_roll,
            storm_chance,
            _mode_name(will_storm),
        )
        return will_storm

    def apply_mode_change(self, new_mode: bool, current_time: int, reason: str) -> OceanModeChanged:
        """Switch to the given mode, reschedule the next change and describe it."""
        old_mode = self.is_storm
        old_feeding_percentage = self.feeding_percentage
        self.is_storm = new_mode
        self.feeding_percentage = (
            constants.STORM_FEEDING_BPS if new_mode else constants.CALM_FEEDING_BPS
        )
        self.last_cycle_mode = 1 if new_mode else 0
        self.storm_probability_bps = constants.INITIAL_STORM_PROBABILITY_BPS
        self.cycle_start_time = current_day_start(current_time)
        self.next_mode_change_time = next_midnight(current_time)
        event = OceanModeChanged(
            old_mode=old_mode,
            new_mode=new_mode,
            old_feeding_percentage=old_feeding_percentage,
            new_feeding_percentage=self.feeding_percentage,
            storm_probability_bps=self.storm_probability_bps,
            cycle_start_time=self.cycle_start_time,
            next_change_time=self.next_mode_change_time,
            reason=reason,
            timestamp=current_time,
        )
        log.info(
            "Ocean mode changed: %s -> %s (feeding: %.2f%%), next change at %d",
            _mode_name(old_mode),
            _mode_name(new_mode),
            self.feeding_percentage / 100.0,
            self.next_mode_change_time,
        )
        return event