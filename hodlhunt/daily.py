"""The daily roll that switches the ocean between calm and storm."""

from __future__ import annotations

import logging

from Crypto.Hash import keccak

from hodlhunt import constants
from hodlhunt.events import OceanModeChanged
from hodlhunt.ocean import Ocean

log = logging.getLogger(__name__)

_U64_MASK = constants.U64_MAX


def _keccak256(data: bytes) -> bytes:
    return keccak.new(digest_bits=256, data=data).digest()


def derive_random_seed(
    current_time: int,
    slot: int,
    cycle_start_time: int,
    vault_bump: int,
    recent_hash: bytes | None,
) -> int:
    """Hash the time, slot, cycle start, vault bump and recent block hash into a u64."""
    buf = (
        (current_time & _U64_MASK).to_bytes(8, "little")
        + (slot & _U64_MASK).to_bytes(8, "little")
        + (cycle_start_time & _U64_MASK).to_bytes(8, "little")
        + bytes([vault_bump & 0xFF])
    )
    digest = _keccak256(buf + bytes(recent_hash) if recent_hash is not None else buf)
    return int.from_bytes(digest[:8], "little")


def update_ocean_daily(
    ocean: Ocean, current_time: int, slot: int, recent_hash: bytes | None = None
) -> OceanModeChanged | None:
    """Roll the next mode once midnight has come; returns None before then."""
    log.info(
        "UpdateOceanDaily: now=%d, next_change=%d", current_time, ocean.next_mode_change_time
    )
    if not ocean.should_change_mode(current_time):
        log.info("UpdateOceanDaily: change blocked (waiting for midnight)")
        return None

    log.info("UpdateOceanDaily: change allowed; proceeding")
    seed = derive_random_seed(
        current_time, slot, ocean.cycle_start_time, ocean.vault_bump, recent_hash
    )
    new_mode = ocean.determine_next_mode(seed)
    reason = f"daily_roll_{constants.INITIAL_STORM_PROBABILITY_BPS}bps"
    return ocean.apply_mode_change(new_mode, current_time, reason)