"""Hunting-mark exclusivity rules."""

import logging

from hodlhunt.errors import ErrorCode, GameError
from hodlhunt.fish import Fish

log = logging.getLogger(__name__)


def check_hunting_mark_exclusivity(prey: Fish, hunter_id: int, current_time: int) -> None:
    """Allow the hunt unless another hunter's mark on the prey is still exclusive.

    An expired mark is cleared from the prey first.
    """
    prey.clear_expired_mark(current_time)

    if prey.marked_by_hunter_id > 0 and prey.mark_placed_at > 0:
        if prey.marked_by_hunter_id == hunter_id:
            log.info("Hunting with own mark: hunter %d -> prey %d", hunter_id, prey.id)
            return
        if current_time > prey.mark_expires_at:
            log.info(
                "Hunting after exclusivity period: hunter %d -> prey %d (mark owner: %d)",
                hunter_id,
                prey.id,
                prey.marked_by_hunter_id,
            )
            return
        log.info(
            "Mark exclusivity active: only hunter %d can hunt prey %d until %d",
            prey.marked_by_hunter_id,
            prey.id,
            prey.mark_expires_at,
        )
        raise GameError(ErrorCode.MARK_EXCLUSIVITY_ACTIVE)

    log.info("Hunting without mark: hunter %d -> prey %d", hunter_id, prey.id)