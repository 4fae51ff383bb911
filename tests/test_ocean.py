from hodlhunt import constants
from hodlhunt.ocean import Ocean, current_day_start, next_midnight

DAY = constants.DAY_DURATION


def test_day_start_on_and_off_boundary():
    assert current_day_start(3 * DAY) == 3 * DAY
    assert current_day_start(3 * DAY + 17) == 3 * DAY


def test_day_start_before_epoch():
    assert current_day_start(-1) == -DAY


def test_next_midnight_is_strictly_later():
    assert next_midnight(3 * DAY) == 4 * DAY
    assert next_midnight(3 * DAY + 17) == 4 * DAY
    assert next_midnight(4 * DAY - 1) == 4 * DAY


def test_should_change_mode_at_scheduled_time():
    ocean = Ocean(next_mode_change_time=5 * DAY)
    assert ocean.should_change_mode(5 * DAY - 1) is False
    assert ocean.should_change_mode(5 * DAY) is True


def test_determine_next_mode_thresholds():
    ocean = Ocean()
    chance = constants.INITIAL_STORM_PROBABILITY_BPS
    assert ocean.determine_next_mode(chance - 1) is True
    assert ocean.determine_next_mode(chance) is False
    assert ocean.determine_next_mode(1000 + chance - 1) is True


def test_apply_storm_mode():
    ocean = Ocean(feeding_percentage=constants.CALM_FEEDING_BPS)
    now = 10 * DAY + 123
    event = ocean.apply_mode_change(True, now, "daily_roll")
    assert ocean.is_storm is True
    assert ocean.feeding_percentage == constants.STORM_FEEDING_BPS
    assert ocean.last_cycle_mode == 1
    assert ocean.storm_probability_bps == constants.INITIAL_STORM_PROBABILITY_BPS
    assert ocean.cycle_start_time == 10 * DAY
    assert ocean.next_mode_change_time == 11 * DAY
    assert event.old_mode is False
    assert event.new_mode is True
    assert event.old_feeding_percentage == constants.CALM_FEEDING_BPS
    assert event.new_feeding_percentage == constants.STORM_FEEDING_BPS
    assert event.next_change_time == ocean.next_mode_change_time
    assert event.reason == "daily_roll"
    assert event.timestamp == now


def test_apply_calm_mode_after_storm():
    ocean = Ocean(is_storm=True, feeding_percentage=constants.STORM_FEEDING_BPS)
    event = ocean.apply_mode_change(False, 2 * DAY, "daily_roll")
    assert ocean.feeding_percentage == constants.CALM_FEEDING_BPS
    assert ocean.last_cycle_mode == 0
    assert event.old_mode is True
    assert ocean.should_change_mode(2 * DAY) is False