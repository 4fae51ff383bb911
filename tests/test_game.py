import pytest

from hodlhunt import constants
from hodlhunt.errors import ErrorCode, GameError
from hodlhunt.game import Game
from hodlhunt.ocean import next_midnight
from hodlhunt.seeds import Pubkey
from hodlhunt.shares import min_feeding_amount

START = 100 * constants.DAY_DURATION + 3600
SOL = 1_000_000_000


@pytest.fixture
def admin():
    return Pubkey.new_unique()


@pytest.fixture
def game(admin):
    return Game(admin, START)


def funded(game, amount=20 * SOL):
    key = Pubkey.new_unique()
    game.ledger.credit(key, amount)
    return key


def expect(code, func, *args):
    with pytest.raises(GameError) as info:
        func(*args)
    assert info.value.code is code


def test_new_game_ocean_state(game, admin):
    assert game.ocean.admin == admin
    assert game.ocean.next_fish_id == 1
    assert game.ocean.feeding_percentage == constants.CALM_FEEDING_BPS
    assert game.ocean.next_mode_change_time == next_midnight(START)
    assert game.ledger.balance(admin) == 0


def test_advance_moves_clock(game):
    assert game.advance(10) == START + 10
    with pytest.raises(ValueError):
        game.advance(-1)


def test_create_first_fish(game, admin):
    owner = funded(game)
    vault_before = game.ledger.balance(game.ocean.vault)
    event = game.create_fish(owner, "  Nemo  ", SOL)
    fish = game.fishes[event.fish_id]
    assert fish.name == "Nemo"
    assert event.share == SOL
    assert fish.share == SOL
    assert event.admin_fee == SOL // constants.CREATION_FEE_DIVISOR
    assert game.ledger.balance(admin) == event.admin_fee
    assert game.ledger.balance(game.ocean.vault) - vault_before == SOL + event.pool_fee
    assert game.ocean.total_fish_count == 1
    assert game.events[-1] == event


def test_duplicate_name_rejected(game):
    owner = funded(game)
    game.create_fish(owner, "Dory", SOL)
    expect(ErrorCode.NAME_ALREADY_TAKEN, game.create_fish, funded(game), "Dory", SOL)


def test_minimum_deposit_leaves_state_unchanged(game):
    owner = funded(game)
    before = game.ledger.balance(owner)
    expect(ErrorCode.MINIMUM_DEPOSIT, game.create_fish, owner, "Tiny", 1)
    assert game.ocean.next_fish_id == 1
    assert game.ledger.balance(owner) == before
    assert game.fishes == {}


def test_sole_fish_owns_whole_pool(game):
    event = game.create_fish(funded(game), "Solo", SOL)
    assert game.get_share_value(event.fish_id) == game.ocean.balance_fishes


def test_new_share_on_empty_ocean(game):
    assert game.get_new_share(12345) == 12345


def test_unknown_fish(game):
    with pytest.raises(KeyError):
        game.get_share_value(99)


def test_fish_info(game):
    event = game.create_fish(funded(game), "Info", SOL)
    lines = game.get_fish_info(event.fish_id)
    assert lines[0] == "Fish Info:"
    assert lines[1] == f"ID: {event.fish_id}"
    assert lines[4] == "Name: Info"


def test_feed_fish(game):
    owner = funded(game)
    fish_id = game.create_fish(owner, "Hungry", SOL).fish_id
    game.advance(constants.DAY_DURATION)
    fish = game.fishes[fish_id]
    amount = min_feeding_amount(game.ocean, fish)
    expect(ErrorCode.INSUFFICIENT_FEEDING_AMOUNT, game.feed_fish, owner, fish_id, amount - 1)
    old_share = fish.share
    event = game.feed_fish(owner, fish_id, amount)
    assert fish.share == old_share + event.added_share
    assert event.new_share == fish.share
    assert fish.last_fed_at == game.now


def test_feed_by_stranger_rejected(game):
    fish_id = game.create_fish(funded(game), "Mine", SOL).fish_id
    expect(ErrorCode.NOT_FISH_OWNER, game.feed_fish, funded(game), fish_id, SOL)


def _hunt_setup(game):
    hunter_owner = funded(game)
    prey_owner = funded(game)
    hunter_id = game.create_fish(hunter_owner, "Shark", 2 * SOL).fish_id
    prey_id = game.create_fish(prey_owner, "Minnow", SOL).fish_id
    return hunter_owner, hunter_id, prey_id


def test_hunt_on_cooldown(game):
    owner, hunter_id, prey_id = _hunt_setup(game)
    prey_share = game.fishes[prey_id].share
    expect(ErrorCode.HUNTING_ON_COOLDOWN, game.hunt_fish, owner, hunter_id, prey_id, prey_share)


def test_hunt_slippage(game):
    owner, hunter_id, prey_id = _hunt_setup(game)
    game.advance(7 * constants.DAY_DURATION + 1)
    prey_share = game.fishes[prey_id].share
    expect(
        ErrorCode.SLIPPAGE_EXCEEDED, game.hunt_fish, owner, hunter_id, prey_id, prey_share * 2
    )
    assert game.fishes[prey_id].share == prey_share


def test_hunt_eats_prey_and_frees_name(game):
    owner, hunter_id, prey_id = _hunt_setup(game)
    game.advance(7 * constants.DAY_DURATION + 1)
    hunter = game.fishes[hunter_id]
    prey = game.fishes[prey_id]
    hunter_share = hunter.share
    prey_share = prey.share
    count = game.ocean.total_fish_count
    event = game.hunt_fish(owner, hunter_id, prey_id, prey_share)
    assert prey.share == 0
    assert event.bite_share == prey_share
    assert hunter.share == hunter_share + event.to_hunter
    assert event.to_hunter + event.to_pool + event.to_admin <= prey_share
    assert game.ocean.total_fish_count == count - 1
    reborn = game.create_fish(funded(game), "Minnow", SOL)
    assert game.fishes[reborn.fish_id].name == "Minnow"


def test_hunt_own_fish_rejected(game):
    owner = funded(game)
    a = game.create_fish(owner, "One", 2 * SOL).fish_id
    b = game.create_fish(owner, "Two", SOL).fish_id
    expect(ErrorCode.INVALID_PREY, game.hunt_fish, owner, a, b, game.fishes[b].share)


def test_exit_game(game):
    owner = funded(game)
    fish_id = game.create_fish(owner, "Leaver", SOL).fish_id
    before = game.ledger.balance(owner)
    event = game.exit_game(owner, fish_id)
    assert game.fishes[fish_id].share == 0
    assert event.to_player + event.admin_fee + event.pool_fee == event.payout
    assert game.ledger.balance(owner) > before + event.to_player - 1
    assert game.ocean.total_fish_count == 0
    again = game.create_fish(funded(game), "Leaver", SOL)
    assert game.fishes[again.fish_id].name == "Leaver"


def test_exit_during_storm(game):
    owner = funded(game)
    fish_id = game.create_fish(owner, "Stormy", SOL).fish_id
    game.ocean.is_storm = True
    expect(ErrorCode.EXIT_DURING_STORM, game.exit_game, owner, fish_id)
    assert game.fishes[fish_id].share == SOL


def test_transfer_fish(game):
    owner = funded(game)
    new_owner = Pubkey.new_unique()
    fish_id = game.create_fish(owner, "Gift", SOL).fish_id
    share = game.fishes[fish_id].share
    expect(ErrorCode.CANNOT_TRANSFER_TO_SELF, game.transfer_fish, owner, fish_id, owner)
    event = game.transfer_fish(owner, fish_id, new_owner)
    assert event.to_owner == new_owner
    assert game.fishes[fish_id].owner == new_owner
    assert game.fishes[fish_id].share == share
    expect(ErrorCode.NOT_FISH_OWNER, game.feed_fish, owner, fish_id, SOL)


def test_resurrect_fish(game):
    owner = funded(game)
    old_id = game.create_fish(owner, "Phoenix", SOL).fish_id
    expect(ErrorCode.FISH_ALREADY_DEAD, game.resurrect_fish, owner, old_id, "Ash", SOL)
    game.exit_game(owner, old_id)
    event = game.resurrect_fish(owner, old_id, "Ash", SOL)
    assert event.old_fish_id == old_id
    assert event.new_fish_id == game.ocean.next_fish_id - 1
    assert game.fishes[event.new_fish_id].name == "Ash"
    assert game.fishes[event.new_fish_id].share == event.share


def test_update_ocean_daily(game):
    assert game.update_ocean_daily(1) is None
    game.advance(game.ocean.next_mode_change_time - game.now)
    event = game.update_ocean_daily(2, bytes(32))
    assert event.timestamp == game.now
    assert event.next_change_time > game.now
    assert game.ocean.is_storm == event.new_mode
    assert game.events[-1] == event
    assert game.update_ocean_daily(3) is None