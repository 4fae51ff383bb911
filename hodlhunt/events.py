"""Records describing what each game operation did."""

from dataclasses import dataclass

from hodlhunt.seeds import Pubkey


@dataclass(frozen=True)
class FishFed:
    fish_id: int
    owner: Pubkey
    added_share: int
    base_cost: int
    admin_fee: int
    pool_fee: int
    new_share: int
    new_value: int


@dataclass(frozen=True)
class FishHunted:
    hunter_id: int
    prey_id: int
    hunter_owner: Pubkey
    prey_owner: Pubkey
    bite_share: int
    to_hunter: int
    to_pool: int
    to_admin: int
    enhanced: bool
    hunter_new_share: int
    prey_new_share: int
    received_from_hunt_value: int
    to_admin_value: int
    to_pool_value: int
    bite_percent: int
    bite_fee_percent: int
    bite_fee: int


@dataclass(frozen=True)
class FishExited:
    fish_id: int
    owner: Pubkey
    exited_share: int
    payout: int
    admin_fee: int
    pool_fee: int
    to_player: int
    new_balance: int


@dataclass(frozen=True)
class FishCreated:
    fish_id: int
    owner: Pubkey
    share: int
    deposit: int
    admin_fee: int
    pool_fee: int
    name: str


@dataclass(frozen=True)
class FishTransferred:
    fish_id: int
    from_owner: Pubkey
    to_owner: Pubkey


@dataclass(frozen=True)
class FishResurrected:
    old_fish_id: int
    new_fish_id: int
    owner: Pubkey
    name: str
    share: int
    deposit: int
    admin_fee: int
    pool_fee: int


@dataclass(frozen=True)
class HuntingMarkPlaced:
    mark_id: Pubkey
    hunter_id: int
    prey_id: int
    hunter_owner: Pubkey
    cost: int
    expires_at: int
    time_until_hungry: int
    cost_percent: int


@dataclass(frozen=True)
class OceanModeChanged:
    old_mode: bool
    new_mode: bool
    old_feeding_percentage: int
    new_feeding_percentage: int
    storm_probability_bps: int
    cycle_start_time: int
    next_change_time: int
    reason: str
    timestamp: int