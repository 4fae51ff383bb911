# hodlhunt

A self-contained simulation of an ocean game. Players create fish by
depositing lamports into a shared vault, and each fish holds a share of
the ocean's balance. Fish must be fed. A fish can hunt a smaller fish
once that fish has gone unfed long enough. A fish can also leave the
ocean for its share's value, less an exit fee. At each midnight the
ocean rolls between calm and storm, and the mode sets the feeding rate.
Nobody can leave during a storm.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

`hodlhunt.game.Game` holds a `Ledger` of lamport balances, the `Ocean`,
every `Fish` by id and a simulated clock. It also keeps every event it
produced in `game.events`.

```python
from hodlhunt.game import Game
from hodlhunt.seeds import Pubkey

admin = Pubkey.new_unique()
alice = Pubkey.new_unique()
bob = Pubkey.new_unique()

game = Game(admin, now=1_700_000_000)
game.ledger.credit(alice, 10_000_000_000)
game.ledger.credit(bob, 10_000_000_000)

big = game.create_fish(alice, "Moby", 2_000_000_000)   # FishCreated event
small = game.create_fish(bob, "Nemo", 500_000_000)

print(game.get_share_value(big.fish_id))   # value of the fish in lamports
print(game.get_fish_info(small.fish_id))   # list of description lines

game.advance(8 * 24 * 60 * 60)             # past protection and cooldowns
game.hunt_fish(alice, big.fish_id, small.fish_id, small.share)

game.exit_game(alice, big.fish_id)         # FishExited event
game.update_ocean_daily(slot=1, recent_hash=None)  # OceanModeChanged or None
```

`Game` also offers `feed_fish`, `transfer_fish`, `resurrect_fish`
(which replaces a dead fish with a new one) and `get_new_share`.

Rule violations raise `hodlhunt.errors.GameError`. Its `code` attribute
holds a `hodlhunt.errors.ErrorCode` member, for example
`ErrorCode.PREY_TOO_HEAVY` or `ErrorCode.EXIT_DURING_STORM`. A failed
operation leaves the ledger, the ocean and the fish unchanged.

The operations can also be called without `Game`. They take the ledger,
the ocean and the fish explicitly, together with the current time:

- `hodlhunt.lifecycle`: `initialize_ocean`, `create_fish`,
  `resurrect_fish`, `transfer_fish`
- `hodlhunt.actions`: `feed_fish`, `hunt_fish`, `exit_game`,
  `fish_info`, `get_share_value`, `get_new_share`
- `hodlhunt.daily`: `update_ocean_daily`, `derive_random_seed`
  (the roll uses a Keccak-256 hash)

## Modules

- `hodlhunt.constants`: durations, fee divisors and feeding rates
- `hodlhunt.errors`: `ErrorCode` and `GameError`
- `hodlhunt.events`: frozen dataclasses describing each operation's effect
- `hodlhunt.seeds`: `Pubkey` (base58, `new_unique`) and program-address
  derivation (`find_program_address`, `derive_vault_pda`,
  `derive_fish_pda`, `derive_name_registry_pda`)
- `hodlhunt.fish`, `hodlhunt.ocean`: game state and its rule checks
- `hodlhunt.shares`: share and value arithmetic, feeding requirements
- `hodlhunt.marks`: hunting-mark exclusivity check
- `hodlhunt.ledger`: `Account`, `Ledger` and `transfer_to_admin`
- `hodlhunt.common`: creation fees, share minting and name reservation
- `hodlhunt.lifecycle`, `hodlhunt.actions`, `hodlhunt.daily`: the game operations
- `hodlhunt.game`: the `Game` class tying everything together

## What it does not do

- There is no command-line program. The package is used as a library.
- State lives only in memory. Nothing is saved or loaded.
- There is no operation that places a hunting mark, so the
  `HuntingMarkPlaced` event and the mark error codes are never produced
  by the package. A hunt does honour a mark that is set on a `Fish`
  directly: only the marking hunter may hunt that fish until the mark
  expires.