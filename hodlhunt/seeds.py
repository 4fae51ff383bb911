"""Public keys and derivation of program-derived addresses."""

from __future__ import annotations

import hashlib
import itertools
from dataclasses import dataclass
from typing import Iterable

SEED_OCEAN = b"ocean"
SEED_VAULT = b"vault"
SEED_FISH = b"fish"
SEED_NAME = b"fish_name"

MAX_SEED_LEN = 32
MAX_SEEDS = 16
_PDA_MARKER = b"ProgramDerivedAddress"

_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_ALPHABET_INDEX = {ch: i for i, ch in enumerate(_ALPHABET)}

_P = 2**255 - 19
_D = (-121665 * pow(121666, -1, _P)) % _P

_unique_counter = itertools.count(1)


def _b58encode(data: bytes) -> str:
    zeros = len(data) - len(data.lstrip(b"\0"))
    number = int.from_bytes(data, "big")
    digits = []
    while number:
        number, rem = divmod(number, 58)
        digits.append(_ALPHABET[rem])
    return "1" * zeros + "".join(reversed(digits))


def _b58decode(text: str) -> bytes:
    number = 0
    for ch in text:
        try:
            number = number * 58 + _ALPHABET_INDEX[ch]
        except KeyError:
            raise ValueError(f"invalid base58 character: {ch!r}") from None
    zeros = len(text) - len(text.lstrip("1"))
    body = number.to_bytes((number.bit_length() + 7) // 8, "big") if number else b""
    return b"\0" * zeros + body


@dataclass(frozen=True, order=True)
class Pubkey:
    """A 32-byte public key."""

    raw: bytes

    def __post_init__(self) -> None:
        raw = bytes(self.raw)
        if len(raw) != 32:
            raise ValueError(f"public key must be 32 bytes, got {len(raw)}")
        object.__setattr__(self, "raw", raw)

    @classmethod
    def from_base58(cls, text: str) -> Pubkey:
        return cls(_b58decode(text))

    @classmethod
    def new_unique(cls) -> Pubkey:
        """Return a key distinct from every other key made this way."""
        return cls(next(_unique_counter).to_bytes(8, "big") + bytes(24))

    def __bytes__(self) -> bytes:
        return self.raw

    def __str__(self) -> str:
        return _b58encode(self.raw)

    def __repr__(self) -> str:
        return f"Pubkey({self})"


SYSTEM_PROGRAM_ID = Pubkey(bytes(32))
PROGRAM_ID = Pubkey.from_base58("B1osUCap5eJ2iJnbRqfCQB87orhJM5EqZqPcGMbjJvXz")


def is_on_curve(data: bytes) -> bool:
    """Return True if the 32 bytes decompress to a point on the ed25519 curve."""
    data = bytes(data)
    if len(data) != 32:
        return False
    y = (int.from_bytes(data, "little") & ((1 << 255) - 1)) % _P
    yy = y * y % _P
    u = (yy - 1) % _P
    v = (_D * yy + 1) % _P
    ratio = u * pow(v, -1, _P) % _P
    return ratio == 0 or pow(ratio, (_P - 1) // 2, _P) == 1


def find_program_address(seeds: Iterable[bytes], program_id: Pubkey) -> tuple[Pubkey, int]:
    """Find the first off-curve address for the seeds, trying bumps from 255 down."""
    seed_list = [bytes(seed) for seed in seeds]
    if len(seed_list) >= MAX_SEEDS:
        raise ValueError(f"at most {MAX_SEEDS - 1} seeds are allowed")
    if any(len(seed) > MAX_SEED_LEN for seed in seed_list):
        raise ValueError(f"seeds may be at most {MAX_SEED_LEN} bytes")
    prefix = b"".join(seed_list)
    suffix = bytes(program_id) + _PDA_MARKER
    for bump in range(255, -1, -1):
        candidate = hashlib.sha256(prefix + bytes([bump]) + suffix).digest()
        if not is_on_curve(candidate):
            return Pubkey(candidate), bump
    raise ValueError("unable to find a viable program address bump seed")


def derive_vault_pda(program_id: Pubkey, ocean: Pubkey) -> tuple[Pubkey, int]:
    """Derive the vault address belonging to an ocean account."""
    return find_program_address([SEED_VAULT, bytes(ocean)], program_id)


def derive_fish_pda(program_id: Pubkey, owner: Pubkey, fish_id: int) -> tuple[Pubkey, int]:
    """Derive the fish address for an owner and fish id."""
    if not 0 <= fish_id < 1 << 64:
        raise ValueError("fish id must fit in an unsigned 64-bit integer")
    return find_program_address(
        [SEED_FISH, bytes(owner), fish_id.to_bytes(8, "little")], program_id
    )


def derive_name_registry_pda(program_id: Pubkey, name: str) -> tuple[Pubkey, bytes, int]:
    """Derive the name registry address; returns the address, the name hash and the bump."""
    name_hash = hashlib.sha256(name.encode("utf-8")).digest()
    pda, bump = find_program_address([SEED_NAME, name_hash], program_id)
    return pda, name_hash, bump