"""Lamport balances of the accounts the game touches, and vault payouts to the admin."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from hodlhunt import constants
from hodlhunt.errors import ErrorCode, GameError
from hodlhunt.seeds import SYSTEM_PROGRAM_ID, Pubkey

log = logging.getLogger(__name__)

# Rent-exemption parameters: an account must hold this many lamports per byte
# (plus a fixed overhead) to stay alive.
ACCOUNT_STORAGE_OVERHEAD = 128
LAMPORTS_PER_BYTE_YEAR = 3480
EXEMPTION_THRESHOLD = 2


@dataclass
class Account:
    """An account's lamport balance, owning program and data size."""

    lamports: int = 0
    owner: Pubkey = SYSTEM_PROGRAM_ID
    space: int = 0

    @property
    def in_use(self) -> bool:
        return self.lamports > 0 or self.space > 0 or self.owner != SYSTEM_PROGRAM_ID


def _check_amount(amount: int) -> None:
    if amount < 0:
        raise ValueError(f"amount must not be negative, got {amount}")


@dataclass
class Ledger:
    """Every account balance, keyed by public key."""

    accounts: dict[Pubkey, Account] = field(default_factory=dict)

    def account(self, key: Pubkey) -> Account:
        """Return the account at the key, creating an empty one if there is none."""
        return self.accounts.setdefault(key, Account())

    def balance(self, key: Pubkey) -> int:
        found = self.accounts.get(key)
        return found.lamports if found is not None else 0

    def credit(self, key: Pubkey, amount: int) -> None:
        _check_amount(amount)
        target = self.account(key)
        if target.lamports + amount > constants.U64_MAX:
            raise GameError(ErrorCode.MATH_OVERFLOW)
        target.lamports += amount

    def debit(self, key: Pubkey, amount: int) -> None:
        _check_amount(amount)
        if self.balance(key) < amount:
            raise GameError(ErrorCode.INSUFFICIENT_FUNDS)
        self.account(key).lamports -= amount

    def transfer(self, source: Pubkey, destination: Pubkey, amount: int) -> None:
        """Move lamports between two accounts; nothing moves if the source is short."""
        _check_amount(amount)
        if self.balance(destination) + amount > constants.U64_MAX and source != destination:
            raise GameError(ErrorCode.MATH_OVERFLOW)
        self.debit(source, amount)
        self.credit(destination, amount)

    def create_account(
        self, payer: Pubkey, key: Pubkey, lamports: int, space: int, owner: Pubkey
    ) -> Account:
        """Fund a fresh account from the payer and assign it to the owning program."""
        _check_amount(lamports)
        existing = self.accounts.get(key)
        if existing is not None and existing.in_use:
            raise ValueError(f"account {key} is already in use")
        self.debit(payer, lamports)
        created = Account(lamports=lamports, owner=owner, space=space)
        self.accounts[key] = created
        return created


def transfer_to_admin(ledger: Ledger, vault: Pubkey, admin: Pubkey, amount: int) -> None:
    """Pay the admin out of the vault; a zero amount does nothing."""
    if amount == 0:
        return
    if ledger.balance(vault) < amount:
        raise GameError(ErrorCode.INSUFFICIENT_FEEDING_AMOUNT)
    ledger.transfer(vault, admin, amount)
    log.info("Transferred %d lamports to admin", amount)