"""Error codes raised by game operations."""

from enum import Enum


class ErrorCode(Enum):
    """Every failure a game operation can report, with its number and message."""

    MINIMUM_DEPOSIT = (6000, "Minimum deposit is 0.01 SOL")
    NAME_TOO_LONG = (6001, "Name too long: maximum 32 characters")
    INVALID_NAME = (6002, "Invalid fish name")
    NAME_ALREADY_TAKEN = (6003, "Fish name is already taken")
    UNAUTHORIZED_ADMIN = (6004, "Unauthorized admin action")
    NOT_FISH_OWNER = (6005, "Caller is not the fish owner")
    FISH_ALREADY_DEAD = (6006, "Fish is already dead")
    CANNOT_TRANSFER_TO_SELF = (6007, "Cannot transfer fish to yourself")
    INSUFFICIENT_FEEDING_AMOUNT = (6008, "Insufficient feeding amount")
    INSUFFICIENT_FUNDS = (6009, "Insufficient funds")
    INSUFFICIENT_VAULT_BALANCE = (6010, "Vault has insufficient balance")
    MATH_OVERFLOW = (6011, "Math overflow/underflow")
    PREY_TOO_HEAVY = (6012, "Prey is too heavy")
    HUNTING_ON_COOLDOWN = (6013, "Hunter is on hunting cooldown")
    INVALID_PREY = (6014, "Invalid prey")
    SLIPPAGE_EXCEEDED = (6015, "Slippage exceeded: prey weight changed more than 5%")
    MARK_LIMIT_EXCEEDED = (6016, "Hunting mark limit exceeded (max 4 per ocean mode period)")
    MARK_TOO_EARLY = (
        6017,
        "Too early to place hunting mark (must be within 24 hours of hunger)",
    )
    MARK_INACTIVE = (6018, "Hunting mark is inactive")
    MARK_WRONG_HUNTER = (6019, "Wrong hunter for this mark")
    MARK_WRONG_PREY = (6020, "Wrong prey for this mark")
    MARK_EXPIRED = (6021, "Hunting mark has expired")
    MARK_EXCLUSIVITY_ACTIVE = (
        6022,
        "Mark exclusivity period active - only mark owner can hunt",
    )
    MARK_ALREADY_ACTIVE = (6023, "An active mark already exists for this prey")
    EXIT_DURING_STORM = (6024, "Cannot exit during storm")

    def __init__(self, number: int, message: str) -> None:
        self.number = number
        self.message = message


class GameError(Exception):
    """Raised when a game rule rejects an operation."""

    def __init__(self, code: ErrorCode) -> None:
        super().__init__(code.message)
        self.code = code