from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import Decimal
from enum import Enum


class Direction(str, Enum):
    BUY = "buy"
    SELL = "sell"


@dataclass(frozen=True)
class TokenTransfer:
    amount: int  # raw base units
    source: str
    destination: str


@dataclass(frozen=True)
class NativeBalanceChange:
    direction: Direction
    magnitude: Decimal


@dataclass(frozen=True)
class TokenLeg:
    mint: str
    amount: str  # scaled, 6 fixed decimals


@dataclass(frozen=True)
class ParsedSwap:
    direction: Direction
    monitored_wallet: str | None
    dex: str
    operation: str
    token_in: TokenLeg
    token_out: TokenLeg
    signature: str | None

    def as_dict(self) -> dict:
        data = asdict(self)
        data["direction"] = self.direction.value
        return data


class ParseStatus(str, Enum):
    PARSED = "parsed"
    NO_MATCH = "no_match"
    FAILED = "failed"


class FailureKind(str, Enum):
    SHAPE = "shape"
    TRANSPORT = "transport"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class ParseResult:
    status: ParseStatus
    swap: ParsedSwap | None = None
    kind: FailureKind | None = None
    reason: str = ""

    @classmethod
    def parsed(cls, swap: ParsedSwap) -> ParseResult:
        return cls(status=ParseStatus.PARSED, swap=swap)

    @classmethod
    def no_match(cls, reason: str) -> ParseResult:
        return cls(status=ParseStatus.NO_MATCH, reason=reason)

    @classmethod
    def failed(cls, kind: FailureKind, reason: str) -> ParseResult:
        return cls(status=ParseStatus.FAILED, kind=kind, reason=reason)

    @property
    def ok(self) -> bool:
        return self.swap is not None
