# uwledger/ledger/contracts.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, TypeVar, Union

T = TypeVar("T")

# --- Error kinds ---------------------------------------------------------------

_CODES = {
    "NOT_ADMIN": 100,
    "SCORE_NOT_FOUND": 101,
    "SCORE_ALREADY_SUBMITTED": 102,
    "SCORE_OUT_OF_RANGE": 103,
    "TIER_RATE_NOT_CONFIGURED": 104,
}


class ErrorKind(str, Enum):
    """Every way a ledger operation can be refused."""
    NOT_ADMIN = "NOT_ADMIN"
    SCORE_NOT_FOUND = "SCORE_NOT_FOUND"
    SCORE_ALREADY_SUBMITTED = "SCORE_ALREADY_SUBMITTED"
    SCORE_OUT_OF_RANGE = "SCORE_OUT_OF_RANGE"
    TIER_RATE_NOT_CONFIGURED = "TIER_RATE_NOT_CONFIGURED"

    @property
    def code(self) -> int:
        """Numeric code reported to the host (100-104)."""
        return _CODES[self.value]

    @staticmethod
    def from_code(code: int) -> "ErrorKind":
        for kind in ErrorKind:
            if kind.code == code:
                return kind
        raise ValueError(f"Unknown error code: {code}")


class LedgerError(Exception):
    """Raised only by Result.unwrap() for hosts that prefer exceptions."""

    def __init__(self, kind: ErrorKind):
        super().__init__(f"{kind.value} ({kind.code})")
        self.kind = kind


# --- Result --------------------------------------------------------------------

@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value}


@dataclass(frozen=True)
class Err:
    kind: ErrorKind

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True

    def unwrap(self):
        raise LedgerError(self.kind)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.kind.code}


Result = Union[Ok[T], Err]


# --- Composite keys ------------------------------------------------------------

@dataclass(frozen=True)
class RiskScoreKey:
    """Identifies one assessment: a farmer's crop in a season."""
    farmer: str
    crop_type: str
    season: str


@dataclass(frozen=True)
class PolicyKey:
    farmer: str
    season: str
