# uwledger/ledger/tiers.py
from typing import Dict, List, Tuple

from .contracts import Err, ErrorKind, Ok, Result

MAX_SCORE = 100

# (inclusive upper bound, tier); first matching band wins
TIER_BANDS: List[Tuple[int, int]] = [
    (20, 1),
    (40, 2),
    (60, 3),
    (80, 4),
    (100, 5),
]


def derive_tier(score: int) -> int:
    """
    Map a risk score to its premium tier.

      0-20 -> 1, 21-40 -> 2, 41-60 -> 3, 61-80 -> 4, 81-100 -> 5

    Scores above MAX_SCORE must be rejected by the caller first.
    """
    for upper, tier in TIER_BANDS:
        if score <= upper:
            return tier
    return TIER_BANDS[-1][1]


def base_premium(score: int, tier_rates: Dict[int, int]) -> Result[int]:
    """Rate in bps for the tier a score falls into. No default for unset tiers."""
    if score > MAX_SCORE:
        return Err(ErrorKind.SCORE_OUT_OF_RANGE)
    tier = derive_tier(score)
    rate = tier_rates.get(tier)
    if rate is None:
        return Err(ErrorKind.TIER_RATE_NOT_CONFIGURED)
    return Ok(rate)
