# uwledger/schemas/snapshot.py
from pydantic import BaseModel, Field, model_validator
from typing import List


# Identities and bps values are stored as the ledger accepted them; only the
# score bound and write-once keys are re-checked on restore.

class TierRateRecord(BaseModel):
    tier: int
    bps: int


class DiscountRecord(BaseModel):
    farmer: str
    bps: int


class RiskScoreRecord(BaseModel):
    farmer: str
    crop_type: str
    season: str
    score: int = Field(le=100)      # lower bound deliberately unchecked, as at submission


class PolicyRecord(BaseModel):
    farmer: str
    season: str


class LedgerSnapshot(BaseModel):
    """Validated shape of a serialized ledger (see LedgerState.to_dict)."""
    admin: str
    tier_rates: List[TierRateRecord] = []
    discounts: List[DiscountRecord] = []
    risk_scores: List[RiskScoreRecord] = []
    policy_submissions: List[PolicyRecord] = []

    @model_validator(mode="after")
    def _write_once_scores(self):
        """A snapshot may hold at most one score per (farmer, crop, season)."""
        seen = set()
        for r in self.risk_scores:
            key = (r.farmer, r.crop_type, r.season)
            if key in seen:
                raise ValueError(f"duplicate risk score for {key}")
            seen.add(key)
        return self
