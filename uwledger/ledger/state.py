# uwledger/ledger/state.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .contracts import PolicyKey, RiskScoreKey


@dataclass
class LedgerState:
    """
    Everything the underwriting ledger owns. Created empty apart from the
    administrator; entries are only ever added or overwritten, never removed.
    """
    admin: str
    tier_rates: Dict[int, int] = field(default_factory=dict)
    discounts: Dict[str, int] = field(default_factory=dict)
    risk_scores: Dict[RiskScoreKey, int] = field(default_factory=dict)
    policy_submissions: Dict[PolicyKey, bool] = field(default_factory=dict)

    # --- lookups (absence is explicit) ---------------------------------------

    def tier_rate(self, tier: int) -> Optional[int]:
        return self.tier_rates.get(tier)

    def risk_score(self, key: RiskScoreKey) -> Optional[int]:
        return self.risk_scores.get(key)

    def discount_for(self, farmer: str) -> int:
        # unlike tiers and scores, a missing discount simply means none
        return self.discounts.get(farmer, 0)

    def has_submitted(self, key: PolicyKey) -> bool:
        return self.policy_submissions.get(key, False)

    # --- serialization -------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly snapshot; composite keys are spelled out as records."""
        return {
            "admin": self.admin,
            "tier_rates": [
                {"tier": t, "bps": bps} for t, bps in sorted(self.tier_rates.items())
            ],
            "discounts": [
                {"farmer": f, "bps": bps} for f, bps in sorted(self.discounts.items())
            ],
            "risk_scores": [
                {"farmer": k.farmer, "crop_type": k.crop_type, "season": k.season, "score": s}
                for k, s in self.risk_scores.items()
            ],
            "policy_submissions": [
                {"farmer": k.farmer, "season": k.season}
                for k, flag in self.policy_submissions.items() if flag
            ],
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "LedgerState":
        """Inverse of to_dict(). Expects data already validated by LedgerSnapshot."""
        return LedgerState(
            admin=d["admin"],
            tier_rates={int(r["tier"]): int(r["bps"]) for r in d.get("tier_rates") or []},
            discounts={r["farmer"]: int(r["bps"]) for r in d.get("discounts") or []},
            risk_scores={
                RiskScoreKey(r["farmer"], r["crop_type"], r["season"]): int(r["score"])
                for r in d.get("risk_scores") or []
            },
            policy_submissions={
                PolicyKey(r["farmer"], r["season"]): True
                for r in d.get("policy_submissions") or []
            },
        )
