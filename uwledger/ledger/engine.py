# uwledger/ledger/engine.py
"""
Underwriting ledger: admin-gated configuration of premium tiers and farmer
discounts, write-once risk scores, and deterministic premium derivation.

Every operation returns a Result (Ok / Err). A refused operation leaves the
state exactly as it was; all checks run before any mutation.
"""
from __future__ import annotations

import copy
import logging
import threading
from typing import Any, Callable, Dict, Optional

from uwledger.config import get_config
from uwledger.schemas.snapshot import LedgerSnapshot
from uwledger.utils.events import file_publisher

from .contracts import Err, ErrorKind, Ok, PolicyKey, Result, RiskScoreKey
from .state import LedgerState
from .tiers import MAX_SCORE, base_premium

logger = logging.getLogger(__name__)

Publisher = Callable[[str, Dict[str, Any]], None]


class UnderwritingLedger:
    def __init__(
        self,
        admin: str,
        state: Optional[LedgerState] = None,
        publish: Optional[Publisher] = None,
    ):
        if state is not None and state.admin != admin:
            raise ValueError(f"admin {admin!r} does not match state admin {state.admin!r}")
        self._state = state or LedgerState(admin=admin)
        self._publish = publish
        self._lock = threading.RLock()

    # --- authorization ---------------------------------------------------------

    def is_admin(self, caller: str) -> bool:
        with self._lock:
            return caller == self._state.admin

    def _refuse(self, op: str, caller: str, kind: ErrorKind) -> Err:
        logger.warning("[LEDGER] %s refused for %s: %s", op, caller, kind.value)
        return Err(kind)

    def _emit(self, event_type: str, payload: Dict[str, Any]) -> None:
        # called under the lock so event order matches commit order
        if self._publish is None:
            return
        try:
            self._publish(event_type, payload)
        except Exception as e:
            # the mutation already happened; a lost event must not undo it
            logger.error("[events] %s emit failed: %r", event_type, e)

    # --- admin-only mutations --------------------------------------------------

    def set_base_premium_tier(self, caller: str, tier: int, bps: int) -> Result[bool]:
        with self._lock:
            if not self.is_admin(caller):
                return self._refuse("set_base_premium_tier", caller, ErrorKind.NOT_ADMIN)
            self._state.tier_rates[tier] = bps
            logger.info("[LEDGER] tier %s rate set to %s bps", tier, bps)
            self._emit("TierRateSet", {"tier": tier, "bps": bps})
        return Ok(True)

    def set_premium_discount(self, caller: str, farmer: str, bps: int) -> Result[bool]:
        with self._lock:
            if not self.is_admin(caller):
                return self._refuse("set_premium_discount", caller, ErrorKind.NOT_ADMIN)
            self._state.discounts[farmer] = bps
            logger.info("[LEDGER] discount for %s set to %s bps", farmer, bps)
            self._emit("DiscountSet", {"farmer": farmer, "bps": bps})
        return Ok(True)

    def submit_risk_score(
        self, caller: str, farmer: str, crop_type: str, season: str, score: int
    ) -> Result[bool]:
        """
        Record the one and only score for (farmer, crop_type, season).

        Check order is fixed: admin gate, then duplicate key, then range.
        Negative scores are accepted; only the upper bound is enforced.
        """
        key = RiskScoreKey(farmer, crop_type, season)
        with self._lock:
            if not self.is_admin(caller):
                return self._refuse("submit_risk_score", caller, ErrorKind.NOT_ADMIN)
            if key in self._state.risk_scores:
                return self._refuse("submit_risk_score", caller, ErrorKind.SCORE_ALREADY_SUBMITTED)
            if score > MAX_SCORE:
                return self._refuse("submit_risk_score", caller, ErrorKind.SCORE_OUT_OF_RANGE)
            self._state.risk_scores[key] = score
            logger.info("[LEDGER] risk score %s recorded for %s/%s/%s", score, farmer, crop_type, season)
            self._emit(
                "RiskScoreSubmitted",
                {"farmer": farmer, "crop_type": crop_type, "season": season, "score": score},
            )
        return Ok(True)

    def mark_policy_submitted(self, caller: str, farmer: str, season: str) -> Result[bool]:
        with self._lock:
            if not self.is_admin(caller):
                return self._refuse("mark_policy_submitted", caller, ErrorKind.NOT_ADMIN)
            # plain set: re-marking is not an error
            self._state.policy_submissions[PolicyKey(farmer, season)] = True
            logger.info("[LEDGER] policy marked submitted for %s/%s", farmer, season)
            self._emit("PolicyMarked", {"farmer": farmer, "season": season})
        return Ok(True)

    def transfer_admin(self, caller: str, new_admin: str) -> Result[bool]:
        with self._lock:
            if not self.is_admin(caller):
                return self._refuse("transfer_admin", caller, ErrorKind.NOT_ADMIN)
            previous = self._state.admin
            self._state.admin = new_admin
            logger.info("[LEDGER] admin transferred from %s to %s", previous, new_admin)
            self._emit("AdminTransferred", {"previous": previous, "admin": new_admin})
        return Ok(True)

    # --- read-only, any caller -------------------------------------------------

    def get_base_premium(self, score: int) -> Result[int]:
        with self._lock:
            return base_premium(score, self._state.tier_rates)

    def calculate_final_premium(self, farmer: str, crop_type: str, season: str) -> Result[int]:
        """
        Final premium in bps: base rate for the stored score's tier minus the
        farmer's discount, floored at zero. Tier errors pass through unchanged.
        """
        with self._lock:
            score = self._state.risk_score(RiskScoreKey(farmer, crop_type, season))
            if score is None:
                return Err(ErrorKind.SCORE_NOT_FOUND)
            base = base_premium(score, self._state.tier_rates)
            if base.is_err:
                return base
            discount = self._state.discount_for(farmer)
        return Ok(base.value - discount if base.value > discount else 0)

    def has_submitted_policy(self, farmer: str, season: str) -> bool:
        with self._lock:
            return self._state.has_submitted(PolicyKey(farmer, season))

    def get_admin(self) -> str:
        with self._lock:
            return self._state.admin

    def get_tier_rate(self, tier: int) -> Optional[int]:
        with self._lock:
            return self._state.tier_rate(tier)

    def get_discount(self, farmer: str) -> int:
        with self._lock:
            return self._state.discount_for(farmer)

    def get_risk_score(self, farmer: str, crop_type: str, season: str) -> Optional[int]:
        with self._lock:
            return self._state.risk_score(RiskScoreKey(farmer, crop_type, season))

    # --- snapshots -------------------------------------------------------------

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return copy.deepcopy(self._state.to_dict())

    @classmethod
    def from_snapshot(
        cls, data: Dict[str, Any], publish: Optional[Publisher] = None
    ) -> "UnderwritingLedger":
        """Rebuild a ledger from snapshot data; raises pydantic.ValidationError if malformed."""
        snap = LedgerSnapshot.model_validate(data)
        state = LedgerState.from_dict(snap.model_dump())
        return cls(state.admin, state=state, publish=publish)


def build_ledger(admin: str, cfg: Optional[Dict[str, Any]] = None) -> UnderwritingLedger:
    """Construct a ledger wired to the configured event sink."""
    cfg = cfg or get_config()
    publish = file_publisher(cfg["events_path"]) if cfg.get("emit_events") else None
    return UnderwritingLedger(admin, publish=publish)
