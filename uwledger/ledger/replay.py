# uwledger/ledger/replay.py
"""
Replay a scripted sequence of host calls against a ledger.

Scenario files (YAML or JSON) look like:

    admin: STADMIN1111
    operations:
      - {op: setBasePremiumTier, caller: STADMIN1111, tier: 2, bps: 500}
      - {op: calculateFinalPremium, farmer: STFARMER, crop_type: maize, season: 2025-Q1}
"""
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple, Union
import json

import yaml

from .contracts import Err, Ok
from .engine import UnderwritingLedger

# host name -> (method, argument names in call order)
_OPS: Dict[str, Tuple[str, List[str]]] = {
    "setBasePremiumTier": ("set_base_premium_tier", ["caller", "tier", "bps"]),
    "setPremiumDiscount": ("set_premium_discount", ["caller", "farmer", "bps"]),
    "submitRiskScore": ("submit_risk_score", ["caller", "farmer", "crop_type", "season", "score"]),
    "getBasePremium": ("get_base_premium", ["score"]),
    "calculateFinalPremium": ("calculate_final_premium", ["farmer", "crop_type", "season"]),
    "markPolicySubmitted": ("mark_policy_submitted", ["caller", "farmer", "season"]),
    "hasSubmittedPolicy": ("has_submitted_policy", ["farmer", "season"]),
    "transferAdmin": ("transfer_admin", ["caller", "new_admin"]),
}
_BY_METHOD = {method: (method, args) for method, args in _OPS.values()}


def _resolve(op: str) -> Tuple[str, List[str]]:
    if op in _OPS:
        return _OPS[op]
    if op in _BY_METHOD:
        return _BY_METHOD[op]
    raise ValueError(f"Unknown ledger operation: {op}")


def apply_operation(ledger: UnderwritingLedger, operation: Dict[str, Any]) -> Dict[str, Any]:
    """Run one operation and describe its outcome as a plain dict."""
    name = operation.get("op") or ""
    method, arg_names = _resolve(name)
    missing = [a for a in arg_names if a not in operation]
    if missing:
        raise ValueError(f"{name}: missing argument(s) {', '.join(missing)}")

    out = getattr(ledger, method)(*[operation[a] for a in arg_names])
    if isinstance(out, Ok):
        return {"op": name, "value": out.value}
    if isinstance(out, Err):
        return {"op": name, "error": out.kind.value, "code": out.kind.code}
    # plain queries (hasSubmittedPolicy) never fail
    return {"op": name, "value": out}


def replay(ledger: UnderwritingLedger, operations: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [apply_operation(ledger, op) for op in operations]


def load_operations(path: Union[str, Path]) -> Tuple[str, List[Dict[str, Any]]]:
    """Read a scenario file; returns (admin, operations)."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Scenario not found: {p}")
    text = p.read_text(encoding="utf-8")
    data = json.loads(text) if p.suffix.lower() == ".json" else yaml.safe_load(text)
    if not isinstance(data, dict) or not data.get("admin"):
        raise ValueError(f"Scenario {p} must define 'admin'")
    return str(data["admin"]), list(data.get("operations") or [])
