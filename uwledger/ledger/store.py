# uwledger/ledger/store.py
from pathlib import Path
from typing import Optional, Union
import json

from .engine import Publisher, UnderwritingLedger


def save_snapshot(ledger: UnderwritingLedger, path: Union[str, Path]) -> Path:
    """Write the ledger's current state as indented JSON. Overwrites."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(ledger.snapshot(), indent=2, ensure_ascii=False), encoding="utf-8")
    return p


def load_snapshot(path: Union[str, Path], publish: Optional[Publisher] = None) -> UnderwritingLedger:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Snapshot not found: {p}")
    data = json.loads(p.read_text(encoding="utf-8"))
    return UnderwritingLedger.from_snapshot(data, publish=publish)
