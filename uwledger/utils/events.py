# uwledger/utils/events.py
import json, os
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

EVENTS_PATH = os.environ.get("UWLEDGER_EVENTS_PATH", "data/events.jsonl")


def publish(event_type: str, payload: Dict[str, Any], path: Optional[str] = None) -> None:
    target = path or EVENTS_PATH
    parent = os.path.dirname(target)
    if parent:
        os.makedirs(parent, exist_ok=True)
    record = {
        "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "type": event_type,
        "payload": payload,
    }
    with open(target, "a", encoding="utf-8") as f:
        f.write(json.dumps(record, ensure_ascii=False) + "\n")


def file_publisher(path: str) -> Callable[[str, Dict[str, Any]], None]:
    """Bind publish() to one JSONL file, in the shape the ledger expects."""
    def _publish(event_type: str, payload: Dict[str, Any]) -> None:
        publish(event_type, payload, path=path)
    return _publish


def read_events(path: Optional[str] = None) -> list:
    target = path or EVENTS_PATH
    if not os.path.exists(target):
        return []
    out = []
    with open(target, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                out.append(json.loads(line))
    return out
