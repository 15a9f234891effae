# uwledger/config.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict

import yaml
from dotenv import load_dotenv

# Load .env in local dev
load_dotenv()


def _load_yaml(path: str | Path) -> dict:
    """Best-effort YAML loader; returns {} if the file is missing or unreadable."""
    p = Path(path)
    if not p.exists():
        return {}
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError):
        return {}


def _getenv_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return str(v).strip().lower() in ("1", "true", "yes", "on")


def get_config() -> Dict[str, Any]:
    """
    Runtime config for hosts embedding the ledger.
    Merges (in order): defaults <- YAML (if present) <- ENV.
    """
    cfg: Dict[str, Any] = {}
    for candidate in ("uwledger/config.yaml", "config.yaml"):
        cfg.update(_load_yaml(candidate))

    defaults = {
        "emit_events": False,
        "events_path": "data/events.jsonl",
        "log_level": "INFO",
    }

    merged = {**defaults, **cfg}

    # ENV overrides
    merged["emit_events"] = _getenv_bool("UWLEDGER_EMIT_EVENTS", bool(merged["emit_events"]))
    merged["events_path"] = os.getenv("UWLEDGER_EVENTS_PATH", merged["events_path"])
    merged["log_level"]   = os.getenv("UWLEDGER_LOG_LEVEL", merged["log_level"])

    return merged
