#!/usr/bin/env python3

import argparse, sys, json
from pathlib import Path

# Ensure project root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from uwledger.config import get_config
from uwledger.ledger.engine import build_ledger
from uwledger.ledger.replay import load_operations, replay
from uwledger.ledger.store import save_snapshot
from uwledger.utils.logging_utils import configure_logging


def main():
    parser = argparse.ArgumentParser(
        description="Replay a scenario of underwriting ledger calls and print each outcome."
    )
    parser.add_argument(
        "scenario",
        type=str,
        nargs="?",
        default=str(Path(ROOT) / "data" / "scenarios" / "premium_demo.yaml"),
        help="YAML/JSON scenario file (default: ./data/scenarios/premium_demo.yaml)",
    )
    parser.add_argument(
        "--snapshot-out",
        type=str,
        default=None,
        help="Write the final ledger state to this JSON file",
    )
    args = parser.parse_args()

    cfg = get_config()
    configure_logging(cfg["log_level"])

    scenario = Path(args.scenario)
    if not scenario.exists():
        print(f"[ERROR] Scenario not found: {scenario}")
        sys.exit(1)

    admin, operations = load_operations(scenario)
    ledger = build_ledger(admin, cfg)
    outcomes = replay(ledger, operations)

    print("=== Outcomes ===")
    for i, o in enumerate(outcomes, 1):
        print(f"[{i}] {json.dumps(o)}")

    if args.snapshot_out:
        out = save_snapshot(ledger, args.snapshot_out)
        print(f"\nSaved snapshot to: {out}")


if __name__ == "__main__":
    main()
