#!/usr/bin/env python3
"""
Fixture Replay Script - run a fixture pack through the outcome pipeline.

Each fixture is treated as one round: persistent stores are reset, the raw
payload is normalized by the adapter registered for the round context, and the
canonical outcome is printed as one JSON line.

Usage:
    PYTHONPATH=src python -m scripts.replay_fixtures fixtures/reference_p0.json
    PYTHONPATH=src python -m scripts.replay_fixtures pack.json --cycle --count 10 --snapshot
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from config import config
from core.bootstrap import build_adapter_registry, build_store_manager
from core.errors import OutcomeContractError
from core.replay_runner import ReplayRunner
from models import AdapterContext, ReplayPolicy
from services.logger import setup_logging
from services.round_service import RoundService

logger = logging.getLogger("replay_fixtures")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Replay a fixture pack through the outcome adapters",
    )
    parser.add_argument(
        "fixture_pack",
        nargs="?",
        default=config.REPLAY["fixture_path"],
        help="Path to a JSON array of raw payloads (default: configured fixture path)",
    )
    parser.add_argument("--game-id", default=config.ADAPTER["reference_game_id"])
    parser.add_argument("--currency", default=config.ADAPTER["default_currency"])
    parser.add_argument(
        "--cycle",
        action="store_true",
        default=config.REPLAY["policy"] == ReplayPolicy.CYCLE.value,
        help="Wrap around to the first fixture instead of stopping",
    )
    parser.add_argument(
        "--count",
        type=int,
        default=None,
        help="Number of rounds to replay (default: pack length)",
    )
    parser.add_argument(
        "--snapshot",
        action="store_true",
        help="Emit the recovery snapshot alongside each outcome",
    )
    parser.add_argument("--log-level", default=config.LOGGING["level"])
    return parser


def run(args: argparse.Namespace, out=None) -> int:
    """Replay the pack; returns the process exit code"""
    out = out or sys.stdout
    registry = build_adapter_registry()
    service = RoundService(registry, build_store_manager())

    policy = ReplayPolicy.CYCLE if args.cycle else ReplayPolicy.EXHAUST
    runner = ReplayRunner(
        registry,
        policy=policy,
        default_context=AdapterContext(game_id=args.game_id, currency=args.currency),
    )

    try:
        runner.load_file(Path(args.fixture_pack))
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Cannot load fixture pack: {e}")
        return 2

    if not len(runner):
        logger.error(f"Fixture pack {args.fixture_pack} is empty")
        return 2

    count = args.count if args.count is not None else len(runner)
    if policy is ReplayPolicy.EXHAUST:
        count = min(count, len(runner))

    failures = 0
    for _ in range(count):
        payload, context = runner.next_raw()
        service.begin_round()
        try:
            outcome = service.process(payload, context)
        except OutcomeContractError as e:
            failures += 1
            logger.error(f"Fixture {runner.progress()[0]} rejected: {e}")
            continue

        record = outcome.to_wire()
        if args.snapshot:
            record = {"outcome": record, "snapshot": service.snapshot()}
        out.write(json.dumps(record) + "\n")

    logger.info(f"Replayed {count} fixtures ({failures} rejected)")
    return 1 if failures else 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging({"level": args.log_level})
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
