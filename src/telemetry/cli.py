from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict

import numpy as np
from pydantic import ValidationError

from .charging import ChargingNetwork
from .config import DashboardConfig, load_config
from .snapshot import SnapshotGenerator, SnapshotHistory

logger = logging.getLogger(__name__)


def _positive_int(raw: str) -> int:
    try:
        v = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {raw}")
    if v < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return v


def record_session(config: DashboardConfig, ticks: int, start: datetime | None = None) -> Dict[str, Any]:
    """
    Generate `ticks` snapshots spaced by the refresh interval.

    The charging fleet advances one interval per snapshot.
    """
    rng = np.random.default_rng(config.seed)
    generator = SnapshotGenerator(config, rng=rng)
    network = ChargingNetwork.create(config.charging, rng)
    history = SnapshotHistory(maxlen=max(ticks, 1))

    start = start or datetime.now()
    step = timedelta(seconds=config.refresh.interval_seconds)
    for i in range(ticks):
        history.append(generator.next(timestamp=start + i * step))
        network.tick()

    snapshots = [s.to_dict() for s in history.snapshots()]
    logger.debug("Recorded %d snapshots", len(snapshots))

    return {
        "config": config.model_dump(),
        "snapshots": snapshots,
        "charging": {
            "stations": [s.to_dict() for s in network.stations],
            "summary": network.summary().to_dict(),
        },
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Record a synthetic power system dashboard session to JSON."
    )
    parser.add_argument(
        "--config",
        "-c",
        help="Path to dashboard config JSON. Defaults are used if omitted.",
    )
    parser.add_argument(
        "--ticks",
        "-n",
        type=_positive_int,
        default=10,
        help="Number of snapshots to record.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (overrides the config seed).",
    )
    parser.add_argument(
        "--output",
        "-o",
        default="dashboard_session.json",
        help="Path to write the session JSON.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging.",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config = load_config(args.config)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        print(f"Input error: {e}", file=sys.stderr)
        return 2
    except ValidationError as e:
        print("Config validation error:", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    if args.seed is not None:
        config = config.model_copy(update={"seed": args.seed})

    session = record_session(config, args.ticks)
    Path(args.output).write_text(json.dumps(session, indent=2))

    # Minimal console summary
    snapshots = session["snapshots"]
    gen = [s["power_flow"]["generation"] for s in snapshots]
    eff = [s["efficiency"]["overall"] for s in snapshots]
    n_alerts = sum(len(s["alerts"]) for s in snapshots)
    summary = session["charging"]["summary"]
    print(f"Snapshots: {len(snapshots)} -> {args.output}")
    print(f"Generation: {min(gen):.1f}-{max(gen):.1f} kW (mean {float(np.mean(gen)):.1f} kW)")
    print(f"Overall efficiency: mean {float(np.mean(eff)):.1f}%")
    print(f"Alerts raised: {n_alerts}")
    print(
        f"Charging: {summary['active']} active / {summary['available']} available / "
        f"{summary['offline']} offline, {summary['total_power_kw']:.1f} kW"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
