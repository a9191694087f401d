from __future__ import annotations

import argparse
import logging
import sys
from datetime import date

import pandas as pd

from .config import DemoDataConfig, load_config
from .data_io import read_schedule, write_schedule
from .demo_data import DemoData, generate_demo_data
from .random_source import available_sequences
from .scoring import calculate_score, explain_score
from .validator import summarize_schedule


def _cmd_demo(args: argparse.Namespace) -> None:
    cfg = load_config(args.config) if args.config else DemoDataConfig()
    if args.rng:
        cfg = DemoDataConfig.from_dict({"random_sequence": args.rng}, base=cfg)
    today = date.fromisoformat(args.start) if args.start else None
    schedule = generate_demo_data(
        demo=DemoData(args.size),
        config=cfg,
        seed=args.seed,
        today=today,
    )
    out = write_schedule(schedule, args.out)
    print(f"[OK] Wrote {len(schedule.employees)} employees and {len(schedule.shifts)} shifts to {out}")


def _cmd_score(args: argparse.Namespace) -> None:
    schedule = read_schedule(args.data)
    score = calculate_score(schedule)
    print(f"Score: {score} ({'feasible' if score.is_feasible else 'infeasible'})")
    if args.explain:
        matches = explain_score(schedule)
        if matches.empty:
            print("No constraint matches.")
        else:
            with pd.option_context("display.max_rows", None, "display.width", 200):
                print(matches.to_string(index=False))


def _cmd_summarize(args: argparse.Namespace) -> None:
    print(summarize_schedule(read_schedule(args.data)))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="employee-scheduling")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    d = sub.add_parser("demo", help="Generate a demo instance as CSV files")
    d.add_argument("--out", required=True, help="Output directory")
    d.add_argument("--size", choices=[demo.value for demo in DemoData], default=DemoData.SMALL.value)
    d.add_argument("--seed", type=int, default=None)
    d.add_argument("--rng", choices=available_sequences(), default=None)
    d.add_argument("--config", help="Path to config YAML or JSON")
    d.add_argument("--start", help="Reference date YYYY-MM-DD (roster starts the Monday on or after it)")
    d.set_defaults(func=_cmd_demo)

    s = sub.add_parser("score", help="Score a schedule directory")
    s.add_argument("--data", required=True, help="Directory with employees.csv and shifts.csv")
    s.add_argument("--explain", action="store_true", help="List every constraint match")
    s.set_defaults(func=_cmd_score)

    m = sub.add_parser("summarize", help="Summarize a schedule directory")
    m.add_argument("--data", required=True)
    m.set_defaults(func=_cmd_summarize)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
        stream=sys.stdout,
    )
    try:
        args.func(args)
    except (ValueError, FileNotFoundError) as e:
        print(f"[ERROR] {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
