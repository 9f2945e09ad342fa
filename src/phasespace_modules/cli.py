from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import RunConfig
from .io import load_points
from .logging_config import setup_logging
from .pipeline import Pipeline, evaluate_points
from .points import midpoint_grid


def _existing_path(value: str) -> Path:
    path = Path(value)
    if not path.exists():
        raise argparse.ArgumentTypeError(f"File not found: {value}")
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ps-modules", add_help=True)
    parser.add_argument("--config", required=True, type=_existing_path, help="Path to run.yaml")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--points", type=_existing_path, help="Path to phase-space points (json|yaml)")
    source.add_argument("--grid", type=int, help="Evaluate the midpoints of an N^dims uniform grid")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write report JSON to this path (default: stdout)",
    )
    parser.add_argument("--log-file", type=str, default=None, help="Also write logs to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)

    try:
        config = RunConfig.from_yaml(args.config)
        pipeline = Pipeline.build(config)
        if args.points is not None:
            points = load_points(args.points)
        else:
            points = midpoint_grid(args.grid, pipeline.dimensions)
        report = evaluate_points(
            pipeline,
            points,
            paths={
                "config": str(args.config),
                "points": str(args.points) if args.points is not None else None,
            },
        )
    except Exception as exc:  # noqa: BLE001
        print(f"error: {exc}", file=sys.stderr)
        return 2

    payload = report.model_dump(mode="json")
    text = json.dumps(payload, indent=2, sort_keys=True)
    if args.output is None:
        print(text)
        return 0

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(text + "\n", encoding="utf-8")
    return 0
