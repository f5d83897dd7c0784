"""
sineprec.cli
============

Command-line entry point.

Runs the comparison engine until interrupted. SIGINT (Ctrl-C) stops the run
after the current iteration and prints the final report; SIGHUP prints a
snapshot and keeps going.

Usage::

    sineprec --seed 1111 --precision 512
    kill -HUP <pid>       # snapshot
    kill -INT <pid>       # final report, exit 0
"""

from __future__ import annotations
import argparse
import logging
from typing import List, Optional

from sineprec.config import DEFAULT_SEED, EngineConfig
from sineprec.core.precision import DEFAULT_PRECISION_BITS
from sineprec.runtime.control import (
    EngineControl,
    install_signal_handlers,
    restore_signal_handlers,
)
from sineprec.runtime.engine import ComparisonEngine

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="sineprec",
        description="Running relative-error statistics of float32/float64/"
        "longdouble/binary128 sine against a high-precision reference.",
    )
    ap.add_argument("--seed", type=int, default=DEFAULT_SEED, help="random seed")
    ap.add_argument(
        "--precision",
        type=int,
        default=DEFAULT_PRECISION_BITS,
        help="working precision in bits for reference and statistics",
    )
    ap.add_argument(
        "--digits", type=int, default=10, help="digits after the point in reports"
    )
    ap.add_argument(
        "--iterations",
        type=int,
        default=None,
        help="stop after this many iterations (default: run until SIGINT)",
    )
    ap.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = EngineConfig(
        seed=args.seed, precision_bits=args.precision, report_digits=args.digits
    )
    try:
        config.validate()
        if args.iterations is not None and args.iterations < 0:
            raise ValueError(f"--iterations must be non-negative, got {args.iterations}")
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    control = EngineControl()
    engine = ComparisonEngine(config, control=control)
    previous = install_signal_handlers(control)
    try:
        engine.run(max_iterations=args.iterations)
    finally:
        restore_signal_handlers(previous)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
