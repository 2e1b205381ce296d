"""Command-line entry point: run NVE dynamics from a configuration file."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from .analysis import PropertyEstimator
from .config import load_parameters
from .engines import ConsoleReporter, NVEEngine
from .exceptions import MDError
from .forcefields import LennardJonesModel
from .integrators import VelocityVerletIntegrator
from .io import INPUT_NAME, CheckpointWriter, read_state
from .logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mdnve",
        description="Molecular dynamics, constant-NVE ensemble (Lennard-Jones).",
    )
    parser.add_argument(
        "params",
        nargs="?",
        type=Path,
        help="YAML/JSON file of run parameters (default: read standard input)",
    )
    parser.add_argument(
        "-i",
        "--input",
        type=Path,
        default=None,
        help=f"initial configuration (default: DIRECTORY/{INPUT_NAME})",
    )
    parser.add_argument(
        "-d",
        "--directory",
        type=Path,
        default=Path("."),
        help="directory for checkpoint files (default: current directory)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="diagnostic logging level",
    )
    parser.add_argument("--log-file", default=None, help="also log to this file")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Run a simulation from the command line.

    Returns:
        Process exit code: 0 on success, 1 on a fatal simulation error.
    """
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)

    try:
        # Parameters are read before any state exists
        params = load_parameters(args.params if args.params else sys.stdin)
        cnf_path = args.input if args.input else args.directory / INPUT_NAME
        state = read_state(cnf_path)

        model = LennardJonesModel()
        engine = NVEEngine(
            state=state,
            integrator=VelocityVerletIntegrator(params.dt, model, params.r_cut),
            estimator=PropertyEstimator(model, params.r_cut),
            checkpoint_writer=CheckpointWriter(args.directory),
        )
        engine.add_reporter(ConsoleReporter(sys.stdout))
        engine.run(params)
    except MDError as exc:
        logger.error("Error in md_nve: %s", exc)
        return 1

    return 0
