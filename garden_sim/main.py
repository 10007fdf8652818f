"""CLI entrypoint for the garden portfolio Monte Carlo simulator.

Execution flow
--------------
1.  Load & validate the simulation config JSON.
2.  Run the Monte Carlo simulation.
3.  Write output CSVs.
4.  Print summary to stdout.

Usage
-----
    python -m garden_sim.main --config configs/durham.json
    python -m garden_sim.main --config my.json --iterations 5000 --seed 42
    python -m garden_sim.main --config my.json --dry-run
    python -m garden_sim.main --config my.json -v
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import jsonschema

from garden_sim.config.defaults import DEFAULT_OUTPUT_DIR
from garden_sim.config.loader import SimulationConfig, load_simulation_config
from garden_sim.output.csv_writer import (
    write_histograms_csv,
    write_results_csv,
    write_summary_csv,
)
from garden_sim.simulation.engine import run_complete_simulation
from garden_sim.simulation.summary import SimulationSummary

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# CLI argument parsing
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    p = argparse.ArgumentParser(
        prog="python -m garden_sim.main",
        description="Garden Portfolio Monte Carlo Simulator",
    )
    p.add_argument(
        "--config",
        required=True,
        metavar="PATH",
        help="Path to simulation config JSON file.",
    )
    p.add_argument(
        "--iterations",
        type=int,
        default=None,
        metavar="N",
        help="Number of Monte Carlo iterations (overrides config JSON).",
    )
    p.add_argument(
        "--seed",
        type=int,
        default=None,
        metavar="SEED",
        help="Random seed for a reproducible run (overrides config JSON).",
    )
    p.add_argument(
        "--output",
        metavar="DIR",
        default=None,
        help=f"Output directory (default: {DEFAULT_OUTPUT_DIR}).",
    )
    p.add_argument(
        "--no-csv",
        action="store_true",
        default=False,
        help="Print the summary without writing CSV files.",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable DEBUG logging.",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        help="Validate the config JSON, then exit without running the simulation.",
    )
    return p


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------


def run(args: argparse.Namespace) -> int:
    """Execute one simulation run.

    Parameters
    ----------
    args:
        Parsed CLI arguments.

    Returns
    -------
    int
        Exit code (0 = success, 1 = error).
    """
    logger.info("Loading simulation config: %s", args.config)
    try:
        config = load_simulation_config(args.config)
    except (FileNotFoundError, json.JSONDecodeError, jsonschema.ValidationError, ValueError) as exc:
        logger.error("Failed to load simulation config: %s", exc)
        return 1

    if args.dry_run:
        print(f"Dry run: config '{config.name}' validated successfully.")
        return 0

    iterations = args.iterations if args.iterations is not None else config.iterations
    seed = args.seed if args.seed is not None else config.seed

    try:
        summary = run_complete_simulation(config, iterations, seed)
    except ValueError as exc:
        logger.error("Simulation failed: %s", exc)
        return 1

    if not args.no_csv:
        output_base = Path(args.output) if args.output else Path(DEFAULT_OUTPUT_DIR)
        output_dir = output_base / config.name
        output_dir.mkdir(parents=True, exist_ok=True)
        logger.info("Output directory: %s", output_dir)

        write_summary_csv(output_dir / f"{config.name}_summary.csv", config, summary, seed)
        write_results_csv(output_dir / f"{config.name}_results.csv", summary.raw_results)
        write_histograms_csv(output_dir / f"{config.name}_histograms.csv", summary)

    _print_summary(config, summary)
    return 0


def _print_summary(config: SimulationConfig, summary: SimulationSummary) -> None:
    """Print a concise result summary to stdout."""
    print()
    print("=" * 60)
    print(f"  Garden: {config.name}")
    print("=" * 60)
    print(f"  Climate:               {config.selected_summer} summer / {config.selected_winter} winter")
    print(f"  Base investment:       {config.base_investment:,.2f}")
    print(f"  Iterations:            {len(summary.raw_results)}")
    print()
    print(f"  Net return mean:       {summary.mean:,.2f}")
    print(f"  Net return median:     {summary.median:,.2f}")
    print(f"  Net return P10:        {summary.percentiles.p10:,.2f}")
    print(f"  Net return P90:        {summary.percentiles.p90:,.2f}")
    print(f"  ROI median:            {summary.roi.median:.1f} %")
    print(f"  Success rate:          {summary.success_rate:.1f} %")

    analysis = summary.investment_analysis
    if analysis is not None:
        print()
        print(f"  Required investment:   {analysis.required.total:,.2f}")
        print(f"  Investment status:     {analysis.sufficiency.status} ({analysis.sufficiency.level})")
        for rec in analysis.sufficiency.recommendations:
            print(f"    - {rec}")

    print("=" * 60)
    print()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Parse CLI arguments and run the simulation."""
    parser = _build_parser()
    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    sys.exit(run(args))


if __name__ == "__main__":
    main()
