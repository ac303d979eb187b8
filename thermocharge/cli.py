"""
Command-line interface for thermocharge.

Usage:
    # One sequence from a random starting reading
    thermocharge --name smoke --seed 42

    # Fixed starting reading, three sequences, with a plot
    thermocharge --name hot --temperature 25 --charge 50 --sequences 3 --plot

Entry points:
    - thermocharge: Direct CLI command (from pyproject.toml)
"""

from __future__ import annotations

import argparse
import sys

from .config import SimConfig
from .logging_config import configure_logging
from .runtime.controller import Controller
from .runtime.metrics import write_run_artifacts
from .runtime.reporting import ConsoleReporter, NullReporter
from .runtime.sources import FixedReadingSource


def _build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser for the CLI.

    Returns:
        Configured ArgumentParser with all supported options.
    """
    p = argparse.ArgumentParser(
        prog="thermocharge",
        description="thermocharge: thermal/battery regulator simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  thermocharge --name smoke --seed 42
      Run one sequence from a seeded random reading

  thermocharge --name hot --temperature 25 --charge 50 --sequences 3
      Run three sequences from a fixed starting reading
""",
    )

    # ─────────────────────────────────────────────────────────────────
    # Core simulation parameters
    # ─────────────────────────────────────────────────────────────────
    p.add_argument(
        "--name",
        type=str,
        default="default",
        help="Scenario name for artifact directory (default: %(default)s)",
    )
    p.add_argument(
        "--sequences",
        type=int,
        default=1,
        help="Start -> Finish sequences before standby (>= 0) (default: %(default)s)",
    )
    p.add_argument(
        "--max-steps",
        type=int,
        default=100_000,
        help="Upper bound on controller steps (> 0) (default: %(default)s)",
    )
    p.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed for starting readings (default: %(default)s)",
    )
    p.add_argument(
        "--temperature",
        type=float,
        default=None,
        help="Fixed starting temperature (requires --charge)",
    )
    p.add_argument(
        "--charge",
        type=float,
        default=None,
        help="Fixed starting battery charge in %% (requires --temperature)",
    )

    # ─────────────────────────────────────────────────────────────────
    # Output options
    # ─────────────────────────────────────────────────────────────────
    p.add_argument(
        "--out-dir",
        type=str,
        default=None,
        help="Output directory (default: artifacts/runs/<timestamp>_<name>)",
    )
    p.add_argument(
        "--no-artifacts",
        action="store_true",
        help="Do not write run artifacts",
    )
    p.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress per-transition status lines",
    )
    p.add_argument(
        "--plot",
        action="store_true",
        help="Save plot.png next to the artifacts (requires matplotlib; not with --no-artifacts)",
    )
    p.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: $THERMOCHARGE_LOG_LEVEL or WARNING)",
    )

    return p


def main(argv: list[str] | None = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code: 0 for success, 1 for plotting failures, 2 for bad arguments
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = SimConfig.from_args(
            name=args.name,
            sequences=args.sequences,
            max_steps=args.max_steps,
            seed=args.seed,
            out_dir=args.out_dir,
            log_level=args.log_level,
        )
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if (args.temperature is None) != (args.charge is None):
        print("error: --temperature and --charge must be given together", file=sys.stderr)
        return 2

    if args.plot and args.no_artifacts:
        print("error: --plot writes into the artifact directory; drop --no-artifacts", file=sys.stderr)
        return 2

    configure_logging(config.log_level)

    source = None
    if args.temperature is not None:
        source = FixedReadingSource(args.temperature, args.charge)
    reporter = NullReporter() if args.quiet else ConsoleReporter()

    # ─────────────────────────────────────────────────────────────────
    # Run the controller
    # ─────────────────────────────────────────────────────────────────
    controller = Controller(config, source=source, reporter=reporter)
    result = controller.run()

    # ─────────────────────────────────────────────────────────────────
    # Write artifacts to disk
    # ─────────────────────────────────────────────────────────────────
    destination = "no artifacts"
    if not args.no_artifacts:
        write_run_artifacts(out_path=config.out_dir, result=result)
        destination = str(config.out_dir / "metrics.json")

    # ─────────────────────────────────────────────────────────────────
    # Print summary to stdout
    # ─────────────────────────────────────────────────────────────────
    m = result.metrics
    print(f"{m.scenario_name}: ", end="")
    print(f"sequences={m.sequences} ", end="")
    print(f"steps={m.total_steps} ", end="")
    print(f"charges={m.charge_cycles}", end="")
    if m.truncated:
        print(" TRUNCATED", end="")
    print(f" -> {destination}")

    if args.plot:
        from .runtime.plotting import plot_run

        try:
            plot_path = plot_run(result, config.out_dir / "plot.png")
        except (RuntimeError, ValueError) as e:
            print(f"Plot failed: {e}", file=sys.stderr)
            return 1
        print(f"Plot saved to: {plot_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
