"""Command line entry point: ``tabreport render`` and ``tabreport simulate``."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from tabreport.const import ChartKind, OutputFormat, RendererKind
from tabreport.core.config import ReportConfig
from tabreport.distributions import parse_spec, simulation_table
from tabreport.exceptions import ReportError
from tabreport.pipeline import generate_report, render_parameterised
from tabreport.tidy import load_table
from tabreport.utils import configure_logger

logger = logging.getLogger("tabreport")


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="tabreport",
        description="Generate tabbed HTML or R Markdown reports, one tab per category.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tabreport render iris.csv --group species --renderer matplotlib --x sepal_length --y sepal_width --kind scatter
  tabreport render labour.xlsx --sheet Data1 --skiprows 9 --group sex --param state --out reports/
  tabreport simulate --dist normal:mean=0,sd=1 --dist poisson:lam=3 --size 2000 --seed 42
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Accept -v after the subcommand too without resetting a -v given before it.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="store_true", default=argparse.SUPPRESS, help="Enable debug logging")

    render = subparsers.add_parser("render", parents=[common], help="Render a tabbed report from a CSV or Excel file")
    render.add_argument("input", type=Path, help="CSV or Excel file")
    render.add_argument("--group", required=True, help="Column whose values become tabs")
    render.add_argument("--param", help="Write one report per value of this column into --out")
    render.add_argument("--renderer", default=str(RendererKind.TABLE), choices=[str(k) for k in RendererKind])
    render.add_argument("--format", default=str(OutputFormat.HTML), choices=[str(f) for f in OutputFormat])
    render.add_argument("--kind", default=str(ChartKind.BAR), choices=[str(k) for k in ChartKind])
    render.add_argument("--x", help="Column on the x axis")
    render.add_argument("--y", help="Column on the y axis")
    render.add_argument("--title", help="Report title; '{parameter}' is replaced with the --param value")
    render.add_argument("--sheet", help="Excel sheet name")
    render.add_argument("--skiprows", type=int, default=0, help="Leading rows to skip before the header")
    render.add_argument("--out", type=Path, help="Output file, or directory when --param is given")

    simulate = subparsers.add_parser("simulate", parents=[common], help="Render histograms of simulated distributions")
    simulate.add_argument(
        "--dist",
        action="append",
        required=True,
        help="Distribution as kind:name=value,... (e.g. binomial:n=20,p=0.3). Repeatable.",
    )
    simulate.add_argument("--size", type=int, default=1000, help="Draws per distribution")
    simulate.add_argument("--seed", type=int, help="Random seed")
    simulate.add_argument("--format", default=str(OutputFormat.HTML), choices=[str(f) for f in OutputFormat])
    simulate.add_argument("--out", type=Path, help="Output file")

    return parser


def _default_output(stem: str, output_format: OutputFormat) -> Path:
    return Path(f"{stem}.{output_format.extension}")


def run_render(args: argparse.Namespace) -> int:
    """Handle ``tabreport render``."""
    config = ReportConfig(
        group_column=args.group,
        title=args.title or (f"{args.input.stem}: {{parameter}}" if args.param else args.input.stem),
        output_format=args.format,
        renderer=args.renderer,
        chart_kind=args.kind,
        x=args.x,
        y=args.y,
        verbose=args.verbose,
    )
    table = load_table(args.input, sheet_name=args.sheet, skiprows=args.skiprows)

    if args.param:
        paths = render_parameterised(table, args.param, config, args.out or Path("reports"))
        for path in paths:
            print(path)
        return 0

    document = generate_report(table, config)
    print(document.write(args.out or _default_output(args.input.stem, config.output_format)))
    return 0


def run_simulate(args: argparse.Namespace) -> int:
    """Handle ``tabreport simulate``."""
    specs = [parse_spec(text) for text in args.dist]
    config = ReportConfig(
        group_column="distribution",
        title="Simulated distributions",
        output_format=args.format,
        renderer=RendererKind.DISTRIBUTION,
        x="value",
        verbose=args.verbose,
    )
    table = simulation_table(specs, args.size, seed=args.seed)
    document = generate_report(table, config)
    print(document.write(args.out or _default_output("distributions", config.output_format)))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line interface."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logger(logger, args.verbose)

    handlers = {"render": run_render, "simulate": run_simulate}
    try:
        return handlers[args.command](args)
    except (ReportError, ValidationError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
