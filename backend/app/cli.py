from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Sequence

from app.config import settings
from app.core.logging import setup_logging

from engine.wind.errors import WeibullFitError
from engine.wind.sorting import MEDIAN_CONVENTIONS
from engine.wind.weibull import WeibullFit, weibull_params
from engine.wind.wind_data import WindDataError, load_wind_csv

logger = logging.getLogger("windweibull.cli")


def format_fit(fit: WeibullFit) -> str:
    return "\n".join(
        [
            "",
            "Found Weibull distribution parameters:",
            "",
            f"shape factor k: {fit.k:.2f}",
            f"scale factor c: {fit.c:.2f}",
            "",
            f"Mean wind speed: {fit.mean:.2f} m/s",
            f"Median wind speed: {fit.median:.2f} m/s",
            "",
        ]
    )


def _column(value: str) -> str | int:
    return int(value) if value.lstrip("-").isdigit() else value


def cmd_fit(args: argparse.Namespace) -> int:
    try:
        speeds = load_wind_csv(
            args.file,
            column=args.column,
            has_header=not args.no_header,
            delimiter=args.delimiter,
        )
    except (OSError, WindDataError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    logger.debug("Read %d wind speeds from %s", len(speeds), args.file)

    try:
        fit = weibull_params(
            speeds,
            kmin=args.kmin,
            kmax=args.kmax,
            eps=args.tolerance,
            max_iter=args.max_iterations,
            median_convention=args.median_convention,
        )
    except WeibullFitError as exc:
        print(f"Error ({exc.code}): {exc}", file=sys.stderr)
        return 1
    except (ValueError, IndexError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(fit.as_dict(), indent=2))
    else:
        print(format_fit(fit))
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    # RequestLoggingMiddleware writes the access log.
    uvicorn.run("app.main:app", host=args.host, port=args.port, access_log=False)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="windweibull",
        description="Estimate Weibull shape and scale factors from wind speed data.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    sub = parser.add_subparsers(dest="command", required=True)

    fit = sub.add_parser("fit", help="Fit Weibull parameters to a column of a CSV file")
    fit.add_argument("file", help="Delimited file with wind speeds (m/s)")
    fit.add_argument(
        "--column", type=_column, default=None,
        help="Column name (or zero-based index); defaults to the first column",
    )
    fit.add_argument("--no-header", action="store_true", help="File has no header row")
    fit.add_argument("--delimiter", default=",")
    fit.add_argument("--kmin", type=float, default=settings.weibull_kmin)
    fit.add_argument("--kmax", type=float, default=settings.weibull_kmax)
    fit.add_argument("--tolerance", type=float, default=settings.weibull_tolerance)
    fit.add_argument("--max-iterations", type=int, default=settings.weibull_max_iterations)
    fit.add_argument(
        "--median-convention", choices=MEDIAN_CONVENTIONS, default=settings.median_convention
    )
    fit.add_argument("--json", action="store_true", help="Print the fit as JSON")
    fit.set_defaults(func=cmd_fit)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=settings.host)
    serve.add_argument("--port", type=int, default=settings.port)
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "fit":
        if args.kmin >= args.kmax:
            parser.error(f"--kmin ({args.kmin}) must be less than --kmax ({args.kmax})")
        if args.max_iterations < 1:
            parser.error("--max-iterations must be at least 1")

    setup_logging(
        json_format=settings.log_json,
        level=logging.DEBUG if args.verbose else logging.WARNING,
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
