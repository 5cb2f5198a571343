"""Helper script to run the estimator with every report enabled."""
from __future__ import annotations

import argparse

from renocost.cli import main


def _parse_args(argv: list[str] | None = None) -> tuple[argparse.Namespace, list[str]]:
    parser = argparse.ArgumentParser(description="Run the renovation estimate pipeline")
    parser.add_argument(
        "--no-reports",
        action="store_true",
        help="Skip the Excel breakdown and PDF summary.",
    )
    return parser.parse_known_args(argv)


if __name__ == "__main__":  # pragma: no cover
    args, remaining = _parse_args()
    forward_args: list[str] = list(remaining)
    if not args.no_reports:
        forward_args.extend(["--xlsx", "--pdf"])
    raise SystemExit(main(forward_args))
