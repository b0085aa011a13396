# -*- coding: utf-8 -*-
"""
Prints the default conversion configuration as YAML.

The output can be edited and passed to other commands with --config.
"""

import argparse
import pathlib
import sys

from traderconv import config
from traderconv.cli import cliutil


def add_subparser(subparsers) -> None:
    """Adds a subcommand parser to ``subparsers``."""
    argparser: argparse.ArgumentParser = subparsers.add_parser(
        "defaultconfig",
        description=__doc__,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    argparser.set_defaults(run=run)

    argparser.add_argument(
        "--output",
        "-o",
        help="Path to the file to write. Defaults to standard output.",
        type=pathlib.Path,
        metavar="CONFIG.yaml",
        default=None,
    )


def run(args: argparse.Namespace) -> int:
    """CLI entry point."""
    cfg = config.ConversionConfig()
    if args.output is None:
        config.dump_config(cfg, sys.stdout)
        return 0
    try:
        with args.output.open("wt", encoding="utf-8") as f:
            config.dump_config(cfg, f)
    except OSError as exc:
        raise cliutil.CLIError(f"cannot write {args.output}: {exc}") from exc
    return 0
