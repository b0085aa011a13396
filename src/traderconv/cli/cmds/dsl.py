# -*- coding: utf-8 -*-
"""
Converts a line-oriented TraderX configuration file (such as
TraderConfig.txt) into TraderPlus v2 JSON files.
"""

import argparse
import pathlib

from traderconv import config, convert
from traderconv.cli import cliutil


def add_subparser(subparsers) -> None:
    """Adds a subcommand parser to ``subparsers``."""
    argparser: argparse.ArgumentParser = subparsers.add_parser(
        "dsl",
        description=__doc__,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    argparser.set_defaults(run=run)

    argparser.add_argument(
        "input",
        help="Path to the TraderX configuration file to read.",
        type=pathlib.Path,
        metavar="TRADERCONFIG.txt",
    )
    cliutil.add_output_flags(argparser)
    config.add_config_flag(argparser)


def run(args: argparse.Namespace) -> int:
    """CLI entry point."""
    cfg = config.config_from_args(args)
    input_path: pathlib.Path = args.input
    try:
        # TraderX files are often saved with Windows encodings.
        text = input_path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise cliutil.CLIError(f"cannot read {input_path}: {exc}") from exc

    result = convert.convert_line_dsl(text, cfg, source=str(input_path))
    cliutil.print_diagnostics(result.diagnostics)
    cliutil.write_files(args, result.files)
    return 0
