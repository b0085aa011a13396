# -*- coding: utf-8 -*-
"""
Converts the three JSON files of a TraderPlus v1 configuration into
TraderPlus v2 JSON files.

The general config, IDs config and price config are all required. They are
recognised by their content, so may be given in any order.
"""

import argparse
import pathlib
import textwrap

from traderconv import config, convert
from traderconv.cli import cliutil


def add_subparser(subparsers) -> None:
    """Adds a subcommand parser to ``subparsers``."""
    argparser: argparse.ArgumentParser = subparsers.add_parser(
        "legacyjson",
        description=__doc__,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    argparser.set_defaults(run=run)

    argparser.add_argument(
        "inputs",
        help=textwrap.dedent(
            """
            Paths to the v1 JSON files. If more than one file of a kind is
            given, the last one is used.
            """
        ),
        type=pathlib.Path,
        nargs="+",
        metavar="V1_CONFIG.json",
    )
    cliutil.add_output_flags(argparser)
    config.add_config_flag(argparser)


def run(args: argparse.Namespace) -> int:
    """CLI entry point."""
    cfg = config.config_from_args(args)
    converter = convert.LegacyJsonConverter(cfg)

    result = convert.ConversionResult(files={}, diagnostics=[])
    for input_path in args.inputs:
        try:
            text = input_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise cliutil.CLIError(f"cannot read {input_path}: {exc}") from exc
        result = converter.submit(text, source=str(input_path))

    if missing := converter.missing():
        raise cliutil.UsageError(
            "missing v1 documents: " + ", ".join(kind.value for kind in missing)
        )

    cliutil.print_diagnostics(result.diagnostics)
    cliutil.write_files(args, result.files)
    return 0
