# -*- coding: utf-8 -*-
"""
Imports TraderPlus v2 JSON files, and writes them out as a single consistent
TraderPlus v2 configuration.

Categories and products are merged, and records without an ID are given a
new one. A category whose ID is already present is dropped, keeping the
first one read. A product whose ID is already present replaces the earlier
one in place. The last currency settings and general settings read are used.
Files that cannot be read are reported and skipped.
"""

import argparse
import pathlib
import sys
import textwrap
from typing import Iterator, Optional

from traderconv import config, filesio, importer, output
from traderconv.cli import cliutil


def add_subparser(subparsers) -> None:
    """Adds a subcommand parser to ``subparsers``."""
    argparser: argparse.ArgumentParser = subparsers.add_parser(
        "import",
        description=__doc__,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    argparser.set_defaults(run=run)

    argparser.add_argument(
        "inputs",
        help=textwrap.dedent(
            """
            Paths to JSON files, or to directories or ZIP files containing
            JSON files.
            """
        ),
        type=pathlib.Path,
        nargs="+",
        metavar="INPUT_PATH",
    )
    cliutil.add_output_flags(argparser)
    config.add_config_flag(argparser)

    argparser.add_argument(
        "--type",
        help=textwrap.dedent(
            """
            Kind of all of the input documents. By default the kind of each
            document is recognised from its content or file name.
            """
        ),
        type=importer.DataType,
        choices=importer.DataType,
        default=None,
    )


def _read_inputs(inputs: list[pathlib.Path]) -> Iterator[tuple[str, str]]:
    for input_path in inputs:
        if input_path.is_file() and input_path.suffix.lower() == filesio.JSON_SUFFIX:
            try:
                text = input_path.read_text(encoding="utf-8")
            except OSError as exc:
                raise cliutil.CLIError(f"cannot read {input_path}: {exc}") from exc
            yield str(input_path), text
            continue

        io_type = filesio.IOType.AUTO.resolve_auto(input_path)
        try:
            with io_type.new_reader(input_path) as reader:
                for path, text in filesio.read_json_documents(reader):
                    yield f"{input_path}/{path}", text
        except filesio.Error as exc:
            raise cliutil.CLIError(f"cannot read {input_path}: {exc}") from exc


def run(args: argparse.Namespace) -> int:
    """CLI entry point."""
    cfg = config.config_from_args(args)
    imp = importer.Importer()
    type_hint: Optional[importer.DataType] = args.type
    stats = imp.import_documents(_read_inputs(args.inputs), type_hint=type_hint)
    cliutil.print_diagnostics(imp.found_diagnostics)

    print(
        f"Processed {stats.processed} files: {stats.successful} imported,"
        f" {stats.failed} failed, {stats.skipped} skipped.",
        file=sys.stderr,
    )
    print(
        f"Imported {stats.categories} category files, {stats.products} product files,"
        f" {stats.currencies} currency settings and {stats.settings} general settings.",
        file=sys.stderr,
    )

    files = output.render_files(imp.workspace, cfg.output)
    cliutil.write_files(args, files)
    return 1 if stats.failed else 0
