# -*- coding: utf-8 -*-
"""CLI utilities shared by the subcommands."""

import argparse
import contextlib
import os
import pathlib
import sys
import textwrap
from typing import Callable, Iterable, Iterator, Mapping

from progress import bar as progress  # type: ignore[import-untyped]
from traderconv import diagnostics, filesio, output


EX_CONFIG = getattr(os, "EX_CONFIG", 78)
EX_DATAERR = getattr(os, "EX_DATAERR", 65)
EX_USAGE = getattr(os, "EX_USAGE", 64)


class CLIError(Exception):
    """Base class for CLI errors."""

    exit_code: int = 1


class UsageError(CLIError):
    """Exception for user usage error."""

    exit_code = EX_USAGE


def add_output_flags(argparser: argparse.ArgumentParser) -> None:
    """Adds the flags used by ``create_writer`` and ``write_files``."""
    argparser.add_argument(
        "output",
        help=textwrap.dedent(
            """
            Path to the directory or ZIP file to write the TraderPlus files
            into.

            Whether this is a directory or ZIP file is controlled by
            --output-type.
            """
        ),
        type=pathlib.Path,
        metavar="OUTPUT_PATH",
    )
    argparser.add_argument(
        "--output-type",
        help=textwrap.dedent(
            """
            Controls how files are written to the OUTPUT_PATH.

            * AUTO guesses, based on any existing file or directory at the path
              or the path suffix ending in ".zip".
            * DIR writes as a directory.
            * ZIP writes as a ZIP file.
            """
        ),
        type=filesio.IOType,
        choices=filesio.IOType,
        default=filesio.IOType.AUTO,
    )
    argparser.add_argument(
        "--no-progress",
        help="""Disable progress bar.""",
        action="store_true",
        default=False,
    )


def create_writer(
    args: argparse.Namespace,
) -> contextlib.AbstractContextManager[filesio.Writer]:
    """Opens the output named by the flags added by ``add_output_flags``."""
    output_path: pathlib.Path = args.output
    output_type: filesio.IOType = args.output_type
    output_type = output_type.resolve_auto(output_path)
    return output_type.new_writer(output_path)


@contextlib.contextmanager
def progress_reporter(
    no_progress: bool,
    message: str,
) -> Iterator[Callable[[output.Progress], None]]:
    """Reports progress on a progress bar, unless disabled."""
    if no_progress:
        progress_bar = None

        def on_progress(p: output.Progress) -> None:
            del p  # unused

    else:
        progress_bar = progress.Bar(message)
        progress_bar.start()

        def on_progress(p: output.Progress) -> None:
            progress_bar.index = p.completed
            progress_bar.max = p.total
            progress_bar.update()

    try:
        yield on_progress
    finally:
        if progress_bar is not None:
            progress_bar.finish()


def write_files(args: argparse.Namespace, files: Mapping[str, str]) -> None:
    """Writes rendered files to the output named by the flags."""
    try:
        with (
            create_writer(args) as writer,
            progress_reporter(args.no_progress, "Writing files") as on_progress,
        ):
            output.write_files(writer, files, on_progress=on_progress)
    except filesio.Error as exc:
        raise CLIError(f"cannot write {args.output}: {exc}") from exc


def print_diagnostics(diags: Iterable[diagnostics.Diagnostic]) -> int:
    """Prints diagnostics to stderr.

    :return: Number of diagnostics printed.
    """
    n = 0
    for diag in diags:
        print(f"warning: {diag}", file=sys.stderr)
        n += 1
    return n
