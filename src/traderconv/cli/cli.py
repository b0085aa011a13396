#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""traderconv commandline interface.

Converts DayZ trader configurations into TraderPlus v2 JSON files:

* from the line-oriented TraderX format,
* from the three JSON files of TraderPlus v1,
* from existing TraderPlus v2 files, merging them into one configuration.
"""


import argparse
import logging
import sys

from traderconv import errors, release
from traderconv.cli import cliutil
from traderconv.cli.cmds import (
    defaultconfig,
    dsl,
    importjson,
    legacyjson,
)

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def main() -> None:
    """Entrypoint for the program."""

    argparser = argparse.ArgumentParser(
        description=__doc__,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    argparser.set_defaults(run=None)
    argparser.add_argument(
        "--version",
        "-V",
        help="Print the version of the program.",
        action="version",
        version=f"%(prog)s {release.EXECUTABLE_VERSION}",
    )
    argparser.add_argument(
        "--log-level",
        help="Minimum level of log messages to print.",
        choices=_LOG_LEVELS,
        default="ERROR",
    )

    subparsers = argparser.add_subparsers(required=True)
    defaultconfig.add_subparser(subparsers)
    dsl.add_subparser(subparsers)
    importjson.add_subparser(subparsers)
    legacyjson.add_subparser(subparsers)

    args = argparser.parse_args()
    logging.basicConfig(
        level=args.log_level,
        format="%(levelname)s:%(name)s: %(message)s",
    )
    try:
        sys.exit(args.run(args))
    except errors.ConfigurationError as exc:
        print(exc, file=sys.stderr)
        sys.exit(cliutil.EX_CONFIG)
    except errors.ParseFormatError as exc:
        print(exc, file=sys.stderr)
        sys.exit(cliutil.EX_DATAERR)
    except cliutil.UsageError as exc:
        argparser.print_usage(sys.stderr)
        print(exc, file=sys.stderr)
        sys.exit(exc.exit_code)
    except cliutil.CLIError as exc:
        print(exc, file=sys.stderr)
        sys.exit(exc.exit_code)


if __name__ == "__main__":
    main()
