#!/usr/bin/env python3
import argparse
import json
import logging
import pathlib
import sys
import tomllib
from typing import List

from bookland import ISBN, add_console_handler, mlogger, parse
from bookland.cli.util import exceptional_exception_handler, get_argparse_help_string, idb_excepthook
from bookland.config import (
    OUTPUT_FORMATS,
    ConfigurationError,
    apply_config,
    find_config_file,
    get_example_config,
    load_config_file,
)


def get_version() -> str:
    """Get the version string

    Read from pyproject.toml next to the source tree,
    which is where it lives for an editable install.
    """
    import bookland

    package_path = pathlib.Path(bookland.__file__).parent
    pyproject_path = package_path.parent.parent / "pyproject.toml"
    if pyproject_path.exists():
        with open(pyproject_path, "rb") as f:
            pyproject_data = tomllib.load(f)
            return pyproject_data.get("project", {}).get("version", "unknown")
    return "unknown"


def makeparser() -> argparse.ArgumentParser:
    """Return the argument parser"""
    parser = argparse.ArgumentParser(
        prog="bookland",
        description="Parse, check, and normalize ISBN-10 and ISBN-13 numbers.",
    )
    parser.add_argument(
        "-D",
        "--debug",
        action="store_true",
        help="Drop into an interactive debugger on unhandled exceptions.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        help="Path to TOML config file, defaulting to a file called bookland.toml or .bookland.toml in this or any parent directory",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log how each ISBN was parsed.")
    parser.add_argument(
        "-f",
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        help="Output format: hyphenated string, barcode digits, or JSON. Default: string",
    )
    parser.add_argument(
        "-n",
        "--normalize",
        action="store_true",
        help="Convert every ISBN to ISBN-13 before showing it.",
    )

    # Take care to add help AND description to each subparser.
    # Help is shown by the parent parser
    # e.g. "bookland --help" shows the help string for each subparser;
    # description is shown by the subparser itself
    # e.g. "bookland show --help" shows the description for the show subparser.

    subparsers = parser.add_subparsers(dest="subcommand", required=True)

    sp_show = subparsers.add_parser(
        "show",
        help="Show ISBNs",
        description="Parse each ISBN and print it in the output format. The check digit is not checked.",
    )
    sp_show.add_argument("isbns", nargs="+", help="One or more ISBNs; quote ISBNs that contain spaces")

    sp_validate = subparsers.add_parser(
        "validate",
        help="Check ISBNs",
        description="Check the structure and check digit of each ISBN. Exits 1 if any ISBN is invalid.",
    )
    sp_validate.add_argument("isbns", nargs="+", help="One or more ISBNs; quote ISBNs that contain spaces")

    sp_normalize = subparsers.add_parser(
        "normalize",
        help="Convert ISBNs to ISBN-13",
        description="Convert each ISBN to ISBN-13, recalculating the check digit, and print it in the output format.",
    )
    sp_normalize.add_argument("isbns", nargs="+", help="One or more ISBNs; quote ISBNs that contain spaces")

    subparsers.add_parser("version", help="Show version information", description="Show version information")
    subparsers.add_parser(
        "example-config",
        help="Show an example config file",
        description="Print an example config file with the default values",
    )

    return parser


def get_help_string() -> str:
    """Get a string containing program help"""
    return get_argparse_help_string("bookland", makeparser())


def parseargs(arguments: List[str]):
    """Parse command-line arguments

    NOTE: Defaults in this function will override defaults in the TOML config file.
    """
    parser = makeparser()

    parsed = parser.parse_args(arguments)

    if not parsed.config:
        parsed.config = find_config_file()

    try:
        apply_config(parsed, load_config_file(parsed.config))
    except ConfigurationError as exc:
        parser.error(f"{parsed.config}: {exc}")

    return parser, parsed


def format_isbn(isbn: ISBN, output_format: str) -> str:
    """Render a parsed ISBN for output"""
    if output_format == "barcode":
        return isbn.to_barcode()
    elif output_format == "json":
        return json.dumps(isbn.asdict)
    return isbn.to_string()


def show_isbns(isbns: List[str], output_format: str, normalize: bool) -> int:
    """Print each ISBN, returning 1 if any of them could not be parsed"""
    returncode = 0
    for text in isbns:
        isbn = parse(text)
        if isbn.error is not None:
            print(f"{text}: {isbn.error.reason}", file=sys.stderr)
            returncode = 1
            if output_format != "json":
                continue
        if normalize:
            isbn.normalize()
        print(format_isbn(isbn, output_format))
    return returncode


def validate_isbns(isbns: List[str]) -> int:
    """Print whether each ISBN is valid, returning 1 if any is not"""
    returncode = 0
    for text in isbns:
        isbn = parse(text)
        if isbn.is_valid():
            print(f"{text}: valid")
            continue
        returncode = 1
        if isbn.error is not None:
            print(f"{text}: invalid: {isbn.error.reason}")
        else:
            print(f"{text}: invalid: check digit should be {isbn.calculate_check_digit()}")
    return returncode


###############################################################################
# Main Entry
###############################################################################


def main(arguments: list[str]) -> int:
    parser, args = parseargs(arguments)

    log_level = logging.INFO
    if args.debug:
        sys.excepthook = idb_excepthook
    if args.verbose:
        log_level = logging.DEBUG
    add_console_handler(log_level)

    if args.config:
        mlogger.debug(f"Using config file {args.config}")

    if args.subcommand == "show":
        return show_isbns(args.isbns, args.output_format, args.normalize)

    elif args.subcommand == "validate":
        return validate_isbns(args.isbns)

    elif args.subcommand == "normalize":
        return show_isbns(args.isbns, args.output_format, normalize=True)

    elif args.subcommand == "version":
        print(get_version())

    elif args.subcommand == "example-config":
        print(get_example_config(), end="")

    else:
        print("Unknown subcommand", file=sys.stderr)
        return 1

    return 0


def wrapped_main():
    sys.exit(exceptional_exception_handler(main, sys.argv[1:]))
