"""Utilities for command-line programs
"""

import argparse
import os
import pdb
import sys
import textwrap
import traceback
from typing import Callable


def idb_excepthook(type_, value, tb):
    """Open pdb on a crash when bookland runs with --debug

    main() installs this as sys.excepthook for `bookland -D ...`.
    Without a terminal on stderr, or inside an interactive session,
    the traceback is printed the normal way.
    """
    if hasattr(sys, "ps1") or not sys.stderr.isatty():
        sys.__excepthook__(type_, value, tb)
    else:
        traceback.print_exception(type_, value, tb)
        print()
        pdb.pm()


def exceptional_exception_handler(func: Callable[[list[str]], int], *arguments: list[str]) -> int:
    """Run a bookland entry point and turn its result into an exit status

    Bugs still end in a traceback, or in pdb with --debug.
    Output cut short by `bookland show ... | head` exits quietly with 129,
    and Ctrl-C while reading a long list of ISBNs exits 130.
    """
    try:
        returncode = func(*arguments)
        sys.stdout.flush()
    except BrokenPipeError:
        # Happens with e.g. `bookland show ... | head`
        # See <https://docs.python.org/3/library/signal.html#note-on-sigpipe>
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        returncode = 128 + 1
    except KeyboardInterrupt:
        print()
        returncode = 128 + 2
    return returncode


def get_argparse_help_string(name: str, parser: argparse.ArgumentParser, wrap: int = 80) -> str:
    """Return the help for a parser and all of its subcommands

    Used to keep the usage in the README up to date.
    """
    # argparse wraps to $COLUMNS, keep the output stable
    os.environ["COLUMNS"] = str(wrap)
    result = f"> {name} --help\n" + parser.format_help()

    for action in parser._actions:
        if not isinstance(action, argparse._SubParsersAction):
            continue
        for subname, subparser in action.choices.items():
            subhelp = get_argparse_help_string(f"{name} {subname}", subparser, wrap)
            result += "\n\n" + textwrap.dedent(subhelp)
    return result
