"""Parse, check, and normalize International Standard Book Numbers"""

import logging
import sys

mlogger = logging.getLogger(__name__)
"""The logger for the whole package"""


def add_console_handler(level: int = logging.INFO):
    """Log to stderr at the given level

    Calling this more than once changes the level of the existing handler
    rather than adding another one.
    """
    mlogger.setLevel(level)
    for handler in mlogger.handlers:
        if isinstance(handler, logging.StreamHandler) and getattr(handler, "_bookland_console", False):
            handler.setLevel(level)
            handler.setStream(sys.stderr)
            return
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    setattr(handler, "_bookland_console", True)
    mlogger.addHandler(handler)


from bookland.isbn import (  # noqa: E402
    BOOKLAND_PREFIXES,
    DEFAULT_PREFIX,
    ISBN,
    ISBNFormatError,
    Version,
    parse,
)

__all__ = [
    "BOOKLAND_PREFIXES",
    "DEFAULT_PREFIX",
    "ISBN",
    "ISBNFormatError",
    "Version",
    "add_console_handler",
    "mlogger",
    "parse",
]
