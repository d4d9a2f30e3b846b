"""Registration group and registrant length tables

ISBN elements are variable length.
The length of the registration group and of the registrant is decided by the numeric value
of the next five digits of the ISBN body, looked up in a range table.

These bands are fixed, including the registrant band that drops from 4 digits back to 2 at 89000.
They are not a copy of the ISBN International Agency range message,
so some groups are hyphenated differently than the agency would.
"""

from typing import Sequence, Tuple

LOOKAHEAD_LENGTH = 5
"""The number of digits read to decide an element length."""

RangeTable = Sequence[Tuple[int, int]]

# (exclusive upper bound, element length); a length of 0 means the band is not allocated
REGISTRATION_GROUP_RANGES: RangeTable = (
    (60000, 1),
    (70000, 0),
    (80000, 1),
    (95000, 2),
    (99000, 3),
    (99900, 4),
    (99999, 5),
)

REGISTRANT_RANGES: RangeTable = (
    (20000, 2),
    (50000, 3),
    (89000, 4),
    (95000, 2),
    (99000, 4),
    (100000, 5),
)


def lookahead(digits: str, start: int) -> int:
    """Return the integer formed by the five digits at start

    A window shorter than five digits is padded on the right with zeros,
    so the value always lands in the same band as a full window with that prefix.

    Examples:
        >>> lookahead("039304002", 0)
        3930
        >>> lookahead("039304002", 1)
        39304
        >>> lookahead("039304002", 6)
        200
    """
    window = digits[start : start + LOOKAHEAD_LENGTH]
    return int(window.ljust(LOOKAHEAD_LENGTH, "0"))


def _length_in(table: RangeTable, value: int) -> int:
    for upper, length in table:
        if value < upper:
            return length
    return 0


def registration_group_length(value: int) -> int:
    """Length of the registration group for a lookahead value, or 0 if not allocated"""
    return _length_in(REGISTRATION_GROUP_RANGES, value)


def registrant_length(value: int) -> int:
    """Length of the registrant for a lookahead value, or 0 if not allocated"""
    return _length_in(REGISTRANT_RANGES, value)
