"""International Standard Book Numbers (ISO 2108:2017)

Parse ISBN-10 and ISBN-13 strings into their elements,
check them, convert ISBN-10 into ISBN-13, and format them for display.

    >>> book = parse("ISBN-10 0-393-04002-X")
    >>> book.is_valid(), book.version
    (True, <Version.TEN: 10>)
    >>> str(book.normalize())
    'ISBN 978-0-393-04002-9'
"""

import dataclasses
import enum
import re
from typing import List, Optional

from bookland import mlogger
from bookland.checksum import isbn10_check_digit, isbn13_check_digit
from bookland.ranges import lookahead, registrant_length, registration_group_length
from bookland.util.isbnutil import split_groups, strip_label

DEFAULT_PREFIX = "978"
"""The bookland prefix used to convert an ISBN-10 into an ISBN-13."""

BOOKLAND_PREFIXES = ("978", "979")
"""EAN prefixes allocated to ISBNs."""

PREFIX_LENGTH = 3
BODY_LENGTH = 9
CHECK_DIGIT_LENGTH = 1
MAX_REGISTRATION_GROUP_LENGTH = 5

VERSION10_GROUPS = 4
VERSION13_GROUPS = 5

_DIGITS_RE = re.compile(r"[0-9]+")
_LAST_GROUP_RE = re.compile(r"[0-9]*[0-9Xx]")


class Version(enum.IntEnum):
    """ISBN version"""

    UNKNOWN = 0
    TEN = 10
    THIRTEEN = 13


class ISBNFormatError(ValueError):
    """The input could not be parsed as an ISBN"""

    def __init__(self, isbn: str, reason: str):
        super().__init__(f"Invalid ISBN {isbn!r}: {reason}")
        self.isbn = isbn
        self.reason = reason


@dataclasses.dataclass
class ISBN:
    """An ISBN split into its elements.

    A record is either fully populated, or carries an error and nothing else.
    """

    version: Version = Version.UNKNOWN
    """ISBN-10 or ISBN-13; UNKNOWN for records that failed to parse."""

    prefix: str = ""
    """The 3-digit bookland prefix; empty for ISBN-10."""

    registration_group: str = ""
    """The national, geographic, or language group, 1-5 digits."""

    registrant: str = ""
    """The publisher within the registration group."""

    publication: str = ""
    """The edition within the registrant."""

    check_digit: str = ""
    """A single character; "X" stands for 10 in an ISBN-10."""

    error: Optional[ISBNFormatError] = None
    """Why parsing failed, if it did."""

    @property
    def body(self) -> str:
        """The registration group, registrant, and publication, concatenated"""
        return self.registration_group + self.registrant + self.publication

    def calculate_check_digit(self) -> str:
        """Calculate the check digit this record should have for its version.

        Returns an empty string for records with an unknown version.
        """
        if self.version == Version.TEN:
            return isbn10_check_digit(self.body)
        if self.version == Version.THIRTEEN:
            return isbn13_check_digit(self.prefix + self.body)
        return ""

    def is_valid(self) -> bool:
        """Return True if the check digit matches the rest of the ISBN"""
        if self.error is not None or len(self.check_digit) != CHECK_DIGIT_LENGTH:
            return False
        if self.version not in (Version.TEN, Version.THIRTEEN):
            return False
        return self.calculate_check_digit() == self.check_digit.upper()

    def normalize(self) -> "ISBN":
        """Convert this ISBN to an ISBN-13 in place.

        The default prefix is added and the check digit recalculated.
        A valid ISBN-13 is left alone, as is a record that failed to parse.
        The registration group, registrant, and publication never change.

        Returns this record.
        """
        if self.error is not None:
            return self
        if self.version == Version.THIRTEEN and self.is_valid():
            return self

        original = self.to_string()
        self.prefix = DEFAULT_PREFIX
        self.version = Version.THIRTEEN
        self.check_digit = isbn13_check_digit(self.prefix + self.body)
        mlogger.debug(f"Normalized {original!r} to {self.to_string()!r}")
        return self

    def to_string(self) -> str:
        """Return the hyphenated form, like 'ISBN 978-0-7777-7777-0'

        Records with an unknown version or an error return an empty string.
        """
        if self.error is not None:
            return ""
        if self.version == Version.TEN:
            elements = [self.registration_group, self.registrant, self.publication, self.check_digit]
        elif self.version == Version.THIRTEEN:
            elements = [self.prefix, self.registration_group, self.registrant, self.publication, self.check_digit]
        else:
            return ""
        return "ISBN " + "-".join(elements)

    def to_barcode(self) -> str:
        """Return the ISBN without label or hyphens, like '9780777777770'"""
        if self.error is not None:
            return ""
        # ISBN-10 has an empty prefix
        return self.prefix + self.body + self.check_digit

    def __str__(self) -> str:
        return self.to_string()

    @property
    def asdict(self) -> dict:
        """Return a JSON-serializable dict of this object."""
        return {
            "version": int(self.version),
            "prefix": self.prefix,
            "registration_group": self.registration_group,
            "registrant": self.registrant,
            "publication": self.publication,
            "check_digit": self.check_digit,
            "valid": self.is_valid(),
            "error": self.error.reason if self.error else None,
            "isbn": self.to_string(),
            "barcode": self.to_barcode(),
        }


def parse(text: str) -> ISBN:
    """Parse an ISBN string.

    Accepts ISBN-10 and ISBN-13,
    with or without an "ISBN", "ISBN-10" or "ISBN-13" label,
    with elements separated by hyphens, spaces, or nothing at all.

    Never raises; if the input is not an ISBN,
    the returned record has an error and an unknown version.
    Parsing does not check the check digit; use ISBN.is_valid() for that.
    """
    try:
        isbn = _parse(text)
    except ISBNFormatError as exc:
        mlogger.debug(f"Rejecting ISBN: {exc.reason}: {text!r}")
        return ISBN(error=exc)
    mlogger.debug(f"Parsed {text!r} as {isbn.to_string()!r}")
    return isbn


def _parse(text: str) -> ISBN:
    hint, rest = strip_label(text)
    groups = split_groups(rest)
    _check_characters(text, groups)

    if len(groups) == VERSION10_GROUPS:
        isbn = _from_groups(text, Version.TEN, "", groups)
    elif len(groups) == VERSION13_GROUPS:
        isbn = _from_groups(text, Version.THIRTEEN, groups[0], groups[1:])
    elif len(groups) == 1:
        isbn = _from_digits(text, groups[0])
    else:
        raise ISBNFormatError(text, f"expected 1, 4 or 5 groups of digits, found {len(groups)}")

    if hint is not None and hint != isbn.version:
        raise ISBNFormatError(text, f"labelled ISBN-{hint} but looks like ISBN-{int(isbn.version)}")
    return isbn


def _check_characters(text: str, groups: List[str]):
    """Only digits are allowed, except for an X or x as the very last character"""
    for i, group in enumerate(groups):
        pattern = _LAST_GROUP_RE if i == len(groups) - 1 else _DIGITS_RE
        if not pattern.fullmatch(group):
            raise ISBNFormatError(text, f"unexpected characters in {group!r}")


def _from_groups(text: str, version: Version, prefix: str, groups: List[str]) -> ISBN:
    """Build a record from an already hyphenated ISBN"""
    registration_group, registrant, publication, check_digit = groups

    if version == Version.THIRTEEN and prefix not in BOOKLAND_PREFIXES:
        raise ISBNFormatError(text, f"prefix {prefix!r} is not a bookland prefix")
    if len(check_digit) != CHECK_DIGIT_LENGTH:
        raise ISBNFormatError(text, f"check digit {check_digit!r} is not a single character")
    if len(registration_group) > MAX_REGISTRATION_GROUP_LENGTH:
        raise ISBNFormatError(text, f"registration group {registration_group!r} is too long")
    body = registration_group + registrant + publication
    if len(body) != BODY_LENGTH:
        raise ISBNFormatError(text, f"expected {BODY_LENGTH} digits between prefix and check digit, found {len(body)}")
    if version == Version.THIRTEEN and check_digit in "Xx":
        raise ISBNFormatError(text, "ISBN-13 check digit must be a digit")

    return ISBN(
        version=version,
        prefix=prefix,
        registration_group=registration_group,
        registrant=registrant,
        publication=publication,
        check_digit=check_digit,
    )


def _from_digits(text: str, digits: str) -> ISBN:
    """Build a record from an unhyphenated ISBN, using the range tables to find element lengths"""
    if len(digits) < PREFIX_LENGTH:
        raise ISBNFormatError(text, "too short")

    prefix = digits[:PREFIX_LENGTH]
    if prefix == DEFAULT_PREFIX:
        version = Version.THIRTEEN
        cursor = PREFIX_LENGTH
    else:
        version = Version.TEN
        prefix = ""
        cursor = 0

    expected = len(prefix) + BODY_LENGTH + CHECK_DIGIT_LENGTH
    if len(digits) != expected:
        raise ISBNFormatError(text, f"expected {expected} digits for ISBN-{int(version)}, found {len(digits)}")
    if version == Version.THIRTEEN and digits[-1] in "Xx":
        raise ISBNFormatError(text, "ISBN-13 check digit must be a digit")

    body = digits[cursor:-1]

    group_length = registration_group_length(lookahead(body, 0))
    if group_length == 0:
        raise ISBNFormatError(text, "registration group is not in an allocated range")
    registration_group = body[:group_length]

    length = registrant_length(lookahead(body, group_length))
    if length == 0:
        raise ISBNFormatError(text, "registrant is not in an allocated range")
    if group_length + length >= BODY_LENGTH:
        raise ISBNFormatError(text, "no digits left for the publication element")
    registrant = body[group_length : group_length + length]

    return ISBN(
        version=version,
        prefix=prefix,
        registration_group=registration_group,
        registrant=registrant,
        publication=body[group_length + length :],
        check_digit=digits[-1],
    )
