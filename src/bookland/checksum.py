"""Check digit calculation for ISBN-10 and ISBN-13

Both functions expect digits only.
Callers are responsible for rejecting anything else before getting here.
"""

ISBN10_MODULUS = 11
ISBN13_MODULUS = 10


def isbn10_weight(index: int) -> int:
    """Weight of the digit at index in a 9-digit ISBN-10 body: 10, 9, 8, ... 2"""
    return 10 - index


def isbn13_weight(index: int) -> int:
    """Weight of the digit at index in the first 12 digits of an ISBN-13: 1, 3, 1, 3, ..."""
    return 1 if index % 2 == 0 else 3


def isbn10_check_digit(body: str) -> str:
    """Calculate the ISBN-10 check digit for a 9-digit body.

    Args:
        body: The registration group, registrant, and publication, concatenated

    Returns:
        A single character, "0" through "9" or "X" for a value of 10

    Examples:
        >>> isbn10_check_digit("039304002")
        'X'
        >>> isbn10_check_digit("059652068")
        '9'
    """
    total = sum(int(digit) * isbn10_weight(i) for i, digit in enumerate(body))
    value = (ISBN10_MODULUS - total % ISBN10_MODULUS) % ISBN10_MODULUS
    return "X" if value == 10 else str(value)


def isbn13_check_digit(digits: str) -> str:
    """Calculate the ISBN-13 check digit for the first 12 digits.

    Args:
        digits: The prefix, registration group, registrant, and publication, concatenated

    Returns:
        A single character, "0" through "9"

    Examples:
        >>> isbn13_check_digit("978077777777")
        '0'
        >>> isbn13_check_digit("978039304002")
        '9'
    """
    total = sum(int(digit) * isbn13_weight(i) for i, digit in enumerate(digits))
    remainder = total % ISBN13_MODULUS
    if remainder == 0:
        remainder = ISBN13_MODULUS
    return str(ISBN13_MODULUS - remainder)
