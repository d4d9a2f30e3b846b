"""ISBN input utilities
"""

import re
from typing import List, Optional, Tuple

# A leading "ISBN", "ISBN-10" or "ISBN-13" label, optionally followed by a colon
_LABEL_RE = re.compile(r"^\s*ISBN(?:-(?P<hint>10|13)(?!\d))?:?", re.IGNORECASE)

# Runs of hyphens and whitespace between digit groups
_SEPARATOR_RE = re.compile(r"[-\s]+")


def strip_label(isbn: str) -> Tuple[Optional[int], str]:
    """Remove a leading ISBN label from an ISBN string.

    Args:
        isbn: The ISBN string as the user wrote it

    Returns:
        A tuple of the version hint from the label (10, 13, or None if the label
        did not carry one or there was no label), and the rest of the string

    Examples:
        >>> strip_label("ISBN-10 0-393-04002-X")
        (10, ' 0-393-04002-X')
        >>> strip_label("isbn: 9780777777770")
        (None, ' 9780777777770')
        >>> strip_label("978-0-7777-7777-0")
        (None, '978-0-7777-7777-0')
    """
    match = _LABEL_RE.match(isbn)
    if not match:
        return None, isbn
    hint = match.group("hint")
    return (int(hint) if hint else None), isbn[match.end() :]


def split_groups(isbn: str) -> List[str]:
    """Split an ISBN string on hyphens and spaces.

    Leading and trailing separators are ignored.

    Examples:
        >>> split_groups("978-0-7777-7777-0")
        ['978', '0', '7777', '7777', '0']
        >>> split_groups(" 0 393  04002 -X ")
        ['0', '393', '04002', 'X']
        >>> split_groups("039304002X")
        ['039304002X']
    """
    return [group for group in _SEPARATOR_RE.split(isbn) if group]

