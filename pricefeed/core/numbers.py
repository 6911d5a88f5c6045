"""
Numeric extraction from loosely structured page text.

Prices on the upstream pages are plain integers (rial), usually grouped with
commas and sometimes written with Persian digits. Extraction is deliberately
naive: the first price-shaped token wins and no range checking is done.
"""

import re
from typing import List, Optional

# Persian (U+06F0..) and Arabic-Indic (U+0660..) digits -> ASCII
_DIGIT_TABLE = str.maketrans(
    "۰۱۲۳۴۵۶۷۸۹٠١٢٣٤٥٦٧٨٩",
    "01234567890123456789",
)
_GROUP_SEPARATORS = re.compile(r"[,٬]")

LARGE_NUMBER_RE = re.compile(r"[0-9]{4,15}")


def normalize_digits(text: str) -> str:
    """Convert Persian digits to ASCII and drop digit-group separators."""
    return _GROUP_SEPARATORS.sub("", text.translate(_DIGIT_TABLE))


def extract_first_large_number(text: Optional[str]) -> Optional[int]:
    """
    Return the first run of 4-15 digits in ``text`` as an int.

    ``None`` is the only "not found" signal; a token such as ``0000`` is the
    value ``0``.
    """
    if not text:
        return None
    match = LARGE_NUMBER_RE.search(normalize_digits(text))
    if match is None:
        return None
    return int(match.group(0))


def extract_all_numbers(text: Optional[str], min_digits: int = 5, max_digits: int = 15) -> List[int]:
    """Return every ``min_digits``-``max_digits`` digit token in document order."""
    if not text:
        return []
    pattern = re.compile(rf"[0-9]{{{min_digits},{max_digits}}}")
    return [int(token) for token in pattern.findall(normalize_digits(text))]
