"""Display formatting for prices."""

from typing import Optional

PERSIAN_DIGITS = str.maketrans("0123456789", "۰۱۲۳۴۵۶۷۸۹")
ARABIC_THOUSANDS_SEPARATOR = "٬"

UNAVAILABLE = "ناموجود"


def format_price(value: Optional[int], locale: str = "fa-IR", unavailable: str = UNAVAILABLE) -> str:
    """
    Group digits the way the locale displays them.

    fa-IR: ``۱۲۳٬۴۵۶``; anything else: ``123,456``.
    """
    if value is None:
        return unavailable

    grouped = f"{int(value):,}"
    if locale.lower().startswith("fa"):
        return grouped.replace(",", ARABIC_THOUSANDS_SEPARATOR).translate(PERSIAN_DIGITS)
    return grouped
