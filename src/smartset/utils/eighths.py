"""Page length helpers for the screenplay eighths-of-a-page convention.

A script page is divided into eight units, so a scene length is written as
``"W E/8"``: ``"1 4/8"`` is one and a half pages, ``"3/8"`` is three eighths.
"""

from __future__ import annotations

import math
import re

EIGHTHS_PATTERN = re.compile(r"(?:(\d+)\s+)?(\d+)\s*/\s*8")


def parse_eighths(value: str | None) -> float:
    """Convert an eighths string to a page count.

    Accepts ``"W E/8"``, ``"E/8"`` and bare numbers (``"2"``, ``"1.5"``).
    Anything unparseable counts as zero pages.

    Args:
        value: Page length as written in a breakdown

    Returns:
        Page count as a float
    """
    if not value:
        return 0.0

    match = EIGHTHS_PATTERN.search(value)
    if not match:
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
        return number if math.isfinite(number) and number >= 0 else 0.0

    whole = int(match.group(1)) if match.group(1) else 0
    eighths = int(match.group(2))
    return whole + eighths / 8


def format_eighths(pages: float) -> str:
    """Render a page count as an eighths string, rounding to the nearest eighth.

    Args:
        pages: Page count

    Returns:
        String of the form ``"W E/8"``
    """
    total = max(0, round(pages * 8))
    whole, eighths = divmod(total, 8)
    return f"{whole} {eighths}/8"
