"""
Amount parsing for stored decimal strings.

Accepts plain decimal notation with optional sign and exponent ("10", "-2.5",
".5", "1e-6"). Anything else (digit separators, hex, NaN, infinities, empty
text) parses as 0.0 so aggregates stay defined for partially malformed data.
"""

from __future__ import annotations

import math
import re
from typing import Any

DECIMAL_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def parse_amount(value: Any) -> float:
    """Parse a decimal-string (or numeric) amount to a finite float; 0.0 on failure."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        amount = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not DECIMAL_RE.match(text):
            return 0.0
        amount = float(text)
    else:
        return 0.0
    if not math.isfinite(amount):
        return 0.0
    return amount
