"""
Utility functions for cell coercion and rate arithmetic.
"""

import math
import numbers
import logging

logger = logging.getLogger(__name__)


def clean_header(header):
    """Strip surrounding whitespace from a CSV header"""
    return str(header).strip()


def coerce_number(value):
    """Convert a raw cell to a finite float, or None when it is not numeric.

    Accepts ints, floats, numpy scalars and strings such as ``" 95 "``,
    ``"91.67%"`` or ``"1,024"``.  Blank strings, NaN, infinities, booleans and
    anything else that does not parse come back as None so the caller can
    fall through to its next alias or default.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, numbers.Number):
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip().rstrip('%').strip().replace(',', '')
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            logger.debug(f"Unparseable cell {value!r}")
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    return number


def safe_percent(numerator, denominator):
    """numerator / denominator * 100, or 0.0 when the denominator is 0"""
    if not denominator:
        return 0.0
    return numerator / denominator * 100
