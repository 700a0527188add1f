"""Normalization of numeric tokens found in bulletin prose."""

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Optional

TEN_THOUSAND = '万'

# Plain decimals only: no sign, exponent, separators, nan or inf
_DECIMAL_RE = re.compile(r'^(?:\d+\.?\d*|\.\d+)$', re.ASCII)


def parse_decimal(text: str) -> Optional[Decimal]:
    """Parse a plain decimal string, returning None when it is not one."""
    if text is None:
        return None
    text = text.strip()
    if not _DECIMAL_RE.match(text):
        return None
    try:
        return Decimal(text)
    except InvalidOperation:
        return None


def parse_count(token: str, unit: str = TEN_THOUSAND) -> Optional[float]:
    """
    Convert a matched count token into a number.
    Handles:
    - 1234 -> 1234.0
    - 3.5 -> 3.5
    - 3.5万 -> 35000.0
    Returns None for anything that is not a plain decimal (with or without
    the unit suffix) and for values too large to represent as a finite
    float. None must be treated as a failure, never as zero.
    """
    if token is None:
        return None
    token = token.strip()
    
    multiplier = 1
    if unit and token.endswith(unit):
        token = token[:-len(unit)]
        multiplier = 10000
    
    value = parse_decimal(token)
    if value is None:
        return None

    result = float(value * multiplier)
    if not math.isfinite(result):
        return None
    return result
