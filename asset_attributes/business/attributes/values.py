"""
Scalar coercion shared by schema parsing, validation and serialization
"""

import json
import math
import re
from datetime import datetime

_NUMBER_LITERAL = re.compile(r'^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$')
_INTEGER_LITERAL = re.compile(r'[+-]?[0-9]+')

# Tried in order; strptime behaves the same on every supported Python
DATE_FORMATS = (
    '%Y-%m-%d',
    '%Y-%m-%dT%H:%M',
    '%Y-%m-%dT%H:%M:%S',
    '%Y-%m-%dT%H:%M:%S.%f',
    '%Y-%m-%dT%H:%M%z',
    '%Y-%m-%dT%H:%M:%S%z',
    '%Y-%m-%dT%H:%M:%S.%f%z',
    '%Y-%m-%d %H:%M',
    '%Y-%m-%d %H:%M:%S',
    '%Y/%m/%d',
    '%m/%d/%Y',
    '%b %d %Y',
    '%b %d, %Y',
    '%B %d %Y',
    '%B %d, %Y',
    '%d %b %Y',
    '%d %B %Y',
)


def parse_number(text):
    """
    Parse a trimmed decimal literal into an int or float.

    Returns None for anything that is not a finite number. Integral literals
    without a fraction or exponent stay ints so "10" is stored as 10.
    """
    if not isinstance(text, str):
        return None
    raw = text.strip()
    if not _NUMBER_LITERAL.match(raw):
        return None
    if _INTEGER_LITERAL.fullmatch(raw):
        return int(raw)
    value = float(raw)
    if not math.isfinite(value):
        return None
    return value


def to_finite_number(raw):
    """
    Coerce an id-like value (int, float or numeric string) to a number.

    None, booleans, blanks and non-finite values give None.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if not math.isfinite(raw):
            return None
        return int(raw) if raw.is_integer() else raw
    if isinstance(raw, str):
        return parse_number(raw)
    return None


def parse_date(text):
    """
    Parse a calendar date or date-time, None when it is not one

    Accepts ISO dates and date-times (optionally with Z or an offset), the
    slash forms 2024/01/15 and 01/15/2024, and month names as in
    "Jan 15 2024". Single-digit month and day are allowed.
    """
    raw = " ".join((text or '').split())
    if not raw or not raw.isascii():
        return None
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(raw, fmt)
        except ValueError:
            continue
    return None


def value_to_text(value):
    """Render a stored scalar back to the string form edited in memory"""
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return json.dumps(value, ensure_ascii=False, default=str)
