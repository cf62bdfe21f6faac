"""
Byte size parsing for memory limits.
"""
import re
from typing import Any

from ..errors import InvalidSizeError

_SIZE_PATTERN = re.compile(r'^(\d+(?:\.\d+)?)\s*([kmgtp]?)b?$', re.IGNORECASE)

# Binary multipliers, as used for RAM limits
_MULTIPLIERS = {
    '': 1,
    'k': 1024,
    'm': 1024 ** 2,
    'g': 1024 ** 3,
    't': 1024 ** 4,
    'p': 1024 ** 5,
}


def ram_in_bytes(value: Any) -> int:
    """
    Converts a memory size into a byte count.

    Accepts integers, integral floats, digit strings and human sizes
    such as '512m', '1g' or '64kb'. Booleans are rejected.

    :param value: The size to convert.
    :return: The size in bytes.
    :raises InvalidSizeError: If the value cannot be interpreted.
    """
    if isinstance(value, bool):
        raise InvalidSizeError(f"Invalid size: {value!r}")
    if isinstance(value, int):
        size = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise InvalidSizeError(f"Invalid size: {value!r}, must be a whole number of bytes")
        size = int(value)
    elif isinstance(value, str):
        match = _SIZE_PATTERN.match(value.strip())
        if not match:
            raise InvalidSizeError(f"Invalid size: {value!r}")
        number, unit = match.groups()
        size = int(float(number) * _MULTIPLIERS[unit.lower()])
    else:
        raise InvalidSizeError(f"Invalid size: {value!r}")

    if size < 0:
        raise InvalidSizeError(f"Invalid size: {value!r}, must not be negative")
    return size
