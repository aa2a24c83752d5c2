"""
Field helpers for the separator-joined report.

The escaping scheme is deliberately minimal: the separator gets a backslash
in front of it and nothing else changes. Quotes, newlines and backslashes
pass through untouched.
"""
from typing import Any, List


def format_number(value: float) -> str:
    """
    Integral values print without a trailing '.0' (10.0 -> '10'). From 1e21 up
    the exponent form is kept (1e+22).
    """
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        return format_number(value)
    return str(value)


def escape(value: Any, separator: str) -> str:
    """Prefixes every occurrence of `separator` with a backslash."""
    if not separator:
        raise ValueError("separator must not be empty")
    return stringify(value).replace(separator, f"\\{separator}")


def unescape(value: str, separator: str) -> str:
    """Reverses escape()."""
    if not separator:
        raise ValueError("separator must not be empty")
    return value.replace(f"\\{separator}", separator)


def fill(length: int, value: str = '') -> List[str]:
    """
    Returns `length` copies of `value`. "[index]" inside `value` is replaced
    with the 1-based position, so fill(2, 'Directory[index]') gives
    ['Directory1', 'Directory2']. Non-positive lengths give an empty list.
    """
    return [value.replace('[index]', str(i + 1)) for i in range(length)]
