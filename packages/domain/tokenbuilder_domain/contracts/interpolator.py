"""Placeholder interpolation helpers.

Pure formatting functions used for every textual substitution in a contract
draft. None of them touch shared state, so they are safe to call from any
thread.
"""

import re
from datetime import date, datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Iterable, Optional, TypeVar, Union

T = TypeVar("T")

# Symbolic "evaluate at generation time" marker for absent dates
NOW_MARKER = "block.timestamp"

FALLBACK_IDENTIFIER = "Token"

_NON_IDENTIFIER = re.compile(r"[^A-Za-z0-9_]")


def sanitize_identifier(name: str) -> str:
    """Turn a display name into a contiguous identifier.

    Whitespace and characters outside [A-Za-z0-9_] are removed. A leading
    digit is prefixed with an underscore and an empty result falls back to
    "Token". Not injective: "A-B" and "AB" both become "AB". The result is
    cosmetic (a contract name) and is never used as a lookup key.

    Example:
        sanitize_identifier("Credit Linked Note 2025") -> "CreditLinkedNote2025"
    """
    identifier = _NON_IDENTIFIER.sub("", name or "")
    if not identifier:
        return FALLBACK_IDENTIFIER
    if identifier[0].isdigit():
        return f"_{identifier}"
    return identifier


def to_epoch_seconds(value: Optional[Union[date, str]]) -> Union[int, str]:
    """Seconds since epoch at UTC midnight of a calendar date.

    Args:
        value: date, ISO "YYYY-MM-DD" string, or None/"" when absent

    Returns:
        Integer seconds, or NOW_MARKER when the date is absent
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return NOW_MARKER
    if isinstance(value, str):
        value = date.fromisoformat(value.strip())
    if isinstance(value, datetime):
        value = value.date()
    midnight = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    return int(midnight.timestamp())


def to_basis_points(percent: Union[int, float, str, Decimal]) -> int:
    """Convert a percentage to basis points: round(percent * 100), half-up.

    Computed in Decimal from the value's string form, so 2.675 -> 268 rather
    than whatever the binary float would round to. Downstream consumers rely
    on the exact tie-break.

    Example:
        to_basis_points(3) -> 300
        to_basis_points(0.125) -> 13
    """
    amount = percent if isinstance(percent, Decimal) else Decimal(str(percent))
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_list(
    values: Iterable[T],
    render_item: Callable[[T], str],
    separator: str = "\n",
) -> str:
    """Render each value and join the results.

    An empty input renders as empty text, never as an empty block.
    """
    return separator.join(render_item(value) for value in values)


def quote_literal(text: str) -> str:
    """Double-quoted string literal with backslashes and quotes escaped."""
    escaped = (text or "").replace("\\", "\\\\").replace('"', '\\"')
    escaped = escaped.replace("\n", " ").replace("\r", " ")
    return f'"{escaped}"'


def supply_expression(total_supply: int, decimals: int) -> str:
    """Minted amount expressed in base units.

    Example:
        supply_expression(1000000, 18) -> "1000000 * 10**18"
        supply_expression(1000000, 0) -> "1000000"
    """
    if decimals == 0:
        return str(total_supply)
    return f"{total_supply} * 10**{decimals}"


def comment_text(text: str) -> str:
    """Single-line comment payload (newlines collapsed)."""
    return " ".join((text or "").split())
