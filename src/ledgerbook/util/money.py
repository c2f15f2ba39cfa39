from __future__ import annotations

import math
from decimal import Decimal, ROUND_HALF_UP


def _non_finite_str(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    return "Infinity" if value > 0 else "-Infinity"


def to_fixed(value: float, places: int = 2) -> str:
    """
    Render a float with a fixed number of decimals:
    - 988.1666 -> "988.17"
    - 48400 -> "48400.00"
    - -0.005 -> "-0.01"
    """
    if not math.isfinite(value):
        return _non_finite_str(value)
    quantum = Decimal(1).scaleb(-places)
    dec = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    return f"{dec:.{places}f}"


def to_plain(value: float) -> str:
    """
    Render a number without padding, the way it was entered:
    - 40000.0 -> "40000"
    - 1.75 -> "1.75"
    """
    if not math.isfinite(value):
        return _non_finite_str(value)
    return str(int(value)) if float(value).is_integer() else repr(float(value))


def format_inr(value: float) -> str:
    """
    Group digits the Indian way (lakh / crore) with two decimals:
    - 49388.1666 -> "49,388.17"
    - 1234567.5 -> "12,34,567.50"
    """
    fixed = to_fixed(value)
    if not math.isfinite(value):
        return fixed

    sign = ""
    if fixed.startswith("-"):
        sign, fixed = "-", fixed[1:]
    whole, frac = fixed.split(".")

    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups: list[str] = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])

    return f"{sign}{whole}.{frac}"
