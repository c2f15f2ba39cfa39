from __future__ import annotations

import re
from typing import Any, Callable, Iterable, Optional, Sequence, TypeVar


T = TypeVar("T")

_RANGE_RE = re.compile(r"^([A-Za-z]*)([0-9]+)-([A-Za-z]*)([0-9]+)$")
_SERIAL_RE = re.compile(r"^([A-Za-z]*)([0-9]+)$")


def _to_int(digits: str) -> Optional[int]:
    # Past the interpreter's int-conversion digit limit, treat the token as plain text.
    try:
        return int(digits)
    except ValueError:
        return None


def expand_search_expression(text: str) -> list[str]:
    """
    Expand a serial search expression into the concrete serials it names.

    - "1,3-5,NS1" -> ["1", "3", "4", "5", "NS1"]
    - "A1-A3" -> ["A1", "A2", "A3"]
    - "A1-B5" -> ["A1-B5"] (prefixes differ, kept as a literal)
    - "5-3" -> [] (reversed range)

    Order follows the expression; duplicates are kept.
    """
    out: list[str] = []
    for token in (text or "").split(","):
        token = token.strip()
        m = _RANGE_RE.match(token)
        if not m:
            out.append(token)
            continue

        prefix_start, start, prefix_end, end = m.group(1), _to_int(m.group(2)), m.group(3), _to_int(m.group(4))
        if prefix_start != prefix_end or start is None or end is None:
            out.append(token)
            continue
        out.extend(f"{prefix_start}{i}" for i in range(start, end + 1))
    return out


def serial_sort_key(serial: str) -> tuple[str, int]:
    # "A12" -> ("A", 12); "7" -> ("", 7); anything else sorts by the whole string.
    m = _SERIAL_RE.match(serial or "")
    number = _to_int(m.group(2)) if m else None
    if number is None:
        return (serial, 0)
    return (m.group(1), number)


def _collation_key(text: str) -> tuple[str, str]:
    # Locale-style ordering: letters compare case-insensitively first, lowercase wins ties.
    return (text.casefold(), text.swapcase())


def _serial_of(item: Any) -> str:
    if isinstance(item, str):
        return item
    if isinstance(item, dict):
        return str(item.get("serialNumber", item.get("serial_number", "")))
    return str(getattr(item, "serial_number"))


def sort_by_serial(
    items: Iterable[T],
    key: Optional[Callable[[T], str]] = None,
) -> list[T]:
    """
    Order entries (or plain serial strings) by alphabetic prefix, then numeric suffix.

    Returns a new list; the sort is stable so equal serials keep their input order.
    """
    get_serial = key or _serial_of

    def _key(item: T) -> tuple[tuple[str, str], int]:
        prefix, number = serial_sort_key(get_serial(item))
        return (_collation_key(prefix), number)

    return sorted(items, key=_key)


def filter_by_serials(items: Iterable[T], serials: Sequence[str]) -> list[T]:
    wanted = set(serials)
    return [item for item in items if _serial_of(item) in wanted]
