from __future__ import annotations

import re
from datetime import date

from dateutil import parser as date_parser


_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DISPLAY_DATE_RE = re.compile(r"^\d{2}-\d{2}-\d{4}$")


def parse_iso_date(value: str) -> date:
    """
    Parse the canonical entry date, strictly `YYYY-MM-DD` (e.g. "2025-07-28").
    """
    if value is None:
        raise ValueError("parse_iso_date: value is None")
    s = value.strip()
    if not _ISO_DATE_RE.match(s):
        raise ValueError(f"parse_iso_date: expected YYYY-MM-DD, got {value!r}")
    return date.fromisoformat(s)


def parse_display_date(value: str) -> date:
    """
    Parse dates as users type them:
    - "28-07-2025"
    - "01-01-2024"
    """
    if value is None:
        raise ValueError("parse_display_date: value is None")
    s = value.strip()
    if not _DISPLAY_DATE_RE.match(s):
        raise ValueError(f"parse_display_date: expected DD-MM-YYYY, got {value!r}")
    dt = date_parser.parse(s, dayfirst=True, yearfirst=False)
    return dt.date()


def format_display_date(value: date) -> str:
    return value.strftime("%d-%m-%Y")
