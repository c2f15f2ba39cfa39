from .dates import format_display_date, parse_display_date, parse_iso_date
from .money import format_inr, to_fixed, to_plain

__all__ = ["parse_iso_date", "parse_display_date", "format_display_date", "format_inr", "to_fixed", "to_plain"]
