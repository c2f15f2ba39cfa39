from .interest import InterestBreakdown, InterestPolicy, InvalidDateError, compute_entry, compute_interest
from .models import ComputedLedgerEntry, LedgerEntry, LedgerSummary
from .serials import expand_search_expression, sort_by_serial

__all__ = [
    "compute_interest",
    "compute_entry",
    "InterestBreakdown",
    "InterestPolicy",
    "InvalidDateError",
    "LedgerEntry",
    "ComputedLedgerEntry",
    "LedgerSummary",
    "expand_search_expression",
    "sort_by_serial",
]
