from __future__ import annotations

import logging
from typing import Iterable

from .interest import DEFAULT_POLICY, InterestPolicy, Now, compute_entry
from .models import ComputedLedgerEntry, LedgerEntry, LedgerSummary
from .serials import expand_search_expression, filter_by_serials, sort_by_serial


logger = logging.getLogger(__name__)


def compute_entries(
    entries: Iterable[LedgerEntry],
    now: Now = None,
    policy: InterestPolicy = DEFAULT_POLICY,
) -> list[ComputedLedgerEntry]:
    return [compute_entry(e, now=now, policy=policy) for e in entries]


def view_entries(
    entries: Iterable[LedgerEntry],
    now: Now = None,
    policy: InterestPolicy = DEFAULT_POLICY,
) -> list[ComputedLedgerEntry]:
    """
    Every entry with its interest fields, ordered by serial.
    """
    computed = sort_by_serial(compute_entries(entries, now=now, policy=policy))
    logger.debug("Computed interest for %d entries", len(computed))
    return computed


def search_entries(
    entries: Iterable[LedgerEntry],
    expression: str,
    now: Now = None,
    policy: InterestPolicy = DEFAULT_POLICY,
) -> list[ComputedLedgerEntry]:
    """
    Entries whose serial appears in a search expression such as "1,3-5,NS1", ordered by serial.

    Only matched entries are computed, so a bad date elsewhere in the ledger does not fail a search.
    """
    serials = expand_search_expression(expression)
    matched = filter_by_serials(entries, serials)
    logger.debug("Search %r expanded to %d serials, matched %d entries", expression, len(serials), len(matched))
    return sort_by_serial(compute_entries(matched, now=now, policy=policy))


def summarize(computed: Iterable[ComputedLedgerEntry]) -> LedgerSummary:
    summary = LedgerSummary()
    for e in computed:
        summary.entry_count += 1
        summary.total_interest_today += e.interest_today
        summary.total_payable += e.total_payable
        if e.interest_rate and e.interest_applicable_amount:
            summary.monthly_growth += e.interest_rate / 100 * e.interest_applicable_amount
    return summary
