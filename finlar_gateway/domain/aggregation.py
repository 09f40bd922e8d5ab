"""Category and statement aggregation over purchases"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Protocol

from finlar_gateway.config import settings
from finlar_gateway.domain.models import CategoryTotals, EnrichedPurchase, Invoice, TransactionSummary
from finlar_gateway.utils.date_utils import first_of_month, month_key, month_label


class Chargeable(Protocol):
    """Anything with an amount and an optional category"""

    @property
    def amount(self) -> Decimal: ...

    @property
    def category(self) -> Optional[str]: ...


def category_label(category: Optional[str], unclassified: Optional[str] = None) -> str:
    """Missing and blank categories share the unclassified bucket"""
    if category and category.strip():
        return category
    return unclassified if unclassified is not None else settings.unclassified_category


def summarize_by_category(
    records: Iterable[Chargeable],
    unclassified: Optional[str] = None,
) -> TransactionSummary:
    """
    Fold purchases into a grand total and per-category totals.

    Amounts are Decimals, so the result does not depend on input order.
    """
    summary = TransactionSummary()
    for record in records:
        amount = Decimal(record.amount)
        label = category_label(record.category, unclassified)
        bucket = summary.by_category.setdefault(label, CategoryTotals())
        bucket.total += amount
        bucket.count += 1
        summary.total += amount
        summary.count += 1
    return summary


def _invoice_status(billing_month: date, today: date) -> str:
    current = first_of_month(today)
    if billing_month == current:
        return "current"
    if billing_month > current:
        return "future"
    return "closed"


def group_invoices(records: Iterable[EnrichedPurchase], today: date) -> List[Invoice]:
    """
    Group enriched purchases into one invoice per billing month.

    `today` decides which statement is current; callers pass it in.
    Returns invoices newest first.
    """
    totals: Dict[date, Decimal] = defaultdict(Decimal)
    counts: Dict[date, int] = defaultdict(int)
    for entry in records:
        month = first_of_month(entry.billing_month)
        totals[month] += Decimal(entry.amount)
        counts[month] += 1

    return [
        Invoice(
            key=month_key(month),
            label=month_label(month),
            billing_month=month,
            total=totals[month],
            count=counts[month],
            status=_invoice_status(month, today),
        )
        for month in sorted(totals, reverse=True)
    ]


def filter_billing_month(records: Iterable[EnrichedPurchase], month: date) -> List[EnrichedPurchase]:
    """Entries attributed to the statement of `month`, in their original order"""
    target = first_of_month(month)
    return [entry for entry in records if first_of_month(entry.billing_month) == target]
