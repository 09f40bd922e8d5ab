"""Billing cycle resolution - which statement a card purchase lands on"""

from datetime import date
from typing import Optional

from finlar_gateway.config import settings
from finlar_gateway.domain.models import BillingInfo, CardBillingPolicy
from finlar_gateway.utils.date_utils import add_months, first_of_month, month_label

MIN_CLOSING_DAY = 1
MAX_CLOSING_DAY = 28


def is_valid_closing_day(value: object) -> bool:
    # bool is an int subclass; True must not pass as closing day 1
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return MIN_CLOSING_DAY <= value <= MAX_CLOSING_DAY


def resolve_closing_day(policy: Optional[CardBillingPolicy], default: Optional[int] = None) -> int:
    """
    Closing day to apply for a card.

    Only 1..28 is valid. Missing policies, missing values and anything out of
    range fall back to the default instead of being rejected. An invalid explicit
    default falls back to the configured one.
    """
    fallback = default if is_valid_closing_day(default) else settings.default_closing_day
    if policy is not None and is_valid_closing_day(policy.closing_day):
        return policy.closing_day
    return fallback


def get_billing_month(purchase_date: date, closing_day: int) -> BillingInfo:
    """
    Attribute a purchase to a billing month.

    Rule: a purchase made after the closing day goes on the following month's
    statement (deferred). A purchase on the closing day itself still closes
    in its own month.

    Example:
        closing_day=20, 2026-12-25 -> 2027-01-01, deferred
        closing_day=20, 2026-12-20 -> 2026-12-01, not deferred
    """
    if purchase_date.day > closing_day:
        billing_month = add_months(purchase_date, 1)
        return BillingInfo(
            billing_month=billing_month,
            billing_label=month_label(billing_month),
            is_deferred=True,
        )

    billing_month = first_of_month(purchase_date)
    return BillingInfo(
        billing_month=billing_month,
        billing_label=month_label(billing_month),
        is_deferred=False,
    )


def deferred_message(billing_info: BillingInfo, closing_day: int) -> Optional[str]:
    """User-facing note explaining why a purchase moved to the next statement"""
    if not billing_info.is_deferred:
        return None
    return (
        f"Purchase made after the closing day ({closing_day}); "
        f"billed on the {billing_info.billing_label} statement."
    )
