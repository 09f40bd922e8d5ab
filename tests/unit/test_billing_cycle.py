"""Unit tests for billing month resolution"""

import pytest
from pydantic import ValidationError
from datetime import date
from finlar_gateway.config import Settings
from finlar_gateway.domain.billing_cycle import (
    deferred_message,
    get_billing_month,
    resolve_closing_day,
)
from finlar_gateway.domain.models import CardBillingPolicy


def test_purchase_on_closing_day_stays_in_month():
    """Test purchase on the closing day itself is billed in its own month"""
    info = get_billing_month(date(2026, 3, 20), closing_day=20)

    assert info.billing_month == date(2026, 3, 1)
    assert info.is_deferred is False


def test_purchase_after_closing_day_is_deferred():
    """Test purchase one day after closing goes to next statement"""
    info = get_billing_month(date(2026, 3, 21), closing_day=20)

    assert info.billing_month == date(2026, 4, 1)
    assert info.is_deferred is True


def test_december_purchase_rolls_into_next_year():
    """Test year rollover for deferred December purchase"""
    info = get_billing_month(date(2026, 12, 25), closing_day=20)

    assert info.billing_month == date(2027, 1, 1)
    assert info.is_deferred is True
    assert info.billing_label == "January 2027"


def test_first_day_of_month_never_deferred():
    info = get_billing_month(date(2026, 2, 1), closing_day=1)

    assert info.billing_month == date(2026, 2, 1)
    assert info.is_deferred is False


def test_end_of_month_purchase_with_short_next_month():
    """Test Jan 31 purchase deferred into February without day overflow"""
    info = get_billing_month(date(2026, 1, 31), closing_day=28)

    assert info.billing_month == date(2026, 2, 1)
    assert info.is_deferred is True


@pytest.mark.parametrize(
    "policy",
    [
        None,
        CardBillingPolicy(card_id="c", closing_day=None),
        CardBillingPolicy(card_id="c", closing_day=0),
        CardBillingPolicy(card_id="c", closing_day=29),
        CardBillingPolicy(card_id="c", closing_day=-3),
        CardBillingPolicy(card_id="c", closing_day=True),
    ],
)
def test_invalid_closing_day_falls_back_to_default(policy):
    """Test missing or out-of-range closing days use the default of 20"""
    assert resolve_closing_day(policy) == 20


@pytest.mark.parametrize("closing_day", [1, 15, 28])
def test_valid_closing_day_is_kept(closing_day):
    assert resolve_closing_day(CardBillingPolicy(card_id="c", closing_day=closing_day)) == closing_day


def test_explicit_default_overrides_settings():
    assert resolve_closing_day(None, default=10) == 10


def test_fallback_default_drives_deferral():
    """Test closing day 29 behaves exactly like 20 for deferral"""
    closing_day = resolve_closing_day(CardBillingPolicy(card_id="c", closing_day=29))

    assert get_billing_month(date(2026, 5, 20), closing_day).is_deferred is False
    assert get_billing_month(date(2026, 5, 21), closing_day).is_deferred is True


def test_deferred_message_only_for_deferred():
    """Test explanatory text is present iff the purchase is deferred"""
    deferred = get_billing_month(date(2026, 3, 21), closing_day=20)
    on_time = get_billing_month(date(2026, 3, 2), closing_day=20)

    message = deferred_message(deferred, 20)
    assert message is not None
    assert "(20)" in message
    assert "April 2026" in message
    assert deferred_message(on_time, 20) is None


@pytest.mark.parametrize("default", [0, 29, 31, -1, True])
def test_invalid_explicit_default_falls_back_to_settings(default):
    """Test an out-of-range default is never used as a closing day"""
    assert resolve_closing_day(None, default=default) == 20
    assert resolve_closing_day(CardBillingPolicy(card_id="c", closing_day=40), default=default) == 20


def test_settings_reject_out_of_range_default():
    for value in (0, 29):
        with pytest.raises(ValidationError):
            Settings(default_closing_day=value)
    assert Settings(default_closing_day=28).default_closing_day == 28
