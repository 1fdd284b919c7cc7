"""Tests for phone normalization and the ordering window"""

from datetime import datetime

import pytest

from storefront.errors import InvalidPhoneError, OrderingClosedError
from storefront.services.opening_hours import OpeningHours
from storefront.services.phone import mask_phone, normalize_phone_se, require_phone_se


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("0701234567", "+46701234567"),
        ("+46701234567", "+46701234567"),
        ("0046701234567", "+46701234567"),
        ("46701234567", "+46701234567"),
        ("070-123 45 67", "+46701234567"),
        ("abc", None),
        ("0701", None),
        ("", None),
        (None, None),
        ("+4670abc4567", None),
    ],
)
def test_normalize_phone_se(raw, expected):
    assert normalize_phone_se(raw) == expected


def test_require_phone_raises():
    with pytest.raises(InvalidPhoneError):
        require_phone_se("12")


def test_mask_phone():
    assert mask_phone("+46701234567") == "4567"
    assert mask_phone(None) == ""


# Tuesday 2026-10-20; Stockholm is UTC+2
@pytest.mark.parametrize(
    "now, is_open, message",
    [
        (datetime(2026, 10, 20, 8, 0), False, "Stängt för beställning. Öppnar kl 10:30."),
        (datetime(2026, 10, 20, 8, 30), True, "Öppet för beställning. Sista beställning kl 20:45."),
        (datetime(2026, 10, 20, 18, 50), False, "Stängt för beställning efter kl 20:45."),
        (datetime(2026, 10, 20, 19, 30), False, "Stängt just nu. Öppnar imorgon kl 10:30."),
        # Friday night, Saturday opens later
        (datetime(2026, 10, 23, 19, 30), False, "Stängt just nu. Öppnar imorgon kl 11:30."),
        # Saturday 11:00
        (datetime(2026, 10, 24, 9, 0), False, "Stängt för beställning. Öppnar kl 11:30."),
    ],
)
def test_opening_hours(now, is_open, message):
    hours = OpeningHours()

    assert hours.is_order_open(now) is is_open
    assert hours.ordering_message(now) == message


def test_ensure_open_raises_with_message():
    with pytest.raises(OrderingClosedError) as exc_info:
        OpeningHours().ensure_open(datetime(2026, 10, 20, 5, 0))

    assert exc_info.value.message == "Stängt för beställning. Öppnar kl 10:30."
