"""Swedish phone number normalization"""

import re
from typing import Optional

from storefront.errors import InvalidPhoneError

E164 = re.compile(r"^\+\d{8,15}$")
DIGITS = re.compile(r"^\d+$")


def normalize_phone_se(value: Optional[str]) -> Optional[str]:
    """
    Normalize a Swedish phone number to E.164.

    Accepts ``+46701234567``, ``0046701234567``, ``46701234567`` and the
    local mobile form ``0701234567``. Returns None when the input cannot be
    turned into a plausible E.164 number.
    """
    raw = re.sub(r"[\s-]+", "", value or "")
    if not raw:
        return None

    if raw.startswith("+"):
        candidate = raw
    elif raw.startswith("0046"):
        candidate = "+46" + raw[4:]
    elif raw.startswith("46"):
        candidate = "+46" + raw[2:]
    elif raw.startswith("07") and DIGITS.match(raw):
        candidate = "+46" + raw[1:]
    else:
        return None

    return candidate if E164.match(candidate) else None


def require_phone_se(value: Optional[str]) -> str:
    """Like ``normalize_phone_se`` but raises on failure"""
    normalized = normalize_phone_se(value)
    if normalized is None:
        raise InvalidPhoneError(value)
    return normalized


def mask_phone(value: Optional[str]) -> str:
    """Last four digits, for logs"""
    return (value or "")[-4:]
