"""Phone number helpers for Saudi mobile numbers."""

import re

SAUDI_PREFIX = "+966"

_DIGITS = re.compile(r"^[0-9]+$")
_SAUDI_MOBILE = re.compile(r"^5[0-9]{8}$")
_SMS_RECIPIENT = re.compile(r"^[0-9]{10,15}$")


def normalize_phone(phone: str | None) -> str | None:
    """Normalize a phone number to the ``+966`` form stored on customers.

    Returns None when the input cannot be interpreted.
    """
    if not phone:
        return None
    trimmed = phone.strip()
    if trimmed.startswith("+966"):
        return trimmed
    if trimmed.startswith("966"):
        return SAUDI_PREFIX + trimmed[3:]
    if trimmed.startswith("00966"):
        return SAUDI_PREFIX + trimmed[5:]
    if trimmed.startswith("0"):
        return SAUDI_PREFIX + trimmed[1:]
    if _DIGITS.fullmatch(trimmed):
        return SAUDI_PREFIX + trimmed
    return None


def local_part(mobile: str) -> str:
    """Strip the ``+966`` prefix for API responses."""
    return mobile[len(SAUDI_PREFIX) :] if mobile.startswith(SAUDI_PREFIX) else mobile


def is_valid_saudi_mobile(phone: str | None) -> bool:
    """True for ``+9665XXXXXXXX`` or ``009665XXXXXXXX``."""
    if not phone:
        return False
    phone = phone.strip()
    if phone.startswith("+966"):
        number = phone[4:]
    elif phone.startswith("00966"):
        number = phone[5:]
    else:
        return False
    return _SAUDI_MOBILE.fullmatch(number) is not None


def to_international(phone: str) -> str:
    phone = phone.strip()
    if phone.startswith("00966"):
        return SAUDI_PREFIX + phone[5:]
    return phone


def is_valid_sms_recipient(recipient: str | None) -> bool:
    """Digits only, 10 to 15 characters long."""
    return recipient is not None and _SMS_RECIPIENT.fullmatch(recipient) is not None
