"""
Design (validators.py)
- Purpose: Format rules for registration fields and message recipient/payload.
- Inputs: Raw strings as collected by the caller (may be None).
- Outputs: Booleans for field predicates; fixed feedback texts for message checks.
- Side effects: None.
- Thread-safety: Stateless; safe to call from any thread.
"""

import re

from .config import (
    LEGACY_RECIPIENT_NUMBER,
    MAX_PASSWORD_LENGTH,
    MAX_PAYLOAD_LENGTH,
    MAX_USERNAME_LENGTH,
    MIN_PASSWORD_LENGTH,
    NAME_PATTERN,
    PAYLOAD_READY,
    PAYLOAD_TOO_LONG,
    PHONE_PATTERN,
    RECIPIENT_CAPTURED,
    RECIPIENT_INVALID,
)

_PHONE_RE = re.compile(PHONE_PATTERN)
_NAME_RE = re.compile(NAME_PATTERN)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def is_valid_username(username: str | None) -> bool:
    """
    Purpose: Username must contain an underscore and be at most five characters.
    Inputs: username (str or None)
    Outputs: True if valid, else False.
    """
    if _is_blank(username):
        return False
    return "_" in username and len(username) <= MAX_USERNAME_LENGTH


def is_valid_password(password: str | None) -> bool:
    """
    Purpose: Password complexity check (length bounds, capital, digit, special char).
    Inputs: password (str or None)
    Outputs: True if valid, else False.
    Notes: Each character sets at most one flag, tested as uppercase, then digit,
           then special (not a letter or digit).
    """
    if _is_blank(password):
        return False

    length_ok = MIN_PASSWORD_LENGTH <= len(password) <= MAX_PASSWORD_LENGTH

    has_capital = has_digit = has_special = False
    for ch in password:
        if ch.isupper():
            has_capital = True
        elif ch.isdigit():
            has_digit = True
        elif not ch.isalnum():
            has_special = True

    return length_ok and has_capital and has_digit and has_special


def is_valid_phone_number(number: str | None, allow_legacy: bool = False) -> bool:
    """
    Purpose: Number must be +27 followed by exactly nine digits.
    Inputs:
        number: candidate phone number (str or None)
        allow_legacy: also accept LEGACY_RECIPIENT_NUMBER verbatim (recipient checks only)
    Outputs: True if valid, else False.
    """
    if _is_blank(number):
        return False
    if _PHONE_RE.fullmatch(number):
        return True
    return allow_legacy and number == LEGACY_RECIPIENT_NUMBER


def is_valid_person_name(name: str | None) -> bool:
    """First/last name: not empty after trimming, ASCII letters only."""
    if _is_blank(name):
        return False
    return _NAME_RE.fullmatch(name) is not None


def validate_payload_length(payload: str | None) -> str:
    """
    Purpose: Describe whether a message body fits within MAX_PAYLOAD_LENGTH.
    Inputs: payload (str or None)
    Outputs: PAYLOAD_READY, or the "exceeds by N" text. A None payload is treated
             as length 0 and therefore reports a negative excess.
    """
    if payload is not None and len(payload) <= MAX_PAYLOAD_LENGTH:
        return PAYLOAD_READY
    length = len(payload) if payload is not None else 0
    return PAYLOAD_TOO_LONG.format(limit=MAX_PAYLOAD_LENGTH, excess=length - MAX_PAYLOAD_LENGTH)


def validate_recipient(recipient: str | None) -> str:
    """Return RECIPIENT_CAPTURED for a usable recipient number, else RECIPIENT_INVALID."""
    if is_valid_phone_number(recipient, allow_legacy=True):
        return RECIPIENT_CAPTURED
    return RECIPIENT_INVALID
