"""Field validators shared by request schemas, the checkout flow and the tests.

Each validator returns a ``ValidationResult``; ``valid`` is ``False`` together
with a human readable ``message`` when the value is rejected.
"""
import re
from collections import namedtuple
from datetime import date

ValidationResult = namedtuple("ValidationResult", ["valid", "message"])
ValidationResult.__new__.__defaults__ = (None,)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^\+?[\d\s\-()]{10,}$")
CZECH_PHONE_RE = re.compile(r"^\+420\s?\d{3}\s?\d{3}\s?\d{3}$")
CARD_NUMBER_RE = re.compile(r"^\d{13,19}$")
CARD_EXPIRY_RE = re.compile(r"^(0[1-9]|1[0-2])/\d{2}$")
CVV_RE = re.compile(r"^\d{3,4}$")
NAME_RE = re.compile(r"^[a-zA-Zа-яА-ЯёЁÀ-ſ\s'-]{2,100}$")

CARD_PREFIXES = ("34", "37", "4", "51", "52", "53", "54", "55", "6")

OK = ValidationResult(True)


def _fail(message):
    return ValidationResult(False, message)


def email(value):
    if not value or not isinstance(value, str):
        return _fail("Email is required")
    trimmed = value.strip()
    if not EMAIL_RE.match(trimmed):
        return _fail("Invalid email format")
    if len(trimmed) > 255:
        return _fail("Email is too long")
    return OK


def phone(value):
    if not value or not isinstance(value, str):
        return _fail("Phone is required")
    trimmed = value.strip()
    digits = re.sub(r"\D", "", trimmed)
    if len(digits) < 10 or len(digits) > 15:
        return _fail("Phone must contain 10-15 digits")
    if not PHONE_RE.match(trimmed):
        return _fail("Invalid phone format")
    return OK


def czech_phone(value):
    if not value:
        return OK
    if not CZECH_PHONE_RE.match(value):
        return _fail("Invalid phone number, expected +420 XXX XXX XXX")
    return OK


def name(value):
    if not value or not isinstance(value, str):
        return _fail("Name is required")
    trimmed = value.strip()
    if len(trimmed) < 2:
        return _fail("Name must be at least 2 characters")
    if len(trimmed) > 100:
        return _fail("Name must be at most 100 characters")
    if not NAME_RE.match(trimmed):
        return _fail("Name contains invalid characters")
    return OK


def address(value):
    if not value or not isinstance(value, str):
        return _fail("Address is required")
    trimmed = value.strip()
    if len(trimmed) < 5:
        return _fail("Address must be at least 5 characters")
    if len(trimmed) > 200:
        return _fail("Address must be at most 200 characters")
    return OK


def password(value, min_length=6, require_complex=False):
    if not value or not isinstance(value, str):
        return _fail("Password is required")
    if len(value) < min_length:
        return _fail(f"Password must be at least {min_length} characters")
    if len(value) > 128:
        return _fail("Password is too long")
    if require_complex:
        if not (re.search(r"[A-Z]", value) and re.search(r"[a-z]", value) and re.search(r"\d", value)):
            return _fail("Password must contain upper case, lower case letters and digits")
    return OK


def luhn_checksum_ok(digits):
    total = 0
    for i, ch in enumerate(reversed(digits)):
        d = int(ch)
        if i % 2 == 1:
            d *= 2
            if d > 9:
                d -= 9
        total += d
    return total % 10 == 0


def card_number(value):
    if not value or not isinstance(value, str):
        return _fail("Card number is required")
    digits = re.sub(r"\D", "", value)
    if not CARD_NUMBER_RE.match(digits):
        return _fail("Invalid card number")
    if not luhn_checksum_ok(digits):
        return _fail("Invalid card number")
    if not digits.startswith(CARD_PREFIXES):
        return _fail("Unsupported card network")
    return OK


def card_expiry(value, today=None):
    if not value or not isinstance(value, str):
        return _fail("Expiry date is required")
    if not CARD_EXPIRY_RE.match(value):
        return _fail("Invalid format (MM/YY)")

    month, year = (int(part) for part in value.split("/"))
    today = today or date.today()
    current_year = today.year % 100
    if year < current_year or (year == current_year and month < today.month):
        return _fail("Card has expired")
    if year > current_year + 10:
        return _fail("Invalid expiry date")
    return OK


def cvv(value):
    if not value or not isinstance(value, str):
        return _fail("CVV is required")
    if not CVV_RE.match(value):
        return _fail("CVV must contain 3-4 digits")
    return OK


def validate_form(data, rules):
    """Run ``rules[field](value)`` for every field that has a rule.

    Returns ``(valid, errors)`` where ``errors`` maps field -> message.
    """
    errors = {}
    for field, value in data.items():
        rule = rules.get(field)
        if rule is None:
            continue
        result = rule(value)
        if not result.valid:
            errors[field] = result.message
    return not errors, errors
