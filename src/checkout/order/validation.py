"""Checkout input validation.

Pure functions over raw request values. Each failure raises a field-scoped
``ValidationError`` (or a subclass) whose payload names the offending field,
so the first problem found can be reported to the buyer verbatim.
"""

import re
from datetime import UTC, date, datetime

from protean.exceptions import ValidationError

from checkout.shared.exceptions import ExpiredError, FormatError

_CARD_PATTERN = re.compile(r"^\d{16}$")
_EXPIRY_PATTERN = re.compile(r"^(\d{2})/(\d{2})$")
_CODE_PATTERN = re.compile(r"^\d{3}$")
_EMAIL_PATTERN = re.compile(r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$")
_PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{0,15}$")
_PHONE_SEPARATORS = re.compile(r"[\s\-.()]")
_ZIP_PATTERN = re.compile(r"^\d{5}(-\d{4})?$")

# Form order; the first failing field is the one reported
CUSTOMER_FIELDS = (
    ("full_name", "Full name"),
    ("email", "Email"),
    ("phone", "Phone number"),
    ("address", "Address"),
    ("city", "City"),
    ("state", "State"),
    ("zip_code", "Zip code"),
)


def strip_card_number(number: str | None) -> str:
    return re.sub(r"\s", "", number or "")


def validate_card(number: str | None) -> bool:
    """True iff the number is exactly 16 decimal digits once whitespace is removed."""
    return bool(_CARD_PATTERN.match(strip_card_number(number)))


def validate_expiry(text: str | None, today: date | None = None) -> None:
    """Check an ``MM/YY`` expiry date against the current year-month.

    A card expiring in the current month is treated as expired: the
    year-month must be strictly after today's.
    """
    match = _EXPIRY_PATTERN.match((text or "").strip())
    if match is None:
        raise FormatError({"expiry_date": ["Expiry date must be in MM/YY format"]})

    month = int(match.group(1))
    year = 2000 + int(match.group(2))
    if not 1 <= month <= 12:
        raise FormatError({"expiry_date": ["Month must be between 01 and 12"]})

    today = today or datetime.now(UTC).date()
    if (year, month) <= (today.year, today.month):
        raise ExpiredError({"expiry_date": ["Expiry date must be in the future"]})


def validate_simulation_code(code: str | None) -> None:
    if not _CODE_PATTERN.match(code or ""):
        raise FormatError({"cvv": ["CVV must be 3 digits"]})


def validate_payment_info(payment_info: dict, today: date | None = None) -> None:
    if not validate_card(payment_info.get("card_number")):
        raise FormatError({"card_number": ["Card number must be exactly 16 digits"]})
    validate_expiry(payment_info.get("expiry_date"), today=today)
    validate_simulation_code(payment_info.get("cvv"))


def normalize_phone(phone: str) -> str:
    return _PHONE_SEPARATORS.sub("", phone)


def validate_customer_info(customer_info: dict) -> dict:
    """Validate contact fields and return a cleaned copy.

    Values are trimmed and the email is lower-cased. Raises on the first
    missing or malformed field.
    """
    cleaned = {}
    for field, label in CUSTOMER_FIELDS:
        value = customer_info.get(field)
        value = value.strip() if isinstance(value, str) else value
        if not value:
            raise ValidationError({field: [f"{label} is required"]})
        cleaned[field] = value

    if not _EMAIL_PATTERN.match(cleaned["email"]):
        raise ValidationError({"email": ["Please enter a valid email"]})
    cleaned["email"] = cleaned["email"].lower()

    if not _PHONE_PATTERN.match(normalize_phone(cleaned["phone"])):
        raise ValidationError({"phone": ["Please enter a valid phone number"]})

    if not _ZIP_PATTERN.match(cleaned["zip_code"]):
        raise ValidationError({"zip_code": ["Please enter a valid zip code"]})

    return cleaned


def validate_items(items: list[dict]) -> None:
    if not items:
        raise ValidationError({"items": ["Order must contain at least one item"]})
    for item in items:
        if not item.get("product_id"):
            raise ValidationError({"items": ["Each item must reference a product"]})
        quantity = item.get("quantity")
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be a positive whole number"]})


def mask_card_number(number: str) -> str:
    """Replace every digit except the last four with ``*``."""
    digits = strip_card_number(number)
    return re.sub(r"\d(?=\d{4})", "*", digits)
