import re
from datetime import date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from ..errors import ValidationError

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
CENTS = Decimal("0.01")
# YYYY-MM-DD with an optional time part, e.g. "2025-06-01T00:00:00.000Z"
ISO_DATE_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})(T\d{2}:\d{2}(:\d{2}(\.\d+)?)?(Z|[+-]\d{2}:?\d{2})?)?$")

# 30 minute steps from opening to last seating
FIRST_SLOT = time(10, 0)
LAST_SLOT = time(21, 0)
SLOT_MINUTES = 30


def format_slot(value: time) -> str:
    """time(19, 0) -> '7:00 PM'"""
    return value.strftime("%I:%M %p").lstrip("0")


def build_time_slots(first=FIRST_SLOT, last=LAST_SLOT, step=SLOT_MINUTES):
    slots = []
    current = datetime.combine(date.today(), first)
    end = datetime.combine(date.today(), last)
    while current <= end:
        slots.append(format_slot(current.time()))
        current += timedelta(minutes=step)
    return slots


TIME_SLOTS = build_time_slots()


def normalize_time_slot(value) -> str:
    """
    Accept a slot label ("7:00 PM", "07:00 pm") or a 24h "HH:MM" string and
    return the canonical label. Anything outside the slot list is rejected.
    """
    if not value or not isinstance(value, str):
        raise ValidationError("Please select a time.")

    raw = value.strip().upper()
    parsed = None
    for fmt in ("%I:%M %p", "%H:%M"):
        try:
            parsed = datetime.strptime(raw, fmt).time()
            break
        except ValueError:
            continue

    if parsed is None or format_slot(parsed) not in TIME_SLOTS:
        raise ValidationError(f"'{value}' is not an available reservation time.")
    return format_slot(parsed)


def parse_date(value, field="date") -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    message = f"Invalid '{field}' format. Use YYYY-MM-DD."
    match = ISO_DATE_RE.match(str(value).strip()) if value is not None else None
    if match is None:
        raise ValidationError(message)
    try:
        return date.fromisoformat(match.group(1))
    except ValueError:
        raise ValidationError(message)


def parse_positive_int(value, field):
    if isinstance(value, bool):
        raise ValidationError(f"'{field}' must be a whole number of at least 1.")
    try:
        number = int(str(value).strip())
    except (ValueError, TypeError):
        raise ValidationError(f"'{field}' must be a whole number of at least 1.")
    if number < 1:
        raise ValidationError(f"'{field}' must be a whole number of at least 1.")
    return number


def parse_money(value, field="price") -> Decimal:
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError(f"'{field}' must be a number.")
    if not amount.is_finite() or amount < 0:
        raise ValidationError(f"'{field}' must be zero or more.")
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def require_text(value, field, min_length=1):
    if value is None or not str(value).strip():
        raise ValidationError(f"'{field}' is required.")
    text = str(value).strip()
    if len(text) < min_length:
        raise ValidationError(f"'{field}' must be at least {min_length} characters.")
    return text


def validate_email(value):
    email = require_text(value, "email").lower()
    if not EMAIL_RE.match(email):
        raise ValidationError("Please enter a valid email address.")
    return email


def validate_contact(name, email, phone):
    """Reservation form rules: name >= 2 chars, valid email, phone >= 10 chars."""
    if not name or len(str(name).strip()) < 2:
        raise ValidationError("Name must be at least 2 characters.")
    if not phone or len(str(phone).strip()) < 10:
        raise ValidationError("Please enter a valid phone number.")
    return str(name).strip(), validate_email(email), str(phone).strip()


def human_date(value: date) -> str:
    """date(2025, 6, 1) -> 'Jun 1, 2025'"""
    return f"{value.strftime('%b')} {value.day}, {value.year}"
