from datetime import date
from decimal import Decimal, InvalidOperation

from turftrack.errors import AppError

MAX_HOURS = Decimal("999999999.9")
MAX_COST = Decimal("99999999.99")
MAX_PRICE = Decimal("9999999999.99")


def require_text(payload, key, label=None, max_length=None):
    value = (payload.get(key) or "")
    value = str(value).strip()
    label = label or key.replace("_", " ").capitalize()
    if not value:
        raise AppError(f"{label} is required.", 400, field=key)
    if max_length and len(value) > max_length:
        raise AppError(f"{label} must be at most {max_length} characters.", 400, field=key)
    return value


def optional_text(payload, key):
    value = payload.get(key)
    if value is None:
        return None
    return str(value).strip() or None


def json_object(payload):
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise AppError("A JSON object body is required.", 400)
    return payload


def parse_decimal(value, key, label, minimum=None, maximum=None, positive=False, required=True, default=None):
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise AppError(f"{label} is required.", 400, field=key)
        return default
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise AppError(f"{label} must be a number.", 400, field=key) from exc
    if not number.is_finite():
        raise AppError(f"{label} must be a number.", 400, field=key)
    if positive and number <= 0:
        raise AppError(f"{label} must be a positive number.", 400, field=key)
    if minimum is not None and number < minimum:
        raise AppError(f"{label} must be at least {minimum}.", 400, field=key)
    if maximum is not None and number > maximum:
        raise AppError(f"{label} must be at most {maximum}.", 400, field=key)
    return number


def parse_int(value, key, label, minimum=None, maximum=None):
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise AppError(f"{label} must be a whole number.", 400, field=key) from exc
    if minimum is not None and number < minimum:
        raise AppError(f"{label} must be at least {minimum}.", 400, field=key)
    if maximum is not None and number > maximum:
        raise AppError(f"{label} must be at most {maximum}.", 400, field=key)
    return number


def parse_date(value, key, label):
    if value is None or (isinstance(value, str) and not value.strip()):
        return date.today()
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError as exc:
        raise AppError(f"{label} must be a date in YYYY-MM-DD format.", 400, field=key) from exc


def parse_choice(value, key, label, choices, default=None):
    raw = default if value is None or value == "" else value
    if not isinstance(raw, str):
        raise AppError(f"Invalid {label}.", 400, field=key)
    choice = raw.strip().lower()
    if choice not in choices:
        raise AppError(f"Invalid {label}.", 400, field=key)
    return choice
