# database/validation.py
"""
Small helpers for turning submitted form values into column values.
"""
import datetime
import math

def parse_optional_float(value, field_name):
    """
    Empty strings and None become None (stored as NULL); anything else must
    parse as a finite float.
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if value == '':
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"'{field_name}' must be a number, got {value!r}.")
    if not math.isfinite(number):
        raise ValueError(f"'{field_name}' must be a finite number, got {value!r}.")
    return number

def parse_concentration(value, field_name):
    """
    A metal concentration in mg/L. Blank and zero mean 'not measured' and
    give None; negative values are rejected.
    """
    concentration = parse_optional_float(value, field_name)
    if concentration is None or concentration == 0:
        return None
    if concentration < 0:
        raise ValueError(f"'{field_name}' cannot be negative.")
    return concentration

def parse_iso_date(value, field_name):
    """Returns the value as a 'YYYY-MM-DD' string, or raises ValueError."""
    text = str(value).strip()
    try:
        return datetime.date.fromisoformat(text).isoformat()
    except ValueError:
        raise ValueError(f"'{field_name}' must be a date in YYYY-MM-DD format, got {value!r}.")

def require_fields(data, *fields):
    """Raises ValueError naming every required field that is missing or blank."""
    missing = [f for f in fields if not str(data.get(f) or '').strip()]
    if missing:
        raise ValueError(f"Missing required field(s): {', '.join(missing)}.")
