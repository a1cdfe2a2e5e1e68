import re

_DIGITS = re.compile(r"^\d+$")


def normalize_phone(phone) -> str:
    """Coerce a phone number to a digit-only string.

    Numbers posted as JSON integers are accepted. Surrounding whitespace
    is stripped. Raises ValueError if anything but digits remain.
    """
    if phone is None:
        raise ValueError("Phone number is required")
    value = str(phone).strip()
    if not value:
        raise ValueError("Phone number is required")
    if not _DIGITS.match(value):
        raise ValueError("Phone number must be a number")
    return value


__all__ = ["normalize_phone"]
