"""
adr-keeper Validators

Input validation for the values the CLI collects.
"""

from typing import Tuple

from adr_keeper.exceptions import ValidationError


STATUS_CHOICES = ["Proposed", "Accepted", "Rejected", "Deprecated", "Superseded"]


def validate_number(number: str) -> Tuple[bool, str]:
    """Validate an ADR sequence number.

    Args:
        number: The number as typed, e.g. "001" or "7"

    Returns:
        Tuple of (is_valid, message)
    """
    if not number or not number.strip():
        return False, "ADR number is required"

    number = number.strip()
    if not number.isdigit():
        return False, "ADR number must contain digits only (e.g., 001)"

    if int(number) == 0:
        return False, "ADR numbers start at 1"

    return True, "Valid ADR number"


def validate_status(status: str) -> Tuple[bool, str]:
    """Validate a status label.

    Any non-empty single-line text is accepted; the menu values are only
    suggestions.
    """
    if not status or not status.strip():
        return False, "Status is required"

    if "\n" in status or "\r" in status:
        return False, "Status must fit on one line"

    if status.strip() not in STATUS_CHOICES:
        return True, f"Custom status '{status.strip()}'"

    return True, "Valid status"


def validate_title(title: str) -> Tuple[bool, str]:
    """Validate a record title."""
    if not title or not title.strip():
        return False, "Title is required"

    if "/" in title or "\\" in title:
        return False, "Title cannot contain path separators"

    if "\n" in title or "\r" in title:
        return False, "Title must fit on one line"

    return True, "Valid title"


def require_valid(field: str, value: str, expected_format: str = "") -> str:
    """Run the validator for a field and raise on failure.

    Returns:
        The value, stripped

    Raises:
        ValidationError: If the value is invalid
    """
    validators = {
        "number": validate_number,
        "status": validate_status,
        "title": validate_title,
    }
    valid, message = validators[field](value)
    if not valid:
        raise ValidationError(message, field=field, expected_format=expected_format or None)
    return value.strip()
