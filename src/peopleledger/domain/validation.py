"""Field rules shared by the domain services."""

from typing import Optional

from peopleledger.domain.errors import ValidationError, field_required, field_too_long

NAME_MAX_LENGTH = 50
ID_NUMBER_MAX_LENGTH = 50
ACCOUNT_NUMBER_MAX_LENGTH = 50
USERNAME_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 100
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 100


def clean_text(value: Optional[str]) -> Optional[str]:
    """Strip surrounding whitespace, mapping blank strings to None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def check_text(
    value: Optional[str], field_name: str, max_length: int, required: bool = False
) -> list[ValidationError]:
    """Return the rule violations for a text field (empty list if valid)."""
    if value is None:
        return [ValidationError(field_required(field_name))] if required else []
    if len(value) > max_length:
        return [ValidationError(field_too_long(field_name, max_length))]
    return []
