"""Field checks shared by the invite form, direct edits and guest invitations."""

from src.errors import ValidationError
from src.guests.dtos import INVITABLE_ROLES, INVITABLE_SIDES, GuestRole, Side

MIN_FULL_NAME_LENGTH = 3


def clean_full_name(full_name: str | None) -> str:
    full_name = (full_name or "").strip()
    if len(full_name) < MIN_FULL_NAME_LENGTH:
        raise ValidationError(f"Full name must be at least {MIN_FULL_NAME_LENGTH} characters")
    return full_name


def parse_side(value: Side | str, allowed=INVITABLE_SIDES) -> Side:
    try:
        side = Side(value)
    except ValueError:
        raise ValidationError(f"Invalid side '{value}'") from None
    if side not in allowed:
        raise ValidationError(f"Side must be one of: {', '.join(sorted(s.value for s in allowed))}")
    return side


def parse_role(value: GuestRole | str, allowed=INVITABLE_ROLES) -> GuestRole:
    try:
        role = GuestRole(value)
    except ValueError:
        raise ValidationError(f"Invalid role '{value}'") from None
    if role not in allowed:
        raise ValidationError(f"Role '{role.value}' cannot be assigned to an invited guest")
    return role


def clean_email(email: str | None) -> str | None:
    email = (email or "").strip().lower()
    return email or None
