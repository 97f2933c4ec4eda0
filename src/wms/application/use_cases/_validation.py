"""Input checks shared by use cases."""

from typing import Optional

from wms.domain.shared import EntityId


def validate_entity_id(value: Optional[str], label: str) -> list[str]:
    """Return ``"<label> is required"`` / ``"Invalid <label> format"`` errors.

    ``label`` is the human name, e.g. ``"User ID"``.
    """
    errors: list[str] = []
    if value is None or not value.strip():
        errors.append(f"{label} is required")
    if value and not EntityId.is_valid(value):
        errors.append(f"Invalid {label[0].lower()}{label[1:]} format")
    return errors
