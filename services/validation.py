"""Field-level validation for category input."""

import re
from typing import Dict, Optional
from errors import ValidationError

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500

UPDATABLE_FIELDS = {"name", "description", "parent_id", "icon", "color"}

_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")
_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """Normalize a category name for uniqueness checks.

    "Getting Started!" -> "getting-started". Names without any ASCII letters
    or digits fall back to their case-folded text.
    """
    slug = _SLUG_STRIP.sub("-", name.lower()).strip("-")
    return slug or name.casefold()


def _check_name(name, errors: Dict[str, str]) -> Optional[str]:
    if not isinstance(name, str):
        errors["name"] = "Category name is required"
        return None
    name = name.strip()
    if not name:
        errors["name"] = "Category name is required"
    elif len(name) > NAME_MAX_LENGTH:
        errors["name"] = (
            f"Category name must be at most {NAME_MAX_LENGTH} characters"
        )
    return name


def _check_description(description, errors: Dict[str, str]) -> Optional[str]:
    if description is None:
        return None
    if not isinstance(description, str):
        errors["description"] = "Description must be text"
    elif len(description) > DESCRIPTION_MAX_LENGTH:
        errors["description"] = (
            f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters"
        )
    return description


def _check_parent_id(parent_id, errors: Dict[str, str]) -> None:
    if parent_id is None:
        return
    # bool is an int subclass; True is not a category ID
    if isinstance(parent_id, bool) or not isinstance(parent_id, int):
        errors["parent_id"] = "Invalid parent category ID"


def _check_icon(icon, errors: Dict[str, str]) -> None:
    if icon is None:
        return
    if not isinstance(icon, str) or not icon.strip():
        errors["icon"] = "Icon is required"


def _check_color(color, errors: Dict[str, str]) -> None:
    if color is None:
        return
    if not isinstance(color, str) or not _COLOR_PATTERN.match(color):
        errors["color"] = "Invalid color format (must be hex)"


def validate_create(
    name,
    description=None,
    parent_id=None,
    icon=None,
    color=None,
) -> dict:
    """Validate input for a new category.

    Returns:
        Cleaned fields (name trimmed).

    Raises:
        ValidationError: With one message per offending field.
    """
    errors: Dict[str, str] = {}
    name = _check_name(name, errors)
    description = _check_description(description, errors)
    _check_parent_id(parent_id, errors)
    _check_icon(icon, errors)
    _check_color(color, errors)

    if errors:
        raise ValidationError(errors)

    return {
        "name": name,
        "description": description,
        "parent_id": parent_id,
        "icon": icon,
        "color": color,
    }


def validate_update(fields: dict) -> dict:
    """Validate a partial update.

    Only keys present in fields are checked. A parent_id of None is a valid
    request to move the category to the root. icon/color may not be cleared.

    Returns:
        Cleaned copy of fields.

    Raises:
        ValidationError: For unsupported or malformed fields.
    """
    errors: Dict[str, str] = {}
    cleaned = {}

    for field in sorted(set(fields) - UPDATABLE_FIELDS):
        errors[field] = "Unsupported field"

    if "name" in fields:
        cleaned["name"] = _check_name(fields["name"], errors)
    if "description" in fields:
        cleaned["description"] = _check_description(fields["description"], errors)
    if "parent_id" in fields:
        _check_parent_id(fields["parent_id"], errors)
        cleaned["parent_id"] = fields["parent_id"]
    for field, check in (("icon", _check_icon), ("color", _check_color)):
        if field in fields:
            if fields[field] is None:
                errors[field] = f"{field.capitalize()} cannot be cleared"
            else:
                check(fields[field], errors)
            cleaned[field] = fields[field]

    if errors:
        raise ValidationError(errors)

    return cleaned
