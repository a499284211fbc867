"""Module name validation and casing helpers.

All functions here are pure.  Kebab-case is used for directory and file
names, PascalCase for the type names emitted into generated TypeScript.
"""

from __future__ import annotations

import re

MODULE_NAME_PATTERN = re.compile(r"[a-zA-Z][a-zA-Z0-9-]*")

NAME_REQUIRED_MESSAGE = "Module name is required"
NAME_PATTERN_MESSAGE = (
    "Name must start with a letter and contain only letters, numbers and hyphens"
)


def validate_module_name(name: str) -> str | None:
    """Return ``None`` if *name* is acceptable, otherwise the reason it is not."""
    if not name.strip():
        return NAME_REQUIRED_MESSAGE
    if not MODULE_NAME_PATTERN.fullmatch(name):
        return NAME_PATTERN_MESSAGE
    return None


def is_valid_module_name(name: str) -> bool:
    return validate_module_name(name) is None


def to_kebab_case(value: str) -> str:
    """Convert ``userProfile`` or ``UserProfile`` to ``user-profile``.

    A hyphen is inserted between a lowercase letter and a following uppercase
    letter, then the whole string is lowercased.  Already-kebab input is
    returned unchanged.
    """
    return re.sub(r"([a-z])([A-Z])", r"\1-\2", value).lower()


def to_camel_case(value: str) -> str:
    """Convert ``user-profile`` to ``userProfile``.

    Only hyphens followed by a lowercase letter are folded; anything else is
    left in place.
    """
    return re.sub(r"-([a-z])", lambda m: m.group(1).upper(), value)


def capitalize(value: str) -> str:
    """Uppercase the first character and leave the rest untouched."""
    return value[:1].upper() + value[1:]


def to_pascal_case(value: str) -> str:
    """Convert ``user-profile`` to ``UserProfile``."""
    return capitalize(to_camel_case(value))
