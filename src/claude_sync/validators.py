"""
Input validation functions for claude_sync.

Fragment and profile names end up as file names inside the sync
directory, so they are checked before any path is built from them.
"""

import re

_PROFILE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


# ---------------------------------------------------------------------------
# Error message formatting helpers
# ---------------------------------------------------------------------------


def format_validation_error(field_name: str, reason: str) -> str:
    """
    Generate consistent error message for validation failures.

    Args:
        field_name: Human-readable field name (e.g., "Fragment name")
        reason: Description of validation failure (e.g., "cannot be empty")

    Returns:
        Formatted error message string
    """
    return f"{field_name} {reason}"


def _validate_file_stem(field_name: str, name: str) -> tuple[bool, str]:
    if not name or not name.strip():
        return (False, format_validation_error(field_name, "cannot be empty"))

    if ".." in name:
        return (
            False,
            format_validation_error(field_name, "cannot contain '..'"),
        )

    if "/" in name or "\\" in name:
        return (
            False,
            format_validation_error(
                field_name, "cannot contain path separators"
            ),
        )

    return (True, "")


def validate_fragment_name(name: str) -> tuple[bool, str]:
    """
    Validate a fragment name.

    Args:
        name: The fragment name to validate

    Returns:
        Tuple of (is_valid, error_message).
        Returns (True, "") if valid, (False, reason) if invalid.

    Validation rules:
        - Cannot be empty or whitespace-only
        - Cannot contain '..' (path traversal protection)
        - Cannot contain '/' or '\\'
    """
    return _validate_file_stem("Fragment name", name)


def validate_profile_name(name: str) -> tuple[bool, str]:
    """
    Validate a profile name.

    Same rules as fragment names, plus the name must start with a letter
    or digit and contain only letters, digits, '_', '.' and '-'.
    """
    ok, reason = _validate_file_stem("Profile name", name)
    if not ok:
        return (ok, reason)

    if not _PROFILE_NAME_PATTERN.match(name):
        return (
            False,
            format_validation_error(
                "Profile name",
                "may only contain letters, digits, '_', '.' and '-'",
            ),
        )

    return (True, "")
