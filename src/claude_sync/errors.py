"""Error taxonomy for claude_sync.

Two families cover everything the core raises on purpose:

- ``NotFoundError`` -- a named fragment or profile does not exist.  Also a
  ``FileNotFoundError`` so callers that only care about missing files can
  catch the builtin.
- ``MalformedInputError`` -- a stored manifest, profile or config file
  failed to parse structurally.  Also a ``ValueError``.

A missing manifest is *not* an error (the store treats it as empty).
"""

from __future__ import annotations


class ClaudeSyncError(Exception):
    """Base class for all claude_sync errors."""


# ---------------------------------------------------------------------------
# Not found
# ---------------------------------------------------------------------------


class NotFoundError(ClaudeSyncError, FileNotFoundError):
    """A named stored entity does not exist."""

    kind = "entity"

    def __init__(self, name: str, path: str | None = None) -> None:
        self.name = name
        self.path = path
        message = f"{self.kind.capitalize()} '{name}' not found"
        if path:
            message += f" ({path})"
        super().__init__(message)


class FragmentNotFoundError(NotFoundError):
    kind = "fragment"


class ProfileNotFoundError(NotFoundError):
    kind = "profile"


# ---------------------------------------------------------------------------
# Malformed input
# ---------------------------------------------------------------------------


class MalformedInputError(ClaudeSyncError, ValueError):
    """A stored file exists but could not be parsed."""


class MalformedManifestError(MalformedInputError):
    pass


class MalformedProfileError(MalformedInputError):
    pass


class MalformedConfigError(MalformedInputError):
    pass
