"""Profile persistence in the sync directory.

Layout::

    <sync_dir>/profiles/<name>.yaml     one file per profile
    <sync_dir>/active-profile           name of the active profile, one line

Which profile is active is a single stored name; merging is done by the
caller once a profile has been selected.
"""

from __future__ import annotations

import logging
from pathlib import Path

from claude_sync.errors import ProfileNotFoundError
from claude_sync.file_handler import read_text, write_file
from claude_sync.validators import validate_profile_name

from .models import Profile, marshal_profile, parse_profile

logger = logging.getLogger(__name__)

PROFILES_SUBDIR = "profiles"
ACTIVE_PROFILE_FILE = "active-profile"
PROFILE_SUFFIX = ".yaml"


class ProfileStore:
    """List, read, write and delete profiles, and track the active one.

    Args:
        sync_dir: Root of the synced configuration mirror.
    """

    def __init__(self, sync_dir: Path) -> None:
        self.sync_dir = sync_dir

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    @property
    def profiles_dir(self) -> Path:
        return self.sync_dir / PROFILES_SUBDIR

    @property
    def active_profile_path(self) -> Path:
        return self.sync_dir / ACTIVE_PROFILE_FILE

    def profile_path(self, name: str) -> Path:
        ok, reason = validate_profile_name(name)
        if not ok:
            raise ValueError(reason)
        return self.profiles_dir / f"{name}{PROFILE_SUFFIX}"

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------

    def list_profiles(self) -> list[str]:
        """Sorted profile names; empty if the profiles directory is absent."""
        if not self.profiles_dir.is_dir():
            return []
        return sorted(
            p.name[: -len(PROFILE_SUFFIX)]
            for p in self.profiles_dir.iterdir()
            if p.is_file() and p.name.endswith(PROFILE_SUFFIX)
        )

    def read_profile(self, name: str) -> Profile:
        """Read and parse profile *name*.

        Raises:
            ProfileNotFoundError: If the profile file does not exist.
            MalformedProfileError: If the file does not parse.
        """
        path = self.profile_path(name)
        if not path.is_file():
            raise ProfileNotFoundError(name, str(path))
        return parse_profile(read_text(path))

    def write_profile(self, name: str, profile: Profile) -> Path:
        """Write *profile* under *name*, creating the profiles directory."""
        path = self.profile_path(name)
        write_file(path, marshal_profile(profile))
        logger.info("Wrote profile %s", name)
        return path

    def delete_profile(self, name: str) -> None:
        """Delete profile *name*; clears the active marker if it pointed here.

        Raises:
            ProfileNotFoundError: If the profile file does not exist.
        """
        path = self.profile_path(name)
        if not path.is_file():
            raise ProfileNotFoundError(name, str(path))
        path.unlink()
        if self.read_active_profile() == name:
            self.clear_active_profile()
        logger.info("Deleted profile %s", name)

    # ------------------------------------------------------------------
    # Active profile
    # ------------------------------------------------------------------

    def read_active_profile(self) -> str | None:
        """Return the active profile name, or ``None`` if none is set."""
        path = self.active_profile_path
        if not path.is_file():
            return None
        name = read_text(path).strip()
        return name or None

    def write_active_profile(self, name: str) -> None:
        """Mark *name* active.

        Raises:
            ProfileNotFoundError: If no such profile exists.
        """
        if not self.profile_path(name).is_file():
            raise ProfileNotFoundError(name, str(self.profile_path(name)))
        write_file(self.active_profile_path, name + "\n")
        logger.info("Activated profile %s", name)

    def clear_active_profile(self) -> None:
        """Remove the active marker; no-op if none is set."""
        self.active_profile_path.unlink(missing_ok=True)

    def load_active_profile(self) -> tuple[str, Profile] | None:
        """Return ``(name, profile)`` for the active profile, if any.

        Raises:
            ProfileNotFoundError: If the marker names a profile that no
                longer exists.
        """
        name = self.read_active_profile()
        if name is None:
            return None
        return name, self.read_profile(name)
