"""Tests for the error taxonomy."""

import pytest

from claude_sync.errors import (
    ClaudeSyncError,
    FragmentNotFoundError,
    MalformedConfigError,
    MalformedInputError,
    MalformedManifestError,
    MalformedProfileError,
    NotFoundError,
    ProfileNotFoundError,
)


class TestNotFoundErrors:
    def test_fragment_message(self):
        err = FragmentNotFoundError("coding-style")
        assert str(err) == "Fragment 'coding-style' not found"
        assert err.name == "coding-style"
        assert err.path is None

    def test_message_includes_path(self):
        err = ProfileNotFoundError("work", "/sync/profiles/work.yaml")
        assert str(err) == (
            "Profile 'work' not found (/sync/profiles/work.yaml)"
        )

    @pytest.mark.parametrize(
        "cls", [FragmentNotFoundError, ProfileNotFoundError]
    )
    def test_is_file_not_found(self, cls):
        with pytest.raises(FileNotFoundError):
            raise cls("x")

    def test_hierarchy(self):
        assert issubclass(FragmentNotFoundError, NotFoundError)
        assert issubclass(NotFoundError, ClaudeSyncError)


class TestMalformedInputErrors:
    @pytest.mark.parametrize(
        "cls",
        [MalformedManifestError, MalformedProfileError, MalformedConfigError],
    )
    def test_is_value_error(self, cls):
        assert issubclass(cls, MalformedInputError)
        with pytest.raises(ValueError, match="bad"):
            raise cls("bad")

    def test_caught_by_base(self):
        with pytest.raises(ClaudeSyncError):
            raise MalformedManifestError("order names unknown fragment")
