"""Tests for ProfileStore: profile files and the active-profile marker."""

from __future__ import annotations

from pathlib import Path

import pytest

from claude_sync.errors import MalformedProfileError, ProfileNotFoundError
from claude_sync.profiles.models import Profile, ProfilePlugins
from claude_sync.profiles.store import ProfileStore


@pytest.fixture
def store(tmp_path: Path) -> ProfileStore:
    return ProfileStore(tmp_path)


@pytest.fixture
def work_profile() -> Profile:
    return Profile(
        plugins=ProfilePlugins(add=["jira@work"]), settings={"model": "opus"}
    )


class TestProfiles:
    """Tests for list/read/write/delete."""

    def test_list_missing_dir(self, store: ProfileStore):
        assert store.list_profiles() == []

    def test_write_then_read(self, store: ProfileStore, work_profile):
        path = store.write_profile("work", work_profile)

        assert path == store.profiles_dir / "work.yaml"
        assert store.read_profile("work") == work_profile

    def test_list_sorted_yaml_only(self, store: ProfileStore, work_profile):
        store.write_profile("work", work_profile)
        store.write_profile("home", Profile(settings={"theme": "light"}))
        (store.profiles_dir / "notes.txt").write_text("ignore me")

        assert store.list_profiles() == ["home", "work"]

    def test_read_missing_raises(self, store: ProfileStore):
        with pytest.raises(ProfileNotFoundError, match="Profile 'ghost' not found"):
            store.read_profile("ghost")

    def test_read_malformed_raises(self, store: ProfileStore):
        store.profiles_dir.mkdir(parents=True)
        (store.profiles_dir / "bad.yaml").write_text("- not\n- a mapping\n")
        with pytest.raises(MalformedProfileError):
            store.read_profile("bad")

    def test_empty_profile_file_is_empty_profile(self, store: ProfileStore):
        store.write_profile("blank", Profile())
        assert (store.profiles_dir / "blank.yaml").read_text() == ""
        assert store.read_profile("blank").is_empty()

    def test_delete(self, store: ProfileStore, work_profile):
        store.write_profile("work", work_profile)
        store.delete_profile("work")
        assert store.list_profiles() == []

    def test_delete_missing_raises(self, store: ProfileStore):
        with pytest.raises(ProfileNotFoundError):
            store.delete_profile("ghost")

    @pytest.mark.parametrize("bad", ["", "../x", "a/b", "-dash", "sp ace"])
    def test_invalid_names_rejected(self, store: ProfileStore, bad):
        with pytest.raises(ValueError, match="Profile name"):
            store.profile_path(bad)


class TestActiveProfile:
    """Tests for the active-profile marker."""

    def test_none_when_unset(self, store: ProfileStore):
        assert store.read_active_profile() is None
        assert store.load_active_profile() is None

    def test_activate(self, store: ProfileStore, work_profile):
        store.write_profile("work", work_profile)
        store.write_active_profile("work")

        assert store.active_profile_path.read_text() == "work\n"
        assert store.read_active_profile() == "work"
        assert store.load_active_profile() == ("work", work_profile)

    def test_activate_missing_raises(self, store: ProfileStore):
        with pytest.raises(ProfileNotFoundError):
            store.write_active_profile("ghost")
        assert not store.active_profile_path.exists()

    def test_blank_marker_is_none(self, store: ProfileStore):
        store.active_profile_path.write_text("  \n")
        assert store.read_active_profile() is None

    def test_clear(self, store: ProfileStore, work_profile):
        store.write_profile("work", work_profile)
        store.write_active_profile("work")
        store.clear_active_profile()
        assert store.read_active_profile() is None

    def test_clear_when_unset_is_noop(self, store: ProfileStore):
        store.clear_active_profile()
        assert store.read_active_profile() is None

    def test_delete_active_clears_marker(self, store: ProfileStore, work_profile):
        store.write_profile("work", work_profile)
        store.write_active_profile("work")

        store.delete_profile("work")

        assert store.read_active_profile() is None

    def test_delete_other_keeps_marker(self, store: ProfileStore, work_profile):
        store.write_profile("work", work_profile)
        store.write_profile("home", Profile(settings={"theme": "light"}))
        store.write_active_profile("work")

        store.delete_profile("home")

        assert store.read_active_profile() == "work"

    def test_dangling_marker_raises_on_load(self, store: ProfileStore):
        store.active_profile_path.write_text("gone\n")
        with pytest.raises(ProfileNotFoundError):
            store.load_active_profile()
