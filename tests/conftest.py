"""Shared pytest fixtures for claude-sync tests."""

import textwrap

import pytest
from dotenv import load_dotenv

from claude_sync.config import Config
from claude_sync.fragments import FragmentStore

load_dotenv()


SAMPLE_DOCUMENT = textwrap.dedent("""\
    # Preferences

    ## Coding Style
    Prefer small functions.
    Keep modules focused.

    ## Git Conventions
    Use conventional commits for all changes in this project repository always

    ## Testing
    Write tests first.
    ### Fixtures
    Share them in conftest.""")


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep developer env vars from leaking into config resolution."""
    for var in (
        "CLAUDE_SYNC_DIR",
        "CLAUDE_DIR",
        "CLAUDE_SYNC_SIMILARITY_THRESHOLD",
        "CLAUDE_SYNC_DEBUG",
        "CLAUDE_SYNC_CONFIG",
        "XDG_CONFIG_HOME",
        "LOG_LEVEL",
        "LOG_FILE",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def sample_document():
    """A CLAUDE.md with a preamble and three ``## `` sections."""
    return SAMPLE_DOCUMENT


@pytest.fixture
def fragment_store(tmp_path):
    """An empty FragmentStore rooted in a temp directory."""
    return FragmentStore(tmp_path / "claude-md")


@pytest.fixture
def imported_store(fragment_store, sample_document):
    """A FragmentStore with ``sample_document`` already imported."""
    fragment_store.import_document(sample_document)
    return fragment_store


@pytest.fixture
def sync_config(tmp_path):
    """A Config pointing at temp sync and host directories."""
    sync_dir = tmp_path / "sync"
    claude_dir = tmp_path / "claude"
    sync_dir.mkdir()
    claude_dir.mkdir()
    return Config(sync_dir=sync_dir, claude_dir=claude_dir)
