"""CLAUDE.md fragment storage and reconciliation.

Splits a markdown preferences document into ``## `` sections, stores each
section as its own fragment file, and re-synchronises the fragments after
the document is edited.

Modules:

- ``sections``   -- ``split`` / ``assemble``: document <-> ordered sections.
- ``store``      -- ``FragmentStore``: fragment files plus ``manifest.yaml``.
- ``similarity`` -- word-set Jaccard similarity for rename detection.
- ``reconciler`` -- ``Reconciler``: three-pass classification
  (updated / renamed / new / deleted).
- ``models``     -- ``Section``, ``Manifest``, ``ReconcileResult`` and friends.
- ``reporter``   -- human-readable and JSON result formatting.

Usage example
-------------
::

    from pathlib import Path
    from claude_sync.fragments import FragmentStore, Reconciler

    store = FragmentStore(Path("~/.claude-sync/claude-md").expanduser())
    store.import_document(Path("~/.claude/CLAUDE.md").expanduser().read_text())

    # ... later, after the user edits CLAUDE.md ...
    result = Reconciler(store).reconcile(edited_text)
    for section in result.new:
        store.add_section(section)
"""

from .models import (
    FragmentMeta,
    FragmentWrite,
    Manifest,
    ReconcilePlan,
    ReconcileResult,
    RenamedFragment,
    Section,
)
from .reconciler import Reconciler, apply_plan, plan_reconcile
from .reporter import format_reconcile_result, result_to_json
from .sections import assemble, header_of, split
from .similarity import RENAME_THRESHOLD, similarity
from .store import FragmentStore, content_hash, header_to_fragment_name

__all__ = [
    "FragmentMeta",
    "FragmentStore",
    "FragmentWrite",
    "Manifest",
    "RENAME_THRESHOLD",
    "ReconcilePlan",
    "ReconcileResult",
    "Reconciler",
    "RenamedFragment",
    "Section",
    "apply_plan",
    "assemble",
    "content_hash",
    "format_reconcile_result",
    "header_of",
    "header_to_fragment_name",
    "plan_reconcile",
    "result_to_json",
    "similarity",
    "split",
]
