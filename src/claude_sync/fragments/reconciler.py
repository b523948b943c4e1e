"""Reconcile a freshly read document against the stored fragments.

Classification runs in three passes, in this order:

1. **Exact header** -- a section whose fragment name is in the manifest is
   matched to that fragment.  Failing that, a fragment whose stored header
   equals the section header is used, so a renamed fragment is found again
   under its original name.  A changed content hash makes it ``updated``.
2. **Similarity rename** -- unmatched sections and fragments are paired by
   word-set similarity (strictly above the threshold).  Candidate pairs are
   sorted by ``(similarity desc, fragment name asc, section index asc)`` and
   assigned greedily, each side at most once.  A pairing is ``renamed``; the
   fragment keeps its original name and takes the section's header and
   content.
3. **New / deleted** -- leftover sections are ``new`` (not written here, the
   caller chooses their names) and leftover fragments are ``deleted`` (a
   classification only, no file is removed).

``plan_reconcile()`` is pure.  ``apply_plan()`` performs the writes and then
persists the manifest.  ``Reconciler.reconcile()`` composes the two.

There is no rollback: if a fragment write fails, earlier writes stay on disk
and the manifest is left as it was.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from .models import (
    FragmentMeta,
    FragmentWrite,
    Manifest,
    ReconcilePlan,
    ReconcileResult,
    RenamedFragment,
    Section,
)
from .sections import split
from .similarity import RENAME_THRESHOLD, similarity
from .store import FragmentStore, content_hash, header_to_fragment_name

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pure planning
# ---------------------------------------------------------------------------


def plan_reconcile(
    sections: list[Section],
    manifest: Manifest,
    stored_contents: Mapping[str, str],
    threshold: float = RENAME_THRESHOLD,
) -> ReconcilePlan:
    """Classify *sections* against *manifest* without touching disk.

    Args:
        sections: Sections of the current document, in order.
        manifest: The stored manifest.  Not mutated.
        stored_contents: Stored content for fragments that may take part in
            rename detection.  Fragments missing here are never paired and
            fall through to ``deleted``.
        threshold: Similarity a pairing must exceed to count as a rename.

    Returns:
        A ``ReconcilePlan`` with the result, the fragment writes, and the
        updated manifest.
    """
    fragments = dict(manifest.fragments)
    writes: list[FragmentWrite] = []
    updated: list[str] = []
    renamed: list[RenamedFragment] = []

    # section index -> fragment name, for every matched section
    matched: dict[int, str] = {}
    matched_fragments: set[str] = set()

    # A renamed fragment keeps its name but stores the new header.
    by_header: dict[str, str] = {}
    for fragment_name in manifest.ordered_names():
        meta = manifest.fragments[fragment_name]
        by_header.setdefault(meta.header, fragment_name)

    # Pass 1: exact header match.
    for i, section in enumerate(sections):
        name = header_to_fragment_name(section.header)
        if name not in fragments or name in matched_fragments:
            name = by_header.get(section.header, "")
        meta = fragments.get(name)
        if meta is None or name in matched_fragments:
            continue
        matched[i] = name
        matched_fragments.add(name)

        new_hash = content_hash(section.content)
        if new_hash != meta.content_hash:
            logger.debug(
                "Fragment %s updated (%s -> %s)",
                name,
                meta.content_hash,
                new_hash,
            )
            updated.append(name)
            writes.append(
                FragmentWrite(
                    name=name, header=section.header, content=section.content
                )
            )
            fragments[name] = FragmentMeta(
                header=section.header, content_hash=new_hash
            )

    unmatched_sections = [i for i in range(len(sections)) if i not in matched]
    unmatched_fragments = [
        n for n in manifest.ordered_names() if n not in matched_fragments
    ]

    # Pass 2: rename detection via content similarity.
    candidates: list[tuple[float, str, int]] = []
    for i in unmatched_sections:
        for name in unmatched_fragments:
            stored = stored_contents.get(name)
            if stored is None:
                continue
            score = similarity(sections[i].content, stored)
            if score > threshold:
                candidates.append((score, name, i))

    candidates.sort(key=lambda c: (-c[0], c[1], c[2]))
    for score, name, i in candidates:
        if i in matched or name in matched_fragments:
            continue
        section = sections[i]
        logger.debug(
            "Fragment %s renamed to header '%s' (similarity %.3f)",
            name,
            section.header,
            score,
        )
        matched[i] = name
        matched_fragments.add(name)
        renamed.append(
            RenamedFragment(old_name=name, new_header=section.header)
        )
        writes.append(
            FragmentWrite(
                name=name, header=section.header, content=section.content
            )
        )
        fragments[name] = FragmentMeta(
            header=section.header, content_hash=content_hash(section.content)
        )

    # Pass 3: new and deleted.
    new = [sections[i] for i in unmatched_sections if i not in matched]
    deleted = [n for n in unmatched_fragments if n not in matched_fragments]

    # Matched fragments follow the document; unmatched ones keep their
    # relative order at the end.
    order = [matched[i] for i in sorted(matched)]
    order.extend(deleted)

    result = ReconcileResult(
        updated=updated, new=new, deleted=deleted, renamed=renamed
    )
    return ReconcilePlan(
        result=result,
        writes=writes,
        manifest=Manifest(fragments=fragments, order=order),
    )


# ---------------------------------------------------------------------------
# Side effects
# ---------------------------------------------------------------------------


def apply_plan(store: FragmentStore, plan: ReconcilePlan) -> None:
    """Write every planned fragment, then persist the plan's manifest."""
    for write in plan.writes:
        store.write_fragment(write.name, write.content)
        logger.info("Wrote fragment %s", write.name)
    store.write_manifest(plan.manifest)


class Reconciler:
    """Reconcile documents against a ``FragmentStore``.

    Args:
        store: The fragment store to read from and write to.
        threshold: Similarity a pairing must exceed to count as a rename.
    """

    def __init__(
        self, store: FragmentStore, threshold: float = RENAME_THRESHOLD
    ) -> None:
        self.store = store
        self.threshold = threshold

    def plan(self, current_document: str) -> ReconcilePlan:
        """Load stored state and classify *current_document* (no writes)."""
        manifest = self.store.read_manifest()
        sections = split(current_document)

        stored_contents: dict[str, str] = {}
        for name in manifest.ordered_names():
            if not self.store.fragment_exists(name):
                logger.warning(
                    "Fragment %s is in the manifest but missing on disk", name
                )
                continue
            stored_contents[name] = self.store.read_fragment(name)

        return plan_reconcile(
            sections, manifest, stored_contents, self.threshold
        )

    def reconcile(self, current_document: str) -> ReconcileResult:
        """Classify *current_document*, update the store, return the result."""
        plan = self.plan(current_document)
        apply_plan(self.store, plan)
        result = plan.result
        logger.info(
            "Reconciled %s: %d updated, %d new, %d deleted, %d renamed",
            self.store.root,
            len(result.updated),
            len(result.new),
            len(result.deleted),
            len(result.renamed),
        )
        return result
