"""Pydantic models for the fragment store and reconciler.

Defines the data contracts shared across the fragment modules:

- ``Section``: One ``## ``-delimited slice of a document.
- ``FragmentMeta``: Manifest entry for a stored fragment.
- ``Manifest``: Ordered index of all stored fragments.
- ``RenamedFragment``: A fragment whose header changed but content survived.
- ``ReconcileResult``: Classification of a document against the store.
- ``FragmentWrite`` / ``ReconcilePlan``: The side effects a reconcile
  will perform, computed before anything touches disk.

Value models are frozen.  ``Manifest`` is mutable so a plan can build an
updated copy entry by entry.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Section(BaseModel):
    """A section of a markdown document.

    Attributes:
        header: Header text after the ``## `` marker; ``""`` for the preamble.
        content: Full section text, including its own header line.
    """

    header: str = ""
    content: str

    model_config = {"frozen": True}


class FragmentMeta(BaseModel):
    """Metadata about a single stored fragment.

    Attributes:
        header: Header the fragment was last stored under.
        content_hash: 16-hex-char digest of the stored content.
    """

    header: str = ""
    content_hash: str

    model_config = {"frozen": True}


class Manifest(BaseModel):
    """Tracks all fragments and their order.

    Attributes:
        fragments: Fragment name -> metadata, in insertion order.
        order: Fragment names in document order.
    """

    fragments: dict[str, FragmentMeta] = Field(default_factory=dict)
    order: list[str] = Field(default_factory=list)

    def ordered_names(self) -> list[str]:
        """Names in ``order`` first, then any remaining manifest entries."""
        names = [n for n in self.order if n in self.fragments]
        seen = set(names)
        names.extend(n for n in self.fragments if n not in seen)
        return names


class RenamedFragment(BaseModel):
    """A fragment matched to a section with a different header."""

    old_name: str
    new_header: str

    model_config = {"frozen": True}


class ReconcileResult(BaseModel):
    """What changed between the stored fragments and the current document.

    The four categories never share a fragment or a section.

    Attributes:
        updated: Fragment names whose content changed under the same header.
        new: Sections that match no stored fragment.
        deleted: Fragment names absent from the current document.
        renamed: Fragments matched to a re-headed section by similarity.
    """

    updated: list[str] = Field(default_factory=list)
    new: list[Section] = Field(default_factory=list)
    deleted: list[str] = Field(default_factory=list)
    renamed: list[RenamedFragment] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def is_empty(self) -> bool:
        """True when the document matches the store exactly."""
        return not (self.updated or self.new or self.deleted or self.renamed)


class FragmentWrite(BaseModel):
    """A fragment file write scheduled by a reconcile plan."""

    name: str
    header: str
    content: str

    model_config = {"frozen": True}


class ReconcilePlan(BaseModel):
    """Pure output of reconcile classification.

    Attributes:
        result: The classification returned to the caller.
        writes: Fragment writes to perform, in pass order.
        manifest: Manifest to persist after the writes.
    """

    result: ReconcileResult
    writes: list[FragmentWrite] = Field(default_factory=list)
    manifest: Manifest
