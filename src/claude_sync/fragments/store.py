"""Fragment store: one file per document section plus an ordered manifest.

Layout of the store directory (typically ``<sync_dir>/claude-md/``)::

    manifest.yaml        {fragments: {name: {header, content_hash}}, order: [...]}
    <name>.md            raw section content, including its header line

Key design choices:

* **Deterministic names** -- ``header_to_fragment_name()`` slugs the header so
  the same header always lands in the same file.
* **Exact hashing** -- ``content_hash()`` digests the exact content bytes.
  Fragments are stored verbatim, so a whitespace-only edit is a real change.
* **Atomic manifest writes** -- the manifest is replaced via a temp file so a
  reader never sees a half-written index.  Fragment files are written
  directly.
* **Missing manifest is empty** -- ``read_manifest()`` returns an empty
  manifest on first run instead of raising.
"""

from __future__ import annotations

import hashlib
import logging
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from claude_sync.errors import FragmentNotFoundError, MalformedManifestError
from claude_sync.file_handler import read_text, write_file, write_file_atomic
from claude_sync.validators import validate_fragment_name

from .models import FragmentMeta, Manifest, Section
from .sections import assemble, header_of, split

logger = logging.getLogger(__name__)

MANIFEST_FILE = "manifest.yaml"
PREAMBLE_NAME = "_preamble"
FALLBACK_PREFIX = "section-"

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9-]")
_MULTI_HYPHEN = re.compile(r"-{2,}")


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


def header_to_fragment_name(header: str) -> str:
    """Convert a section header to a filename-safe fragment name.

    ``""`` maps to ``_preamble``.  Otherwise the header is lower-cased,
    spaces become hyphens, anything outside ``[a-z0-9-]`` is dropped,
    hyphen runs collapse and leading/trailing hyphens are trimmed.

    A header with nothing left after slugging (``"日本語"``, ``"---"``) is
    named ``section-`` plus the first 8 hex chars of its hash.
    """
    if header == "":
        return PREAMBLE_NAME
    slug = header.lower().replace(" ", "-")
    slug = _NON_SLUG_CHARS.sub("", slug)
    slug = _MULTI_HYPHEN.sub("-", slug)
    slug = slug.strip("-")
    if not slug:
        return FALLBACK_PREFIX + content_hash(header)[:8]
    return slug


def content_hash(content: str) -> str:
    """Return the first 16 hex characters of the SHA-256 of *content*."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()[:16]


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class FragmentStore:
    """Read and write fragments and the manifest under *root*.

    Args:
        root: Directory holding the fragment files and ``manifest.yaml``.
            Created lazily on the first write.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    # ------------------------------------------------------------------
    # Fragments
    # ------------------------------------------------------------------

    def fragment_path(self, name: str) -> Path:
        """Return the path of fragment *name*, validating the name first."""
        ok, reason = validate_fragment_name(name)
        if not ok:
            raise ValueError(reason)
        return self.root / f"{name}.md"

    def write_fragment(self, name: str, content: str) -> None:
        write_file(self.fragment_path(name), content)

    def read_fragment(self, name: str) -> str:
        """Return the stored content of fragment *name*.

        Raises:
            FragmentNotFoundError: If no such fragment file exists.
        """
        path = self.fragment_path(name)
        if not path.is_file():
            raise FragmentNotFoundError(name, str(path))
        return read_text(path)

    def fragment_exists(self, name: str) -> bool:
        return self.fragment_path(name).is_file()

    def list_fragments(self) -> list[str]:
        """Sorted names of fragment files present on disk."""
        if not self.root.is_dir():
            return []
        return sorted(p.stem for p in self.root.glob("*.md") if p.is_file())

    # ------------------------------------------------------------------
    # Manifest
    # ------------------------------------------------------------------

    @property
    def manifest_path(self) -> Path:
        return self.root / MANIFEST_FILE

    def read_manifest(self) -> Manifest:
        """Load the manifest.

        Returns:
            The stored manifest, or an empty one if the file does not exist.

        Raises:
            MalformedManifestError: If the file is not valid YAML or does not
                have the manifest structure.
        """
        path = self.manifest_path
        if not path.exists():
            return Manifest()

        try:
            data = yaml.safe_load(read_text(path))
        except yaml.YAMLError as exc:
            raise MalformedManifestError(
                f"Manifest {path} is not valid YAML: {exc}"
            ) from exc

        if data is None:
            return Manifest()
        if not isinstance(data, dict):
            raise MalformedManifestError(
                f"Manifest {path} must be a mapping, got {type(data).__name__}"
            )

        # Tolerate explicit nulls for either key.
        data = {
            "fragments": data.get("fragments") or {},
            "order": data.get("order") or [],
        }
        try:
            manifest = Manifest.model_validate(data)
        except ValidationError as exc:
            raise MalformedManifestError(
                f"Manifest {path} has invalid structure: {exc}"
            ) from exc

        for name in manifest.fragments:
            ok, reason = validate_fragment_name(name)
            if not ok:
                raise MalformedManifestError(
                    f"Manifest {path} lists invalid fragment name {name!r}: "
                    f"{reason}"
                )

        unknown = [n for n in manifest.order if n not in manifest.fragments]
        if unknown:
            raise MalformedManifestError(
                f"Manifest {path} orders unknown fragments: {unknown}"
            )
        return manifest

    def write_manifest(self, manifest: Manifest) -> None:
        """Persist *manifest* atomically, creating the store directory."""
        text = yaml.safe_dump(
            manifest.model_dump(mode="json"),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
        write_file_atomic(self.manifest_path, text)

    # ------------------------------------------------------------------
    # Bulk operations
    # ------------------------------------------------------------------

    def import_document(self, document: str) -> list[str]:
        """Split *document*, write one fragment per section and a fresh manifest.

        This is the first-time / bulk path.  Any previous manifest is
        replaced, and ``order`` follows section order.  When two sections
        slug to the same name the later one wins and the name keeps its
        first position.

        Returns:
            Fragment names in document order.
        """
        manifest = Manifest()
        for section in split(document):
            name = header_to_fragment_name(section.header)
            if name in manifest.fragments:
                logger.warning(
                    "Duplicate section header '%s' -> fragment '%s'; "
                    "later section overwrites earlier one",
                    section.header,
                    name,
                )
            else:
                manifest.order.append(name)
            manifest.fragments[name] = FragmentMeta(
                header=section.header,
                content_hash=content_hash(section.content),
            )
            self.write_fragment(name, section.content)

        self.write_manifest(manifest)
        logger.info(
            "Imported %d fragments into %s", len(manifest.order), self.root
        )
        return list(manifest.order)

    def assemble_from_names(self, names: list[str]) -> str:
        """Assemble a document from the named fragments, in the given order.

        The header of each fragment is recovered from its own header line,
        so *names* may reorder or subset the manifest freely.

        Raises:
            FragmentNotFoundError: If any named fragment is missing.
        """
        sections: list[Section] = []
        for name in names:
            content = self.read_fragment(name)
            sections.append(Section(header=header_of(content), content=content))
        return assemble(sections)

    def assemble_manifest(self) -> str:
        """Assemble every fragment in manifest order."""
        return self.assemble_from_names(self.read_manifest().ordered_names())

    # ------------------------------------------------------------------
    # Incremental maintenance
    # ------------------------------------------------------------------

    def add_section(self, section: Section, name: str | None = None) -> str:
        """Persist a section reported as new by the reconciler.

        Args:
            section: The section to store.
            name: Fragment name to use; derived from the header when omitted.

        Returns:
            The fragment name the section was stored under.

        Raises:
            ValueError: If *name* is invalid or already in the manifest.
        """
        name = name or header_to_fragment_name(section.header)
        manifest = self.read_manifest()
        if name in manifest.fragments:
            raise ValueError(f"Fragment '{name}' already exists")

        self.write_fragment(name, section.content)
        manifest.fragments[name] = FragmentMeta(
            header=section.header, content_hash=content_hash(section.content)
        )
        manifest.order.append(name)
        self.write_manifest(manifest)
        logger.info("Added fragment %s", name)
        return name

    def remove_fragment(self, name: str) -> None:
        """Delete fragment *name* and drop it from the manifest.

        Raises:
            FragmentNotFoundError: If neither the file nor a manifest entry
                exists.
        """
        path = self.fragment_path(name)
        manifest = self.read_manifest()
        if not path.is_file() and name not in manifest.fragments:
            raise FragmentNotFoundError(name, str(path))

        if path.is_file():
            path.unlink()
        manifest.fragments.pop(name, None)
        manifest.order = [n for n in manifest.order if n != name]
        self.write_manifest(manifest)
        logger.info("Removed fragment %s", name)
