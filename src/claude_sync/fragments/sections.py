"""Split a markdown document into ``## `` sections and assemble it back.

Only a line that starts with ``"## "`` (marker plus a literal space) opens
a new section.  ``###`` sub-headers and ``##word`` lines stay in the body of
the current section.  Text before the first header becomes a preamble
section with an empty header, kept only when it has non-whitespace content.

``assemble(split(doc)) == doc`` for any document made of well-formed
sections.
"""

from __future__ import annotations

from .models import Section

HEADER_MARKER = "## "


def split(document: str) -> list[Section]:
    """Split *document* on ``## `` header lines.

    Args:
        document: Raw markdown text.

    Returns:
        Sections in document order.  Empty list for whitespace-only input.
    """
    if not document.strip():
        return []

    sections: list[Section] = []
    current: list[str] = []
    current_header = ""
    in_preamble = True

    for line in document.split("\n"):
        if line.startswith(HEADER_MARKER):
            if in_preamble:
                _flush_preamble(sections, current)
                in_preamble = False
            else:
                sections.append(
                    Section(header=current_header, content="\n".join(current))
                )
            current_header = line[len(HEADER_MARKER):]
            current = [line]
        else:
            current.append(line)

    if in_preamble:
        _flush_preamble(sections, current)
    else:
        sections.append(
            Section(header=current_header, content="\n".join(current))
        )

    return sections


def _flush_preamble(sections: list[Section], lines: list[str]) -> None:
    text = "\n".join(lines)
    if text.strip():
        sections.append(Section(header="", content=text))


def assemble(sections: list[Section]) -> str:
    """Join section contents with a single newline separator."""
    return "\n".join(s.content for s in sections)


def header_of(content: str) -> str:
    """Recover the header from a section's own leading header line.

    Returns ``""`` when *content* does not start with a header (preamble).
    """
    if not content.startswith(HEADER_MARKER):
        return ""
    first_line, _, _ = content.partition("\n")
    return first_line[len(HEADER_MARKER):]
