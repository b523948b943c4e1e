"""Reconcile result formatting.

- ``format_reconcile_result`` -- human-readable summary for the terminal.
- ``result_to_json`` -- structured dict for machine consumers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ReconcileResult


def format_reconcile_result(result: ReconcileResult) -> str:
    """Format a reconcile result as human-readable text.

    Sections are only included when they contain at least one entry.

    Args:
        result: The reconcile result.

    Returns:
        Multi-line formatted string.
    """
    if result.is_empty:
        return "CLAUDE.md fragments: no changes"

    lines: list[str] = [
        "CLAUDE.md fragments: "
        f"{len(result.updated)} updated, {len(result.new)} new, "
        f"{len(result.deleted)} deleted, {len(result.renamed)} renamed",
        "",
    ]

    if result.updated:
        lines.append("Updated:")
        for name in result.updated:
            lines.append(f"  {name}")
        lines.append("")

    if result.renamed:
        lines.append("Renamed:")
        for r in result.renamed:
            lines.append(f"  {r.old_name} -> '{r.new_header}'")
        lines.append("")

    if result.new:
        lines.append("New sections:")
        for s in result.new:
            lines.append(f"  '{s.header}'" if s.header else "  (preamble)")
        lines.append("")

    if result.deleted:
        lines.append("Deleted:")
        for name in result.deleted:
            lines.append(f"  {name}")
        lines.append("")

    return "\n".join(lines).rstrip()


def result_to_json(result: ReconcileResult) -> dict:
    """Convert a reconcile result to a JSON-serializable dict."""
    return {
        "updated": list(result.updated),
        "new": [{"header": s.header, "content": s.content} for s in result.new],
        "deleted": list(result.deleted),
        "renamed": [
            {"old_name": r.old_name, "new_header": r.new_header}
            for r in result.renamed
        ],
        "summary": {
            "updated": len(result.updated),
            "new": len(result.new),
            "deleted": len(result.deleted),
            "renamed": len(result.renamed),
        },
    }
