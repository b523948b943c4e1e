"""Lexical similarity used for rename detection.

Jaccard similarity over the *sets* of lower-cased, whitespace-delimited
words.  Repeated words count once.  Two empty inputs score ``1.0``.
"""

from __future__ import annotations

RENAME_THRESHOLD = 0.8


def word_set(text: str) -> frozenset[str]:
    """Return the set of lower-cased whitespace-delimited words in *text*."""
    return frozenset(text.lower().split())


def similarity(a: str, b: str) -> float:
    """Jaccard similarity of the word sets of *a* and *b*, in ``[0, 1]``."""
    set_a = word_set(a)
    set_b = word_set(b)

    union = set_a | set_b
    if not union:
        return 1.0

    return len(set_a & set_b) / len(union)
