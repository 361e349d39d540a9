"""Normalize resume and job text into comparable tokens."""
from __future__ import annotations

import re
import unicodedata

# Maximal runs of ASCII letters; anything else separates tokens.
_WORD_RE = re.compile(r"[a-z]+")
MIN_TOKEN_LEN = 3


def fold_case(text: str) -> str:
    """NFKC then upper-before-lower, so ``fold_case(s) == fold_case(s.upper())``.

    NFKC splits ligatures PDF extractors emit (``ﬁ`` -> ``fi``); going through
    upper() first maps ``ß`` to ``ss`` and the dotless ``ı`` to ``i``.
    """
    return unicodedata.normalize("NFKC", text).upper().lower()


def tokenize(text: str) -> list[str]:
    """Lower-cased alphabetic runs of 3+ letters, in source order, duplicates kept."""
    if not text:
        return []
    return [w for w in _WORD_RE.findall(fold_case(text)) if len(w) >= MIN_TOKEN_LEN]
