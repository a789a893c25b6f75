"""Unicode normalization for designator matching.

Matching runs on the decomposed (NFD) form so that precomposed accents and
base-letter-plus-combining-mark spellings meet the same pattern; everything
handed back to callers is recomposed (NFC).
"""

from __future__ import annotations

import re
import unicodedata

# Single-letter initial followed by a stray " ." (e.g. "P .J . S .C")
_STRAY_INITIAL_INNER = re.compile(r"(?<=\b[^\W\d_])\s+\.\s*(?=[^\W\d_])")
_STRAY_INITIAL_FINAL = re.compile(r"(?<=\b[^\W\d_])\s+\.(?=\s*$)")

_WHITESPACE_RUN = re.compile(r"\s+")


def to_match_form(s: str) -> str:
    return unicodedata.normalize("NFD", s)


def to_display_form(s: str) -> str:
    return unicodedata.normalize("NFC", s)


def strip_marks(s: str) -> str:
    """Remove combining marks (Unicode category M*) from a decomposed string."""
    return "".join(c for c in s if not unicodedata.category(c).startswith("M"))


def collapse_initials(s: str) -> str:
    """Rewrite stray initials spacing into a dotted form.

    "P .J . S .C" becomes "P. J. S. C"; correctly dotted text is left alone.
    """
    s = _STRAY_INITIAL_INNER.sub(". ", s)
    return _STRAY_INITIAL_FINAL.sub(".", s)


def strip_parens(s: str, parens: str = "()（）") -> str:
    """Drop parentheses and any whitespace around them."""
    pattern = r"\s*[" + re.escape(parens) + r"]\s*"
    return re.sub(pattern, "", s)


def collapse_whitespace(s: str) -> str:
    """Squeeze every whitespace run to a single space and trim the ends."""
    return _WHITESPACE_RUN.sub(" ", s).strip()


def prepare_input(s: str) -> str:
    """Light normalization applied to every name before tier matching.

    Tier patterns assume whitespace runs are at most one space long.
    """
    return collapse_initials(collapse_whitespace(to_match_form(s)))
