"""Configuration for the cdmatch designator parser."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

# Unicode punctuation (roughly \p{P}) that `re` has no property class for:
# ASCII, Latin-1, General Punctuation, CJK and full-width forms.
PUNCTUATION = (
    r"!-#%-*,-/:;?@\[-\]_{}"
    r"¡§«¶·»¿"
    r"‐-‧‰-⁞"
    r"、-〃〈-】〔-〟"
    r"！-＃％-＊，-／：；？＠"
    r"［-］＿｛｝｟-･"
)


@dataclass(frozen=True)
class PatternConfig:
    """Character classes used when building tier patterns."""

    space_class: str = r"\s"
    punctuation: str = PUNCTUATION
    word_separator_class: str = r"[\s,()\-]"  # replaces whitespace inside a designator
    ampersand_chars: str = "&+"
    open_parens: str = "(（"
    close_parens: str = ")）"

    @property
    def separator_class(self) -> str:
        """A single space or punctuation character between name and designator."""
        return f"[{self.space_class}{self.punctuation}]"

    @property
    def open_paren_class(self) -> str:
        return f"[{re.escape(self.open_parens)}]"

    @property
    def close_paren_class(self) -> str:
        return f"[{re.escape(self.close_parens)}]"

    @property
    def paren_chars(self) -> str:
        return self.open_parens + self.close_parens


DEFAULT_CONTINUOUS_LANGUAGES = frozenset({"zh", "ja", "ko"})

# Designators that are a proper subset of a longer one in the dataset; they are
# matched only by the fallback tiers, after the longer form had its chance.
DEFAULT_BLACKLIST = frozenset({
    "Vennootschap",  # vs. Vennootschap Onder Firma
    "Co.",  # vs. & Co.
    "Co. L.L.C.",  # vs. & Co. L.L.C.
    "L.L.C.",  # vs. Co. L.L.C.
    "L.C.",  # vs. L.L.C.
})


@dataclass(frozen=True)
class ParserConfig:
    """Settings for building a Parser."""

    continuous_languages: frozenset[str] = DEFAULT_CONTINUOUS_LANGUAGES
    blacklist: frozenset[str] = DEFAULT_BLACKLIST
    patterns: PatternConfig = field(default_factory=PatternConfig)
    backend: str = "regex"
