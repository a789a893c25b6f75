"""Core types for the cdmatch designator parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Position(str, Enum):
    """Where the designator was found in the name."""

    NONE = "none"
    BEGIN = "begin"
    END = "end"

    def __str__(self) -> str:
        return self.value


class MatchTier(str, Enum):
    """Matching strategies, in the order the parser tries them."""

    END = "end"
    END_FALLBACK = "end_fallback"
    END_CONT = "end_cont"
    BEGIN = "begin"
    BEGIN_FALLBACK = "begin_fallback"

    def __str__(self) -> str:
        return self.value

    @property
    def is_begin(self) -> bool:
        return self in (MatchTier.BEGIN, MatchTier.BEGIN_FALLBACK)

    @property
    def is_fallback(self) -> bool:
        return self in (MatchTier.END_FALLBACK, MatchTier.BEGIN_FALLBACK)

    @property
    def position(self) -> Position:
        """Position reported to callers; fallback and continuous tiers collapse."""
        return Position.BEGIN if self.is_begin else Position.END


@dataclass(frozen=True)
class DesignatorEntry:
    """One dataset record: a canonical designator and its abbreviations."""

    canonical_form: str
    standard_abbreviation: str | None = None
    abbreviations: tuple[str, ...] = ()
    language_tag: str | None = None
    is_leading_form: bool = False
    documentation: str | None = None

    def strings(self) -> list[str]:
        """Canonical form, standard abbreviation and abbreviations, deduplicated."""
        seen: list[str] = [self.canonical_form]
        if self.standard_abbreviation and self.standard_abbreviation not in seen:
            seen.append(self.standard_abbreviation)
        for abbr in self.abbreviations:
            if abbr not in seen:
                seen.append(abbr)
        return seen


@dataclass
class ParseResult:
    """Outcome of parsing one company name."""

    input: str
    matched: bool = False
    short_name: str = ""
    designator: str | None = None
    position: Position = Position.NONE

    @classmethod
    def unmatched(cls, text: str) -> ParseResult:
        return cls(input=text, matched=False, short_name=text)

    def to_dict(self) -> dict:
        return {
            "input": self.input,
            "matched": self.matched,
            "short_name": self.short_name,
            "designator": self.designator,
            "position": self.position.value,
        }
