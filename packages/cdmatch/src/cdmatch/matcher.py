"""Tier matchers: apply one compiled tier to a prepared company name."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from cdmatch.config import ParserConfig
from cdmatch.patterns import compile_pattern, compile_tier, tier_alternatives, wrap_tier
from cdmatch.types import DesignatorEntry, MatchTier


@dataclass(frozen=True)
class TierMatch:
    tier: MatchTier
    short_name: str
    designator: str
    separator: str | None = None


class TierMatcher(Protocol):
    tier: MatchTier

    def match(self, text: str) -> TierMatch | None:
        """Match a prepared (NFD) name, or return None."""
        ...


def _tier_match(tier: MatchTier, m: re.Match, open_parens: str) -> TierMatch:
    groups = m.groupdict()
    separator = groups.get("sep")
    designator = groups["des"].strip()
    # An opening paren consumed as the separator belongs to the designator
    if (
        not tier.is_begin
        and separator
        and separator in open_parens
        and designator[:1] not in open_parens
    ):
        designator = separator + designator
    return TierMatch(
        tier=tier,
        short_name=groups["short"].strip(),
        designator=designator,
        separator=separator,
    )


class RegexTierMatcher:
    """All alternatives of a tier joined into one compiled pattern."""

    def __init__(self, tier: MatchTier, pattern: re.Pattern, open_parens: str = "(（") -> None:
        self.tier = tier
        self.pattern = pattern
        self.open_parens = open_parens

    @classmethod
    def build(
        cls,
        entries: Mapping[str, DesignatorEntry],
        tier: MatchTier,
        config: ParserConfig,
    ) -> RegexTierMatcher | None:
        pattern = compile_tier(entries, tier, config)
        if pattern is None:
            return None
        return cls(tier, pattern, config.patterns.open_parens)

    def match(self, text: str) -> TierMatch | None:
        m = self.pattern.match(text)
        if m is None:
            return None
        return _tier_match(self.tier, m, self.open_parens)


class LongestTierMatcher:
    """One compiled pattern per alternative; the longest designator wins.

    Slower than RegexTierMatcher, but independent of alternation order, so
    it gives leftmost-longest results even without the blacklist.
    """

    def __init__(
        self,
        tier: MatchTier,
        patterns: list[re.Pattern],
        open_parens: str = "(（",
    ) -> None:
        self.tier = tier
        self.patterns = patterns
        self.open_parens = open_parens

    @classmethod
    def build(
        cls,
        entries: Mapping[str, DesignatorEntry],
        tier: MatchTier,
        config: ParserConfig,
    ) -> LongestTierMatcher | None:
        alternatives = tier_alternatives(entries, tier, config)
        if not alternatives:
            return None
        patterns = [
            compile_pattern(wrap_tier(alt, tier, config.patterns), tier)
            for alt in alternatives
        ]
        return cls(tier, patterns, config.patterns.open_parens)

    def match(self, text: str) -> TierMatch | None:
        best: re.Match | None = None
        for pattern in self.patterns:
            m = pattern.match(text)
            if m is None:
                continue
            if best is None or len(m.group("des")) > len(best.group("des")):
                best = m
        if best is None:
            return None
        return _tier_match(self.tier, best, self.open_parens)


BACKENDS = {
    "regex": RegexTierMatcher,
    "longest": LongestTierMatcher,
}


def build_tier_matcher(
    entries: Mapping[str, DesignatorEntry],
    tier: MatchTier,
    config: ParserConfig,
) -> TierMatcher | None:
    try:
        backend = BACKENDS[config.backend]
    except KeyError:
        raise ValueError(
            f"unknown backend {config.backend!r}, expected one of {sorted(BACKENDS)}"
        ) from None
    return backend.build(entries, tier, config)
