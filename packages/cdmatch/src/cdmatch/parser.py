"""Designator parser: try each tier in order, first match wins."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

import structlog

from cdmatch.config import ParserConfig
from cdmatch.dataset import entries_from_records, load_dataset
from cdmatch.matcher import TierMatcher, build_tier_matcher
from cdmatch.normalize import prepare_input, strip_parens, to_display_form
from cdmatch.types import MatchTier, ParseResult

log = structlog.get_logger()

TIER_ORDER: tuple[MatchTier, ...] = (
    MatchTier.END,
    MatchTier.END_FALLBACK,
    MatchTier.END_CONT,
    MatchTier.BEGIN,
    MatchTier.BEGIN_FALLBACK,
)


class Parser:
    """Splits company names into a short name and a legal designator.

    A Parser is immutable once created, so a single instance can be shared
    between threads.
    """

    def __init__(
        self,
        matchers: Mapping[MatchTier, TierMatcher],
        config: ParserConfig | None = None,
    ) -> None:
        self.config = config or ParserConfig()
        self._matchers = tuple(
            (tier, matchers[tier]) for tier in TIER_ORDER if matchers.get(tier) is not None
        )

    @classmethod
    def create(cls, dataset: Mapping, config: ParserConfig | None = None) -> Parser:
        """Build a parser from a dataset mapping.

        Values may be DesignatorEntry objects or raw `{abbr_std, abbr, lang,
        lead, doc}` records. Raises DatasetError for invalid entries and
        CompileError if a tier pattern does not compile.
        """
        config = config or ParserConfig()
        entries = entries_from_records(dataset)
        matchers: dict[MatchTier, TierMatcher] = {}
        for tier in TIER_ORDER:
            matcher = build_tier_matcher(entries, tier, config)
            if matcher is not None:
                matchers[tier] = matcher
        parser = cls(matchers, config)
        log.info(
            "parser_created",
            entries=len(entries),
            tiers=[str(t) for t in parser.tiers],
            backend=config.backend,
        )
        return parser

    @classmethod
    def from_file(cls, path: str | Path, config: ParserConfig | None = None) -> Parser:
        return cls.create(load_dataset(path), config)

    @classmethod
    def default(cls, config: ParserConfig | None = None) -> Parser:
        """Parser over the bundled dataset (or $CDMATCH_DATASET)."""
        return cls.create(load_dataset(), config)

    @property
    def tiers(self) -> list[MatchTier]:
        return [tier for tier, _ in self._matchers]

    def parse(self, name: str) -> ParseResult:
        """Find a leading or trailing designator in a company name."""
        display = to_display_form(name)
        text = prepare_input(name)
        stripped: str | None = None

        for tier, matcher in self._matchers:
            if tier is MatchTier.END_CONT:
                if stripped is None:
                    stripped = strip_parens(text, self.config.patterns.paren_chars)
                m = matcher.match(stripped)
            else:
                m = matcher.match(text)
            if m is None:
                continue
            log.debug(
                "designator_matched",
                tier=str(tier),
                position=str(tier.position),
                designator=m.designator,
            )
            return ParseResult(
                input=display,
                matched=True,
                short_name=to_display_form(m.short_name),
                designator=to_display_form(m.designator),
                position=tier.position,
            )

        return ParseResult.unmatched(display)

    def parse_all(self, names: Iterable[str]) -> list[ParseResult]:
        return [self.parse(name) for name in names]
