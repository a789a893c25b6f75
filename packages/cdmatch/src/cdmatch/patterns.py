"""Compile designator datasets into per-tier regular expressions.

Every tier pattern has the same named groups: ``short`` (the remaining
company name), ``des`` (the designator) and, for tiers that require one,
``sep`` (the single separator character between the two).
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

import structlog

from cdmatch.config import ParserConfig, PatternConfig
from cdmatch.errors import CompileError
from cdmatch.normalize import strip_marks, to_display_form, to_match_form
from cdmatch.types import DesignatorEntry, MatchTier

log = structlog.get_logger()

FLAGS = re.IGNORECASE | re.DOTALL

_ASCII = re.compile(r"^[\x00-\x7f]+$")


def _tokenizer(config: PatternConfig) -> re.Pattern:
    amp = re.escape(config.ampersand_chars)
    return re.compile(rf"(\s*[{amp}]\s*|\s+|\.)")


def escape_designator(des: str, config: PatternConfig | None = None) -> str:
    """Escape a designator for use inside an alternation.

    Periods become optional (so "L.L.C." also matches "LLC" and "L. L. C."),
    embedded spaces accept a leading comma and any run of word separators,
    and ampersands accept "&" or "+" with optional surrounding space.
    """
    config = config or PatternConfig()
    space = config.space_class
    out: list[str] = []
    for piece in _tokenizer(config).split(des):
        if not piece:
            continue
        if piece == ".":
            out.append(rf"\.*,?{space}*")
        elif piece.strip() and piece.strip() in config.ampersand_chars:
            out.append(rf"{space}*[{re.escape(config.ampersand_chars)}]{space}*")
        elif piece.isspace():
            out.append(f",?{config.word_separator_class}+")
        else:
            out.append(re.escape(piece))
    return "".join(out)


def is_blacklisted(s: str, blacklist: Iterable[str]) -> bool:
    return to_display_form(s) in {to_display_form(b) for b in blacklist}


def tier_strings(
    entries: Mapping[str, DesignatorEntry],
    tier: MatchTier,
    config: ParserConfig,
) -> list[str]:
    """Designator strings (canonical forms and abbreviations) that qualify for a tier."""
    blacklist = frozenset(to_display_form(b) for b in config.blacklist)
    selected: list[str] = []
    for entry in entries.values():
        if tier.is_begin and not entry.is_leading_form:
            continue
        if tier is MatchTier.END_CONT and entry.language_tag not in config.continuous_languages:
            continue
        for s in entry.strings():
            # ASCII abbreviations still need a word break, leave them to End
            if tier is MatchTier.END_CONT and s != entry.canonical_form and _ASCII.match(s):
                continue
            if tier is not MatchTier.END_CONT:
                if is_blacklisted(s, blacklist) != tier.is_fallback:
                    continue
            if s not in selected:
                selected.append(s)
    return selected


def tier_alternatives(
    entries: Mapping[str, DesignatorEntry],
    tier: MatchTier,
    config: ParserConfig,
) -> list[str]:
    """Escaped alternatives for a tier, longest designator first.

    Each string is decomposed to NFD; a copy with combining marks removed is
    added when that differs, so unaccented spellings match too.
    """
    variants: list[str] = []
    for s in tier_strings(entries, tier, config):
        nfd = to_match_form(s)
        for v in (nfd, strip_marks(nfd)):
            if v not in variants:
                variants.append(v)
    variants.sort(key=lambda v: (-len(v), v))

    alternatives: list[str] = []
    for v in variants:
        escaped = escape_designator(v, config.patterns)
        if escaped not in alternatives:
            alternatives.append(escaped)
    return alternatives


def wrap_tier(alternation: str, tier: MatchTier, config: PatternConfig | None = None) -> str:
    """Wrap an alternation with the positional context of its tier."""
    config = config or PatternConfig()
    s = config.space_class
    sep = config.separator_class
    des = f"{config.open_paren_class}?(?:{alternation}){config.close_paren_class}?"

    if tier in (MatchTier.END, MatchTier.END_FALLBACK):
        return rf"\A{s}*(?P<short>\S(?:.*?\S)?){s}*(?P<sep>{sep}){s}*(?P<des>{des}){s}*\Z"
    if tier is MatchTier.END_CONT:
        return rf"\A{s}*(?P<short>\S(?:.*?\S)?){s}*(?P<des>{des}){s}*\Z"
    return rf"\A{s}*(?P<des>{des})(?P<sep>{sep}){s}*(?P<short>\S(?:.*?\S)?){s}*\Z"


def compile_pattern(source: str, tier: MatchTier) -> re.Pattern:
    try:
        return re.compile(source, FLAGS)
    except re.error as exc:
        raise CompileError(f"invalid {tier} pattern: {exc}") from exc


def compile_tier(
    entries: Mapping[str, DesignatorEntry],
    tier: MatchTier,
    config: ParserConfig | None = None,
) -> re.Pattern | None:
    """Compile the single-alternation pattern for a tier, or None if nothing qualifies."""
    config = config or ParserConfig()
    alternatives = tier_alternatives(entries, tier, config)
    if not alternatives:
        log.debug("tier_absent", tier=str(tier))
        return None
    pattern = compile_pattern(wrap_tier("|".join(alternatives), tier, config.patterns), tier)
    log.debug("tier_compiled", tier=str(tier), alternatives=len(alternatives))
    return pattern
