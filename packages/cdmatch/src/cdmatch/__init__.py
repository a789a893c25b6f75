"""cdmatch - Company designator matching and parsing."""

from cdmatch.config import ParserConfig, PatternConfig
from cdmatch.errors import CdmatchError, CompileError, DatasetError
from cdmatch.parser import Parser
from cdmatch.types import DesignatorEntry, MatchTier, ParseResult, Position

__all__ = [
    "CdmatchError",
    "CompileError",
    "DatasetError",
    "DesignatorEntry",
    "MatchTier",
    "ParseResult",
    "Parser",
    "ParserConfig",
    "PatternConfig",
    "Position",
]
