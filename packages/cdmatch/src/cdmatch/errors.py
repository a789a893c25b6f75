"""Exceptions raised while building a designator parser."""


class CdmatchError(Exception):
    """Base class for cdmatch errors."""


class DatasetError(CdmatchError):
    """A designator dataset is unreadable or contains an invalid entry."""


class CompileError(CdmatchError):
    """An assembled tier pattern is not a valid regular expression."""
