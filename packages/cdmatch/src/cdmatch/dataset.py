"""Company designator dataset loading and validation."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

import structlog
import yaml

from cdmatch.errors import DatasetError
from cdmatch.types import DesignatorEntry

log = structlog.get_logger()

BUNDLED_DATASET = Path(__file__).resolve().parent / "data" / "company_designator.yml"


def default_dataset_path() -> Path:
    """Dataset used by Parser.default(); CDMATCH_DATASET overrides the bundled file."""
    return Path(os.environ.get("CDMATCH_DATASET") or BUNDLED_DATASET)


def _optional_str(key: str, record: Mapping, field_name: str, blank_ok: bool = True) -> str | None:
    value = record.get(field_name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise DatasetError(f"{key!r}: {field_name!r} must be a string, got {type(value).__name__}")
    if not blank_ok and not value.strip():
        raise DatasetError(f"{key!r}: {field_name!r} must not be blank")
    return value or None


def validate_entry(key: str, entry: DesignatorEntry) -> DesignatorEntry:
    """Check a DesignatorEntry; every designator string must be non-blank."""
    if entry.canonical_form != key:
        raise DatasetError(f"{key!r}: key does not match canonical form {entry.canonical_form!r}")
    abbr_std = entry.standard_abbreviation
    if abbr_std is not None and (not isinstance(abbr_std, str) or not abbr_std.strip()):
        raise DatasetError(f"{key!r}: 'abbr_std' must be a non-empty string, got {abbr_std!r}")
    if isinstance(entry.abbreviations, str) or not all(
        isinstance(a, str) and a.strip() for a in entry.abbreviations
    ):
        raise DatasetError(f"{key!r}: 'abbr' must be a list of non-empty strings")
    for field_name, value in (("lang", entry.language_tag), ("doc", entry.documentation)):
        if value is not None and not isinstance(value, str):
            raise DatasetError(f"{key!r}: {field_name!r} must be a string, got {type(value).__name__}")
    if not isinstance(entry.is_leading_form, bool):
        raise DatasetError(f"{key!r}: 'lead' must be a boolean, got {entry.is_leading_form!r}")
    return entry


def entry_from_record(key: str, record: Mapping | DesignatorEntry | None) -> DesignatorEntry:
    """Build a DesignatorEntry from one `{abbr_std, abbr, lang, lead, doc}` record."""
    if not isinstance(key, str) or not key.strip():
        raise DatasetError(f"designator key must be a non-empty string, got {key!r}")
    if record is None:
        record = {}
    if isinstance(record, DesignatorEntry):
        return validate_entry(key, record)
    if not isinstance(record, Mapping):
        raise DatasetError(f"{key!r}: record must be a mapping, got {type(record).__name__}")

    abbr = record.get("abbr") or []
    if isinstance(abbr, str):
        abbr = [abbr]
    if not isinstance(abbr, list) or not all(isinstance(a, str) and a.strip() for a in abbr):
        raise DatasetError(f"{key!r}: 'abbr' must be a list of non-empty strings")

    lead = record.get("lead", False)
    if lead is None:
        lead = False
    if not isinstance(lead, bool):
        raise DatasetError(f"{key!r}: 'lead' must be a boolean, got {lead!r}")

    return DesignatorEntry(
        canonical_form=key,
        standard_abbreviation=_optional_str(key, record, "abbr_std", blank_ok=False),
        abbreviations=tuple(abbr),
        language_tag=_optional_str(key, record, "lang"),
        is_leading_form=lead,
        documentation=_optional_str(key, record, "doc"),
    )


def entries_from_records(records: Mapping) -> dict[str, DesignatorEntry]:
    """Validate a whole dataset mapping; raises DatasetError on the first bad entry."""
    if not isinstance(records, Mapping):
        raise DatasetError(f"dataset must be a mapping, got {type(records).__name__}")
    entries: dict[str, DesignatorEntry] = {}
    for key, record in records.items():
        try:
            entry = entry_from_record(key, record)
        except DatasetError as exc:
            log.warning("dataset_invalid_entry", key=key, reason=str(exc))
            raise
        entries[key] = entry
    return entries


def load_dataset(path: str | Path | None = None) -> dict[str, DesignatorEntry]:
    """Load a designator dataset from a YAML file."""
    path = Path(path) if path is not None else default_dataset_path()
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise DatasetError(f"cannot read dataset {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise DatasetError(f"cannot parse dataset {path}: {exc}") from exc

    entries = entries_from_records(data or {})
    log.info("dataset_loaded", path=str(path), entries=len(entries))
    return entries
