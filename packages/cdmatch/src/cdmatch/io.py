"""CSV/JSONL/Excel input and output for batch designator parsing."""

from __future__ import annotations

import csv
import json
from pathlib import Path

import pandas as pd

from cdmatch.types import ParseResult

FIELDNAMES = ["id", "input", "matched", "short_name", "designator", "position"]


def read_names(path: str | Path, name_column: str = "name", id_column: str | None = "id") -> list[tuple[int, str]]:
    """Read company names from CSV, JSONL or Excel.

    Returns list of (id, name) tuples.
    """
    path = Path(path)

    if path.suffix == ".jsonl":
        return _read_jsonl(path, name_column, id_column)
    elif path.suffix in (".xlsx", ".xls"):
        return _read_excel(path, name_column, id_column)
    else:
        return _read_csv(path, name_column, id_column)


def _read_csv(path: Path, name_column: str, id_column: str | None) -> list[tuple[int, str]]:
    results: list[tuple[int, str]] = []
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for i, row in enumerate(reader):
            name = (row.get(name_column) or "").strip()
            if not name:
                continue
            if id_column and row.get(id_column):
                item_id = int(row[id_column])
            else:
                item_id = i
            results.append((item_id, name))
    return results


def _read_jsonl(path: Path, name_column: str, id_column: str | None) -> list[tuple[int, str]]:
    results: list[tuple[int, str]] = []
    with path.open(encoding="utf-8") as f:
        for i, line in enumerate(f):
            if not line.strip():
                continue
            row = json.loads(line)
            name = (row.get(name_column) or "").strip()
            if not name:
                continue
            if id_column and row.get(id_column) is not None:
                item_id = int(row[id_column])
            else:
                item_id = i
            results.append((item_id, name))
    return results


def _read_excel(path: Path, name_column: str, id_column: str | None) -> list[tuple[int, str]]:
    df = pd.read_excel(path)
    results: list[tuple[int, str]] = []
    for i, row in df.iterrows():
        value = row.get(name_column)
        if pd.isna(value) or not str(value).strip():
            continue
        if id_column and id_column in df.columns and pd.notna(row[id_column]):
            item_id = int(row[id_column])
        else:
            item_id = int(i)
        results.append((item_id, str(value).strip()))
    return results


def write_results(results: list[tuple[int, ParseResult]], path: str | Path) -> None:
    """Write (id, ParseResult) pairs to CSV or JSONL."""
    path = Path(path)

    if path.suffix == ".jsonl":
        _write_jsonl(results, path)
    else:
        _write_csv(results, path)


def _write_csv(results: list[tuple[int, ParseResult]], path: Path) -> None:
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        for item_id, r in results:
            writer.writerow({
                "id": item_id,
                "input": r.input,
                "matched": r.matched,
                "short_name": r.short_name,
                "designator": r.designator or "",
                "position": r.position.value,
            })


def _write_jsonl(results: list[tuple[int, ParseResult]], path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        for item_id, r in results:
            record = {"id": item_id, **r.to_dict()}
            f.write(json.dumps(record, ensure_ascii=False) + "\n")
