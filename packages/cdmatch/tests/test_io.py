"""Tests for the io module (CSV/JSONL/Excel reading and writing)."""

import csv
import json
from pathlib import Path

import pandas as pd

from cdmatch.io import read_names, write_results
from cdmatch.types import ParseResult, Position


class TestReadNames:
    def test_read_csv_with_defaults(self, tmp_path: Path):
        csv_file = tmp_path / "names.csv"
        csv_file.write_text("id,name\n1,Acme GmbH\n2,Initech LLC\n")

        result = read_names(csv_file)

        assert result == [(1, "Acme GmbH"), (2, "Initech LLC")]

    def test_read_csv_custom_columns(self, tmp_path: Path):
        csv_file = tmp_path / "names.csv"
        csv_file.write_text("company_id,company_name\n10,Volvo AB\n20,Nokia Oyj\n")

        result = read_names(csv_file, name_column="company_name", id_column="company_id")

        assert result == [(10, "Volvo AB"), (20, "Nokia Oyj")]

    def test_read_csv_no_id_column(self, tmp_path: Path):
        csv_file = tmp_path / "names.csv"
        csv_file.write_text("name\nAcme GmbH\nInitech LLC\n")

        result = read_names(csv_file, id_column=None)

        assert result == [(0, "Acme GmbH"), (1, "Initech LLC")]

    def test_read_csv_skips_empty_names(self, tmp_path: Path):
        csv_file = tmp_path / "names.csv"
        csv_file.write_text("id,name\n1,Acme GmbH\n2,\n3,Umbrella\n")

        result = read_names(csv_file)

        assert result == [(1, "Acme GmbH"), (3, "Umbrella")]

    def test_read_jsonl(self, tmp_path: Path):
        jsonl_file = tmp_path / "names.jsonl"
        jsonl_file.write_text(
            '{"id": 5, "name": "Volvo AB"}\n\n{"id": 6, "name": " ООО Ромашка "}\n',
            encoding="utf-8",
        )

        result = read_names(jsonl_file)

        assert result == [(5, "Volvo AB"), (6, "ООО Ромашка")]

    def test_read_excel(self, tmp_path: Path):
        xlsx_file = tmp_path / "names.xlsx"
        pd.DataFrame({"id": [7, 8], "name": ["Acme Ltd", None]}).to_excel(xlsx_file, index=False)

        result = read_names(xlsx_file)

        assert result == [(7, "Acme Ltd")]


class TestWriteResults:
    results = [
        (1, ParseResult("Acme LLC", True, "Acme", "LLC", Position.END)),
        (2, ParseResult.unmatched("Microsoft")),
    ]

    def test_write_csv(self, tmp_path: Path):
        out = tmp_path / "out.csv"
        write_results(self.results, out)

        with out.open(newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))

        assert rows[0] == {
            "id": "1",
            "input": "Acme LLC",
            "matched": "True",
            "short_name": "Acme",
            "designator": "LLC",
            "position": "end",
        }
        assert rows[1]["designator"] == ""
        assert rows[1]["position"] == "none"

    def test_write_jsonl(self, tmp_path: Path):
        out = tmp_path / "out.jsonl"
        write_results(self.results, out)

        records = [json.loads(line) for line in out.read_text(encoding="utf-8").splitlines()]

        assert records[0] == {
            "id": 1,
            "input": "Acme LLC",
            "matched": True,
            "short_name": "Acme",
            "designator": "LLC",
            "position": "end",
        }
        assert records[1]["designator"] is None
        assert records[1]["short_name"] == "Microsoft"
