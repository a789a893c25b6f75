"""CLI tool for company designator parsing."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace

import structlog

from cdmatch.config import ParserConfig
from cdmatch.errors import CdmatchError
from cdmatch.io import read_names, write_results
from cdmatch.logging import configure_logging
from cdmatch.matcher import BACKENDS
from cdmatch.parser import Parser


def _build_parser(args: argparse.Namespace) -> Parser:
    config = replace(ParserConfig(), backend=args.backend)
    if args.dataset:
        return Parser.from_file(args.dataset, config)
    return Parser.default(config)


def cmd_parse(args: argparse.Namespace) -> None:
    parser = _build_parser(args)
    for name in args.names:
        r = parser.parse(name)
        print(f"{r.short_name}\t{r.designator or ''}\t{r.position.value}")


def cmd_batch(args: argparse.Namespace) -> None:
    log = structlog.get_logger()
    parser = _build_parser(args)

    id_column = args.id_column or None
    names = read_names(args.input, name_column=args.name_column, id_column=id_column)
    log.info("batch_start", input=args.input, count=len(names))

    results = [(item_id, parser.parse(name)) for item_id, name in names]
    write_results(results, args.output)

    matched = sum(1 for _, r in results if r.matched)
    log.info("batch_done", output=args.output, matched=matched)
    print(f"matched={matched} unmatched={len(results) - matched}")
    print(f"Saved to: {args.output}")


def main(argv: list[str] | None = None) -> None:
    # Parent parser with global options (inherited by all subcommands)
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    parent_parser.add_argument(
        "--log-format",
        choices=["console", "json"],
        default="console",
        help="Log output format (default: console)",
    )
    parent_parser.add_argument(
        "--dataset",
        help="Path to a designator dataset YAML file (default: bundled dataset)",
    )
    parent_parser.add_argument(
        "--backend",
        choices=sorted(BACKENDS),
        default="regex",
        help="Tier matching backend (default: regex)",
    )

    parser = argparse.ArgumentParser(
        description="Company designator parsing CLI",
        parents=[parent_parser],
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_parser = subparsers.add_parser("parse", parents=[parent_parser], help="Parse company names")
    parse_parser.add_argument("names", nargs="+", metavar="NAME", help="Company name(s) to parse")
    parse_parser.set_defaults(func=cmd_parse)

    batch_parser = subparsers.add_parser("batch", parents=[parent_parser], help="Parse names from a file")
    batch_parser.add_argument("input", help="Input file (.csv, .jsonl or .xlsx)")
    batch_parser.add_argument("output", help="Output file (.csv or .jsonl)")
    batch_parser.add_argument("--name-column", default="name", help="Column holding company names")
    batch_parser.add_argument("--id-column", default="id", help="Column holding row ids (empty for row index)")
    batch_parser.set_defaults(func=cmd_batch)

    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.log_format)
    try:
        args.func(args)
    except CdmatchError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
