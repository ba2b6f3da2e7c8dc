from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import ParserConfig, load_config
from .errors import LSystemSyntaxError
from .lsystem import LSystem
from .parser import LSystemParser


def _build_parser(config_path: Path | None) -> LSystemParser:
    if config_path is None:
        return LSystemParser(ParserConfig())
    return LSystemParser(load_config(config_path).parser)


def _parse_input(parser: LSystemParser, source: str) -> LSystem:
    if source == "-":
        return parser.parse(sys.stdin.buffer)
    with Path(source).open("rb") as handle:
        return parser.parse(handle)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Parse an L-system description and print the result.")
    parser.add_argument("source", help="Path to the L-system file, or '-' to read from stdin.")
    parser.add_argument("--config", type=Path, default=None,
                        help="Path to a TOML config file with parser settings.")
    parser.add_argument("--format", choices=("json", "source"), default="json",
                        help="Choose the output format.")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log parser progress to stderr.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    lsystem_parser = _build_parser(args.config)
    try:
        lsystem = _parse_input(lsystem_parser, args.source)
    except LSystemSyntaxError as exc:
        print(exc, file=sys.stderr)
        return 1

    if args.format == "json":
        print(json.dumps(lsystem.to_dict(), indent=2))
    else:
        sys.stdout.write(lsystem.to_source())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
