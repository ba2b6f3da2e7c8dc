from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for 3.10
    import tomli as tomllib  # type: ignore[no-redef]

from .rules import ALIAS_KINDS, BUILTIN_ALIASES, Rule

DEFAULT_CONTEXT_SPAN = 40
_RESERVED_ALIAS_CHARS = {" ", "\n", "#"}


@dataclass(frozen=True)
class ParserConfig:
    aliases: Mapping[str, Rule] = field(default_factory=lambda: dict(BUILTIN_ALIASES))
    context_span: int = DEFAULT_CONTEXT_SPAN

    def __post_init__(self) -> None:
        for name, rule in self.aliases.items():
            _check_alias_name(name)
            if not isinstance(rule, Rule):
                raise ValueError(f"Alias '{name}' must map to a Rule, got {rule!r}.")
        if isinstance(self.context_span, bool) or not isinstance(self.context_span, int) or self.context_span <= 0:
            raise ValueError("parser.context_span must be a positive integer.")
        object.__setattr__(self, "aliases", dict(self.aliases))


@dataclass(frozen=True)
class Config:
    parser: ParserConfig


def _check_alias_name(name: object) -> None:
    if not isinstance(name, str) or not name:
        raise ValueError("Alias names must be non-empty strings.")
    if _RESERVED_ALIAS_CHARS.intersection(name):
        raise ValueError(f"Alias '{name}' must not contain spaces, newlines or '#'.")


def _parse_aliases(aliases_raw: Mapping[str, Any]) -> Dict[str, Rule]:
    aliases: Dict[str, Rule] = dict(BUILTIN_ALIASES)
    for name, kind in aliases_raw.items():
        name = str(name)
        _check_alias_name(name)
        if not isinstance(kind, str) or kind not in ALIAS_KINDS:
            choices = ", ".join(sorted(ALIAS_KINDS))
            raise ValueError(f"Alias '{name}' must map to one of: {choices}.")
        aliases[name] = ALIAS_KINDS[kind]
    return aliases


def parse_parser_config(parser_raw: Mapping[str, Any]) -> ParserConfig:
    aliases_raw = parser_raw.get("aliases", {})
    if not isinstance(aliases_raw, Mapping):
        raise ValueError("[parser.aliases] must be a table.")
    context_span = parser_raw.get("context_span", DEFAULT_CONTEXT_SPAN)
    return ParserConfig(aliases=_parse_aliases(aliases_raw), context_span=context_span)


def load_config(path: str | Path) -> Config:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open("rb") as handle:
        raw = tomllib.load(handle)

    parser_raw = raw.get("parser", {})
    if not isinstance(parser_raw, Mapping):
        raise ValueError("[parser] must be a table if provided.")
    return Config(parser=parse_parser_config(parser_raw))
