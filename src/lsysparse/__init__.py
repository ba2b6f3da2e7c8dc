"""Parser for a small text language describing stochastic L-systems."""

from .config import Config, ParserConfig, load_config
from .errors import LSystemError, LSystemSyntaxError
from .lsystem import LSystem, Production
from .parser import LSystemParser, parse
from .rules import JUMP_FORWARD, MOVE_FORWARD, Rule, RuleKind

__all__ = [
    "Config",
    "JUMP_FORWARD",
    "LSystem",
    "LSystemError",
    "LSystemParser",
    "LSystemSyntaxError",
    "MOVE_FORWARD",
    "ParserConfig",
    "Production",
    "Rule",
    "RuleKind",
    "load_config",
    "parse",
]
