from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Mapping, Tuple


class RuleKind(IntEnum):
    MOVE_FORWARD = 0
    JUMP_FORWARD = 1
    WORD = 2


@dataclass(frozen=True, order=True)
class Rule:
    """A single rewrite symbol.

    Built-in kinds carry no character; ``WORD`` carries exactly one. Ordering
    is by kind first, then by character, so rules can be sorted and used as
    mapping keys.
    """

    kind: RuleKind
    char: str = ""

    def __post_init__(self) -> None:
        if self.kind is RuleKind.WORD:
            if len(self.char) != 1:
                raise ValueError(f"Word rule needs exactly one character, got {self.char!r}.")
        elif self.char:
            raise ValueError(f"{self.kind.name} rule takes no character.")

    @classmethod
    def word(cls, char: str) -> "Rule":
        return cls(RuleKind.WORD, char)

    def __str__(self) -> str:
        if self.kind is RuleKind.WORD:
            return self.char
        return _CANONICAL_ALIASES[self.kind]

    def __repr__(self) -> str:
        if self.kind is RuleKind.WORD:
            return f"Word({self.char!r})"
        return "MoveForward" if self.kind is RuleKind.MOVE_FORWARD else "JumpForward"


Rules = Tuple[Rule, ...]

MOVE_FORWARD = Rule(RuleKind.MOVE_FORWARD)
JUMP_FORWARD = Rule(RuleKind.JUMP_FORWARD)

_CANONICAL_ALIASES = {
    RuleKind.MOVE_FORWARD: "F",
    RuleKind.JUMP_FORWARD: "f",
}

# Short names recognised by the rule grammar before falling back to words.
BUILTIN_ALIASES: Mapping[str, Rule] = {
    "F": MOVE_FORWARD,
    "f": JUMP_FORWARD,
}

# Kind names accepted in configuration files.
ALIAS_KINDS: Mapping[str, Rule] = {
    "move_forward": MOVE_FORWARD,
    "jump_forward": JUMP_FORWARD,
}
