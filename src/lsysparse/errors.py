from __future__ import annotations


class LSystemError(Exception):
    pass


class LSystemSyntaxError(LSystemError, ValueError):
    """Raised when the input does not match the L-system grammar.

    ``rule`` names what the parser was expecting, ``context`` holds the
    unconsumed input at the failure point (up to the end of that line),
    ``position`` is the zero-based offset and ``line``/``column`` are one-based.
    """

    def __init__(self, rule: str, context: str, position: int, line: int, column: int) -> None:
        self.rule = rule
        self.context = context
        self.position = position
        self.line = line
        self.column = column
        super().__init__(
            f'Cannot parse lsystem: Expecting {rule} here: "{context}" (line {line}, column {column})'
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "error": str(self),
            "rule": self.rule,
            "context": self.context,
            "line": self.line,
            "column": self.column,
        }
