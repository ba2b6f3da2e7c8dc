"""Recursive-descent parser for the L-system description language.

A document looks like::

    generations:4
    angle:25.7
    scale:1
    axiom:F
    F -> F[+F]F[-F]F
    X (0.5) -> F[+X]

Spaces and ``#`` comments may appear between tokens. Newlines are
significant: they end header fields and separate production lines.
"""
from __future__ import annotations

import logging
import math
import re
from typing import IO, Dict, List, Mapping, Optional, Union

from .config import ParserConfig
from .errors import LSystemSyntaxError
from .lsystem import LSystem, Production
from .rules import Rule, Rules

logger = logging.getLogger(__name__)

Source = Union[str, bytes, IO[str], IO[bytes]]

_INTEGER = re.compile(r"[+-]?\d+")
_REAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class Scanner:
    """Cursor over the input text. One scanner is created per parse."""

    def __init__(self, text: str, context_span: int) -> None:
        self.text = text
        self.pos = 0
        self._context_span = context_span

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return "" if self.at_end() else self.text[self.pos]

    def skip(self) -> bool:
        """Skip spaces and comments. Returns True if a comment ended a line."""
        crossed_line = False
        text = self.text
        while self.pos < len(text):
            char = text[self.pos]
            if char == " ":
                self.pos += 1
            elif char == "#":
                end = text.find("\n", self.pos)
                self.pos = len(text) if end == -1 else end + 1
                crossed_line = True
            else:
                break
        return crossed_line

    def match(self, pattern: "re.Pattern[str]", expected: str) -> str:
        self.skip()
        found = pattern.match(self.text, self.pos)
        if found is None:
            raise self.error(expected)
        self.pos = found.end()
        return found.group()

    def expect(self, literal: str) -> None:
        self.skip()
        if not self.text.startswith(literal, self.pos):
            raise self.error(f'"{literal}"')
        self.pos += len(literal)

    def line_end(self) -> bool:
        """Consume a newline, or accept a comment that already consumed one."""
        if self.skip():
            return True
        if self.peek() == "\n":
            self.pos += 1
            return True
        return False

    def error(self, expected: str, pos: Optional[int] = None) -> LSystemSyntaxError:
        if pos is None:
            pos = self.pos
        line_stop = self.text.find("\n", pos)
        if line_stop == -1:
            line_stop = len(self.text)
        context = self.text[pos:min(line_stop, pos + self._context_span)]
        line = self.text.count("\n", 0, pos) + 1
        column = pos - (self.text.rfind("\n", 0, pos) + 1) + 1
        return LSystemSyntaxError(expected, context, pos, line, column)


class LSystemParser:
    """Parses L-system documents into :class:`LSystem` models.

    Instances hold only read-only settings and may be shared between threads.
    """

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        config = config or ParserConfig()
        # Longest alias first, so multi-character aliases win over their prefixes.
        self._aliases = tuple(sorted(config.aliases.items(), key=lambda item: -len(item[0])))
        self._context_span = config.context_span

    @property
    def aliases(self) -> Mapping[str, Rule]:
        return dict(self._aliases)

    def parse(self, source: Source) -> LSystem:
        data = _read_source(source)
        try:
            if isinstance(data, bytes):
                data = _decode(data, self._context_span)
            scanner = Scanner(data, self._context_span)
            lsystem = self._lsystem(scanner)
            self._end(scanner)
        except LSystemSyntaxError as exc:
            logger.info("L-system syntax error at line %d, column %d: expecting %s", exc.line, exc.column, exc.rule)
            raise
        logger.debug(
            "Parsed L-system: generations=%d angle=%s scale=%s axiom=%d rules, %d predecessors",
            lsystem.generations,
            lsystem.angle,
            lsystem.scale,
            len(lsystem.axiom),
            len(lsystem.productions),
        )
        return lsystem

    def _rule(self, scanner: Scanner) -> Rule:
        scanner.skip()
        for name, rule in self._aliases:
            if scanner.text.startswith(name, scanner.pos):
                scanner.pos += len(name)
                return rule
        char = scanner.peek()
        if not char or char in " \n":
            raise scanner.error("rule")
        scanner.pos += 1
        return Rule.word(char)

    def _rules(self, scanner: Scanner) -> Rules:
        rules = [self._rule(scanner)]
        while True:
            mark = scanner.pos
            line_done = scanner.skip() or scanner.at_end() or scanner.peek() == "\n"
            scanner.pos = mark
            if line_done:
                return tuple(rules)
            rules.append(self._rule(scanner))

    def _line_end(self, scanner: Scanner) -> None:
        if not scanner.line_end():
            raise scanner.error("newline")

    def _real(self, scanner: Scanner) -> float:
        scanner.skip()
        start = scanner.pos
        value = float(scanner.match(_REAL, "real"))
        if not math.isfinite(value):
            raise scanner.error("finite real", start)
        return value

    def _probability(self, scanner: Scanner) -> float:
        scanner.skip()
        if scanner.peek() != "(":
            return 1.0
        scanner.pos += 1
        scanner.skip()
        start = scanner.pos
        probability = self._real(scanner)
        if not 0.0 < probability <= 1.0:
            raise scanner.error("probability in (0, 1]", start)
        scanner.expect(")")
        return probability

    def _production(self, scanner: Scanner) -> tuple[Rule, Production]:
        predecessor = self._rule(scanner)
        probability = self._probability(scanner)
        scanner.expect("->")
        successor = self._rules(scanner)
        return predecessor, Production(successor=successor, probability=probability)

    def _productions(self, scanner: Scanner) -> Dict[Rule, List[Production]]:
        table: Dict[Rule, List[Production]] = {}
        while True:
            predecessor, production = self._production(scanner)
            table.setdefault(predecessor, []).append(production)
            mark = scanner.pos
            if not scanner.line_end():
                break
            scanner.skip()
            if scanner.at_end() or scanner.peek() == "\n":
                # Trailing newline(s), handled by _end.
                scanner.pos = mark
                break
        return table

    def _lsystem(self, scanner: Scanner) -> LSystem:
        scanner.expect("generations:")
        scanner.skip()
        start = scanner.pos
        generations = int(scanner.match(_INTEGER, "integer"))
        if generations < 0:
            raise scanner.error("non-negative integer", start)
        self._line_end(scanner)

        scanner.expect("angle:")
        angle = self._real(scanner)
        self._line_end(scanner)

        scanner.expect("scale:")
        scale = self._real(scanner)
        self._line_end(scanner)

        scanner.expect("axiom:")
        axiom = self._rules(scanner)
        self._line_end(scanner)

        productions = self._productions(scanner)
        return LSystem(
            generations=generations,
            angle=angle,
            scale=scale,
            axiom=axiom,
            productions=productions,
        )

    def _end(self, scanner: Scanner) -> None:
        while scanner.line_end():
            pass
        if not scanner.at_end():
            raise scanner.error("end of input")


def _read_source(source: Source) -> Union[str, bytes]:
    if isinstance(source, (str, bytes)):
        return source
    return source.read()


def _decode(data: bytes, context_span: int) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        # Report against the replaced text so line and column stay meaningful.
        text = data.decode("utf-8", errors="replace")
        pos = len(data[:exc.start].decode("utf-8"))
        raise Scanner(text, context_span).error("UTF-8 text", pos) from exc


_default_parser = LSystemParser()


def parse(source: Source) -> LSystem:
    return _default_parser.parse(source)
