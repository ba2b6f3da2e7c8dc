from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from .rules import Rule, Rules


@dataclass(frozen=True)
class Production:
    successor: Rules
    probability: float = 1.0

    def __post_init__(self) -> None:
        if not self.successor:
            raise ValueError("Production successor must contain at least one rule.")
        if not 0.0 < self.probability <= 1.0:
            raise ValueError(f"Probability must be in (0, 1], got {self.probability}.")
        object.__setattr__(self, "successor", tuple(self.successor))


Productions = Tuple[Production, ...]


@dataclass(frozen=True)
class LSystem:
    generations: int
    angle: float
    scale: float
    axiom: Rules
    productions: Mapping[Rule, Productions]

    # The read-only productions view is unhashable, so the model is too.
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.generations < 0:
            raise ValueError(f"Generations must be non-negative, got {self.generations}.")
        if not self.axiom:
            raise ValueError("Axiom must contain at least one rule.")
        for predecessor, options in self.productions.items():
            if not options:
                raise ValueError(f"No productions provided for rule {predecessor!r}.")
        # Copy so that later changes to the caller's dict cannot leak in.
        object.__setattr__(self, "axiom", tuple(self.axiom))
        object.__setattr__(
            self,
            "productions",
            MappingProxyType({key: tuple(value) for key, value in self.productions.items()}),
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "generations": self.generations,
            "angle": self.angle,
            "scale": self.scale,
            "axiom": [str(rule) for rule in self.axiom],
            "productions": [
                {
                    "predecessor": str(predecessor),
                    "alternatives": [
                        {
                            "probability": option.probability,
                            "successor": [str(rule) for rule in option.successor],
                        }
                        for option in options
                    ],
                }
                for predecessor, options in self.productions.items()
            ],
        }

    def to_source(self) -> str:
        lines = [
            f"generations:{self.generations}",
            f"angle:{self.angle!r}",
            f"scale:{self.scale!r}",
            "axiom:" + "".join(str(rule) for rule in self.axiom),
        ]
        for predecessor, options in self.productions.items():
            for option in options:
                weight = "" if option.probability == 1.0 else f" ({option.probability!r})"
                successor = "".join(str(rule) for rule in option.successor)
                lines.append(f"{predecessor}{weight} -> {successor}")
        return "\n".join(lines) + "\n"
