from dataclasses import dataclass
from typing_extensions import *


# Epsilon is kept outside the string alphabet so no symbol can collide with it.
EPSILON = None

Symbol = Optional[str]


@dataclass(frozen=True, order=True)
class State:
    """A named automaton state. Identity and ordering are by name only."""

    name: str

    def __str__(self) -> str:
        return self.name


def symbol_label(symbol: Symbol) -> str:
    return "ε" if symbol is EPSILON else str(symbol)
