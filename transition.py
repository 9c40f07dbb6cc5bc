from collections import defaultdict
from typing_extensions import *

from state import EPSILON, State, Symbol


class TransitionFunction:
    """
    Transition relation of a finite automaton.

    Maps a (state, symbol) pair to the set of destination states. A key that
    was never populated maps to the empty set, so "no transition" is an
    ordinary answer rather than an error.
    """

    def __init__(self, triples: Iterable[Tuple[State, Symbol, State]] = ()):
        self._mapping: Dict[Tuple[State, Symbol], Set[State]] = defaultdict(set)
        for src, symbol, tgt in triples:
            self.add(src, symbol, tgt)

    def add(self, state: State, symbol: Symbol, destination: State) -> None:
        self._mapping[(state, symbol)].add(destination)

    def lookup(self, state: State, symbol: Symbol) -> FrozenSet[State]:
        # .get keeps the defaultdict from growing on misses
        return frozenset(self._mapping.get((state, symbol), ()))

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    def transitions(self) -> Iterator[Tuple[State, Symbol, State]]:
        """Yield every (source, symbol, destination) triple, epsilon first per source."""

        def key(item):
            (src, symbol), _ = item
            return (src, symbol is not EPSILON, symbol or "")

        for (src, symbol), targets in sorted(self._mapping.items(), key=key):
            for tgt in sorted(targets):
                yield src, symbol, tgt

    def symbols(self) -> FrozenSet[str]:
        return frozenset(
            symbol for (_, symbol) in self._mapping if symbol is not EPSILON
        )

    def states(self) -> FrozenSet[State]:
        result = set()
        for (src, _), targets in self._mapping.items():
            result.add(src)
            result.update(targets)
        return frozenset(result)

    def is_deterministic(self) -> bool:
        return all(
            symbol is not EPSILON and len(targets) <= 1
            for (_, symbol), targets in self._mapping.items()
        )

    def __contains__(self, key: Tuple[State, Symbol]) -> bool:
        return bool(self._mapping.get(key))

    def __eq__(self, other) -> bool:
        if not isinstance(other, TransitionFunction):
            return NotImplemented
        return set(self.transitions()) == set(other.transitions())

    def __len__(self) -> int:
        return sum(len(targets) for targets in self._mapping.values())

    def __repr__(self) -> str:
        return f"TransitionFunction({len(self)} transitions)"
