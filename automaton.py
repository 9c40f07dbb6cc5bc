from abc import ABC, abstractmethod
from collections import defaultdict
from dataclasses import dataclass, field
from typing_extensions import *

from graphviz import Digraph

from state import EPSILON, State, Symbol, symbol_label
from transition import TransitionFunction


def word_label(word: Sequence[Symbol]) -> str:
    """
    Printable form of a word; the empty word shows as ε. Single-character
    symbols are run together, longer ones are separated by spaces.
    """
    labels = [str(symbol) for symbol in word]
    if not labels:
        return "ε"
    separator = "" if all(len(label) == 1 for label in labels) else " "
    return separator.join(labels)


def states_label(states: Iterable[State]) -> str:
    return "{" + ",".join(state.name for state in sorted(states)) + "}"


# -----------------------------------------------------------------------------
# Tracing
# -----------------------------------------------------------------------------


class TraceSink(Protocol):
    """Observer notified while a machine decides a word."""

    def transition(
        self, state: State, symbol: Symbol, destinations: FrozenSet[State]
    ) -> None: ...

    def result(self, word: Tuple[Symbol, ...], accepted: bool) -> None: ...


class PrintTrace:
    """Writes each explored step as `<q0,a> --> {q0,q1}`."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def transition(self, state, symbol, destinations):
        print(
            f"<{state},{symbol_label(symbol)}> --> {states_label(destinations)}",
            file=self.stream,
        )

    def result(self, word, accepted):
        verdict = "accepted" if accepted else "rejected"
        print(f"{word_label(word)} --> {verdict}", file=self.stream)


class RecordingTrace:
    def __init__(self):
        self.transitions: List[Tuple[State, Symbol, FrozenSet[State]]] = []
        self.results: List[Tuple[Tuple[Symbol, ...], bool]] = []

    def transition(self, state, symbol, destinations):
        self.transitions.append((state, symbol, destinations))

    def result(self, word, accepted):
        self.results.append((word, accepted))


# -----------------------------------------------------------------------------
# Machines
# -----------------------------------------------------------------------------


@dataclass
class FiniteAutomaton(ABC):
    """
    Common shape of DFA and NFA: M = (Q, delta, q0, F). Base class only.

    Q and F are not checked against each other or against delta; that is
    the job of whoever builds the machine (see io_utils.MachineDescription).
    """

    states: FrozenSet[State] = field(default_factory=frozenset)
    delta: TransitionFunction = field(default_factory=TransitionFunction)
    initial_state: Optional[State] = None
    accepting_states: FrozenSet[State] = field(default_factory=frozenset)
    trace: Optional[TraceSink] = field(default=None, compare=False, repr=False)

    kind: ClassVar[str] = "Automaton"

    def __post_init__(self):
        self.states = frozenset(self.states)
        self.accepting_states = frozenset(self.accepting_states)

    def step(self, state: State, symbol: Symbol) -> FrozenSet[State]:
        return self.delta.lookup(state, symbol)

    def accept(self, word: Sequence[Symbol]) -> bool:
        """Decide whether the machine accepts `word` (a str is one symbol per char)."""
        symbols = tuple(word)
        accepted = self._decide(symbols)
        if self.trace is not None:
            self.trace.result(symbols, accepted)
        return accepted

    def accepts_all(self, words: Iterable[Sequence[Symbol]]) -> bool:
        # a list, not a generator, so every word is decided (and traced)
        return all([self.accept(word) for word in words])

    def is_deterministic(self) -> bool:
        return self.delta.is_deterministic()

    @abstractmethod
    def _decide(self, word: Tuple[Symbol, ...]) -> bool: ...

    def _emit(self, state: State, symbol: Symbol, destinations: FrozenSet[State]):
        if self.trace is not None:
            self.trace.transition(state, symbol, destinations)

    # -------------------------------------------------------------------------
    # Visualization
    # -------------------------------------------------------------------------

    def _get_state_id(self, state: State, state_to_id: dict) -> str:
        """Get or create a clean ID for a state."""
        if state not in state_to_id:
            state_to_id[state] = f"s{len(state_to_id)}"
        return state_to_id[state]

    def to_graphviz(self, filename: Optional[str] = None, view: bool = False) -> Digraph:
        """Build a Graphviz diagram; rendered to PNG only when a filename is given."""
        dot = Digraph(
            name=self.kind,
            format="png",
            graph_attr={
                "rankdir": "LR",
                "splines": "true",
                "nodesep": "0.8",
                "ranksep": "1.2",
                "label": self.kind,
                "labelloc": "t",
                "fontsize": "14",
                "fontname": "Arial",
            },
            node_attr={
                "shape": "circle",
                "fontsize": "14",
                "fontname": "Arial",
                "style": "filled",
                "fillcolor": "lightblue",
            },
            edge_attr={"fontsize": "12", "fontname": "Arial", "arrowsize": "0.8"},
        )

        state_to_id: Dict[State, str] = {}

        dot.node("__start__", shape="point", width="0.01", style="invis")

        # transitions may point at states outside Q; draw them anyway
        for state in sorted(self.states | self.delta.states()):
            node_id = self._get_state_id(state, state_to_id)
            if state in self.accepting_states:
                dot.node(
                    node_id,
                    label=state.name,
                    shape="doublecircle",
                    fillcolor="lightgreen",
                )
            else:
                dot.node(node_id, label=state.name)

        if self.initial_state is not None:
            start_id = self._get_state_id(self.initial_state, state_to_id)
            dot.edge("__start__", start_id, penwidth="2")

        edges = defaultdict(list)
        for src, symbol, tgt in self.delta.transitions():
            edges[(src, tgt)].append(symbol_label(symbol))

        for (src, tgt), labels in edges.items():
            src_id = self._get_state_id(src, state_to_id)
            tgt_id = self._get_state_id(tgt, state_to_id)
            if src == tgt:
                dot.edge(src_id, tgt_id, label=", ".join(labels), headport="n", tailport="n")
            else:
                dot.edge(src_id, tgt_id, label=", ".join(labels))

        if filename:
            dot.render(filename, view=view, cleanup=True)
        return dot


@dataclass
class NFA(FiniteAutomaton):
    """
    Nondeterministic finite automaton with epsilon-moves.

    Acceptance explores every branch depth-first and ORs the outcomes. A
    branch is a configuration (state, position in the word). The search
    runs on an explicit stack, so word length is not limited by the
    interpreter's recursion depth.

    Each configuration is expanded at most once per call. Re-entering a
    state at the same position (an epsilon-cycle) is a dead end, and two
    branches that meet in the same configuration share one expansion. The
    work per word is therefore bounded by |Q| * (len(word) + 1).
    """

    kind: ClassVar[str] = "NFA"

    def _decide(self, word):
        if self.initial_state is None:
            return False

        accepted = False
        expanded: Set[Tuple[State, int]] = set()
        # (state, position, pending symbol targets); a frame with pending
        # targets takes the symbol-move after its epsilon subtrees are done
        stack: List[Tuple[State, int, Optional[FrozenSet[State]]]] = [
            (self.initial_state, 0, None)
        ]

        while stack:
            state, index, pending = stack.pop()

            if pending is not None:
                self._emit(state, word[index], pending)
                for target in sorted(pending, reverse=True):
                    stack.append((target, index + 1, None))
                continue

            if (state, index) in expanded:
                continue
            expanded.add((state, index))

            epsilon_targets = self.step(state, EPSILON)

            if index == len(word):
                accepted |= state in self.accepting_states
            else:
                symbol_targets = self.step(state, word[index])
                if symbol_targets:
                    stack.append((state, index, symbol_targets))

            if epsilon_targets:
                self._emit(state, EPSILON, epsilon_targets)
                for target in sorted(epsilon_targets, reverse=True):
                    stack.append((target, index, None))

        return accepted

    def epsilon_closure(self, state: State) -> FrozenSet[State]:
        closure = {state}
        stack = [state]
        while stack:
            current = stack.pop()
            for target in self.step(current, EPSILON):
                if target not in closure:
                    closure.add(target)
                    stack.append(target)
        return frozenset(closure)


@dataclass
class DFA(FiniteAutomaton):
    """
    Deterministic finite automaton.

    delta must be epsilon-free with at most one destination per key. A
    missing transition leads to an implicit dead state, so the word is
    rejected rather than treated as an error.
    """

    kind: ClassVar[str] = "DFA"

    def __post_init__(self):
        super().__post_init__()
        if not self.delta.is_deterministic():
            raise ValueError(
                "DFA transition function must have no epsilon-moves and "
                "at most one destination per (state, symbol)"
            )

    def _decide(self, word):
        current = self.initial_state
        for symbol in word:
            if current is None:
                return False
            targets = self.step(current, symbol)
            self._emit(current, symbol, targets)
            current = next(iter(targets), None)
        return current is not None and current in self.accepting_states

    def to_nfa(self) -> NFA:
        return NFA(
            states=self.states,
            delta=self.delta,
            initial_state=self.initial_state,
            accepting_states=self.accepting_states,
            trace=self.trace,
        )
