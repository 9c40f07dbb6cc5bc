from dataclasses import dataclass, field
from typing_extensions import *

from automaton import DFA, NFA, TraceSink
from state import EPSILON, State, Symbol
from transition import TransitionFunction

# Symbol tokens in a `delta` line that stand for the empty-string move
EPSILON_TOKENS = ("ε", "eps", "epsilon")

# A word-list line holding only this token is the empty word
EMPTY_WORD_TOKEN = "ε"


@dataclass
class MachineDescription:
    """Parsed (Q, delta, q0, F) tuple, before it becomes a machine."""

    states: FrozenSet[State] = field(default_factory=frozenset)
    delta: TransitionFunction = field(default_factory=TransitionFunction)
    initial_state: Optional[State] = None
    accepting_states: FrozenSet[State] = field(default_factory=frozenset)

    def to_nfa(self, trace: Optional[TraceSink] = None) -> NFA:
        return NFA(
            states=self.states,
            delta=self.delta,
            initial_state=self.initial_state,
            accepting_states=self.accepting_states,
            trace=trace,
        )

    def to_dfa(self, trace: Optional[TraceSink] = None) -> DFA:
        return DFA(
            states=self.states,
            delta=self.delta,
            initial_state=self.initial_state,
            accepting_states=self.accepting_states,
            trace=trace,
        )

    def validate(self) -> List[str]:
        """Describe inconsistencies between Q, delta, q0 and F. Never raises."""
        problems = []

        if self.initial_state is not None and self.initial_state not in self.states:
            problems.append(f"initial state {self.initial_state} is not in Q")

        for state in sorted(self.accepting_states - self.states):
            problems.append(f"accept state {state} is not in Q")

        for state in sorted(self.delta.states() - self.states):
            problems.append(f"transition uses state {state} which is not in Q")

        return problems


def _parse_symbol(token: str) -> Symbol:
    return EPSILON if token in EPSILON_TOKENS else token


def parse_machine(content: str) -> MachineDescription:
    """
    Parse the line-oriented machine format:

        Q q0 q1 q2
        delta q0 a q0 q0 a q1 q1 b q2
        q0 q0
        F q2

    Blank lines and lines starting with '#' are skipped. Several `delta`
    lines accumulate; a repeated Q or F line replaces the previous one.
    """
    states: Set[State] = set()
    accepting_states: Set[State] = set()
    initial_state = None
    delta = TransitionFunction()

    for lineno, raw in enumerate(content.splitlines(), start=1):
        line = raw.strip()

        if not line or line.startswith("#"):
            continue

        key, *args = line.split()

        if key == "Q":
            states = {State(name) for name in args}

        elif key == "F":
            accepting_states = {State(name) for name in args}

        elif key == "q0":
            if len(args) != 1:
                raise ValueError(f"line {lineno}: q0 takes exactly one state")
            initial_state = State(args[0])

        elif key == "delta":
            if not args or len(args) % 3 != 0:
                raise ValueError(
                    f"line {lineno}: delta expects <state> <symbol> <state> triples"
                )
            for i in range(0, len(args), 3):
                src, symbol, tgt = args[i : i + 3]
                delta.add(State(src), _parse_symbol(symbol), State(tgt))

        else:
            raise ValueError(f"line {lineno}: unknown key '{key}'")

    if initial_state is None:
        raise ValueError("machine description has no q0 line")

    return MachineDescription(
        states=frozenset(states),
        delta=delta,
        initial_state=initial_state,
        accepting_states=frozenset(accepting_states),
    )


def load_machine(filename: str) -> MachineDescription:
    with open(filename, "r", encoding="utf-8") as f:
        content = f.read()
    return parse_machine(content)


def format_machine(description: MachineDescription) -> str:
    """Write a description back in the format parse_machine reads."""
    lines = ["Q " + " ".join(state.name for state in sorted(description.states))]

    triples = [
        f"{src} {EPSILON_TOKENS[0] if symbol is EPSILON else symbol} {tgt}"
        for src, symbol, tgt in description.delta.transitions()
    ]
    if triples:
        lines.append("delta " + " ".join(triples))

    if description.initial_state is not None:
        lines.append(f"q0 {description.initial_state}")

    lines.append(
        "F " + " ".join(state.name for state in sorted(description.accepting_states))
    )
    return "\n".join(line.rstrip() for line in lines) + "\n"


def parse_words(content: str) -> List[Tuple[str, ...]]:
    """One word per line, each character one symbol."""
    words = []
    for raw in content.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if line == EMPTY_WORD_TOKEN:
            words.append(())
        else:
            words.append(tuple(line))
    return words


def read_words(filename: str) -> List[Tuple[str, ...]]:
    with open(filename, "r", encoding="utf-8") as f:
        content = f.read()
    return parse_words(content)
