import os
from typing_extensions import *

from automaton import RecordingTrace, states_label
from io_utils import EMPTY_WORD_TOKEN, MachineDescription, format_machine, load_machine
from state import State, symbol_label

HELP = """
Commands:
  LOADING:
    load <file> [name]           - Load a machine description
    save <name> <file>           - Write a machine back to a file
    list                         - List all loaded machines

  MACHINES:
    show <name>                  - Show machine info
    graph <name>                 - Visualize machine
    test <name> <word>           - Test if word is accepted (ε = empty word)
    trace <name> <word>          - Test and print every explored transition
    closure <name> <state>       - Epsilon-closure of a state

  GENERAL:
    delete <name>                - Delete machine
    clear                        - Clear all
    exit                         - Exit
"""


MACHINE_COMMANDS = ("show", "delete", "graph", "save", "test", "trace", "closure")


def _parse_word(token: str) -> Tuple[str, ...]:
    return () if token == EMPTY_WORD_TOKEN else tuple(token)


def run_command(parts: List[str], machines: Dict[str, MachineDescription]) -> None:
    """Execute one terminal command against the loaded machines."""
    cmd = parts[0].lower()

    if cmd == "help":
        print(HELP)

    elif cmd == "load":
        if len(parts) < 2:
            print("Usage: load <file> [name]")
            return
        name = parts[2] if len(parts) > 2 else os.path.basename(parts[1]).rsplit(".", 1)[0]
        description = load_machine(parts[1])
        machines[name] = description
        print(f"Loaded {name}")
        for problem in description.validate():
            print(f"Warning: {problem}")

    elif cmd == "list":
        if machines:
            print("Machines: " + ", ".join(sorted(machines)))
        else:
            print("Nothing loaded")

    elif cmd == "clear":
        machines.clear()
        print("Cleared")

    elif cmd not in MACHINE_COMMANDS:
        print(f"Unknown command: {cmd}")

    elif len(parts) < 2:
        print(f"Usage: {cmd} <name> ...")

    elif parts[1] not in machines:
        print(f"Machine not found: {parts[1]}")

    elif cmd == "show":
        description = machines[parts[1]]
        kind = "DFA" if description.delta.is_deterministic() else "NFA"
        print(f"\n{parts[1]} ({kind}):")
        print(f"  States: {states_label(description.states)}")
        print(f"  Alphabet: {{{','.join(sorted(description.delta.symbols()))}}}")
        print(f"  Start: {description.initial_state}")
        print(f"  Accepting: {states_label(description.accepting_states)}")
        print(f"  Transitions: {len(description.delta)}\n")

    elif cmd == "delete":
        del machines[parts[1]]
        print(f"Deleted {parts[1]}")

    elif cmd == "graph":
        machines[parts[1]].to_nfa().to_graphviz(filename=parts[1], view=True)
        print(f"Created: {parts[1]}.png")

    elif cmd == "save":
        if len(parts) < 3:
            print("Usage: save <name> <file>")
            return
        with open(parts[2], "w", encoding="utf-8") as f:
            f.write(format_machine(machines[parts[1]]))
        print(f"Saved {parts[1]} to {parts[2]}")

    elif cmd in ("test", "trace"):
        if len(parts) < 3:
            print(f"Usage: {cmd} <name> <word>")
            return
        recorder = RecordingTrace() if cmd == "trace" else None
        result = machines[parts[1]].to_nfa(trace=recorder).accept(_parse_word(parts[2]))
        if recorder is not None:
            for state, symbol, destinations in recorder.transitions:
                print(f"  <{state},{symbol_label(symbol)}> --> {states_label(destinations)}")
        print("ACCEPTED" if result else "REJECTED")

    elif cmd == "closure":
        if len(parts) < 3:
            print("Usage: closure <name> <state>")
            return
        nfa = machines[parts[1]].to_nfa()
        print(states_label(nfa.epsilon_closure(State(parts[2]))))


def main():
    """Simple interactive terminal for finite automaton operations."""
    machines: Dict[str, MachineDescription] = {}

    print("Finite Automata Terminal - Type 'help' for commands\n")

    while True:
        try:
            command = input("> ").strip()
            if not command:
                continue

            parts = command.split()
            if parts[0].lower() in ["exit", "quit"]:
                break

            run_command(parts, machines)

        except KeyboardInterrupt:
            print("\nUse 'exit' to quit")
        except EOFError:
            break
        except Exception as e:
            print(f"Error: {e}")

    print("Goodbye!")


if __name__ == "__main__":
    main()
