import sys
from typing_extensions import *

from automaton import PrintTrace, word_label
from io_utils import load_machine, read_words

USAGE = """Verifies if a Language is accepted by a Finite Automata.
Usage:
\tmachine <PATH_TO_MACHINE_FILE> <PATH_TO_LANGUAGE_FILE> [--trace]"""


def main(argv: Optional[List[str]] = None) -> int:
    """Check every word of a language file against a machine file."""
    args = list(sys.argv[1:] if argv is None else argv)

    trace = "--trace" in args
    if trace:
        args.remove("--trace")

    if len(args) != 2:
        print(USAGE)
        return 1

    machine_file, language_file = args

    try:
        description = load_machine(machine_file)
        words = read_words(language_file)
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    for problem in description.validate():
        print(f"Warning: {problem}")

    nfa = description.to_nfa(trace=PrintTrace() if trace else None)

    print("Validating language\n")
    language_accepted = True
    for word in words:
        if trace:
            print(f"\nComputing [{word_label(word)}]:")
        accepted = nfa.accept(word)
        print(f"Word {word_label(word)} is {'accepted' if accepted else 'rejected'}")
        if not accepted:
            language_accepted = False

    print(
        f"\nLanguage is {'accepted' if language_accepted else 'rejected'} by the machine"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
