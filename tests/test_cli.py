"""Tests for the interactive terminal."""

import pytest

import cli
from io_utils import load_machine

MACHINE = """\
Q q0 q1 q2
delta q0 ε q1 q1 ε q0 q1 a q2
q0 q0
F q2
"""


@pytest.fixture
def machine_file(tmp_path):
    path = tmp_path / "cycle.txt"
    path.write_text(MACHINE, encoding="utf-8")
    return str(path)


@pytest.fixture
def machines(machine_file):
    loaded = {}
    cli.run_command(["load", machine_file], loaded)
    return loaded


def run(machines, command):
    cli.run_command(command.split(), machines)


class TestRunCommand:
    def test_load_names_machine_after_file(self, machines, capsys):
        assert list(machines) == ["cycle"]
        run(machines, "list")
        assert "Machines: cycle" in capsys.readouterr().out

    def test_load_with_explicit_name(self, machine_file, capsys):
        loaded = {}
        cli.run_command(["load", machine_file, "m"], loaded)
        assert list(loaded) == ["m"]
        assert "Loaded m" in capsys.readouterr().out

    @pytest.mark.parametrize("word,verdict", [("a", "ACCEPTED"), ("b", "REJECTED"), ("ε", "REJECTED")])
    def test_test_command(self, machines, capsys, word, verdict):
        capsys.readouterr()
        run(machines, f"test cycle {word}")
        assert capsys.readouterr().out.strip() == verdict

    def test_trace_command(self, machines, capsys):
        capsys.readouterr()
        run(machines, "trace cycle a")
        out = capsys.readouterr().out
        assert "<q0,ε> --> {q1}" in out
        assert "<q1,a> --> {q2}" in out
        assert out.rstrip().endswith("ACCEPTED")

    def test_closure_command(self, machines, capsys):
        capsys.readouterr()
        run(machines, "closure cycle q0")
        assert capsys.readouterr().out.strip() == "{q0,q1}"

    def test_show_command(self, machines, capsys):
        capsys.readouterr()
        run(machines, "show cycle")
        out = capsys.readouterr().out
        assert "cycle (NFA)" in out
        assert "Alphabet: {a}" in out
        assert "Transitions: 3" in out

    def test_save_command(self, machines, tmp_path):
        target = tmp_path / "saved.txt"
        run(machines, f"save cycle {target}")
        assert load_machine(str(target)) == machines["cycle"]

    def test_delete_and_clear(self, machines, capsys):
        run(machines, "delete cycle")
        assert machines == {}
        run(machines, "show cycle")
        assert "Machine not found: cycle" in capsys.readouterr().out
        machines["x"] = None
        run(machines, "clear")
        assert machines == {}

    def test_unknown_command(self, machines, capsys):
        run(machines, "minimize")
        assert "Unknown command: minimize" in capsys.readouterr().out

    def test_missing_arguments(self, machines, capsys):
        capsys.readouterr()
        run(machines, "test cycle")
        assert "Usage: test <name> <word>" in capsys.readouterr().out


class TestMain:
    def test_session(self, machine_file, monkeypatch, capsys):
        commands = iter([f"load {machine_file}", "", "test cycle a", "load nope.txt", "exit"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(commands))
        cli.main()
        out = capsys.readouterr().out
        assert "ACCEPTED" in out
        assert "Error:" in out
        assert out.rstrip().endswith("Goodbye!")

    def test_end_of_input_exits(self, monkeypatch, capsys):
        def raise_eof(prompt=""):
            raise EOFError

        monkeypatch.setattr("builtins.input", raise_eof)
        cli.main()
        assert "Goodbye!" in capsys.readouterr().out
