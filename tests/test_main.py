"""Tests for the language validation driver."""

import pytest

from main import USAGE, main

MACHINE = """\
Q q0 q1 q2
delta q0 a q0 q0 a q1 q1 b q2
q0 q0
F q2
"""


@pytest.fixture
def machine_file(tmp_path):
    path = tmp_path / "machine.txt"
    path.write_text(MACHINE, encoding="utf-8")
    return str(path)


def write_words(tmp_path, content):
    path = tmp_path / "words.txt"
    path.write_text(content, encoding="utf-8")
    return str(path)


class TestUsage:
    @pytest.mark.parametrize("argv", [[], ["help"], ["a"], ["a", "b", "c"]])
    def test_wrong_arguments_print_usage(self, argv, capsys):
        assert main(argv) == 1
        assert capsys.readouterr().out.strip() == USAGE


class TestValidation:
    def test_whole_language_accepted(self, tmp_path, machine_file, capsys):
        words = write_words(tmp_path, "# words\nab\naab\n")
        assert main([machine_file, words]) == 0
        out = capsys.readouterr().out
        assert "Word ab is accepted" in out
        assert "Word aab is accepted" in out
        assert out.rstrip().endswith("Language is accepted by the machine")

    def test_one_rejected_word_rejects_language(self, tmp_path, machine_file, capsys):
        words = write_words(tmp_path, "ab\na\nε\naab\n")
        assert main([machine_file, words]) == 0
        out = capsys.readouterr().out
        assert "Word a is rejected" in out
        assert "Word ε is rejected" in out
        assert "Word aab is accepted" in out
        assert "Language is rejected by the machine" in out

    def test_long_word_gets_a_verdict(self, tmp_path, machine_file, capsys):
        words = write_words(tmp_path, "a" * 5000 + "b\n" + "a" * 5000 + "\n")
        assert main([machine_file, words]) == 0
        out = capsys.readouterr().out
        assert out.count(" is accepted") == 1
        assert out.count(" is rejected") == 1
        assert "Language is rejected by the machine" in out

    def test_trace_flag(self, tmp_path, machine_file, capsys):
        words = write_words(tmp_path, "ab\n")
        assert main(["--trace", machine_file, words]) == 0
        out = capsys.readouterr().out
        assert "Computing [ab]:" in out
        assert "<q1,b> --> {q2}" in out
        assert "ab --> accepted" in out

    def test_warnings_for_inconsistent_machine(self, tmp_path, capsys):
        machine = tmp_path / "bad.txt"
        machine.write_text("Q q0\ndelta q0 a q1\nq0 q0\nF q1\n", encoding="utf-8")
        words = write_words(tmp_path, "a\n")
        assert main([str(machine), words]) == 0
        out = capsys.readouterr().out
        assert "Warning: accept state q1 is not in Q" in out
        assert "Word a is accepted" in out


class TestErrors:
    def test_missing_file(self, tmp_path, machine_file, capsys):
        assert main([machine_file, str(tmp_path / "missing.txt")]) == 1
        assert capsys.readouterr().out.startswith("Error:")

    def test_malformed_machine(self, tmp_path, capsys):
        machine = tmp_path / "bad.txt"
        machine.write_text("Q q0\ndelta q0 a\nq0 q0\n", encoding="utf-8")
        words = write_words(tmp_path, "a\n")
        assert main([str(machine), words]) == 1
        assert "Error: line 2" in capsys.readouterr().out
