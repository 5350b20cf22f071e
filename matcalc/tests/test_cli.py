"""Tests for the terminal front end."""

import pytest

import mcalc
from matcalc import new_session


@pytest.fixture(autouse=True)
def no_debug(monkeypatch):
    for name in ("MATCALC_DEBUG", "MATCALC_PRECISION", "MATCALC_PIVOT_TOLERANCE"):
        monkeypatch.delenv(name, raising=False)


def write_script(tmp_path, text):
    path = tmp_path / "script.mc"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_script_prints_one_line_per_statement(tmp_path, capsys):
    path = write_script(tmp_path, "# a comment\na = [1, 2\n3, 4]\ndet(a)\n")
    assert mcalc.main(["mcalc", path]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["=> [1, 2; 3, 4]", "=> -2"]


def test_script_error_sets_exit_code(tmp_path, capsys):
    path = write_script(tmp_path, "1 + 2\n1 / 0\n3\n")
    assert mcalc.main(["mcalc", path]) == 1
    out = capsys.readouterr().out.splitlines()
    assert out == ["=> 3", "! DivisionByZero: Division by zero on line 1", "=> 3"]


def test_script_ending_mid_statement_fails(tmp_path, capsys):
    path = write_script(tmp_path, "[1, 2;\n")
    assert mcalc.main(["mcalc", path]) == 1
    assert "unexpected end of file" in capsys.readouterr().out


def test_missing_script(tmp_path, capsys):
    assert mcalc.main(["mcalc", str(tmp_path / "missing.mc")]) == 1
    assert "FileNotFoundError" in capsys.readouterr().out


def test_help_flag(capsys):
    assert mcalc.main(["mcalc", "-h"]) == 0
    assert "Usage:" in capsys.readouterr().out


def test_too_many_arguments(capsys):
    assert mcalc.main(["mcalc", "a", "b"]) == 1
    assert "Usage:" in capsys.readouterr().out


def test_bad_config_is_reported(monkeypatch, capsys):
    monkeypatch.setenv("MATCALC_PRECISION", "lots")
    assert mcalc.main(["mcalc", "-h"]) == 2
    assert capsys.readouterr().out.startswith("ConfigError:")


def test_commands(capsys):
    session = new_session()
    session.evaluate("b = 2")
    session.evaluate("a = [1, 2]")
    assert mcalc.command(".vars", session)
    out = capsys.readouterr().out
    assert out.index("a = [1, 2]") < out.index("b = 2")
    assert "pi = 3.14159265359" in out

    assert mcalc.command(".help", session)
    assert "det(x)" in capsys.readouterr().out

    assert mcalc.command(".bogus", session)
    assert "No such command" in capsys.readouterr().out

    assert mcalc.command(".quit", session) is False


def test_evalf_command_shares_the_session(tmp_path, capsys):
    path = write_script(tmp_path, "z = 4\n")
    session = new_session()
    assert mcalc.command(f".evalf {path}", session)
    assert capsys.readouterr().out.strip() == "=> 4"
    assert session.evaluate("z + 1").output == "5"


def test_repl_prompts_follow_the_session(monkeypatch, capsys):
    lines = iter(["[1, 2", "3, 4]", ".quit"])
    prompts = []

    def fake_input(prompt):
        prompts.append(prompt)
        return next(lines)

    monkeypatch.setattr("builtins.input", fake_input)
    assert mcalc.main(["mcalc"]) == 0
    out = capsys.readouterr().out
    assert prompts == ["> ", ". ", "> "]
    assert "Little Mat Calculator" in out
    assert "=> [1, 2; 3, 4]" in out


def test_repl_stops_at_end_of_input(monkeypatch, capsys):
    def fake_input(prompt):
        raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)
    assert mcalc.main(["mcalc"]) == 0


def test_strip_anno_lines():
    assert mcalc.strip_anno_lines("# x\n1\n#y\n2") == ["1", "2"]
