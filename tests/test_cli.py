"""Tests for the skill-picker CLI."""

import io
import json

import pytest
import readchar

from skill_picker import __version__
from skill_picker.cli import EXIT_CANCELLED, EXIT_NO_TTY, build_parser, main

CATALOG = """\
Python:
  - ruff
  - name: mypy
    hint: types
JS:
  - eslint
"""


class FakeTTY(io.StringIO):
    def isatty(self):
        return True


@pytest.fixture
def catalog(tmp_path):
    path = tmp_path / "skills.yaml"
    path.write_text(CATALOG)
    return path


@pytest.fixture
def keys(monkeypatch):
    """Feed scripted keystrokes to the interactive picker."""
    pending: list[str] = []

    def fake_readkey():
        if not pending:
            raise EOFError
        return pending.pop(0)

    monkeypatch.setattr("sys.stdin", FakeTTY())
    monkeypatch.setattr(readchar, "readkey", fake_readkey)
    return pending


def test_parser_has_subcommands():
    parser = build_parser()
    args = parser.parse_args(["pick", "c.yaml", "--max-items", "5", "--json"])
    assert args.command == "pick"
    assert args.max_items == 5
    assert args.json
    assert parser.parse_args(["list", "c.yaml"]).command == "list"


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    main([])
    assert "usage: skill-picker" in capsys.readouterr().out


def test_list(catalog, capsys):
    main(["list", str(catalog)])
    out = capsys.readouterr().out
    assert "Python (2)" in out
    assert "mypy  types" in out
    assert "3 option(s) in 2 group(s)" in out


def test_select_without_prompt(catalog, capsys):
    main(["pick", str(catalog), "--select", "mypy, eslint"])
    assert capsys.readouterr().out.split() == ["mypy", "eslint"]


def test_select_as_json(catalog, capsys):
    main(["pick", str(catalog), "--select", "ruff", "--json"])
    assert json.loads(capsys.readouterr().out) == ["ruff"]


def test_select_unknown_name(catalog, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["pick", str(catalog), "--select", "ruff,nope"])
    assert excinfo.value.code == 1
    assert "nope" in capsys.readouterr().err


def test_invalid_catalog(tmp_path, capsys):
    path = tmp_path / "bad.yaml"
    path.write_text("just text")
    with pytest.raises(SystemExit) as excinfo:
        main(["list", str(path)])
    assert excinfo.value.code == 1
    assert "Invalid catalog" in capsys.readouterr().err


def test_pick_requires_tty(catalog, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO())
    with pytest.raises(SystemExit) as excinfo:
        main(["pick", str(catalog)])
    assert excinfo.value.code == EXIT_NO_TTY
    assert "requires a TTY" in capsys.readouterr().err


def test_interactive_pick(catalog, keys, capsys):
    keys.extend([readchar.key.DOWN, readchar.key.SPACE, readchar.key.ENTER])
    main(["pick", str(catalog), "--json"])
    assert json.loads(capsys.readouterr().out) == ["mypy"]


def test_interactive_pick_with_initial(catalog, keys, capsys):
    keys.append(readchar.key.ENTER)
    main(["pick", str(catalog), "--initial", "eslint"])
    assert capsys.readouterr().out.split() == ["eslint"]


def test_interactive_cancel(catalog, keys):
    keys.append(readchar.key.ESC)
    with pytest.raises(SystemExit) as excinfo:
        main(["pick", str(catalog)])
    assert excinfo.value.code == EXIT_CANCELLED


def test_interactive_end_of_input_cancels(catalog, keys):
    with pytest.raises(SystemExit) as excinfo:
        main(["pick", str(catalog)])
    assert excinfo.value.code == EXIT_CANCELLED


def test_empty_catalog(tmp_path, keys, capsys):
    path = tmp_path / "empty.yaml"
    path.write_text("Python: []\n")
    main(["pick", str(path), "--json"])
    captured = capsys.readouterr()
    assert json.loads(captured.out) == []
    assert "No skills available" in captured.err


def test_initial_unknown_name(catalog, keys, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["pick", str(catalog), "--initial", "eslint,ghost"])
    assert excinfo.value.code == 1
    assert "ghost" in capsys.readouterr().err
