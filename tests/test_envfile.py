from pathlib import Path

import pytest

from evo.core.envfile import (
    check_entry,
    format_line,
    parse_env_file,
    parse_env_text,
    parse_line,
    render_env,
    write_env_file,
)
from evo.core.errors import InvalidVariable, StoreParseError


def test_format_line_uses_export_prefix() -> None:
    assert format_line("PATH", "/usr/bin") == "export PATH=/usr/bin"


def test_parse_line_splits_on_first_equals() -> None:
    assert parse_line("export URL=http://x/?a=1") == ("URL", "http://x/?a=1")


def test_parse_line_keeps_spaces_in_value() -> None:
    assert parse_line("export GREETING=hello world") == ("GREETING", "hello world")


def test_parse_line_accepts_missing_export_prefix() -> None:
    assert parse_line("EDITOR=vim") == ("EDITOR", "vim")


def test_parse_line_allows_empty_value() -> None:
    assert parse_line("export EMPTY=") == ("EMPTY", "")


def test_parse_line_skips_blank_and_comment_lines() -> None:
    assert parse_line("") is None
    assert parse_line("   ") is None
    assert parse_line("# export A=1") is None


@pytest.mark.parametrize("raw", ["export FOO", "export =bar", "garbage"])
def test_parse_line_rejects_malformed_lines(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_line(raw)


def test_parse_env_text_last_line_wins() -> None:
    text = "export A=1\nexport B=2\nexport A=3\n"
    assert parse_env_text(text) == {"A": "3", "B": "2"}


def test_parse_env_text_reports_line_number(tmp_path: Path) -> None:
    path = tmp_path / ".evo"
    with pytest.raises(StoreParseError) as excinfo:
        parse_env_text("export A=1\n\nexport BROKEN\n", path)
    assert excinfo.value.lineno == 3
    assert excinfo.value.path == path
    assert str(path) in str(excinfo.value)


def test_render_env_sorts_and_terminates_lines() -> None:
    assert render_env({"B": "2", "A": "1"}) == "export A=1\nexport B=2\n"
    assert render_env({}) == ""


def test_write_then_parse_env_file(tmp_path: Path) -> None:
    path = tmp_path / ".evo"
    write_env_file(path, {"HOME": "/home/me", "SHELL": "/bin/zsh"})
    assert path.read_text(encoding="utf-8") == "export HOME=/home/me\nexport SHELL=/bin/zsh\n"
    assert parse_env_file(path) == {"HOME": "/home/me", "SHELL": "/bin/zsh"}


def test_parse_env_file_missing_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        parse_env_file(tmp_path / "absent")


def test_parse_line_keeps_value_whitespace() -> None:
    assert parse_line("export A=x \n") == ("A", "x ")
    assert parse_line("export B=  ") == ("B", "  ")
    assert parse_line("  export C= padded\t\r\n") == ("C", " padded\t")


@pytest.mark.parametrize(
    "name, value",
    [("", "x"), ("A=B", "x"), (" A", "x"), ("A\nB", "x"), ("A", "one\ntwo"), ("A", "cr\r")],
)
def test_check_entry_rejects_unstorable(name: str, value: str) -> None:
    with pytest.raises(InvalidVariable):
        check_entry(name, value)


def test_check_entry_accepts_plain_entries() -> None:
    check_entry("PATH", "/usr/bin:/bin")
    check_entry("EMPTY", "")
    check_entry("SPACED", "  a b  ")
