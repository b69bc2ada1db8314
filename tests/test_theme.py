# tests/test_theme.py

from __future__ import annotations

import io
from pathlib import Path

from theme import DIM, HEX_DONE_DEFAULT, RESET, Theme, read_dotenv


class _TTY(io.StringIO):
    def isatty(self) -> bool:
        return True


def test_plain_theme_is_identity() -> None:
    theme = Theme.plain()
    for fn in (theme.done, theme.pending, theme.muted, theme.underline):
        assert fn("text") == "text"


def test_enabled_theme_wraps_in_escape_codes() -> None:
    theme = Theme(enabled=True)
    assert theme.muted("x") == DIM + "x" + RESET
    assert theme.done("x").startswith("\033[38;5;")
    assert Theme(enabled=True, truecolor=True, done_hex="#010203").done("x") == \
        "\033[38;2;1;2;3mx" + RESET


def test_from_env_not_a_tty_is_plain(tmp_path: Path) -> None:
    theme = Theme.from_env(io.StringIO(), env={}, dotenv=tmp_path / ".env")
    assert theme.enabled is False


def test_from_env_tty_and_force(tmp_path: Path) -> None:
    dotenv = tmp_path / ".env"
    assert Theme.from_env(_TTY(), env={}, dotenv=dotenv).enabled is True
    assert Theme.from_env(io.StringIO(), env={"FORCE_COLOR": "1"}, dotenv=dotenv).enabled is True
    assert Theme.from_env(_TTY(), env={"NO_COLOR": ""}, dotenv=dotenv).enabled is False
    forced = Theme.from_env(io.StringIO(), env={"FORCE_COLOR": "yes", "COLORTERM": "truecolor"},
                            dotenv=dotenv)
    assert forced.truecolor is True


def test_palette_overrides(tmp_path: Path) -> None:
    dotenv = tmp_path / ".env"
    dotenv.write_text(
        "# palette\n"
        "TASKBOARD_DONE=112233\n"
        "TASKBOARD_PENDING=#zzzzzz\n"
        "OTHER=#445566\n",
        encoding="utf-8",
    )
    assert read_dotenv(dotenv) == {"TASKBOARD_DONE": "#112233"}

    theme = Theme.from_env(_TTY(), env={}, dotenv=dotenv)
    assert theme.done_hex == "#112233"

    theme = Theme.from_env(_TTY(), env={"TASKBOARD_DONE": "#abcdef", "TASKBOARD_PENDING": "bad"},
                           dotenv=dotenv)
    assert theme.done_hex == "#abcdef"
    assert theme.pending_hex != "bad"


def test_missing_dotenv(tmp_path: Path) -> None:
    assert read_dotenv(tmp_path / "absent") == {}
    assert Theme.from_env(_TTY(), env={}, dotenv=tmp_path / "absent").done_hex == HEX_DONE_DEFAULT
