import subprocess
import sys

import pytest

from jirakit.tui.helper import (
    get_pager,
    is_dumb_terminal,
    is_not_tty,
    pad,
    pager_out,
    split_text,
)


@pytest.fixture
def unix(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.delenv("WT_SESSION", raising=False)
    monkeypatch.delenv("JIRA_PAGER", raising=False)
    monkeypatch.delenv("PAGER", raising=False)
    return monkeypatch


@pytest.mark.parametrize(
    "text, n, expected",
    [
        ("", 1, ""),
        ("Hello, World!", 1, " Hello, World! "),
        ("Hello, World!", 3, "   Hello, World!   "),
    ],
)
def test_pad(text, n, expected):
    assert pad(text, n) == expected


def test_pad_rejects_negative():
    with pytest.raises(ValueError):
        pad("x", -1)


def test_is_dumb_terminal(monkeypatch):
    monkeypatch.setenv("TERM", "")
    monkeypatch.delenv("WT_SESSION", raising=False)
    assert is_dumb_terminal() is True

    monkeypatch.delenv("TERM", raising=False)
    assert is_dumb_terminal() is True

    monkeypatch.setenv("TERM", "foo")
    assert is_dumb_terminal() is False

    monkeypatch.delenv("TERM", raising=False)
    monkeypatch.setenv("WT_SESSION", "foo")
    assert is_dumb_terminal() is False


def test_is_dumb_terminal_ignores_case(monkeypatch):
    monkeypatch.delenv("WT_SESSION", raising=False)
    monkeypatch.setenv("TERM", "DUMB")
    assert is_dumb_terminal() is True


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Hello, World!", ["Hello, World!"]),
        ("Hello, World!\nHow is it going?", ["Hello, World!", "How is it going?"]),
        ("Hello, World!\r\nHow is it going?", ["Hello, World!", "How is it going?"]),
        (
            "Hello, World!\n\t\t\t\t\tHow is it going?\n\t\t\t\t\tIs everything alright!",
            ["Hello, World!", "\t\t\t\t\tHow is it going?", "\t\t\t\t\tIs everything alright!"],
        ),
    ],
)
def test_split_text(text, expected):
    assert split_text(text) == expected


def test_split_text_empty_and_trailing_newline():
    assert split_text("") == []
    assert split_text("a\n") == ["a"]


def test_get_pager_with_pager_env(unix):
    unix.setenv("TERM", "xterm")
    unix.setenv("PAGER", "")
    assert get_pager() == "less"
    unix.setenv("PAGER", "more")
    assert get_pager() == "more"


def test_get_pager_term_without_pager(unix):
    unix.setenv("TERM", "dumb")
    assert get_pager() == "cat"
    unix.setenv("TERM", "")
    assert get_pager() == "cat"
    unix.setenv("TERM", "xterm")
    assert get_pager() == "less"


def test_get_pager_with_jira_pager(unix):
    unix.setenv("JIRA_PAGER", "bat")
    unix.setenv("TERM", "dumb")
    assert get_pager() == "cat"
    unix.setenv("TERM", "")
    assert get_pager() == "cat"
    unix.setenv("TERM", "xterm")
    assert get_pager() == "bat"


def test_get_pager_term_takes_precedence(unix):
    unix.setenv("TERM", "")
    unix.setenv("PAGER", "")
    unix.setenv("JIRA_PAGER", "")
    assert get_pager() == "cat"

    unix.setenv("PAGER", "more")
    unix.setenv("TERM", "dumb")
    assert get_pager() == "cat"

    unix.setenv("TERM", "xterm")
    assert get_pager() == "more"


def test_get_pager_on_windows(monkeypatch):
    monkeypatch.setattr(sys, "platform", "win32")
    monkeypatch.setenv("TERM", "xterm")
    assert get_pager() == ""


def test_pager_out_prints_without_pager(monkeypatch, capfd):
    monkeypatch.setattr(sys, "platform", "win32")
    pager_out("plain output")
    assert capfd.readouterr().out == "plain output"


def test_pager_out_through_cat(unix, capfd):
    unix.setenv("TERM", "dumb")
    pager_out("paged text\n")
    assert capfd.readouterr().out == "paged text\n"


def test_pager_out_environment(unix, capfd):
    unix.setenv("TERM", "xterm")
    unix.setenv("PAGER", "more")
    unix.delenv("LESS", raising=False)
    unix.setenv("JIRA_PAGER", "env")
    pager_out("ignored")
    lines = capfd.readouterr().out.splitlines()
    assert "LESS=R" in lines
    assert not any(line.startswith("PAGER=") for line in lines)


def test_pager_out_missing_pager(unix):
    unix.setenv("TERM", "xterm")
    unix.setenv("JIRA_PAGER", "no-such-pager-program-here")
    with pytest.raises(FileNotFoundError):
        pager_out("text")


def test_pager_out_failing_pager(unix):
    unix.setenv("TERM", "xterm")
    unix.setenv("JIRA_PAGER", "false")
    with pytest.raises(subprocess.CalledProcessError):
        pager_out("text")


class _FakeTTY:
    def isatty(self):
        return True


class _FakePipe:
    def isatty(self):
        return False


def test_is_not_tty(monkeypatch):
    monkeypatch.setattr(sys, "stdout", _FakeTTY())
    assert is_not_tty() is False
    monkeypatch.setattr(sys, "stdout", _FakePipe())
    assert is_not_tty() is True