"""Helpers shared by the terminal layouts: padding, text splitting and paging."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys


def pad(text: str, n: int) -> str:
    """Surround non-empty text with n spaces on each side."""
    if n < 0:
        raise ValueError("padding must not be negative")
    if not text:
        return text
    spaces = " " * n
    return f"{spaces}{text}{spaces}"


def split_text(s: str) -> list[str]:
    """Split text into lines, dropping one trailing carriage return per line."""
    lines = s.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def is_dumb_terminal() -> bool:
    """Tell whether TERM and WT_SESSION point to a terminal with limited capability."""
    term = os.environ.get("TERM", "").lower()
    wt_session = "WT_SESSION" in os.environ
    return not wt_session and term in ("", "dumb")


def is_not_tty() -> bool:
    """Tell whether standard output is not attached to a terminal."""
    stdout = sys.stdout
    return stdout is None or not stdout.isatty()


def _is_windows() -> bool:
    return sys.platform.startswith("win")


def get_pager() -> str:
    """Return the configured pager command, or an empty string for none."""
    if _is_windows():
        return ""
    if is_dumb_terminal():
        return "cat"
    return os.environ.get("JIRA_PAGER") or os.environ.get("PAGER") or "less"


def pager_out(out: str) -> None:
    """Show text through the configured pager, or print it when there is none."""
    pager_cmd = get_pager()
    if not pager_cmd:
        print(out, end="", flush=True)
        return

    pager, *pager_args = pager_cmd.split(" ")
    if shutil.which(pager) is None:
        raise FileNotFoundError(f"executable file not found in $PATH: {pager}")

    env = {key: value for key, value in os.environ.items() if key != "PAGER"}
    if "LESS" not in os.environ:
        env["LESS"] = "R"

    sys.stdout.flush()
    subprocess.run([pager, *pager_args], input=out, text=True, env=env, check=True)