"""Prompting for text through an external editor."""

from __future__ import annotations

import os
import shlex
import shutil
import subprocess
import sys
import tempfile
from dataclasses import dataclass, field
from typing import Callable, Optional, TextIO

BOM = b"\xef\xbb\xbf"

LookPath = Callable[[str], "tuple[list[str], Optional[dict[str, str]]]"]


def default_editor() -> str:
    """Return the editor chosen from the environment."""
    for var in ("JIRA_EDITOR", "VISUAL", "EDITOR"):
        value = os.environ.get(var, "")
        if value:
            return value
    return "notepad" if sys.platform.startswith("win") else "nano"


def editor_name(editor_command: str) -> str:
    """Return the program name of an editor command."""
    if not editor_command:
        editor_command = default_editor()
    try:
        args = shlex.split(editor_command)
    except ValueError:
        args = []
    if args:
        editor_command = args[0]
    return os.path.basename(editor_command)


def _default_look_path(name: str) -> tuple[list[str], Optional[dict[str, str]]]:
    exe = shutil.which(name)
    if exe is None:
        raise FileNotFoundError(f"executable file not found in $PATH: {name}")
    return [exe], None


def _needs_bom() -> bool:
    return sys.platform.startswith("win")


def edit(editor_command: str, file_name: str = "", initial_value: str = "",
         look_path: Optional[LookPath] = None) -> str:
    """Open the editor on a temporary file and return what was saved."""
    pattern = file_name or "survey*.md"
    prefix, star, suffix = pattern.rpartition("*")
    if not star:
        prefix, suffix = pattern, ""
    fd, path = tempfile.mkstemp(prefix=prefix, suffix=suffix)
    try:
        with os.fdopen(fd, "wb") as handle:
            if _needs_bom():
                handle.write(BOM)
            handle.write(initial_value.encode("utf-8"))

        args = shlex.split(editor_command or default_editor())
        args.append(path)
        exe, env = (look_path or _default_look_path)(args[0])
        subprocess.run([*exe, *args[1:]], env=env, check=True)

        with open(path, "rb") as handle:
            raw = handle.read()
    finally:
        try:
            os.remove(path)
        except OSError:
            pass
    return raw.removeprefix(BOM).decode("utf-8")


@dataclass
class JiraEditor:
    """A prompt that launches an editor on 'e' and may be skipped with enter."""

    message: str
    default: str = ""
    help: str = ""
    editor_command: str = ""
    blank_allowed: bool = False
    append_default: bool = False
    file_name: str = ""
    help_input: str = "?"
    look_path: Optional[LookPath] = None
    stdin: TextIO = field(default_factory=lambda: sys.stdin)
    stdout: TextIO = field(default_factory=lambda: sys.stdout)

    def _render(self, show_help: bool = False) -> None:
        parts = []
        if show_help:
            parts.append(f"? {self.help}\n")
        parts.append(f"? {self.message} ")
        if self.help and not show_help:
            parts.append(f"[{self.help_input} for help] ")
        if self.default:
            parts.append(f"({self.default}) ")
        skip = ", enter to skip" if self.blank_allowed else ""
        parts.append(f"[(e) to launch {editor_name(self.editor_command)}{skip}] ")
        self.stdout.write("".join(parts))
        self.stdout.flush()

    def prompt(self) -> str:
        """Ask for input and return the edited text."""
        initial = self.default if self.default and self.append_default else ""
        self._render()
        while True:
            char = self.stdin.read(1)
            if char == "":
                raise EOFError("input closed")
            if char in ("e", "\x04"):
                break
            if char in ("\r", "\n"):
                if self.blank_allowed:
                    return initial
                continue
            if char == "\x03":
                raise KeyboardInterrupt
            if char == self.help_input and self.help:
                self._render(show_help=True)

        text = edit(self.editor_command, self.file_name, initial, self.look_path)
        if not text and not self.append_default:
            return self.default
        return text