"""Reading credentials from a GNU .netrc file."""

from __future__ import annotations

import functools
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlsplit


class NetrcEntryNotFound(LookupError):
    """No netrc entry matches the requested machine and login."""

    def __init__(self) -> None:
        super().__init__("netrc config: entry not found")


@dataclass(frozen=True)
class Entry:
    """A netrc config entry."""

    machine: str = ""
    login: str = ""
    password: str = ""


def parse_netrc(data: str) -> list[Entry]:
    """Parse netrc text into complete entries."""
    entries: list[Entry] = []
    current: dict[str, str] = {}
    in_macro = False
    for line in data.split("\n"):
        if in_macro:
            if line == "":
                in_macro = False
            continue

        fields = line.split()
        i = 0
        while i < len(fields) - 1:
            key, value = fields[i], fields[i + 1]
            if key == "machine":
                current = {"machine": value}
            elif key in ("login", "password"):
                current[key] = value
            elif key == "macdef":
                in_macro = True
            if all(current.get(k) for k in ("machine", "login", "password")):
                entries.append(Entry(**current))
                current = {}
            i += 2

        if i < len(fields) and fields[i] == "default":
            break
    return entries


def netrc_path() -> Path:
    """Return the path of the netrc file to read."""
    env = os.environ.get("NETRC", "")
    if env:
        return Path(env)
    name = "_netrc" if sys.platform.startswith("win") else ".netrc"
    return Path.home() / name


@functools.lru_cache(maxsize=1)
def _load() -> tuple[Entry, ...]:
    path = netrc_path()
    try:
        data = path.read_text()
    except FileNotFoundError:
        return ()
    return tuple(parse_netrc(data))


def read(machine: str, login: str) -> Entry:
    """Return the entry for the given server URL and login."""
    entries = _load()
    parts = urlsplit(machine)
    if not parts.scheme and not machine.startswith("/"):
        raise ValueError(f"invalid URI for request: {machine!r}")
    for entry in entries:
        if entry.machine == parts.netloc and entry.login == login:
            return entry
    raise NetrcEntryNotFound()