"""Conversion of Jira wiki markup to CommonMark markdown."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

TAG_HEADING1 = "h1."
TAG_HEADING2 = "h2."
TAG_HEADING3 = "h3."
TAG_HEADING4 = "h4."
TAG_HEADING5 = "h5."
TAG_HEADING6 = "h6."
TAG_BLOCK_QUOTE = "bq."
TAG_QUOTE = "{quote}"
TAG_PANEL = "{panel}"
TAG_CODE_BLOCK = "{code}"
TAG_NO_FORMAT = "{noformat}"
TAG_LINK = "["
TAG_ORDERED_LIST = "#"
TAG_UNORDERED_LIST = "*"  # '*' is either bold or an unordered list.
TAG_BOLD = "*"
TAG_TABLE = "||"

_ATTR_TITLE = "title"

VALID_TAGS = frozenset(
    {
        TAG_HEADING1,
        TAG_HEADING2,
        TAG_HEADING3,
        TAG_HEADING4,
        TAG_HEADING5,
        TAG_HEADING6,
        TAG_BLOCK_QUOTE,
        TAG_QUOTE,
        TAG_PANEL,
        TAG_CODE_BLOCK,
        TAG_NO_FORMAT,
        TAG_LINK,
        TAG_ORDERED_LIST,
        TAG_UNORDERED_LIST,
        TAG_BOLD,
        TAG_TABLE,
    }
)

REPLACEMENTS = {
    TAG_HEADING1: "#",
    TAG_HEADING2: "##",
    TAG_HEADING3: "###",
    TAG_HEADING4: "####",
    TAG_HEADING5: "#####",
    TAG_HEADING6: "######",
    TAG_QUOTE: "> ",
    TAG_PANEL: "---",
    TAG_BLOCK_QUOTE: ">",
    TAG_CODE_BLOCK: "```",
    TAG_NO_FORMAT: "```",
    TAG_ORDERED_LIST: "-",
    TAG_BOLD: "**",
    TAG_TABLE: "|",
}

_LINE_END = re.compile(r"[\r\n]")
_WORD_STOP = re.compile(r"[*{}\[\]]")


class _Family(Enum):
    TEXT_EFFECT = "text-effect"
    LIST = "list"
    HEADING = "heading"
    INLINE_QUOTE = "inline-quote"
    REFERENCE_LINK = "link"
    FENCED_CODE = "code"
    TABLE = "table"
    OTHER = "other"


def _replacement(tag: str) -> str:
    return REPLACEMENTS.get(tag, "")


@dataclass
class _Token:
    """A Jira tag found in a line, with its position in the trimmed line."""

    tag: str
    family: _Family
    start: int
    end: int
    attrs: dict[str, str] = field(default_factory=dict)

    def render(self, line: str, out: list[str]) -> int:
        """Write the markdown for this token; return the index where it ends."""
        handlers = {
            _Family.TEXT_EFFECT: self._text_effect,
            _Family.HEADING: self._heading,
            _Family.INLINE_QUOTE: self._inline_quote,
            _Family.LIST: self._list,
            _Family.REFERENCE_LINK: self._reference_link,
            _Family.TABLE: self._table,
            _Family.OTHER: self._other,
        }
        return handlers[self.family](line, out)

    def _text_effect(self, line: str, out: list[str]) -> int:
        marker = _replacement(line[self.start])
        out.append(marker + line[self.start + 1 : self.end] + marker)
        if self.end == len(line) - 1:
            out.append("\n")
        return self.end

    def _heading(self, line: str, out: list[str]) -> int:
        word = line[self.end + 1 :]
        out.append(_replacement(self.tag) + word)
        return self.end + len(word)

    def _inline_quote(self, line: str, out: list[str]) -> int:
        word = line[self.end + 1 :]
        out.append("\n" + _replacement(self.tag) + word)
        return self.end + len(word)

    def _list(self, line: str, out: list[str]) -> int:
        end = self.end + 1
        out.append("\t" * max(0, self.end - 1 - self.start))
        if end >= len(line):
            out.append("-")
            return self.end
        rest = line[end:].strip()
        out.append(f"- {rest}")
        return end + len(rest) + 1

    def _reference_link(self, line: str, out: list[str]) -> int:
        if len(line) < 2:
            return self.end
        pieces = line[self.start + 1 : self.end].split("|")
        if len(pieces) == 2:
            out.append(f"[{pieces[0]}]({pieces[1]})")
        else:
            out.append(f"[]({pieces[0]})")
        return self.end

    def _table(self, line: str, out: list[str]) -> int:
        if line[1:2] != "|":
            out.append(line)
            return self.end
        headers = line.replace(TAG_TABLE, _replacement(TAG_TABLE))
        columns = headers.split("|")
        separator = "|---" * max(0, len(columns) - 2)
        out.append(f"{headers}\n{separator}|")
        return self.end

    def _other(self, line: str, out: list[str]) -> int:
        closes_line = self.end == len(line) - 1
        if self.tag != TAG_QUOTE or not closes_line:
            out.append("\n" + _replacement(self.tag))
        if self.tag == TAG_PANEL:
            title = self.attrs.get(_ATTR_TITLE)
            if title is not None:
                out.append(f"\n**{title}**\n")
            if not closes_line:
                out.append("\n")
        return self.end

    def render_fenced_code(self, index: int, lines: list[str], out: list[str]) -> int:
        """Write a fenced code block; return the index of its last line."""
        if index == len(lines) - 1:
            return index

        fence = _replacement(self.tag)
        out.append("\n" + fence)
        title = self.attrs.get(_ATTR_TITLE)
        if title is not None:
            pieces = title.split(".")
            out.append(pieces[1] if len(pieces) == 2 else title)
        out.append("\n")

        i = index + 1
        while i < len(lines):
            stripped = lines[i].strip()
            if stripped in (TAG_CODE_BLOCK, TAG_NO_FORMAT):
                break
            close_at = _inline_close(stripped)
            if close_at > 0:
                out.append(stripped[:close_at] + "\n")
                break
            out.append(lines[i] + "\n")
            i += 1
        out.append(fence)
        return i


def parse(text: str) -> str:
    """Convert Jira wiki markup to CommonMark markdown."""
    return _render(_split_lines(text))


def _split_lines(text: str) -> list[str]:
    lines: list[str] = []
    size = len(text)
    beg = 0
    while beg < size:
        match = _LINE_END.search(text, beg)
        end = match.start() if match else size
        lines.append(text[beg:end])
        while end < size and text[end] == "\r":
            end += 1
        beg = end + 1
    return lines


def _render(lines: list[str]) -> str:
    out: list[str] = []
    line_num = 0
    while line_num < len(lines):
        line = lines[line_num]
        tokens = _tokenize(line)

        if not tokens:
            out.append(line)
            line_num += 1
            if line_num < len(lines) - 1:
                out.append("\n")
            continue

        by_start: dict[int, _Token] = {}
        for token in tokens:
            by_start.setdefault(token.start, token)

        beg = 0
        while beg < len(line):
            end = beg
            token = by_start.get(beg)
            if token is None:
                out.append(line[beg])
            elif token.family is _Family.FENCED_CODE:
                line_num = token.render_fenced_code(line_num, lines, out)
                break
            else:
                end = token.render(line, out)
            beg = end + 1

        line_num += 1
        out.append("\n")

    return "".join(out)


def _tokenize(line: str) -> list[_Token]:
    line = line.strip()
    size = len(line)
    tokens: list[_Token] = []
    beg = 0

    while beg < size - 1:
        family = _tag_family(line, beg)

        if family is _Family.TEXT_EFFECT:
            end = line.find(line[beg], beg + 1)
            if end < 0:
                end = size
            word = line[beg : end + 1] if end < size - 1 else line[beg:end]
            tokens.append(_Token(word, family, beg, end))
            beg = end + 1
        elif family in (_Family.HEADING, _Family.INLINE_QUOTE):
            end = line.find(".", beg + 1)
            if end < 0:
                end = size
            tokens.append(_Token(line[beg : end + 1], family, beg, end))
            break
        elif family is _Family.LIST:
            rest = line[beg:]
            end = beg + len(rest) - len(rest.lstrip(line[beg]))
            tokens.append(_Token(line[beg:end], family, beg, end))
            beg = end + 1
        elif family is _Family.REFERENCE_LINK:
            end = line.find("]", beg + 1)
            if end < 0:
                end = size
            tokens.append(_Token(line[beg : end + 1], family, beg, end))
            beg = end
        elif family is _Family.TABLE:
            end = size - 1
            tokens.append(_Token(line, family, beg, end))
            beg = end
        else:
            match = _WORD_STOP.search(line, beg + 1)
            end = match.start() if match else size
            if end != size and line[end] not in "*{[":
                end += 1
            word, attrs = _extract_attributes(line[beg:end])
            if word in VALID_TAGS:
                kind = (
                    _Family.FENCED_CODE
                    if word in (TAG_CODE_BLOCK, TAG_NO_FORMAT)
                    else _Family.OTHER
                )
                tokens.append(_Token(word, kind, beg, end - 1, attrs))
            beg = end

    return tokens


def _extract_attributes(token: str) -> tuple[str, dict[str, str]]:
    attrs: dict[str, str] = {}
    if not token.startswith("{") or ":" not in token:
        return token, attrs

    pieces = token.split(":")
    if len(pieces) != 2 or not pieces[1]:
        return token, attrs

    tag = pieces[0] + "}"
    meta = pieces[1][:-1]

    for item in meta.split("|"):
        props = item.split("=")
        if len(props) == 1:
            attrs[_ATTR_TITLE] = props[0]
        elif props[0] == _ATTR_TITLE:
            attrs[_ATTR_TITLE] = props[1]

    return tag, attrs


def _tag_family(line: str, beg: int) -> _Family:
    current, following = line[beg], line[beg + 1]
    if current == TAG_BOLD and following not in (" ", current):
        return _Family.TEXT_EFFECT
    if current in (TAG_ORDERED_LIST, TAG_UNORDERED_LIST) and following in (" ", current):
        return _Family.LIST
    if len(line) >= 3 and current == "h" and line[2] == ".":
        return _Family.HEADING
    if len(line) >= 3 and current == "b" and line[2] == ".":
        return _Family.INLINE_QUOTE
    if current == "[" and line.find("]", beg + 1) >= 0:
        return _Family.REFERENCE_LINK
    if len(line) - 1 != beg and current == "|" and line[-1] == "|":
        return _Family.TABLE
    return _Family.OTHER


def _inline_close(line: str) -> int:
    for tag in (TAG_CODE_BLOCK, TAG_NO_FORMAT):
        if len(line) > len(tag) and line.endswith(tag):
            return len(line) - len(tag)
    return 0