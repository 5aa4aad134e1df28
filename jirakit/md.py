"""Conversion between CommonMark and Jira flavoured markdown."""

from __future__ import annotations

from markdown_it import MarkdownIt
from markdown_it.token import Token

from jirakit.jirawiki import parse

_ESCAPED = str.maketrans({"(": "\\(", ")": "\\)", "[": "\\[", "]": "\\]"})


def _escape(text: str) -> str:
    return text.translate(_ESCAPED)


class _JiraRenderer:
    """Render a markdown-it token stream as Jira wiki markup."""

    def __init__(self, source: str) -> None:
        self._source_lines = source.split("\n")
        self._out: list[str] = []
        self._lists: list[str] = []
        self._in_header = False
        self._link_stack: list[tuple[str, int]] = []

    def render(self, tokens: list[Token]) -> str:
        for token in tokens:
            self._block(token)
        return "".join(self._out)

    def _write(self, text: str) -> None:
        self._out.append(text)

    def _ends_with_newline(self) -> bool:
        joined = "".join(self._out[-2:])
        return not joined or joined.endswith("\n")

    def _block(self, token: Token) -> None:
        kind = token.type
        if kind == "heading_open":
            self._write(f"h{token.tag[1]}. ")
        elif kind == "heading_close":
            self._write("\n")
        elif kind == "paragraph_close":
            if not token.hidden:
                self._write("\n\n")
        elif kind == "inline":
            self._inline(token.children or [])
        elif kind == "blockquote_open":
            self._write("{quote}\n")
        elif kind == "blockquote_close":
            self._write("{quote}\n\n")
        elif kind == "hr":
            self._write("\n----\n")
        elif kind in ("bullet_list_open", "ordered_list_open"):
            if self._lists and not self._ends_with_newline():
                self._write("\n")
            self._lists.append("*" if kind == "bullet_list_open" else "#")
        elif kind in ("bullet_list_close", "ordered_list_close"):
            self._lists.pop()
            if not self._lists:
                self._write("\n")
        elif kind == "list_item_open":
            self._write("".join(self._lists) + " ")
        elif kind == "list_item_close":
            if not self._ends_with_newline():
                self._write("\n")
        elif kind == "thead_open":
            self._in_header = True
        elif kind == "thead_close":
            self._in_header = False
        elif kind in ("th_open", "td_open"):
            self._write("||" if self._in_header else "|")
        elif kind == "tr_close":
            self._write("||\n" if self._in_header else "|\n")
        elif kind == "table_close":
            self._write("\n")
        elif kind in ("fence", "code_block"):
            self._code(token)
        elif kind == "html_block":
            self._write(token.content)

    def _code(self, token: Token) -> None:
        if token.type == "fence" and not self._fence_closed(token):
            self._unclosed_fence(token)
            return
        lang = token.info.strip().split(" ")[0] if token.type == "fence" else ""
        opener = f"{{code:language={lang}}}" if lang else "{code}"
        self._write(f"{opener}\n{token.content}{{code}}\n")

    def _fence_closed(self, token: Token) -> bool:
        if token.map is None:
            return True
        start, end = token.map
        if end - 1 <= start or end - 1 >= len(self._source_lines):
            return False
        last = self._source_lines[end - 1].strip()
        return bool(last) and last.startswith(token.markup) and set(last) == {token.markup[0]}

    def _unclosed_fence(self, token: Token) -> None:
        start, end = token.map or (0, 0)
        block: list[str] = []
        for line in [*self._source_lines[start:end], ""]:
            if line.strip():
                block.append(_escape(line))
            elif block:
                self._write("\n".join(block) + "\n\n")
                block = []

    def _inline(self, children: list[Token]) -> None:
        for child in children:
            kind = child.type
            if kind == "text":
                self._write(_escape(child.content))
            elif kind in ("softbreak", "hardbreak"):
                self._write("\n")
            elif kind in ("strong_open", "strong_close"):
                self._write("*")
            elif kind in ("em_open", "em_close"):
                self._write("_")
            elif kind in ("s_open", "s_close"):
                self._write("-")
            elif kind == "code_inline":
                self._write("{{" + child.content + "}}")
            elif kind == "link_open":
                self._link_stack.append((str(child.attrGet("href") or ""), len(self._out)))
                self._write("[")
            elif kind == "link_close":
                href, mark = self._link_stack.pop()
                has_text = "".join(self._out[mark + 1 :]) != ""
                self._write(f"|{href}]" if has_text else f"{href}]")
            elif kind == "image":
                self._write(f"!{child.attrGet('src') or ''}!")
            elif kind == "html_inline":
                self._write(child.content)


def to_jira_md(md: str) -> str:
    """Translate CommonMark to Jira flavoured markdown."""
    if md == "":
        return md
    parser = MarkdownIt("commonmark").enable(["table", "strikethrough"])
    return _JiraRenderer(md).render(parser.parse(md))


def from_jira_md(jfm: str) -> str:
    """Translate Jira flavoured markdown to CommonMark."""
    return parse(jfm)