"""Text layout: a scrollable view of plain text."""

from __future__ import annotations

from typing import Callable, Optional

import urwid

from jirakit.tui.helper import split_text
from jirakit.tui.screen import Screen


class _TextView(urwid.WidgetPlaceholder):
    """Closes on Escape or q and scrolls otherwise."""

    def __init__(self, widget: urwid.Widget, on_close: Callable[[], None]) -> None:
        super().__init__(widget)
        self._on_close = on_close

    def keypress(self, size, key):
        if key in ("esc", "q"):
            self._on_close()
            return None
        return self.original_widget.keypress(size, key)


class Text:
    """Shows a block of text until the user presses Escape or q."""

    def __init__(self, screen: Optional[Screen] = None) -> None:
        self.screen = screen or Screen()
        self._text = ""
        self._walker = urwid.SimpleListWalker([])
        self._view = _TextView(urwid.ListBox(self._walker), self.screen.stop)

    @property
    def text(self) -> str:
        """The text last rendered."""
        return self._text

    @property
    def lines(self) -> list[str]:
        """The lines on display."""
        return [widget.text for widget in self._walker]

    @property
    def widget(self) -> urwid.Widget:
        """The root widget of the layout."""
        return self._view

    def render(self, data: str) -> None:
        """Show data and run until the user closes the view."""
        self._text = data
        self._walker[:] = [urwid.Text(line) for line in split_text(data)]
        self.screen.paint(self._view)