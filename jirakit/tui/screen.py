"""A terminal screen that runs one main loop around a root widget."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional, TypeVar

import urwid

T = TypeVar("T")

LoopFactory = Callable[..., Any]


class Screen:
    """Runs a main loop and lets handlers stop, redraw or suspend it."""

    def __init__(
        self,
        palette: Optional[Iterable[tuple]] = None,
        loop_factory: Optional[LoopFactory] = None,
    ) -> None:
        self.palette = list(palette or [])
        self._loop_factory = loop_factory or urwid.MainLoop
        self._loop: Any = None

    @property
    def running(self) -> bool:
        """Tell whether a main loop is currently running."""
        return self._loop is not None

    def paint(self, root: urwid.Widget) -> None:
        """Show root on the screen and run until stopped."""
        if self._loop is not None:
            raise RuntimeError("screen is already painting")
        self._loop = self._loop_factory(root, palette=self.palette, handle_mouse=False)
        try:
            self._loop.run()
        finally:
            self._loop = None

    def stop(self) -> None:
        """End the running main loop; does nothing when none is running."""
        if self._loop is not None:
            raise urwid.ExitMainLoop()

    def draw(self) -> None:
        """Redraw the screen of the running loop."""
        if self._loop is not None:
            self._loop.draw_screen()

    def suspend(self, fn: Callable[[], T]) -> T:
        """Give the terminal back while fn runs, then restore the screen."""
        if self._loop is None:
            return fn()
        display = self._loop.screen
        display.stop()
        try:
            return fn()
        finally:
            display.start()
            self._loop.draw_screen()