import pytest
import urwid

from jirakit.tui.screen import Screen


class FakeDisplay:
    def __init__(self, log):
        self.log = log

    def stop(self):
        self.log.append("stop")

    def start(self):
        self.log.append("start")


class FakeLoop:
    def __init__(self, widget, palette=(), handle_mouse=True):
        self.widget = widget
        self.palette = palette
        self.handle_mouse = handle_mouse
        self.log = []
        self.screen = FakeDisplay(self.log)
        self.draws = 0
        self.exited = False

    def run(self):
        try:
            self.widget(self)
        except urwid.ExitMainLoop:
            self.exited = True

    def draw_screen(self):
        self.draws += 1


def make_screen(palette=None):
    loops = []

    def factory(widget, **options):
        loop = FakeLoop(widget, **options)
        loops.append(loop)
        return loop

    return Screen(palette=palette, loop_factory=factory), loops


def test_paint_passes_root_and_palette():
    palette = [("body", "white", "black")]
    screen, loops = make_screen(palette)

    def root(loop):
        loop.log.append("ran")

    screen.paint(root)
    assert loops[0].widget is root
    assert loops[0].palette == palette
    assert loops[0].handle_mouse is False
    assert loops[0].log == ["ran"]


def test_stop_inside_paint_ends_the_loop():
    screen, loops = make_screen()

    def root(loop):
        screen.stop()
        loop.log.append("after")

    screen.paint(root)
    assert loops[0].exited is True
    assert "after" not in loops[0].log


def test_running_only_during_paint():
    screen, _ = make_screen()
    seen = []
    screen.paint(lambda loop: seen.append(screen.running))
    assert seen == [True]
    assert screen.running is False
    assert screen.stop() is None


def test_suspend_outside_loop_returns_result():
    screen, _ = make_screen()
    assert screen.suspend(lambda: "done") == "done"


def test_suspend_inside_loop_releases_and_restores_display():
    screen, loops = make_screen()
    results = []

    def root(loop):
        results.append(screen.suspend(lambda: loop.log.append("fn") or "value"))

    screen.paint(root)
    assert loops[0].log == ["stop", "fn", "start"]
    assert results == ["value"]
    assert loops[0].draws >= 1


def test_draw_redraws_running_loop():
    screen, loops = make_screen()
    screen.paint(lambda loop: screen.draw())
    assert loops[0].draws == 1


def test_nested_paint_is_rejected():
    screen, _ = make_screen()
    errors = []

    def root(loop):
        with pytest.raises(RuntimeError):
            screen.paint(lambda inner: None)
        errors.append("checked")

    screen.paint(root)
    assert errors == ["checked"]