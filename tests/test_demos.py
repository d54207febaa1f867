"""Demo models driven directly through update()."""

from datetime import datetime

from sketch_tui import Key, KeyCode, KeyEventKind, KeyModifiers, Msg, Paste, Quit, Resize, visible_length
from sketch_tui.channel import Channel
from sketch_tui.demos import DEMOS, Clock, Counter, PrettyCounter, TextInput
from sketch_tui.demos.clock import Tick, start_ticker
from sketch_tui.style import strip_ansi


def feed(model, *messages):
    follow_ups = []
    for message in messages:
        model, follow_up = model.update(Msg(message))
        follow_ups.append(follow_up)
    return model, follow_ups


def test_registry():
    assert set(DEMOS) == {"counter", "pretty-counter", "text-input", "clock"}


class TestCounter:
    def test_enter_increments_and_q_quits(self):
        model, follow_ups = feed(Counter(), Key(code=KeyCode.ENTER), Key(code=KeyCode.ENTER), Key(code="q"))
        assert model.count == 2
        assert follow_ups[:2] == [None, None]
        assert isinstance(follow_ups[2], Quit)
        assert strip_ansi(model.view()) == "2"

    def test_other_messages_ignored(self):
        model, follow_ups = feed(Counter(), Key(code="x"), Resize(width=1, height=1))
        assert model.count == 0
        assert follow_ups == [None, None]


class TestPrettyCounter:
    def test_follows_resize(self):
        model, _ = feed(PrettyCounter(width=10, height=4), Resize(width=40, height=12))
        assert (model.width, model.height) == (40, 12)

    def test_counts_presses_only(self):
        model, _ = feed(
            PrettyCounter(width=40, height=4),
            Key(code=KeyCode.ENTER),
            Key(code=KeyCode.ENTER, kind=KeyEventKind.RELEASE),
        )
        assert model.count == 1

    def test_ctrl_c_quits(self):
        _, follow_ups = feed(PrettyCounter(width=40, height=4), Key(code="c", modifiers=KeyModifiers.CONTROL))
        assert isinstance(follow_ups[0], Quit)

    def test_view_is_centered(self):
        view = PrettyCounter(count=7, width=40, height=4).view()
        lines = view.split("\n")
        assert len(lines) == 3
        last = strip_ansi(lines[-1])
        assert last.strip() == "Count: 7"
        assert last.startswith(" " * (20 - visible_length("Count: 7") // 2))


class TestTextInput:
    def test_typing_and_editing(self):
        model, _ = feed(
            TextInput(),
            Key(code="h"),
            Key(code="i"),
            Key(code=KeyCode.LEFT),
            Key(code="!"),
        )
        assert model.text == "h!i"
        assert model.cursor == 2

    def test_backspace_at_start_is_noop(self):
        model, _ = feed(TextInput(), Key(code=KeyCode.BACKSPACE))
        assert model == TextInput()

    def test_backspace_removes_before_cursor(self):
        model, _ = feed(TextInput(text="abc", cursor=2), Key(code=KeyCode.BACKSPACE))
        assert (model.text, model.cursor) == ("ac", 1)

    def test_cursor_is_clamped(self):
        model, _ = feed(TextInput(text="ab", cursor=2), Key(code=KeyCode.RIGHT))
        assert model.cursor == 2
        model, _ = feed(TextInput(text="ab", cursor=0), Key(code=KeyCode.LEFT))
        assert model.cursor == 0

    def test_paste_inserts_single_line(self):
        model, _ = feed(TextInput(text="[]", cursor=1), Paste(text="a\r\nb"))
        assert model.text == "[a b]"
        assert model.cursor == 4

    def test_ctrl_c_quits(self):
        model, follow_ups = feed(TextInput(text="x", cursor=1), Key(code="c", modifiers=KeyModifiers.CONTROL))
        assert model.text == "x"
        assert isinstance(follow_ups[0], Quit)

    def test_view_shows_cursor(self):
        assert strip_ansi(TextInput(text="ab", cursor=1).view()) == "ab"
        assert strip_ansi(TextInput(text="ab", cursor=2).view()) == "ab "


class TestClock:
    def test_startup_returns_tick(self):
        assert isinstance(Clock().startup(), Tick)

    def test_tick_updates_time(self):
        at = datetime(2024, 1, 1, 12, 30, 5)
        model, _ = feed(Clock(), Tick(at=at))
        assert model.now == at
        assert model.ticks == 1
        assert "12:30:05" in strip_ansi(model.view())

    def test_ticker_sends_until_closed(self):
        channel = Channel()
        thread = start_ticker(channel.sender(), interval=0.01)
        assert channel.recv().is_(Tick)
        channel.close()
        thread.join(2.0)
        assert not thread.is_alive()
