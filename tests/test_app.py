import contextlib
import io
from unittest.mock import patch

import pytest
from blessed.keyboard import Keystroke

from fedit.app import Command, dispatch, main, run, translate_key
from fedit.editor import Direction, Editor, Modifiers
from fedit.line import Line
from fedit.point import Point


def ctrl(letter):
    return chr(ord(letter) & 0x1F)


class FakeTerminal:
    def __init__(self, keys, width=40, height=10):
        self._keys = list(keys)
        self.width = width
        self.height = height
        self.stream = io.StringIO()
        self.clear = "<clear>"
        self.clear_eol = "<eol>"

    def fullscreen(self):
        return contextlib.nullcontext()

    def raw(self):
        return contextlib.nullcontext()

    def inkey(self, timeout=None):
        if self._keys:
            return self._keys.pop(0)
        if timeout is None:
            raise AssertionError("ran out of keys")
        return ""

    def move_xy(self, x, y):
        return f"<move {x},{y}>"

    def on_blue(self, text):
        return text

    def on_bright_black(self, text):
        return text


def make_editor(*lines):
    editor = Editor(dimensions=Point(40, 9))
    if lines:
        editor.content = [Line.from_string(text) for text in lines]
    return editor


@pytest.mark.parametrize(
    "letter, kind",
    [
        ("q", Command.Kind.QUIT),
        ("s", Command.Kind.SAVE),
        ("c", Command.Kind.COPY),
        ("v", Command.Kind.PASTE),
        ("z", Command.Kind.UNDO),
        ("y", Command.Kind.REDO),
    ],
)
def test_translate_control_keys(letter, kind):
    assert translate_key(ctrl(letter)) == Command(kind)


def test_translate_plain_arrow():
    assert translate_key("\x1b[A") == Command(
        Command.Kind.MOVE, direction=Direction.UP, modifiers=Modifiers.NONE
    )


def test_translate_shift_arrow():
    assert translate_key("\x1b[1;2C") == Command(
        Command.Kind.MOVE, direction=Direction.RIGHT, modifiers=Modifiers.SHIFT
    )


def test_translate_super_arrow():
    command = translate_key("\x1b[1;9B")
    assert command.direction is Direction.DOWN
    assert command.modifiers == Modifiers.SUPER


def test_translate_named_keystroke():
    key = Keystroke("\x1b[d", code=0, name="KEY_SLEFT")
    assert translate_key(key) == Command(
        Command.Kind.MOVE, direction=Direction.LEFT, modifiers=Modifiers.SHIFT
    )


def test_translate_kitty_control_key():
    assert translate_key(f"\x1b[{ord('q')};5u") == Command(Command.Kind.QUIT)


def test_translate_editing_keys():
    assert translate_key("a") == Command(Command.Kind.INSERT, text="a")
    assert translate_key("\t") == Command(Command.Kind.INSERT, text="\t")
    assert translate_key("\r") == Command(Command.Kind.NEWLINE)
    assert translate_key("\x7f") == Command(Command.Kind.BACKSPACE)


def test_translate_unknown_sequence():
    assert translate_key("\x1bx") is None


def test_dispatch_quit_stops():
    assert dispatch(make_editor(), Command(Command.Kind.QUIT)) is False


def test_dispatch_insert_and_undo():
    editor = make_editor()
    assert dispatch(editor, Command(Command.Kind.INSERT, text="a")) is True
    dispatch(editor, Command(Command.Kind.INSERT, text="b"))
    assert editor.content[0].text() == "ab"
    dispatch(editor, Command(Command.Kind.UNDO))
    assert editor.content[0].text() == "a"
    dispatch(editor, Command(Command.Kind.REDO))
    assert editor.content[0].text() == "ab"


def test_dispatch_newline_and_backspace():
    editor = make_editor("abcd")
    editor.cursor = Point(2, 0)
    dispatch(editor, Command(Command.Kind.NEWLINE))
    assert [line.text() for line in editor.content] == ["ab", "cd"]
    dispatch(editor, Command(Command.Kind.BACKSPACE))
    assert [line.text() for line in editor.content] == ["abcd"]


def test_dispatch_move():
    editor = make_editor("abc")
    dispatch(
        editor,
        Command(Command.Kind.MOVE, direction=Direction.RIGHT, modifiers=Modifiers.NONE),
    )
    assert editor.cursor == Point(1, 0)


def test_run_types_text_until_quit():
    editor = make_editor()
    terminal = FakeTerminal(["h", "i", ctrl("q")])
    run(editor, terminal)
    assert editor.content[0].text() == "hi"
    output = terminal.stream.getvalue()
    assert "\x1b[?1000h" in output
    assert output.endswith("\x1b[?1006l\x1b[?1000l\x1b[<u")


def test_run_decodes_split_arrow_sequence():
    editor = make_editor("abc")
    terminal = FakeTerminal(["\x1b", "[", "C", "x", ctrl("q")])
    run(editor, terminal)
    assert editor.content[0].text() == "axbc"


def test_run_handles_mouse_click():
    editor = make_editor("hello", "world")
    keys = ["\x1b", "[", "<", "0", ";", "3", ";", "2", "M", ctrl("q")]
    run(editor, FakeTerminal(keys))
    assert editor.cursor == Point(2, 1)


def test_main_edits_and_saves_file(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("abc", encoding="utf-8")
    terminal = FakeTerminal(["x", ctrl("s"), ctrl("q")])
    with patch("fedit.app.blessed.Terminal", return_value=terminal):
        assert main([str(path)]) == 0
    assert path.read_text(encoding="utf-8") == "xabc"


def test_main_without_file_shows_no_name():
    terminal = FakeTerminal([ctrl("q")])
    with patch("fedit.app.blessed.Terminal", return_value=terminal):
        assert main([]) == 0
    assert "[No Name]" in terminal.stream.getvalue()