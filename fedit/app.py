"""The terminal front end: key translation, the event loop and the command."""

from __future__ import annotations

import argparse
import enum
import re
import unicodedata
from dataclasses import dataclass

import blessed

from fedit.editor import Direction, Editor, Modifiers
from fedit.screen import Screen

_SEQUENCE_TIMEOUT = 0.05

_ENABLE_INPUT = "\x1b[>1u\x1b[?1000h\x1b[?1006h"
_DISABLE_INPUT = "\x1b[?1006l\x1b[?1000l\x1b[<u"

_ARROW = re.compile(r"\x1b(?:\[(?:1;(\d+))?|O)([ABCD])")
_CSI_U = re.compile(r"\x1b\[(\d+)(?:;(\d+))?u")
_MOUSE = re.compile(r"\x1b\[<(\d+);(\d+);(\d+)([Mm])")

_ARROW_DIRECTIONS = {
    "A": Direction.UP,
    "B": Direction.DOWN,
    "C": Direction.RIGHT,
    "D": Direction.LEFT,
}

_NAMED_KEYS = {
    "KEY_UP": (Direction.UP, Modifiers.NONE),
    "KEY_DOWN": (Direction.DOWN, Modifiers.NONE),
    "KEY_LEFT": (Direction.LEFT, Modifiers.NONE),
    "KEY_RIGHT": (Direction.RIGHT, Modifiers.NONE),
    "KEY_SUP": (Direction.UP, Modifiers.SHIFT),
    "KEY_SR": (Direction.UP, Modifiers.SHIFT),
    "KEY_SDOWN": (Direction.DOWN, Modifiers.SHIFT),
    "KEY_SF": (Direction.DOWN, Modifiers.SHIFT),
    "KEY_SLEFT": (Direction.LEFT, Modifiers.SHIFT),
    "KEY_SRIGHT": (Direction.RIGHT, Modifiers.SHIFT),
}


@dataclass(frozen=True)
class Command:
    """An editor command decoded from a key press."""

    class Kind(enum.Enum):
        QUIT = enum.auto()
        SAVE = enum.auto()
        COPY = enum.auto()
        PASTE = enum.auto()
        UNDO = enum.auto()
        REDO = enum.auto()
        MOVE = enum.auto()
        BACKSPACE = enum.auto()
        INSERT = enum.auto()
        NEWLINE = enum.auto()

    kind: Kind
    direction: Direction | None = None
    modifiers: Modifiers = Modifiers.NONE
    text: str = ""


_CONTROL_LETTERS = {
    "q": Command.Kind.QUIT,
    "s": Command.Kind.SAVE,
    "c": Command.Kind.COPY,
    "v": Command.Kind.PASTE,
    "z": Command.Kind.UNDO,
    "y": Command.Kind.REDO,
}

_CONTROL_CHARS = {chr(ord(letter) & 0x1F): kind for letter, kind in _CONTROL_LETTERS.items()}


def _decode_modifiers(value: str | None) -> Modifiers:
    if value is None:
        return Modifiers.NONE
    bits = max(int(value) - 1, 0)
    modifiers = Modifiers.NONE
    for bit, flag in (
        (1, Modifiers.SHIFT),
        (2, Modifiers.ALT),
        (4, Modifiers.CONTROL),
        (8, Modifiers.SUPER),
    ):
        if bits & bit:
            modifiers |= flag
    return modifiers


def _translate_csi_u(codepoint: int, modifiers: Modifiers) -> Command | None:
    if codepoint == 13:
        return Command(Command.Kind.NEWLINE)
    if codepoint == 9:
        return Command(Command.Kind.INSERT, text="\t")
    if codepoint in (8, 127):
        return Command(Command.Kind.BACKSPACE)
    char = chr(codepoint)
    if modifiers == Modifiers.CONTROL and char in _CONTROL_LETTERS:
        return Command(_CONTROL_LETTERS[char])
    if modifiers in (Modifiers.NONE, Modifiers.SHIFT) and unicodedata.category(char) != "Cc":
        return Command(Command.Kind.INSERT, text=char)
    return None


def translate_key(key) -> Command | None:
    """Decode a key press (a string or blessed keystroke) into a command."""
    text = str(key)
    if text in _CONTROL_CHARS:
        return Command(_CONTROL_CHARS[text])

    match = _ARROW.fullmatch(text)
    if match:
        return Command(
            Command.Kind.MOVE,
            direction=_ARROW_DIRECTIONS[match.group(2)],
            modifiers=_decode_modifiers(match.group(1)),
        )

    match = _CSI_U.fullmatch(text)
    if match:
        return _translate_csi_u(int(match.group(1)), _decode_modifiers(match.group(2)))

    name = getattr(key, "name", None)
    if name in _NAMED_KEYS:
        direction, modifiers = _NAMED_KEYS[name]
        return Command(Command.Kind.MOVE, direction=direction, modifiers=modifiers)
    if text in ("\x7f", "\x08") or name == "KEY_BACKSPACE":
        return Command(Command.Kind.BACKSPACE)
    if text == "\t":
        return Command(Command.Kind.INSERT, text="\t")
    if text in ("\r", "\n") or name == "KEY_ENTER":
        return Command(Command.Kind.NEWLINE)
    if len(text) == 1 and unicodedata.category(text) != "Cc":
        return Command(Command.Kind.INSERT, text=text)
    return None


def dispatch(editor: Editor, command: Command) -> bool:
    """Carry out ``command``; return False when the editor should quit."""
    kind = command.kind
    if kind is Command.Kind.QUIT:
        return False
    if kind is Command.Kind.MOVE:
        editor.handle_movement_input(command.direction, command.modifiers)
    elif kind is Command.Kind.INSERT:
        editor.insert_char(command.text)
    else:
        {
            Command.Kind.SAVE: editor.save_file,
            Command.Kind.COPY: editor.copy,
            Command.Kind.PASTE: editor.paste,
            Command.Kind.UNDO: editor.undo,
            Command.Kind.REDO: editor.redo,
            Command.Kind.BACKSPACE: editor.remove_char,
            Command.Kind.NEWLINE: editor.insert_newline,
        }[kind]()
    return True


def _read_key(terminal):
    key = terminal.inkey()
    if str(key) != "\x1b":
        return key
    parts = ["\x1b"]
    while True:
        following = str(terminal.inkey(timeout=_SEQUENCE_TIMEOUT))
        if not following:
            break
        parts.append(following)
        if len(parts) == 2:
            if following not in ("[", "O"):
                break
        elif following[-1].isalpha() or following.endswith("~"):
            break
    return "".join(parts)


def _write(terminal, text: str) -> None:
    terminal.stream.write(text)
    terminal.stream.flush()


def run(editor: Editor, terminal) -> None:
    """Run the interactive loop until the user quits."""
    screen = Screen(terminal)
    with terminal.fullscreen(), terminal.raw():
        _write(terminal, _ENABLE_INPUT)
        try:
            screen.draw(editor)
            while True:
                key = _read_key(terminal)
                mouse = _MOUSE.fullmatch(str(key))
                if mouse:
                    button, column, row, final = mouse.groups()
                    if int(button) == 0 and final == "M":
                        if editor.handle_click(int(column) - 1, int(row) - 1):
                            screen.draw(editor)
                    continue
                command = translate_key(key)
                if command is not None and not dispatch(editor, command):
                    break
                screen.draw(editor)
        finally:
            _write(terminal, _DISABLE_INPUT)


def main(argv: list[str] | None = None) -> int:
    """Start the editor, optionally on a file."""
    parser = argparse.ArgumentParser(prog="fedit", description="A simple text editor")
    parser.add_argument("file", nargs="?")
    args = parser.parse_args(argv)

    terminal = blessed.Terminal()
    editor = Editor(dimensions=Screen(terminal).dimensions)
    if args.file is not None:
        editor.load_file(args.file)
    run(editor, terminal)
    return 0