"""Drawing the editor onto a terminal."""

from __future__ import annotations

from fedit.editor import STATUS_BAR_HEIGHT, Editor
from fedit.point import Point

Selection = tuple[Point, Point]


def ordered_selection(selection: Selection | None) -> Selection | None:
    """Return the selection with its earlier end first."""
    if selection is None:
        return None
    first, second = selection
    if second.y > first.y or (second.y == first.y and second.x > first.x):
        return (first, second)
    return (second, first)


def line_highlight(
    selection: Selection | None, index: int, length: int
) -> tuple[int, int] | None:
    """Grapheme range of line ``index`` covered by an ordered selection."""
    if selection is None:
        return None
    start, end = selection
    if start.y == index and end.y == index:
        return (start.x, end.x)
    if start.y == index:
        return (start.x, length)
    if end.y == index:
        return (0, end.x)
    if start.y < index < end.y:
        return (0, length)
    return None


def status_text(editor: Editor) -> str:
    """The status bar text: a fresh message, or the file name and cursor position."""
    if editor.status is not None and editor.status.is_fresh():
        return editor.status.text
    name = editor.filename or "[No Name]"
    return f" {name} • {editor.cursor.y + 1}:{editor.cursor.x + 1} "


def truncate_status(status: str, width: int) -> str:
    """Shorten ``status`` to ``width`` characters, ending in an ellipsis."""
    if len(status) > width:
        return status[: max(width - 3, 0)] + "..."
    return status


class Screen:
    """Renders an editor onto a blessed-style terminal."""

    def __init__(self, terminal) -> None:
        self.terminal = terminal

    def dimensions(self) -> Point:
        """Size of the text area, leaving room for the status bar."""
        height = max(self.terminal.height - STATUS_BAR_HEIGHT, 1)
        return Point(self.terminal.width, height)

    def _write(self, text: str) -> None:
        stream = self.terminal.stream
        stream.write(text)
        stream.flush()

    def _status_line(self, editor: Editor) -> str:
        dims = self.dimensions()
        text = truncate_status(status_text(editor), dims.x)
        return self.terminal.move_xy(0, dims.y) + self.terminal.on_bright_black(text)

    def draw_status_line(self, editor: Editor) -> None:
        """Draw the status bar on the bottom row."""
        self._write(self._status_line(editor))

    def draw(self, editor: Editor) -> None:
        """Redraw the visible lines, the status bar and the cursor."""
        term = self.terminal
        dims = self.dimensions()
        selection = ordered_selection(editor.selection)
        top = editor.offset.y

        parts = [term.clear]
        for index, line in enumerate(editor.content[top : top + dims.y], start=top):
            parts.append(term.move_xy(0, index - top))
            parts.append(term.clear_eol)
            offset = editor.offset.x if index == editor.cursor.y else None
            highlight = line_highlight(selection, index, len(line))
            parts.append(line.render(offset, highlight, term.on_blue))

        parts.append(self._status_line(editor))

        screen_y = max(editor.cursor.y - top, 0)
        line = editor.current_line()
        display_x = max(line.width_to(editor.cursor.x) - line.width_to(editor.offset.x), 0)
        if len(line) > editor.cursor.x:
            display_x = min(display_x, dims.x - 1)
        if screen_y < dims.y:
            parts.append(term.move_xy(display_x, screen_y))

        self._write("".join(parts))