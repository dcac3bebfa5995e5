"""The editing model: buffer, cursor, selection, clipboard and undo history."""

from __future__ import annotations

import enum
import shutil
from collections.abc import Callable
from copy import deepcopy

import regex

from fedit.action import Action, ActionType, UndoStack
from fedit.line import Line
from fedit.point import Point
from fedit.status import Status

STATUS_BAR_HEIGHT = 1

_GRAPHEME = regex.compile(r"\X")

Dimensions = Point | Callable[[], Point] | None


class Direction(enum.Enum):
    """A direction of cursor movement."""

    RIGHT = enum.auto()
    DOWN = enum.auto()
    LEFT = enum.auto()
    UP = enum.auto()


class Modifiers(enum.Flag):
    """Keyboard modifier keys held during a key press."""

    NONE = 0
    SHIFT = enum.auto()
    CONTROL = enum.auto()
    ALT = enum.auto()
    SUPER = enum.auto()


def _terminal_dimensions() -> Point:
    size = shutil.get_terminal_size()
    return Point(size.columns, max(size.lines - STATUS_BAR_HEIGHT, 1))


class Editor:
    """A text buffer with a cursor, viewport offset, selection and undo history."""

    def __init__(self, dimensions: Dimensions = None) -> None:
        self.content: list[Line] = [Line()]
        self.cursor = Point.zero()
        self.offset = Point.zero()
        self.preferred_width = 0
        self.selection: tuple[Point, Point] | None = None
        self.clipboard: list[Line] | None = None
        self.undo_stack = UndoStack()
        self.filename: str | None = None
        self.status: Status | None = None
        self._dimensions = dimensions

    def get_dimensions(self) -> Point:
        """Size of the text area: columns and rows, excluding the status bar."""
        if self._dimensions is None:
            return _terminal_dimensions()
        if callable(self._dimensions):
            return self._dimensions()
        return self._dimensions

    # Files

    def load_file(self, filename: str) -> None:
        """Load ``filename``; a file that cannot be read gives an empty buffer."""
        try:
            with open(filename, encoding="utf-8", newline="") as handle:
                text = handle.read()
        except (OSError, UnicodeDecodeError):
            self.content = [Line()]
        else:
            lines = text.split("\n")
            if lines[-1] == "":
                lines.pop()
            self.content = [
                Line.from_string(line[:-1] if line.endswith("\r") else line)
                for line in lines
            ] or [Line()]
        self.filename = filename

    def save_file(self) -> None:
        """Write the buffer to its file and report the outcome in the status bar."""
        if self.filename is None:
            self.status = Status("No filename specified")
            return
        text = "\n".join(line.text() for line in self.content)
        try:
            with open(self.filename, "w", encoding="utf-8", newline="") as handle:
                handle.write(text)
        except OSError as error:
            self.status = Status(f"Error saving file: {error}")
        else:
            self.status = Status(f"Saved to {self.filename}")

    def current_line(self) -> Line:
        """The line the cursor is on."""
        return self.content[self.cursor.y]

    # Editing

    def apply_action(self, action: Action) -> None:
        """Apply an insertion or removal to the buffer and move the cursor."""
        start = action.start
        if action.kind is ActionType.INSERT:
            if not action.payload:
                raise ValueError("insert action needs a non-empty payload")
            graphemes = self.content[start.y].graphemes
            left, right = graphemes[: start.x], graphemes[start.x :]
            payload = action.payload
            if len(payload) == 1:
                merged = left + payload[0].graphemes
                x_new = len(merged)
                self.content[start.y] = Line(merged + right)
                self.move_cursor(Point(x_new, start.y))
                return
            first = Line(left + payload[0].graphemes)
            middle = [Line(list(line.graphemes)) for line in payload[1:-1]]
            last_graphemes = list(payload[-1].graphemes)
            x_new = len(last_graphemes)
            last = Line(last_graphemes + right)
            self.content[start.y : start.y + 1] = [first, *middle, last]
            self.move_cursor(Point(x_new, start.y + len(payload) - 1))
            return

        end = action.end
        if end is None:
            raise ValueError("remove action needs an end point")
        if start.y == end.y:
            del self.content[start.y].graphemes[start.x : end.x]
        else:
            left = self.content[start.y].graphemes[: start.x]
            right = self.content[end.y].graphemes[end.x :]
            self.content[start.y : end.y + 1] = [Line(left + right)]
        self.move_cursor(start)

    def insert_char(self, c: str) -> None:
        """Insert a character, merging it into the previous grapheme if it combines."""
        line = self.current_line()
        if self.cursor.x > 0 and self.cursor.x - 1 < len(line):
            combined = line.graphemes[self.cursor.x - 1] + c
            if len(_GRAPHEME.findall(combined)) == 1:
                line.graphemes[self.cursor.x - 1] = combined
                return

        start = self.cursor
        redo = Action(ActionType.INSERT, start, payload=[Line([c])])
        undo = Action(ActionType.REMOVE, start, end=Point(start.x + 1, start.y))
        self.apply_action(redo)
        self.undo_stack.add(redo, undo)

    def insert_newline(self) -> None:
        """Split the current line at the cursor."""
        start = self.cursor
        redo = Action(ActionType.INSERT, start, payload=[Line(), Line()])
        self.apply_action(redo)
        undo = Action(ActionType.REMOVE, start, end=self.cursor)
        self.undo_stack.add(redo, undo)

    def char_at(self, point: Point) -> str | None:
        """The grapheme at ``point``, or None if there is none."""
        if not 0 <= point.y < len(self.content):
            return None
        graphemes = self.content[point.y].graphemes
        if not 0 <= point.x < len(graphemes):
            return None
        return graphemes[point.x]

    def _extract(self, start: Point, end: Point) -> list[Line]:
        if start.y == end.y:
            return [Line(self.content[start.y].graphemes[start.x : end.x])]
        first = Line(self.content[start.y].graphemes[start.x :])
        middle = [Line(list(line.graphemes)) for line in self.content[start.y + 1 : end.y]]
        last = Line(self.content[end.y].graphemes[: end.x])
        return [first, *middle, last]

    def remove_char(self) -> None:
        """Delete the grapheme (or line break) before the cursor."""
        start = self.previous_point()
        if start is None:
            return
        end = self.cursor
        redo = Action(ActionType.REMOVE, start, end=end)
        undo = Action(ActionType.INSERT, start, payload=self._extract(start, end))
        self.apply_action(redo)
        self.undo_stack.add(redo, undo)

    def paste(self) -> None:
        """Insert the clipboard at the cursor."""
        if self.clipboard is None:
            return
        start = self.cursor
        redo = Action(ActionType.INSERT, start, payload=deepcopy(self.clipboard))
        self.apply_action(redo)
        undo = Action(ActionType.REMOVE, start, end=self.cursor)
        self.undo_stack.add(redo, undo)

    def undo(self) -> None:
        """Revert the last edit, if any."""
        action = self.undo_stack.undo()
        if action is not None:
            self.apply_action(action)

    def redo(self) -> None:
        """Reapply the last undone edit, if any."""
        action = self.undo_stack.redo()
        if action is not None:
            self.apply_action(action)

    # Movement

    def adjust_offset(self) -> None:
        """Scroll the viewport so the cursor stays visible."""
        dims = self.get_dimensions()
        x, y = self.offset.x, self.offset.y

        if self.cursor.y < y:
            y = self.cursor.y
        elif self.cursor.y >= y + dims.y:
            y = self.cursor.y - dims.y + 1

        target_width = self.current_line().width_to(self.cursor.x)
        if target_width < x:
            x = target_width
        elif target_width >= x + dims.x:
            x = target_width - dims.x + 1

        self.offset = Point(x, y)

    def previous_point(self) -> Point | None:
        """The position one step before the cursor, or None at the start."""
        if self.cursor.x > 0:
            return Point(self.cursor.x - 1, self.cursor.y)
        if self.cursor.y > 0:
            return Point(len(self.content[self.cursor.y - 1]), self.cursor.y - 1)
        return None

    def next_point(self) -> Point | None:
        """The position one step after the cursor, or None at the end."""
        if self.cursor.x < len(self.current_line()):
            return Point(self.cursor.x + 1, self.cursor.y)
        if self.cursor.y < len(self.content) - 1:
            return Point(0, self.cursor.y + 1)
        return None

    def move_cursor(self, destination: Point) -> None:
        """Place the cursor and scroll to keep it visible."""
        self.cursor = destination
        self.adjust_offset()

    def _vertical_target(self, direction: Direction, modifiers: Modifiers) -> Point:
        old = self.cursor
        if Modifiers.SUPER in modifiers:
            self.preferred_width = 0
            if direction is Direction.UP:
                return Point(0, 0)
            y_max = max(len(self.content) - 1, 0)
            return Point(len(self.content[y_max]), y_max)

        dy = -1 if direction is Direction.UP else 1
        y_new = max(0, min(old.y + dy, len(self.content) - 1))
        if y_new == old.y:
            return old
        new_line = self.content[y_new]
        x_new = new_line.x_at_width(self.preferred_width)
        return Point(len(new_line) if x_new is None else x_new, y_new)

    def _horizontal_target(self, direction: Direction, modifiers: Modifiers) -> Point:
        old = self.cursor
        if Modifiers.SUPER in modifiers:
            if direction is Direction.LEFT:
                if old.x != 0:
                    return Point(0, old.y)
                if old.y > 0:
                    return Point(len(self.content[old.y - 1]), old.y - 1)
                return old
            line_length = len(self.current_line())
            if old.x != line_length:
                return Point(line_length, old.y)
            if old.y < len(self.content) - 1:
                return Point(0, old.y + 1)
            return old

        step = self.previous_point() if direction is Direction.LEFT else self.next_point()
        target = old if step is None else step
        self.preferred_width = self.content[target.y].width_to(target.x)
        return target

    def handle_movement_input(
        self, direction: Direction, modifiers: Modifiers = Modifiers.NONE
    ) -> None:
        """Move the cursor; SUPER jumps, SHIFT extends the selection."""
        point_old = self.cursor
        if direction in (Direction.UP, Direction.DOWN):
            point_new = self._vertical_target(direction, modifiers)
        else:
            point_new = self._horizontal_target(direction, modifiers)

        if Modifiers.SHIFT in modifiers:
            self.handle_selection(point_old, point_new)
        else:
            self.selection = None

        self.move_cursor(point_new)

    def handle_click(self, column: int, row: int) -> bool:
        """Move the cursor to a clicked screen cell; return whether it moved."""
        y_new = row + self.offset.y
        if not 0 <= y_new < len(self.content):
            return False

        line = self.content[y_new]
        offset_width = line.width_to(self.offset.x) if y_new == self.cursor.y else 0
        width_goal = column + offset_width

        if y_new != self.cursor.y:
            self.offset = Point(0, self.offset.y)

        x_new = line.x_at_width(width_goal)
        self.cursor = Point(len(line) if x_new is None else x_new, y_new)
        self.preferred_width = width_goal
        return True

    # Selection

    def handle_selection(self, point_old: Point, point_new: Point) -> None:
        """Extend the selection, anchoring it where it first started."""
        anchor = point_old if self.selection is None else self.selection[0]
        self.selection = (anchor, point_new)

    def copy(self) -> None:
        """Copy the selected text to the clipboard."""
        if self.selection is None:
            return
        start, end = sorted(self.selection)
        self.clipboard = self._extract(start, end)