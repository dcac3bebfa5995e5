"""Edit actions and the undo history."""

from __future__ import annotations

import copy
import enum
from dataclasses import dataclass, field

from fedit.line import Line
from fedit.point import Point


class ActionType(enum.Enum):
    """What an action does to the buffer."""

    INSERT = enum.auto()
    REMOVE = enum.auto()


@dataclass
class Action:
    """An insertion of ``payload`` at ``start`` or a removal from ``start`` to ``end``."""

    kind: ActionType
    start: Point
    end: Point | None = None
    payload: list[Line] | None = None


@dataclass
class UndoNode:
    """A pair of actions: one that redoes an edit and one that reverts it."""

    redo: Action
    undo: Action


@dataclass
class UndoStack:
    """Linear undo history; ``index`` counts how many nodes are applied."""

    nodes: list[UndoNode] = field(default_factory=list)
    index: int = 0

    def add(self, redo: Action, undo: Action) -> None:
        """Record an edit, discarding any redo history past the current point."""
        del self.nodes[self.index :]
        self.nodes.append(UndoNode(redo, undo))
        self.index += 1

    def undo(self) -> Action | None:
        """Step back and return the action that reverts the last edit."""
        if self.index == 0:
            return None
        self.index -= 1
        return copy.deepcopy(self.nodes[self.index].undo)

    def redo(self) -> Action | None:
        """Step forward and return the action that reapplies the next edit."""
        if self.index == len(self.nodes):
            return None
        self.index += 1
        return copy.deepcopy(self.nodes[self.index - 1].redo)