"""A single line of text stored as grapheme clusters."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

import regex
import wcwidth

TAB_WIDTH = 4

_GRAPHEME = regex.compile(r"\X")


def _grapheme_width(grapheme: str) -> int:
    width = wcwidth.wcswidth(grapheme)
    if width >= 0:
        return width
    return sum(max(wcwidth.wcwidth(ch), 0) for ch in grapheme)


@dataclass
class Line:
    """A line of text as a list of grapheme clusters."""

    graphemes: list[str] = field(default_factory=list)

    @classmethod
    def from_string(cls, text: str) -> Line:
        """Split ``text`` into extended grapheme clusters."""
        return cls(_GRAPHEME.findall(text))

    def __len__(self) -> int:
        return len(self.graphemes)

    def text(self) -> str:
        """Return the line as a plain string."""
        return "".join(self.graphemes)

    def _widths(self):
        width = 0
        for grapheme in self.graphemes:
            if grapheme == "\t":
                width += TAB_WIDTH - width % TAB_WIDTH
            else:
                width += _grapheme_width(grapheme)
            yield width

    def width_to(self, index: int) -> int:
        """Display width of the first ``index`` graphemes, tabs expanded."""
        width = 0
        for count, width_after in enumerate(self._widths(), start=1):
            if count > index:
                break
            width = width_after
        return width

    def x_at_width(self, width_goal: int) -> int | None:
        """Index of the grapheme covering display column ``width_goal``, if any."""
        for index, width in enumerate(self._widths()):
            if width > width_goal:
                return index
        return None

    def render(
        self,
        offset: int | None = None,
        highlight: tuple[int, int] | None = None,
        highlighter: Callable[[str], str] | None = None,
    ) -> str:
        """Return the visible text from ``offset`` on, highlighting an inclusive range."""
        start = offset or 0
        parts = []
        for index, grapheme in enumerate(self.graphemes[start:], start=start):
            piece = " " * TAB_WIDTH if grapheme == "\t" else grapheme
            if (
                highlight is not None
                and highlighter is not None
                and highlight[0] <= index <= highlight[1]
            ):
                piece = highlighter(piece)
            parts.append(piece)
        return "".join(parts)