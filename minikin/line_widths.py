"""Line breaking parameters: strategies, line widths and tab stops."""

from __future__ import annotations

import enum
import math
from collections.abc import Iterable
from dataclasses import dataclass, field


class BreakStrategy(enum.IntEnum):
    """How candidate breaks are chosen."""

    GREEDY = 0
    HIGH_QUALITY = 1
    BALANCED = 2


class HyphenationFrequency(enum.IntEnum):
    """How eagerly words are hyphenated."""

    NONE = 0
    NORMAL = 1
    FULL = 2


class Bidi(enum.IntEnum):
    """Bidirectional layout flags."""

    LTR = 0
    RTL = 1
    DEFAULT_LTR = 2
    DEFAULT_RTL = 3
    FORCE_LTR = 4
    FORCE_RTL = 5
    MASK = 0x7


@dataclass
class LineWidths:
    """Width available to each line: a first width for some lines, then the rest, minus indents."""

    first_width: float = 0.0
    first_width_line_count: int = 0
    rest_width: float = 0.0
    indents: list[float] = field(default_factory=list)

    def set_widths(
        self, first_width: float, first_width_line_count: int, rest_width: float
    ) -> None:
        self.first_width = first_width
        self.first_width_line_count = first_width_line_count
        self.rest_width = rest_width

    def set_indents(self, indents: Iterable[float]) -> None:
        self.indents = list(indents)

    def is_constant(self) -> bool:
        """Whether every line has the same width."""
        return self.rest_width == self.first_width and not self.indents

    def get_line_width(self, line: int) -> float:
        width = self.first_width if line < self.first_width_line_count else self.rest_width
        if self.indents:
            width -= self.indents[line] if line < len(self.indents) else self.indents[-1]
        return width

    def clear(self) -> None:
        """Drop the indents."""
        self.indents = []


@dataclass
class TabStops:
    """Explicit tab stop positions, falling back to a regular tab width."""

    stops: list[int] = field(default_factory=list)
    tab_width: int = 0

    def set(self, stops: Iterable[int] | None, tab_width: int) -> None:
        self.stops = list(stops) if stops is not None else []
        self.tab_width = tab_width

    def next_tab(self, width_so_far: float) -> float:
        """Return the position of the first tab stop past ``width_so_far``."""
        for stop in self.stops:
            if stop > width_so_far:
                return float(stop)
        if self.tab_width <= 0:
            raise ValueError("tab width must be positive")
        return math.floor(width_so_far / self.tab_width + 1) * self.tab_width