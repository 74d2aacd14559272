"""Caret advances and hit testing over measured runs of text."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence

GraphemeBreakFunc = Callable[[Sequence, int, int, int], bool]
"""Callable ``(text, start, count, offset)`` that says whether ``offset`` is a grapheme break."""


def _run_advance(
    advances: Sequence[float],
    text: Sequence,
    layout_start: int,
    start: int,
    count: int,
    offset: int,
    is_grapheme_break: GraphemeBreakFunc,
) -> float:
    advance = 0.0
    last_cluster = start
    cluster_width = 0.0
    for i in range(start, offset):
        char_advance = advances[i - layout_start]
        if char_advance != 0.0:
            advance += char_advance
            last_cluster = i
            cluster_width = char_advance

    end = start + count
    if offset < end and advances[offset - layout_start] == 0.0:
        # Inside a cluster: give each grapheme cluster an equal share of its width.
        next_cluster = next(
            (j for j in range(offset + 1, end) if advances[j - layout_start] != 0.0),
            end,
        )
        breaks = [
            i
            for i in range(last_cluster, next_cluster)
            if is_grapheme_break(text, start, count, i)
        ]
        if breaks:
            after = sum(1 for i in breaks if i >= offset)
            advance -= cluster_width * after / len(breaks)
    return advance


def get_run_advance(
    advances: Sequence[float],
    text: Sequence,
    start: int,
    count: int,
    offset: int,
    is_grapheme_break: GraphemeBreakFunc,
) -> float:
    """Return the caret position at ``offset`` within the run ``[start, start + count)``.

    ``advances[k]`` is the advance of the code unit at ``start + k``; zero marks a
    code unit that continues the previous cluster.
    """
    if not start <= offset <= start + count:
        raise ValueError(f"offset {offset} outside run [{start}, {start + count}]")
    return _run_advance(advances, text, start, start, count, offset, is_grapheme_break)


def get_offset_for_advance(
    advances: Sequence[float],
    text: Sequence,
    start: int,
    count: int,
    advance: float,
    is_grapheme_break: GraphemeBreakFunc,
) -> int:
    """Return the grapheme boundary whose caret position is closest to ``advance``."""
    x = 0.0
    x_last_cluster_start = 0.0
    x_search_start = 0.0
    last_cluster_start = start
    search_start = start
    for i in range(start, start + count):
        if is_grapheme_break(text, start, count, i):
            search_start = last_cluster_start
            x_search_start = x_last_cluster_start
        width = advances[i - start]
        if width != 0.0:
            last_cluster_start = i
            x_last_cluster_start = x
            x += width
            if x > advance:
                break

    best = search_start
    best_dist = math.inf
    for i in range(search_start, start + count + 1):
        if is_grapheme_break(text, start, count, i):
            delta = (
                _run_advance(
                    advances,
                    text,
                    start,
                    search_start,
                    count - search_start,
                    i,
                    is_grapheme_break,
                )
                + x_search_start
                - advance
            )
            if abs(delta) < best_dist:
                best_dist = abs(delta)
                best = i
            if delta >= 0.0:
                break
    return best