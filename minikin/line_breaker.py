"""Breaking paragraphs into lines, with hyphenation and justification support."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol

from .font import HyphenEdit, MinikinPaint
from .line_widths import Bidi, BreakStrategy, HyphenationFrequency, LineWidths, TabStops
from .word_breaker import WordBreaker

CHAR_TAB = 0x0009

# Scores in a hierarchy: a desperate break is preferred to an overfull line.
SCORE_INFTY = 3.4028234663852886e38
SCORE_OVERFULL = 1e12
SCORE_DESPERATE = 1e10

# Multiplier for the hyphen penalty on the last line.
LAST_LINE_PENALTY_MULTIPLIER = 4.0
# Penalty for each line break, to keep the number of lines down.
LINE_PENALTY_MULTIPLIER = 2.0

# Longer words are not hyphenated, to avoid quadratic behaviour.
LONGEST_HYPHENATED_WORD = 45


class Measure(Protocol):
    """Measures ``count`` code units of ``text`` from ``start``.

    Returns the total advance (including any hyphen requested by
    ``paint.hyphen_edit``) and the advance of each code unit.
    """

    def __call__(
        self, text: str, start: int, count: int, bidi: Bidi, paint: MinikinPaint
    ) -> tuple[float, Sequence[float]]: ...


class Hyphenator(Protocol):
    """Returns one hyphen edit per code unit of ``word``; 0 means no hyphen."""

    def hyphenate(self, word: str) -> Sequence[int]: ...


def is_line_end_space(c: int) -> bool:
    """Whether code unit ``c`` is a space that disappears at the end of a line."""
    return (
        c == 0x0A
        or c == 0x20
        or c == 0x1680
        or (0x2000 <= c <= 0x200A and c != 0x2007)
        or c == 0x205F
        or c == 0x3000
    )


_LINE_BREAKING_HYPHENS = frozenset(
    {0x002D, 0x058A, 0x05BE, 0x1400, 0x2010, 0x2013, 0x2027, 0x2E17, 0x2E40}
)


def is_line_breaking_hyphen(c: int) -> bool:
    """Whether ``c`` allows a break after it but keeps its word from being hyphenated."""
    return c in _LINE_BREAKING_HYPHENS


@dataclass
class _Candidate:
    offset: int
    prev: int = 0
    pre_break: float = 0.0
    post_break: float = 0.0
    penalty: float = 0.0
    score: float = 0.0
    line_number: int = 0
    hyphen_edit: int = 0


class LineBreaker:
    """Chooses line breaks for a paragraph, greedily or by minimising total badness.

    After :meth:`compute_breaks`, ``breaks`` holds the offset ending each line,
    ``widths`` the width of each line and ``flags`` the hyphen edit of each
    break, with bit ``TAB_SHIFT`` set when the line contains a tab.
    """

    TAB_SHIFT = 29

    def __init__(self, word_breaker: WordBreaker | None = None) -> None:
        self._word_breaker = word_breaker if word_breaker is not None else WordBreaker()
        self._hyphenator: Hyphenator | None = None
        self.text = ""
        self.char_widths: list[float] = []
        self.strategy = BreakStrategy.GREEDY
        self.hyphenation_frequency = HyphenationFrequency.NORMAL
        self.line_widths = LineWidths()
        self.tab_stops = TabStops()
        self.breaks: list[int] = []
        self.widths: list[float] = []
        self.flags: list[int] = []
        self._width = 0.0
        self._candidates: list[_Candidate] = []
        self._line_penalty = 0.0
        self._last_break = 0
        self._best_break = 0
        self._best_score = SCORE_INFTY
        self._pre_break = 0.0
        self._first_tab_index: int | None = None

    def set_hyphenator(self, hyphenator: Hyphenator | None) -> None:
        """Use ``hyphenator`` for words, or none at all."""
        self._hyphenator = hyphenator

    def set_text(self, text: str) -> None:
        """Start a paragraph; code unit widths are reset to zero."""
        self.text = text
        self.char_widths = [0.0] * len(text)
        self._word_breaker.set_text(text)
        # The initial break is handled here, as add_style_run may never be called.
        self._word_breaker.next()
        self._candidates = [_Candidate(offset=0)]
        self.breaks = []
        self.widths = []
        self.flags = []
        self._last_break = 0
        self._best_break = 0
        self._best_score = SCORE_INFTY
        self._pre_break = 0.0
        self._first_tab_index = None

    def set_line_widths(
        self, first_width: float, first_width_line_count: int, rest_width: float
    ) -> None:
        self.line_widths.set_widths(first_width, first_width_line_count, rest_width)

    def set_indents(self, indents: Iterable[float]) -> None:
        self.line_widths.set_indents(indents)

    def set_tab_stops(self, stops: Iterable[int] | None, tab_width: int) -> None:
        self.tab_stops.set(stops, tab_width)

    def add_style_run(
        self,
        paint: MinikinPaint | None,
        measure: Measure | None,
        start: int,
        end: int,
        is_rtl: bool,
    ) -> float:
        """Measure ``[start, end)`` and add its candidate breaks; return its width.

        With ``paint`` None the code unit widths are taken as already stored.
        """
        if not 0 <= start <= end <= len(self.text):
            raise ValueError(f"run [{start}, {end}) outside text of length {len(self.text)}")
        text = self.text
        width = 0.0
        bidi = Bidi.FORCE_RTL if is_rtl else Bidi.FORCE_LTR
        hyphen_penalty = 0.0

        if paint is not None:
            if measure is None:
                raise ValueError("a measure function is required when a paint is given")
            width, advances = measure(text, start, end - start, bidi, paint)
            advances = list(advances)
            if len(advances) != end - start:
                raise ValueError("measure returned the wrong number of advances")
            self.char_widths[start:end] = advances
            # a heuristic that seems to perform well
            hyphen_penalty = 0.5 * paint.size * paint.scale_x * self.line_widths.get_line_width(0)
            if self.hyphenation_frequency == HyphenationFrequency.NORMAL:
                hyphen_penalty *= 4.0
            self._line_penalty = max(
                self._line_penalty, hyphen_penalty * LINE_PENALTY_MULTIPLIER
            )

        breaker = self._word_breaker
        current = breaker.current()
        after_word = start
        last_break = start
        last_break_width = self._width
        post_break = self._width
        skip_hyphenation = False

        for i in range(start, end):
            c = ord(text[i])
            if c == CHAR_TAB:
                self._width = self._pre_break + self.tab_stops.next_tab(
                    self._width - self._pre_break
                )
                if self._first_tab_index is None:
                    self._first_tab_index = i
                # other strategies cannot deal with tabs
                self.strategy = BreakStrategy.GREEDY
            else:
                self._width += self.char_widths[i]
                if not is_line_end_space(c):
                    post_break = self._width
                    after_word = i + 1

            if current is None or i + 1 != current:
                continue

            word_ends_in_hyphen = is_line_breaking_hyphen(c)
            word_start = breaker.word_start()
            word_end = breaker.word_end()
            if (
                paint is not None
                and self._hyphenator is not None
                and self.hyphenation_frequency != HyphenationFrequency.NONE
                and not word_ends_in_hyphen
                and not skip_hyphenation
                and word_start >= start
                and word_end > word_start
                and word_end - word_start <= LONGEST_HYPHENATED_WORD
            ):
                hyph_buf = self._hyphenator.hyphenate(text[word_start:word_end])
                for j, hyph in zip(range(word_start, word_end), hyph_buf):
                    if not hyph:
                        continue
                    paint.hyphen_edit = HyphenEdit(hyph)
                    first_part, _ = measure(text, last_break, j - last_break, bidi, paint)
                    hyph_post_break = last_break_width + first_part
                    paint.hyphen_edit = HyphenEdit()
                    second_part, _ = measure(text, j, after_word - j, bidi, paint)
                    hyph_pre_break = post_break - second_part
                    self._add_word_break(
                        j, hyph_pre_break, hyph_post_break, hyphen_penalty, hyph
                    )
            # Skip hyphenating the next word if and only if this one ends in a hyphen.
            skip_hyphenation = word_ends_in_hyphen

            # Skip breaks at zero-width code units inside a replacement span.
            if paint is not None or current == end or self.char_widths[current] > 0:
                penalty = hyphen_penalty * breaker.break_badness()
                self._add_word_break(current, self._width, post_break, penalty, 0)
            last_break = current
            last_break_width = self._width
            current = breaker.next()

        return width

    def _add_word_break(
        self, offset: int, pre_break: float, post_break: float, penalty: float, hyph: int
    ) -> None:
        width = self._candidates[-1].pre_break
        if post_break - width > self._current_line_width():
            # Desperate breaks, based on the widths of the unbroken text.
            i = self._candidates[-1].offset
            if i < len(self.char_widths):
                width += self.char_widths[i]
            for k in range(i + 1, offset):
                w = self.char_widths[k]
                if w > 0:
                    self._add_candidate(
                        _Candidate(
                            offset=k,
                            pre_break=width,
                            post_break=width,
                            penalty=SCORE_DESPERATE,
                        )
                    )
                    width += w
        self._add_candidate(
            _Candidate(
                offset=offset,
                pre_break=pre_break,
                post_break=post_break,
                penalty=penalty,
                hyphen_edit=hyph,
            )
        )

    def _add_candidate(self, cand: _Candidate) -> None:
        cand_index = len(self._candidates)
        self._candidates.append(cand)
        if cand.post_break - self._pre_break > self._current_line_width():
            # The line would be overfull: break at the best break so far (greedy).
            if self._best_break == self._last_break:
                self._best_break = cand_index
            best = self._candidates[self._best_break]
            self._push_break(best.offset, best.post_break - self._pre_break, best.hyphen_edit)
            self._best_score = SCORE_INFTY
            self._last_break = self._best_break
            self._pre_break = best.pre_break
        if cand.penalty <= self._best_score:
            self._best_break = cand_index
            self._best_score = cand.penalty

    def _push_break(self, offset: int, width: float, hyph: int) -> None:
        self.breaks.append(offset)
        self.widths.append(width)
        has_tab = self._first_tab_index is not None and self._first_tab_index < offset
        self.flags.append((int(has_tab) << self.TAB_SHIFT) | hyph)
        self._first_tab_index = None

    def add_replacement(self, start: int, end: int, width: float) -> None:
        """Treat ``[start, end)`` as one unit of the given width, such as an inline object."""
        if not 0 <= start < end <= len(self.text):
            raise ValueError(f"replacement [{start}, {end}) outside text")
        self.char_widths[start] = width
        self.char_widths[start + 1 : end] = [0.0] * (end - start - 1)
        self.add_style_run(None, None, start, end, False)

    def _current_line_width(self) -> float:
        return self.line_widths.get_line_width(len(self.breaks))

    def _compute_breaks_greedy(self) -> None:
        # All breaks but the last were pushed by _add_candidate already.
        n_cand = len(self._candidates)
        if n_cand == 1 or self._last_break != n_cand - 1:
            last = self._candidates[-1]
            self._push_break(last.offset, last.post_break - self._pre_break, 0)

    def _finish_breaks_optimal(self) -> None:
        cands = self._candidates
        breaks: list[int] = []
        widths: list[float] = []
        flags: list[int] = []
        i = len(cands) - 1
        while i > 0:
            prev = cands[i].prev
            breaks.append(cands[i].offset)
            widths.append(cands[i].post_break - cands[prev].pre_break)
            flags.append(cands[i].hyphen_edit)
            i = prev
        self.breaks = breaks[::-1]
        self.widths = widths[::-1]
        self.flags = flags[::-1]

    def _compute_breaks_optimal(self, is_rectangle: bool) -> None:
        cands = self._candidates
        active = 0
        n_cand = len(cands)
        width = self.line_widths.get_line_width(0)
        for i in range(1, n_cand):
            at_end = i == n_cand - 1
            best = SCORE_INFTY
            best_prev = 0
            line_number_last = 0

            if not is_rectangle:
                width = self.line_widths.get_line_width(cands[active].line_number)
            left_edge = cands[i].post_break - width
            best_hope = 0.0

            for j in range(active, i):
                if not is_rectangle:
                    line_number = cands[j].line_number
                    if line_number != line_number_last:
                        width_new = self.line_widths.get_line_width(line_number)
                        if width_new != width:
                            left_edge = cands[i].post_break - width
                            best_hope = 0.0
                            width = width_new
                        line_number_last = line_number
                j_score = cands[j].score
                if j_score + best_hope >= best:
                    continue
                delta = cands[j].pre_break - left_edge

                # best_hope assumes the width score grows as later breaks are considered.
                width_score = 0.0
                additional_penalty = 0.0
                if delta < 0:
                    width_score = SCORE_OVERFULL
                elif at_end and self.strategy != BreakStrategy.BALANCED:
                    # increase penalty for hyphen on last line
                    additional_penalty = LAST_LINE_PENALTY_MULTIPLIER * cands[j].penalty
                else:
                    width_score = delta * delta

                if delta < 0:
                    active = j + 1
                else:
                    best_hope = width_score

                score = j_score + width_score + additional_penalty
                if score <= best:
                    best = score
                    best_prev = j
            cands[i].score = best + cands[i].penalty + self._line_penalty
            cands[i].prev = best_prev
            cands[i].line_number = cands[best_prev].line_number + 1
        self._finish_breaks_optimal()

    def compute_breaks(self) -> int:
        """Compute the breaks for the paragraph and return how many lines there are."""
        if not self._candidates:
            raise RuntimeError("set_text must be called before compute_breaks")
        if self.strategy == BreakStrategy.GREEDY:
            self._compute_breaks_greedy()
        else:
            self._compute_breaks_optimal(self.line_widths.is_constant())
        return len(self.breaks)

    def finish(self) -> None:
        """Reset paragraph state and parameters; the hyphenator is kept."""
        self._word_breaker.finish()
        self._width = 0.0
        self.line_widths.clear()
        self._candidates = []
        self.breaks = []
        self.widths = []
        self.flags = []
        self.strategy = BreakStrategy.GREEDY
        self.hyphenation_frequency = HyphenationFrequency.NORMAL
        self._line_penalty = 0.0