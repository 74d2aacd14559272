"""Line break opportunities tuned for layout, with e-mail and URL handling."""

from __future__ import annotations

import bisect
import enum
import unicodedata
from typing import Protocol

from .emoji import is_emoji_base, is_emoji_modifier

CHAR_SOFT_HYPHEN = 0x00AD
CHAR_ZWJ = 0x200D
_MYANMAR_VIRAMA = 0x1039
_EMOJI_VARIATION_SELECTOR = 0xFE0F
_EXTRA_EMOJI = frozenset({0x2695, 0x2640, 0x2642})


class _LB(enum.Enum):
    AL = enum.auto()
    BK = enum.auto()
    SP = enum.auto()
    ZW = enum.auto()
    CM = enum.auto()
    GL = enum.auto()
    HY = enum.auto()
    BA = enum.auto()
    OP = enum.auto()
    CL = enum.auto()
    QU = enum.auto()
    ID = enum.auto()
    PR = enum.auto()
    PO = enum.auto()
    NU = enum.auto()


_BK = frozenset({0x0A, 0x0B, 0x0C, 0x0D, 0x85, 0x2028, 0x2029})
_GL = frozenset({0x00A0, 0x034F, 0x2007, 0x202F, 0x2060, 0xFEFF})
_BA = frozenset({0x09, 0x00AD, 0x058A, 0x1400, 0x2010, 0x2012, 0x2013, 0x2027, 0x2E17, 0x2E40})
_CL = frozenset(
    {ord(","), ord("."), ord(":"), ord(";"), ord("!"), ord("?"),
     0x3001, 0x3002, 0xFF01, 0xFF0C, 0xFF0E, 0xFF1F}
)
_QU = frozenset({ord('"'), ord("'")})
_PO = frozenset({ord("%"), 0x00A2, 0x00B0, 0x2030, 0x2031, 0x2103, 0x2109, 0xFF05})


def _is_ideographic(cp: int, category: str) -> bool:
    if 0x2E80 <= cp <= 0x9FFF or 0xAC00 <= cp <= 0xD7A3 or 0xF900 <= cp <= 0xFAFF:
        return True
    if 0x20000 <= cp <= 0x3FFFD:
        return True
    return (category == "So" and cp >= 0x2600) or is_emoji_modifier(cp)


def _line_break_class(cp: int) -> _LB:
    if cp in _BK:
        return _LB.BK
    if cp == 0x200B:
        return _LB.ZW
    if cp in _GL:
        return _LB.GL
    if cp == CHAR_ZWJ or 0xFE00 <= cp <= 0xFE0F or 0xE0100 <= cp <= 0xE01EF:
        return _LB.CM
    category = unicodedata.category(chr(cp))
    if category in ("Mn", "Mc", "Me"):
        return _LB.CM
    if cp == 0x2D:
        return _LB.HY
    if cp in _BA:
        return _LB.BA
    if category == "Zs":
        return _LB.SP
    if cp in _QU or category in ("Pi", "Pf"):
        return _LB.QU
    if category == "Ps":
        return _LB.OP
    if category == "Pe" or cp in _CL:
        return _LB.CL
    if category == "Nd":
        return _LB.NU
    if cp in _PO:
        return _LB.PO
    if category == "Sc":
        return _LB.PR
    if _is_ideographic(cp, category):
        return _LB.ID
    return _LB.AL


def _effective_class(classes: list[_LB], i: int) -> _LB:
    """Class of the character before ``i``, with combining marks attached to their base."""
    if classes[i - 1] is not _LB.CM:
        return classes[i - 1]
    j = i - 1
    while j >= 0 and classes[j] is _LB.CM:
        j -= 1
    if j < 0 or classes[j] in (_LB.SP, _LB.BK, _LB.ZW):
        return _LB.AL
    return classes[j]


def _allows_break(text: str, classes: list[_LB], i: int) -> bool:
    raw_before, after = classes[i - 1], classes[i]
    if raw_before is _LB.BK:
        return not (text[i - 1] == "\r" and text[i] == "\n")
    if after in (_LB.BK, _LB.SP, _LB.ZW):
        return False
    if raw_before is _LB.ZW:
        return True
    if after is _LB.CM:
        return False
    before = _effective_class(classes, i)
    if _LB.GL in (before, after):
        return False
    if after in (_LB.CL, _LB.BA, _LB.HY):
        return False
    if before is _LB.OP:
        return False
    if before is _LB.SP:
        return True
    if _LB.QU in (before, after):
        return False
    if before is _LB.HY:
        return after is not _LB.NU
    if before is _LB.BA:
        return True
    if before is _LB.PR and after is _LB.ID:
        return False
    if before is _LB.ID and after is _LB.PO:
        return False
    return _LB.ID in (before, after)


def _compute_boundaries(text: str) -> list[int]:
    classes = [_line_break_class(ord(c)) for c in text]
    boundaries = [0]
    boundaries.extend(i for i in range(1, len(text)) if _allows_break(text, classes, i))
    if text:
        boundaries.append(len(text))
    return boundaries


class BreakIterator(Protocol):
    def set_text(self, text: str) -> None: ...
    def first(self) -> int: ...
    def next(self) -> int | None: ...
    def following(self, offset: int) -> int | None: ...
    def is_boundary(self, offset: int) -> bool: ...


class SimpleLineBreakIterator:
    """A compact line break iterator following the main rules of UAX #14.

    Offsets are indices into the text; ``None`` marks the end of iteration.
    """

    def __init__(self, text: str = "") -> None:
        self.set_text(text)

    def set_text(self, text: str) -> None:
        self._text = text
        self._boundaries = _compute_boundaries(text)
        self._index = 0

    def first(self) -> int:
        self._index = 0
        return self._boundaries[0]

    def next(self) -> int | None:
        if self._index + 1 >= len(self._boundaries):
            self._index = len(self._boundaries)
            return None
        self._index += 1
        return self._boundaries[self._index]

    def following(self, offset: int) -> int | None:
        k = bisect.bisect_right(self._boundaries, offset)
        self._index = k
        if k >= len(self._boundaries):
            return None
        return self._boundaries[k]

    def is_boundary(self, offset: int) -> bool:
        k = bisect.bisect_left(self._boundaries, offset)
        return k < len(self._boundaries) and self._boundaries[k] == offset


def _is_zwj_emoji(cp: int) -> bool:
    return cp in _EXTRA_EMOJI or is_emoji_base(cp) or is_emoji_modifier(cp)


def is_break_valid(text: str, i: int) -> bool:
    """Return whether a break proposed by the iterator at ``i`` should be kept."""
    prev_offset = i - 1
    code_point = ord(text[prev_offset])
    if code_point == CHAR_SOFT_HYPHEN:
        return False
    # Never break after a Myanmar virama, a pure stacker.
    if code_point == _MYANMAR_VIRAMA:
        return False

    next_code_point = ord(text[i]) if i < len(text) else 0

    # (AL | HL) x (PR | PO)
    if _line_break_class(code_point) is _LB.AL:
        if _line_break_class(next_code_point) in (_LB.PR, _LB.PO):
            return False

    if code_point == CHAR_ZWJ and _is_zwj_emoji(next_code_point):
        return False

    # Emoji base x emoji modifier, skipping an emoji variation selector.
    if is_emoji_modifier(next_code_point):
        if code_point == _EMOJI_VARIATION_SELECTOR and prev_offset > 0:
            code_point = ord(text[prev_offset - 1])
        if is_emoji_base(code_point):
            return False
    return True


def _break_after(c: str) -> bool:
    return c in ":=&"


def _break_before(c: str) -> bool:
    return c in "~.,-_?#%=&"


class _ScanState(enum.IntEnum):
    START = 0
    SAW_AT = 1
    SAW_COLON = 2
    SAW_COLON_SLASH = 3
    SAW_COLON_SLASH_SLASH = 4


class WordBreaker:
    """Walks line break opportunities and reports the word before each one."""

    def __init__(self, iterator: BreakIterator | None = None) -> None:
        self._iterator: BreakIterator = (
            iterator if iterator is not None else SimpleLineBreakIterator()
        )
        self._text: str | None = None
        self._last = 0
        self._current: int | None = 0
        self._iterator_was_reset = False
        self._scan_offset = 0
        self._in_email_or_url = False

    def set_text(self, text: str) -> None:
        """Start iterating over ``text``."""
        self._text = text
        self._iterator_was_reset = False
        self._last = 0
        self._current = 0
        self._scan_offset = 0
        self._in_email_or_url = False
        self._iterator.set_text(text)
        self._iterator.first()

    def _scan_email_or_url(self, text: str) -> None:
        state = _ScanState.START
        i = self._last
        while i < len(text):
            c = text[i]
            # scan only printable ASCII, stop at space
            if not (" " < c <= "~"):
                break
            if state is _ScanState.START and c == "@":
                state = _ScanState.SAW_AT
            elif state is _ScanState.START and c == ":":
                state = _ScanState.SAW_COLON
            elif state in (_ScanState.SAW_COLON, _ScanState.SAW_COLON_SLASH):
                state = _ScanState(state + 1) if c == "/" else _ScanState.START
            i += 1
        if state in (_ScanState.SAW_AT, _ScanState.SAW_COLON_SLASH_SLASH):
            if not self._iterator.is_boundary(i):
                following = self._iterator.following(i)
                i = len(text) if following is None else following
            self._in_email_or_url = True
            self._iterator_was_reset = True
        else:
            self._in_email_or_url = False
        self._scan_offset = i

    def _next_in_email_or_url(self, text: str) -> int:
        last = self._last
        last_char = text[last]
        i = last + 1
        while i < self._scan_offset:
            if _break_after(last_char):
                break
            # break after double slash
            if last_char == "/" and i >= last + 2 and text[i - 2] == "/":
                break
            this_char = text[i]
            # never break after hyphen
            if last_char != "-":
                if _break_before(this_char):
                    break
                # break before single slash
                if (
                    this_char == "/"
                    and last_char != "/"
                    and not (i + 1 < self._scan_offset and text[i + 1] == "/")
                ):
                    break
            last_char = this_char
            i += 1
        return i

    def next(self) -> int | None:
        """Advance to the next break; return its offset, or None at the end."""
        text = self._text
        if text is None:
            raise RuntimeError("no text has been set")
        if self._current is None:
            return None
        self._last = self._current

        if self._last >= self._scan_offset:
            self._scan_email_or_url(text)

        if self._in_email_or_url:
            self._current = self._next_in_email_or_url(text)
            return self._current

        while True:
            if self._iterator_was_reset:
                result = self._iterator.following(self._current)
                self._iterator_was_reset = False
            else:
                result = self._iterator.next()
            if result is None or result == len(text) or is_break_valid(text, result):
                break
        self._current = result
        return self._current

    def current(self) -> int | None:
        """Offset of the last break returned, 0 at the start, None at the end."""
        return self._current

    def _end(self) -> int:
        return self._last if self._current is None else self._current

    def word_start(self) -> int:
        """Start of the previous word, after leading opening punctuation and quotes."""
        if self._in_email_or_url or self._text is None:
            return self._last
        result = self._last
        end = self._end()
        while result < end:
            if _line_break_class(ord(self._text[result])) not in (_LB.OP, _LB.QU):
                break
            result += 1
        return result

    def word_end(self) -> int:
        """End of the previous word, before trailing spaces and punctuation."""
        if self._in_email_or_url or self._text is None:
            return self._last
        result = self._end()
        while result > self._last:
            category = unicodedata.category(self._text[result - 1])
            if not (category == "Zs" or category.startswith("P")):
                break
            result -= 1
        return result

    def break_badness(self) -> int:
        """1 for a break inside an e-mail address or URL, otherwise 0."""
        inside = (
            self._in_email_or_url
            and self._current is not None
            and self._current < self._scan_offset
        )
        return 1 if inside else 0

    def finish(self) -> None:
        """Release the text."""
        self._text = None