import bisect

import pytest

from minikin.word_breaker import SimpleLineBreakIterator, WordBreaker, is_break_valid


def _all_breaks(breaker):
    return list(iter(breaker.next, None))


def _iterator_breaks(it):
    it.first()
    return list(iter(it.next, None))


class _EveryPositionIterator:
    """Proposes a break between every pair of characters."""

    def set_text(self, text):
        self._bounds = list(range(len(text) + 1))
        self._index = 0

    def first(self):
        self._index = 0
        return 0

    def next(self):
        self._index += 1
        return self._bounds[self._index] if self._index < len(self._bounds) else None

    def following(self, offset):
        self._index = bisect.bisect_right(self._bounds, offset)
        return self._bounds[self._index] if self._index < len(self._bounds) else None

    def is_boundary(self, offset):
        return offset in self._bounds


def test_iterator_breaks_after_space():
    text = "ab cd"
    it = SimpleLineBreakIterator(text)
    assert it.first() == 0
    assert it.next() == text.index("c")
    assert it.next() == len(text)
    assert it.next() is None


def test_iterator_following_and_is_boundary():
    text = "ab cd"
    it = SimpleLineBreakIterator(text)
    assert it.following(0) == text.index("c")
    assert it.following(len(text)) is None
    assert it.is_boundary(text.index("c"))
    assert not it.is_boundary(text.index("b"))


def test_iterator_cjk_breaks_everywhere():
    text = "\u4e00\u4e8c\u4e09"
    it = SimpleLineBreakIterator(text)
    assert _iterator_breaks(it) == list(range(1, len(text) + 1))


def test_iterator_keeps_combining_mark_with_base():
    text = "\u4e00\u0332\u4e00"
    it = SimpleLineBreakIterator(text)
    assert _iterator_breaks(it) == [text.index("\u0332") + 1, len(text)]


def test_iterator_breaks_after_hyphen_but_not_before_number():
    word = "well-known"
    it = SimpleLineBreakIterator(word)
    assert it.is_boundary(word.index("-") + 1)
    assert not it.is_boundary(word.index("-"))
    number = "a-1"
    assert _iterator_breaks(SimpleLineBreakIterator(number)) == [len(number)]


def test_iterator_empty_text():
    it = SimpleLineBreakIterator("")
    assert it.first() == 0
    assert it.next() is None


def test_break_invalid_after_soft_hyphen():
    text = "a\u00adb"
    assert is_break_valid(text, text.index("b")) is False


def test_break_invalid_after_myanmar_virama():
    assert is_break_valid("\u1039x", 1) is False


def test_break_invalid_between_letter_and_prefix_numeric():
    assert is_break_valid("a$", 1) is False
    assert is_break_valid("a b", 2) is True


def test_break_invalid_in_zwj_sequence():
    text = "\U0001F468\u200d\U0001F469"
    assert is_break_valid(text, text.index("\U0001F469")) is False


def test_break_invalid_between_emoji_base_and_modifier():
    assert is_break_valid("\u261d\U0001F3FB", 1) is False
    text = "\u261d\ufe0f\U0001F3FB"
    assert is_break_valid(text, text.index("\U0001F3FB")) is False
    assert is_break_valid("a\U0001F3FB", 1) is True


def test_words_separated_by_space():
    text = "hello world"
    wb = WordBreaker()
    wb.set_text(text)
    assert wb.current() == 0
    assert wb.next() == text.index("w")
    assert wb.word_start() == 0
    assert wb.word_end() == text.index(" ")
    assert wb.break_badness() == 0
    assert wb.next() == len(text)
    assert wb.word_start() == text.index("w")
    assert wb.word_end() == len(text)
    assert wb.next() is None
    assert wb.current() is None


def test_word_bounds_strip_punctuation():
    text = "(hello) x"
    wb = WordBreaker()
    wb.set_text(text)
    assert wb.next() == text.index("x")
    assert wb.word_start() == text.index("h")
    assert wb.word_end() == text.index(")")


def test_word_end_strips_comma():
    text = "hello, world"
    wb = WordBreaker()
    wb.set_text(text)
    assert wb.next() == text.index("w")
    assert wb.word_end() == text.index(",")


def test_soft_hyphen_break_rejected():
    text = "ab\u00adcd"
    wb = WordBreaker()
    wb.set_text(text)
    assert _all_breaks(wb) == [len(text)]


def test_emoji_modifier_break_rejected():
    text = "\u261d\U0001F3FB x"
    wb = WordBreaker()
    wb.set_text(text)
    assert wb.next() == text.index("x")


def test_custom_iterator_is_filtered():
    text = "a\u00adb"
    wb = WordBreaker(_EveryPositionIterator())
    wb.set_text(text)
    assert _all_breaks(wb) == [text.index("\u00ad"), len(text)]


def test_email_address_breaks_before_dot():
    text = "foo@example.com"
    wb = WordBreaker()
    wb.set_text(text)
    assert wb.next() == text.index(".")
    assert wb.break_badness() == 1
    assert wb.word_start() == wb.word_end() == 0
    assert wb.next() == len(text)
    assert wb.break_badness() == 0
    assert wb.next() is None


def test_url_breaks_follow_style_rules():
    text = "http://a.com/b"
    wb = WordBreaker()
    wb.set_text(text)
    assert _all_breaks(wb) == [
        text.index("/"),
        text.index("a"),
        text.index("."),
        text.rindex("/"),
        len(text),
    ]


def test_finish_releases_text():
    wb = WordBreaker()
    wb.set_text("hello world")
    wb.finish()
    with pytest.raises(RuntimeError):
        wb.next()
    wb.set_text("ab")
    assert wb.next() == len("ab")


def test_next_without_text_raises():
    with pytest.raises(RuntimeError):
        WordBreaker().next()