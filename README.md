# minikin

Building blocks for breaking paragraphs of text into lines. Text is passed
as Python strings and every offset is an index into the string.

## Modules

- `minikin.font` holds the font model. It has `FontStyle` (weight, italic,
  variant and language list id, with `bits()` for the packed form),
  `FontVariant`, `FontFakery`, `FakedFont`, `HyphenEdit`, `PaintFlags`,
  `MinikinPaint`, `MinikinRect` and the abstract base class `MinikinFont`.
  A subclass of `MinikinFont` supplies `get_horizontal_advance`, `get_bounds`
  and `get_table`. `make_tag("c", "m", "a", "p")` builds a 32-bit OpenType
  table tag, and raises `ValueError` for characters that are not single bytes.
- `minikin.emoji` has the predicates `is_emoji_base` and `is_emoji_modifier`.
- `minikin.word_breaker` finds line break opportunities.
  - `SimpleLineBreakIterator` is a compact line break iterator that follows
    the main rules of UAX #14.
  - `WordBreaker` walks those opportunities. After each `next()` call,
    `word_start()` and `word_end()` give the span of the preceding word.
    E-mail addresses and URLs are broken at the points the Chicago Manual of
    Style recommends, and `break_badness()` reports such breaks.
  - `is_break_valid` holds the extra rules that reject some of the breaks the
    iterator proposes. These cover the soft hyphen, the Myanmar virama, emoji
    ZWJ sequences and emoji modifiers.
- `minikin.measurement` maps between caret offsets and advances within a
  measured run. It provides `get_run_advance` and `get_offset_for_advance`.
  The caller supplies the per-code-unit advances and a grapheme break
  predicate `is_grapheme_break(text, start, count, offset)`.
- `minikin.line_widths` provides `LineWidths`, `TabStops`, and the enums
  `BreakStrategy`, `HyphenationFrequency` and `Bidi`.
- `minikin.line_breaker.LineBreaker` breaks a paragraph into lines.
  - It breaks greedily, or optimally with `BreakStrategy.HIGH_QUALITY` or
    `BreakStrategy.BALANCED`.
  - It can take an optional hyphenator through `set_hyphenator`.
  - After `compute_breaks()`, the results are in `breaks`, `widths` and
    `flags`. Bit `LineBreaker.TAB_SHIFT` of a flag marks a line that holds a
    tab.

## Installing

```
pip install .
```

## Example

```python
from minikin.line_breaker import LineBreaker
from minikin.word_breaker import SimpleLineBreakIterator, WordBreaker

text = "the quick brown fox"
breaker = LineBreaker(WordBreaker(SimpleLineBreakIterator()))
breaker.set_text(text)
breaker.set_line_widths(10.0, 1, 10.0)
# With no paint, the widths already stored in char_widths are used.
breaker.char_widths[:] = [1.0] * len(text)
breaker.add_style_run(None, None, 0, len(text), False)
count = breaker.compute_breaks()
print(count, breaker.breaks, breaker.widths)
```

To have runs measured, pass a `MinikinPaint` and a callable
`measure(text, start, count, bidi, paint)`. The callable returns the total
advance and one advance per code unit. A hyphenator is any object with a
`hyphenate(word)` method that returns one hyphen edit per code unit, where 0
means no hyphen.

## What the package does not do

The package does not load fonts, shape text or render glyphs. Any advances,
glyph bounds and table data must come from a `MinikinFont` subclass or a
measuring callable that you supply.

There are no built-in hyphenation patterns and no grapheme break rules. These
are passed in as the hyphenator and the `is_grapheme_break` callable.

The package has no font collections, so it does not choose fonts by code
point coverage.

## Running the tests

```
pip install .[test]
pytest
```