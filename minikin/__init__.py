"""Text layout helpers: font model, emoji predicates, word and line breaking, and caret measurement."""

__version__ = "0.1.0"
__all__ = [
    "emoji",
    "font",
    "line_breaker",
    "line_widths",
    "measurement",
    "word_breaker",
]