"""Emoji modifier and modifier-base classification."""

from __future__ import annotations

MAX_UNICODE_CODE_POINT = 0x10FFFF

_EMOJI_BASE_HIGH_RANGES = (
    (0x1F385, 0x1F385),
    (0x1F3C3, 0x1F3C4),
    (0x1F3CA, 0x1F3CB),
    (0x1F442, 0x1F443),
    (0x1F446, 0x1F450),
    (0x1F466, 0x1F469),
    (0x1F46E, 0x1F46E),
    (0x1F470, 0x1F478),
    (0x1F47C, 0x1F47C),
    (0x1F481, 0x1F483),
    (0x1F485, 0x1F487),
    (0x1F4AA, 0x1F4AA),
    (0x1F575, 0x1F575),
    (0x1F57A, 0x1F57A),
    (0x1F590, 0x1F590),
    (0x1F595, 0x1F596),
    (0x1F645, 0x1F647),
    (0x1F64B, 0x1F64F),
    (0x1F6A3, 0x1F6A3),
    (0x1F6B4, 0x1F6B6),
    (0x1F6C0, 0x1F6C0),
    (0x1F918, 0x1F91E),
    (0x1F926, 0x1F926),
    (0x1F930, 0x1F930),
    (0x1F933, 0x1F939),
    (0x1F93B, 0x1F93E),
)


def is_emoji_modifier(c: int) -> bool:
    """Return whether ``c`` is an emoji skin-tone modifier."""
    return 0x1F3FB <= c <= 0x1F3FF


def is_emoji_base(c: int) -> bool:
    """Return whether ``c`` is an emoji that accepts a skin-tone modifier."""
    if 0x261D <= c <= 0x270D:
        return c == 0x261D or c == 0x26F9 or 0x270A <= c <= 0x270D
    if 0x1F385 <= c <= 0x1F93E:
        return any(lo <= c <= hi for lo, hi in _EMOJI_BASE_HIGH_RANGES)
    return False