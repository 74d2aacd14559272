import pytest

from minikin.emoji import is_emoji_base, is_emoji_modifier


@pytest.mark.parametrize("c", [0x1F3FB, 0x1F3FC, 0x1F3FD, 0x1F3FE, 0x1F3FF])
def test_modifiers(c):
    assert is_emoji_modifier(c) is True


@pytest.mark.parametrize("c", [0x1F3FA, 0x1F400, ord("a"), 0x261D])
def test_non_modifiers(c):
    assert is_emoji_modifier(c) is False


@pytest.mark.parametrize(
    "c",
    [0x261D, 0x26F9, 0x270A, 0x270D, 0x1F385, 0x1F3C3, 0x1F469, 0x1F46E,
     0x1F4AA, 0x1F6C0, 0x1F918, 0x1F926, 0x1F933, 0x1F93E],
)
def test_bases(c):
    assert is_emoji_base(c) is True


@pytest.mark.parametrize(
    "c",
    [0x261E, 0x26F8, 0x2709, 0x1F384, 0x1F3C5, 0x1F46F, 0x1F93A, 0x1F93F,
     0x1F3FB, ord("A")],
)
def test_non_bases(c):
    assert is_emoji_base(c) is False


def test_modifier_is_not_base():
    assert all(not is_emoji_base(c) for c in range(0x1F3FB, 0x1F400))