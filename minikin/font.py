"""Font abstraction, style descriptors and paint parameters."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

_WEIGHT_MASK = (1 << 4) - 1
_ITALIC_MASK = 1 << 4
_VARIANT_SHIFT = 5
_VARIANT_MASK = (1 << 2) - 1


class FontVariant(enum.IntEnum):
    """Font variant used when selecting a family."""

    DEFAULT = 0
    COMPACT = 1
    ELEGANT = 2


@dataclass(frozen=True)
class FontStyle:
    """All style information needed to select a font from a collection.

    Weight is kept in 4 bits and variant in 2 bits, as in the packed form.
    """

    weight: int = 4
    italic: bool = False
    variant: int = 0
    language_list_id: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "weight", int(self.weight) & _WEIGHT_MASK)
        object.__setattr__(self, "italic", bool(self.italic))
        object.__setattr__(self, "variant", int(self.variant) & _VARIANT_MASK)

    def bits(self) -> int:
        """Return the packed weight, italic and variant bits."""
        packed = self.weight & _WEIGHT_MASK
        if self.italic:
            packed |= _ITALIC_MASK
        packed |= (self.variant & _VARIANT_MASK) << _VARIANT_SHIFT
        return packed


@dataclass(frozen=True)
class FontFakery:
    """Transforms (fake bold, fake italic) applied to match a style."""

    fake_bold: bool = False
    fake_italic: bool = False


@dataclass
class FakedFont:
    """A font together with the fakery needed to render a requested style."""

    font: MinikinFont | None
    fakery: FontFakery = field(default_factory=FontFakery)


@dataclass(frozen=True)
class HyphenEdit:
    """Edit applied to a string where a word is hyphenated."""

    hyphen: int = 0

    def has_hyphen(self) -> bool:
        return self.hyphen != 0


class PaintFlags(enum.IntFlag):
    """Paint flags that affect layout."""

    LINEAR_TEXT = 0x40


@dataclass
class MinikinPaint:
    """Paint parameters relevant to text layout."""

    font: Any = None
    size: float = 0.0
    scale_x: float = 0.0
    skew_x: float = 0.0
    letter_spacing: float = 0.0
    paint_flags: int = 0
    fakery: FontFakery = field(default_factory=FontFakery)
    hyphen_edit: HyphenEdit = field(default_factory=HyphenEdit)
    font_feature_settings: str = ""

    def skip_cache(self) -> bool:
        """Layouts with font feature settings are not cached."""
        return bool(self.font_feature_settings)


@dataclass
class MinikinRect:
    """An axis-aligned rectangle."""

    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    def is_empty(self) -> bool:
        return self.left == self.right or self.top == self.bottom

    def set(self, other: MinikinRect) -> None:
        self.left = other.left
        self.top = other.top
        self.right = other.right
        self.bottom = other.bottom

    def offset(self, dx: float, dy: float) -> None:
        self.left += dx
        self.top += dy
        self.right += dx
        self.bottom += dy

    def set_empty(self) -> None:
        self.left = self.top = self.right = self.bottom = 0.0


class MinikinFont(ABC):
    """Abstract platform font, so several font back ends can be used.

    Subclasses that hold the raw font file may assign it to ``_raw_data``
    so that :meth:`font_data` exposes it.
    """

    def __init__(self, unique_id: int) -> None:
        self._unique_id = int(unique_id)
        self._raw_data: bytes | bytearray | memoryview | None = None

    @property
    def unique_id(self) -> int:
        return self._unique_id

    @abstractmethod
    def get_horizontal_advance(self, glyph_id: int, paint: MinikinPaint) -> float:
        """Return the horizontal advance of a glyph."""

    @abstractmethod
    def get_bounds(self, glyph_id: int, paint: MinikinPaint) -> MinikinRect:
        """Return the bounding box of a glyph."""

    @abstractmethod
    def get_table(self, tag: int) -> bytes | None:
        """Return the raw data of an sfnt table, or None if absent."""

    def font_data(self) -> bytes | None:
        """Raw font file data, or None if the font does not provide it."""
        raw = self._raw_data
        if raw is None:
            return None
        return bytes(raw)

    def font_index(self) -> int:
        """Index of the font within an OpenType collection."""
        return 0


def make_tag(c1: str, c2: str, c3: str, c4: str) -> int:
    """Build a 32-bit OpenType table tag from four characters."""
    codes = []
    for c in (c1, c2, c3, c4):
        if len(c) != 1 or ord(c) > 0xFF:
            raise ValueError(f"tag characters must be single bytes, got {c!r}")
        codes.append(ord(c))
    return (codes[0] << 24) | (codes[1] << 16) | (codes[2] << 8) | codes[3]