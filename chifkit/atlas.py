"""Glyph atlas: packs the printable ASCII glyphs of a font into one texture."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Union

import numpy as np

from chifkit import backlog

FIRST_CODE = 32
END_CODE = 128
GLYPH_PADDING = 2

GlyphLoader = Callable[[int, int], Union["Glyph", None]]


@dataclass
class Glyph:
    """A rendered glyph as a rasteriser delivers it.

    ``advance_x`` and ``advance_y`` are in 26.6 fixed point; ``bitmap`` holds
    ``rows * width`` coverage bytes in row-major order.
    """

    width: int
    rows: int
    bitmap: Any = None
    advance_x: int = 0
    advance_y: int = 0
    left: int = 0
    top: int = 0

    def __post_init__(self) -> None:
        if self.width < 0 or self.rows < 0:
            raise ValueError("glyph dimensions must not be negative")
        if self.bitmap is None:
            pixels = np.zeros((self.rows, self.width), dtype=np.uint8)
        else:
            if isinstance(self.bitmap, (bytes, bytearray, memoryview)):
                raw = np.frombuffer(bytes(self.bitmap), dtype=np.uint8)
            else:
                raw = np.asarray(self.bitmap, dtype=np.uint8)
            if raw.size != self.rows * self.width:
                raise ValueError(
                    f"bitmap holds {raw.size} pixels, expected {self.rows * self.width}"
                )
            pixels = raw.reshape(self.rows, self.width).copy()
        self.bitmap = pixels


@dataclass
class Character:
    """Placement and metrics of one glyph inside an atlas."""

    advance_x: float = 0.0
    advance_y: float = 0.0
    bitmap_width: float = 0.0
    bitmap_height: float = 0.0
    bitmap_left: float = 0.0
    bitmap_top: float = 0.0
    x_offset: float = 0.0


@dataclass
class FontAtlas:
    """Single-row texture holding every glyph from code 32 to 127.

    ``glyphs`` is either a mapping from character code to :class:`Glyph` or a
    callable ``(code, pixel_size)`` returning a glyph, or None when the glyph
    cannot be loaded. Glyphs that fail to load are logged and left out.
    """

    glyphs: Mapping[int, Glyph] | GlyphLoader
    pixel_size: int
    width: int = field(init=False, default=0)
    height: int = field(init=False, default=0)
    texture: np.ndarray = field(init=False, repr=False)
    chars: tuple[Character, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if isinstance(self.glyphs, Mapping):
            source = self.glyphs
            load = lambda code, _size: source.get(code)  # noqa: E731
        else:
            load = self.glyphs

        loaded: list[tuple[int, Glyph]] = []
        for code in range(FIRST_CODE, END_CODE):
            glyph = load(code, self.pixel_size)
            if glyph is None:
                backlog.log(
                    "Font",
                    f"Loading character {chr(code)} failed!",
                    backlog.LogLevel.ERR,
                )
                continue
            loaded.append((code, glyph))

        self.width = sum(glyph.width + GLYPH_PADDING for _, glyph in loaded)
        self.height = max((glyph.rows for _, glyph in loaded), default=0)
        self.texture = np.zeros((self.height, self.width), dtype=np.uint8)

        chars = [Character() for _ in range(END_CODE)]
        position = 0
        for code, glyph in loaded:
            self.texture[: glyph.rows, position : position + glyph.width] = glyph.bitmap
            chars[code] = Character(
                advance_x=float(glyph.advance_x >> 6),
                advance_y=float(glyph.advance_y >> 6),
                bitmap_width=float(glyph.width),
                bitmap_height=float(glyph.rows),
                bitmap_left=float(glyph.left),
                bitmap_top=float(glyph.top),
                x_offset=position / self.width if self.width else 0.0,
            )
            position += glyph.width + GLYPH_PADDING
        self.chars = tuple(chars)

    def char_info(self, code: int | str) -> Character:
        """Return the metrics for a character code or one-character string."""
        if isinstance(code, str):
            if len(code) != 1:
                raise ValueError("expected a single character")
            code = ord(code)
        if not 0 <= code < END_CODE:
            raise ValueError(f"character code {code} is outside the atlas")
        return self.chars[code]