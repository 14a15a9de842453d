"""Text label: lays out glyph quads from a font atlas and keeps an MVP matrix."""

from __future__ import annotations

import enum
import itertools
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Callable, Union

import numpy as np

from chifkit.atlas import FontAtlas, Glyph, GlyphLoader
from chifkit.textlayout import calc_width, wrap_lines

PI = 3.141596
DEG_TO_RAD = PI / 180.0
DEFAULT_PIXEL_SIZE = 48

LineHeight = Union[int, Callable[[int], int], None]
Kerning = Callable[[str, str], int]


class FontFlags(enum.IntFlag):
    """Alignment and style flags of a label."""

    LeftAligned = 1 << 1
    RightAligned = 1 << 2
    CenterAligned = 1 << 3
    WordWrap = 1 << 4
    Underlined = 1 << 5
    Bold = 1 << 6
    Italic = 1 << 7
    Indented = 1 << 8
    HorizontalLayout = 1 << 9


@dataclass(frozen=True)
class Point:
    """One vertex: window position (x, y) and atlas texture coordinate (s, t)."""

    x: float
    y: float
    s: float
    t: float


def _ortho(left: float, right: float, bottom: float, top: float,
           near: float, far: float) -> np.ndarray:
    m = np.identity(4)
    m[0, 0] = 2.0 / (right - left)
    m[1, 1] = 2.0 / (top - bottom)
    m[2, 2] = -2.0 / (far - near)
    m[0, 3] = -(right + left) / (right - left)
    m[1, 3] = -(top + bottom) / (top - bottom)
    m[2, 3] = -(far + near) / (far - near)
    return m


def _look_at(eye, center, up) -> np.ndarray:
    eye = np.asarray(eye, dtype=float)
    forward = np.asarray(center, dtype=float) - eye
    forward /= np.linalg.norm(forward)
    side = np.cross(forward, np.asarray(up, dtype=float))
    side /= np.linalg.norm(side)
    upward = np.cross(side, forward)
    m = np.identity(4)
    m[0, :3] = side
    m[1, :3] = upward
    m[2, :3] = -forward
    m[0, 3] = -side @ eye
    m[1, 3] = -upward @ eye
    m[2, 3] = forward @ eye
    return m


def _rotation(angle: float, axis) -> np.ndarray:
    a = np.asarray(axis, dtype=float)
    norm = np.linalg.norm(a)
    if norm == 0:
        raise ValueError("rotation axis must not be zero")
    a = a / norm
    c, s = math.cos(angle), math.sin(angle)
    cross = np.array([[0.0, -a[2], a[1]], [a[2], 0.0, -a[0]], [-a[1], a[0], 0.0]])
    m = np.identity(4)
    m[:3, :3] = c * np.identity(3) + (1 - c) * np.outer(a, a) + s * cross
    return m


class Label:
    """A block of text laid out as textured triangles in normalised coordinates.

    ``glyphs`` feeds a :class:`FontAtlas` for each pixel size used.
    ``line_height`` is a pixel count, a callable taking the pixel size, or None
    to use the pixel size. ``kerning`` maps a pair of characters (the second is
    ``""`` at the end of a line) to a 26.6 fixed-point horizontal adjustment.
    """

    def __init__(
        self,
        glyphs: Mapping[int, Glyph] | GlyphLoader,
        window_width: int,
        window_height: int,
        text: str = "",
        x: float = 0,
        y: float = 0,
        width: int = 0,
        height: int = 0,
        *,
        line_height: LineHeight = None,
        kerning: Kerning | None = None,
        pixel_size: int = DEFAULT_PIXEL_SIZE,
    ) -> None:
        self._initialized = False
        self._glyphs = glyphs
        self._line_height_spec = line_height
        self._kerning = kerning
        self._atlases: dict[int, FontAtlas] = {}
        self._text = text
        self._alignment = FontFlags.LeftAligned
        self._color = (0.0, 0.0, 0.0, 1.0)
        self._indentation = 0
        self._x = int(x)
        self._y = int(y)
        self._width = int(width)
        self._height = int(height)
        self._coords: list[Point] = []
        self._flags = FontFlags.LeftAligned | FontFlags.WordWrap
        self.set_window_size(window_width, window_height)

        self._projection = _ortho(-1.0, 1.0, -1.0, 1.0, 0.1, 100.0)
        self._view = _look_at((0, 0, 1), (0, 0, 0), (0, 1, 0))
        self._model = np.identity(4)
        self._recalculate_mvp()

        self.set_pixel_size(pixel_size)
        self._initialized = True
        if self._text:
            self._recalculate()

    # -- read-only state -------------------------------------------------

    @property
    def text(self) -> str:
        return self._text

    @property
    def x(self) -> float:
        return float(self._x)

    @property
    def y(self) -> float:
        return float(self._y)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def color(self) -> tuple[float, float, float, float]:
        return self._color

    @property
    def alignment(self) -> FontFlags:
        return self._alignment

    @property
    def indentation(self) -> int:
        return self._indentation

    @property
    def font_flags(self) -> FontFlags:
        return self._flags

    @property
    def pixel_size(self) -> int:
        return self._pixel_size

    @property
    def window_size(self) -> tuple[int, int]:
        return self._window_width, self._window_height

    @property
    def atlas(self) -> FontAtlas:
        return self._atlases[self._pixel_size]

    @property
    def vertices(self) -> tuple[Point, ...]:
        return tuple(self._coords)

    @property
    def num_vertices(self) -> int:
        return len(self._coords)

    @property
    def mvp(self) -> np.ndarray:
        return self._mvp.copy()

    # -- setters ---------------------------------------------------------

    def set_window_size(self, width: int, height: int) -> None:
        """Set the window size that positions are measured against."""
        if width <= 0 or height <= 0:
            raise ValueError("window size must be positive")
        self._window_width = int(width)
        self._window_height = int(height)
        self._sx = 2.0 / self._window_width
        self._sy = 2.0 / self._window_height
        if self._initialized:
            self._recalculate()

    def rotate(self, degrees: float, x: float, y: float, z: float) -> None:
        """Rotate the model by ``degrees`` about the axis (x, y, z)."""
        self._model = self._model @ _rotation(degrees * DEG_TO_RAD, (x, y, z))
        self._recalculate_mvp()

    def scale(self, x: float, y: float, z: float) -> None:
        """Replace the model transform with a scaling by (x, y, z)."""
        self._model = np.diag([float(x), float(y), float(z), 1.0])
        self._recalculate_mvp()

    def set_text(self, text: str) -> None:
        self._text = text
        self._recalculate()

    def set_position(self, x: float, y: float) -> None:
        self._x = int(x)
        self._y = int(y)
        if self._text:
            self._recalculate()

    def set_size(self, width: int, height: int) -> None:
        """Set the wrap width and clip height in pixels; 0 disables either."""
        self._width = int(width)
        self._height = int(height)
        if self._text:
            self._recalculate()

    def set_color(self, r: float, g: float, b: float, a: float) -> None:
        """Set the RGBA text colour, each channel in 0..1."""
        self._color = (float(r), float(g), float(b), float(a))

    def set_alignment(self, alignment: FontFlags | int) -> None:
        self._alignment = FontFlags(alignment)
        if self._initialized:
            self._recalculate()

    def set_pixel_size(self, size: int) -> None:
        """Switch to ``size``, building its atlas the first time it is used."""
        self._pixel_size = int(size)
        if self._pixel_size not in self._atlases:
            self._atlases[self._pixel_size] = FontAtlas(self._glyphs, self._pixel_size)
        if self._initialized:
            self._recalculate()

    def set_indentation(self, pixels: int) -> None:
        self._indentation = int(pixels)

    def set_font_flags(self, flags: FontFlags | int) -> None:
        self._flags = FontFlags(flags)

    def append_font_flags(self, flags: FontFlags | int) -> None:
        self._flags |= FontFlags(flags)

    # -- layout ----------------------------------------------------------

    def _line_height(self) -> int:
        spec = self._line_height_spec
        if spec is None:
            return self._pixel_size
        if callable(spec):
            return int(spec(self._pixel_size))
        return int(spec)

    def _recalculate(self) -> None:
        self._coords = []
        atlas = self.atlas
        lines = wrap_lines(self._text, atlas, self._width)
        indented = bool(self._flags & FontFlags.Indented)
        indent = (
            self._pixel_size
            if indented and self._alignment != FontFlags.CenterAligned
            else 0
        )
        line_height = self._line_height()
        x = float(self._x)
        y = float(self._y)
        start_y = y - line_height
        for line in lines:
            if self._height and y - start_y > self._height:
                break
            self._layout_line(line, x + indent, y)
            y += line_height
            indent = 0

    def _layout_line(self, text: str, x: float, y: float) -> None:
        atlas = self.atlas
        sx, sy = self._sx, self._sy
        y += self._line_height()

        text_width = calc_width(text, atlas)
        if self._alignment == FontFlags.CenterAligned:
            x -= text_width / 2.0
        elif self._alignment == FontFlags.RightAligned:
            x -= text_width

        x = -1 + x * sx
        y = 1 - y * sy

        for char, following in zip(text, itertools.chain(text[1:], [""])):
            info = atlas.char_info(char)
            x2 = x + info.bitmap_left * sx
            y2 = -y - info.bitmap_top * sy
            w = info.bitmap_width * sx
            h = info.bitmap_height * sy

            kern = int(self._kerning(char, following)) if self._kerning else 0
            x += (info.advance_x + (kern >> 6)) * sx
            y += info.advance_y * sy

            if not w or not h:
                continue

            s0 = info.x_offset
            s1 = info.x_offset + info.bitmap_width / atlas.width
            t1 = info.bitmap_height / atlas.height
            self._coords.extend(
                (
                    Point(x2, -y2, s0, 0.0),
                    Point(x2 + w, -y2, s1, 0.0),
                    Point(x2, -y2 - h, s0, t1),
                    Point(x2 + w, -y2, s1, 0.0),
                    Point(x2, -y2 - h, s0, t1),
                    Point(x2 + w, -y2 - h, s1, t1),
                )
            )

    def _recalculate_mvp(self) -> None:
        self._mvp = self._projection @ self._view @ self._model