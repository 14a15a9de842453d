"""Word splitting, width measurement and line wrapping for label text."""

from __future__ import annotations

from chifkit.atlas import FontAtlas


def split_text(text: str) -> list[str]:
    """Split ``text`` at spaces, keeping each space on the word before it."""
    parts = text.split(" ")
    return [part + " " for part in parts[:-1]] + [parts[-1]]


def calc_width(text: str, atlas: FontAtlas) -> int:
    """Return the summed horizontal advance of ``text`` in pixels."""
    width = 0
    for char in text:
        width = int(width + atlas.char_info(char).advance_x)
    return width


def wrap_lines(text: str, atlas: FontAtlas, width: int) -> list[str]:
    """Break ``text`` into lines no wider than ``width``; 0 disables wrapping."""
    lines: list[str] = []
    remaining = width
    space_width = calc_width(" ", atlas)
    current = ""
    for word in split_text(text):
        word_width = calc_width(word, atlas)
        if width and word_width - space_width > remaining:
            lines.append(current)
            remaining = width - word_width
            current = word
        else:
            current += word
            remaining -= word_width
    if current:
        lines.append(current)
    return lines