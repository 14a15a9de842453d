import pytest

from chifkit import backlog
from chifkit.atlas import Character, FontAtlas, Glyph


def _uniform_glyphs(width=3, rows=4, advance=640):
    return {
        code: Glyph(width, rows, bytes([code]) * (width * rows), advance_x=advance, left=1, top=rows)
        for code in range(32, 128)
    }


def test_atlas_dimensions_follow_glyphs_and_padding():
    glyphs = _uniform_glyphs()
    atlas = FontAtlas(glyphs, 16)
    assert atlas.width == len(glyphs) * (3 + 2)
    assert atlas.height == 4
    assert atlas.texture.shape == (atlas.height, atlas.width)


def test_height_is_tallest_glyph():
    glyphs = _uniform_glyphs()
    glyphs[ord("g")] = Glyph(3, 9, bytes(27))
    atlas = FontAtlas(glyphs, 16)
    assert atlas.height == 9


def test_advance_is_shifted_out_of_fixed_point():
    atlas = FontAtlas(_uniform_glyphs(advance=640), 16)
    assert atlas.char_info("A").advance_x == 10.0


def test_glyph_pixels_are_copied_at_offset():
    atlas = FontAtlas(_uniform_glyphs(), 16)
    info = atlas.char_info("B")
    start = round(info.x_offset * atlas.width)
    block = atlas.texture[:4, start : start + 3]
    assert block.tolist() == [[ord("B")] * 3] * 4
    # padding column after the glyph stays empty
    assert atlas.texture[:, start + 3].tolist() == [0] * 4


def test_offsets_increase_with_code():
    atlas = FontAtlas(_uniform_glyphs(), 16)
    offsets = [atlas.char_info(code).x_offset for code in range(32, 128)]
    assert offsets == sorted(offsets)
    assert offsets[0] == 0.0


def test_missing_glyph_is_skipped_and_logged():
    backlog.clear()
    glyphs = _uniform_glyphs()
    del glyphs[ord("Q")]
    atlas = FontAtlas(glyphs, 16)
    assert atlas.width == len(glyphs) * 5
    assert atlas.char_info("Q") == Character()
    errors = [e for e in backlog.entries() if e.level is backlog.LogLevel.ERR]
    assert any(e.source == "Font" and "Q" in e.text for e in errors)
    backlog.clear()


def test_callable_loader_receives_pixel_size():
    seen = []

    def loader(code, size):
        seen.append(size)
        return Glyph(1, 1, b"\xff", advance_x=64 * size)

    atlas = FontAtlas(loader, 12)
    assert set(seen) == {12}
    assert atlas.char_info(65).advance_x == 12.0


def test_control_codes_have_empty_info():
    atlas = FontAtlas(_uniform_glyphs(), 16)
    assert atlas.char_info(10) == Character()


@pytest.mark.parametrize("code", [128, -1, "é", "ab"])
def test_char_info_rejects_out_of_range(code):
    atlas = FontAtlas(_uniform_glyphs(), 16)
    with pytest.raises(ValueError):
        atlas.char_info(code)


def test_glyph_rejects_wrong_bitmap_size():
    with pytest.raises(ValueError):
        Glyph(2, 2, b"\x00\x00\x00")