import numpy as np
import pytest

from chifkit.atlas import Glyph
from chifkit.label import FontFlags, Label, Point

WINDOW = 200


def make_glyphs():
    glyphs = {32: Glyph(0, 0, advance_x=10 * 64)}
    for code in range(33, 128):
        glyphs[code] = Glyph(8, 10, advance_x=10 * 64, left=1, top=10)
    return glyphs


def make_label(**kwargs):
    return Label(make_glyphs(), WINDOW, WINDOW, **kwargs)


def top_rows(label):
    return {round(p.y, 9) for p in label.vertices[::6]}


def test_default_flags_and_alignment():
    label = make_label()
    assert label.font_flags == FontFlags.LeftAligned | FontFlags.WordWrap
    assert label.alignment == FontFlags.LeftAligned
    assert label.num_vertices == 0


def test_append_font_flags_keeps_existing():
    label = make_label()
    label.append_font_flags(FontFlags.Bold)
    assert label.font_flags & FontFlags.Bold
    assert label.font_flags & FontFlags.WordWrap
    label.set_font_flags(FontFlags.Italic)
    assert label.font_flags == FontFlags.Italic


def test_six_vertices_per_visible_character():
    label = make_label()
    label.set_text("ab c")
    assert label.num_vertices == 3 * 6
    assert all(isinstance(p, Point) for p in label.vertices)


def test_spaces_produce_no_vertices():
    label = make_label()
    label.set_text("   ")
    assert label.num_vertices == 0


def test_texture_coordinates_in_unit_range():
    label = make_label(text="Hello World")
    for p in label.vertices:
        assert 0.0 <= p.s <= 1.0
        assert 0.0 <= p.t <= 1.0
    first = label.vertices[:6]
    assert first[0].t == 0.0
    assert first[2].t == pytest.approx(1.0)


def test_position_is_truncated_to_int():
    label = make_label()
    label.set_position(10.7, 3.2)
    assert label.x == 10
    assert label.y == 3


def test_set_position_shifts_vertices():
    label = make_label(text="abc")
    before = [p.x for p in label.vertices]
    label.set_position(10, 0)
    after = [p.x for p in label.vertices]
    for a, b in zip(before, after):
        assert b - a == pytest.approx(10 * 2 / WINDOW)


def test_alignment_shifts_are_consistent():
    left = make_label(text="abcd")
    center = make_label(text="abcd")
    center.set_alignment(FontFlags.CenterAligned)
    right = make_label(text="abcd")
    right.set_alignment(FontFlags.RightAligned)
    shift_center = left.vertices[0].x - center.vertices[0].x
    shift_right = left.vertices[0].x - right.vertices[0].x
    assert shift_center > 0
    assert shift_right == pytest.approx(2 * shift_center)


def test_wrapping_creates_lines():
    label = make_label(text="ab cd ef")
    assert len(top_rows(label)) == 1
    label.set_size(25, 0)
    assert len(top_rows(label)) == 3
    assert label.num_vertices == 6 * 6


def test_height_clips_lines():
    label = make_label(text="ab cd ef", line_height=20)
    label.set_size(25, 20)
    single = make_label(text="ab", line_height=20)
    assert [p.y for p in label.vertices] == pytest.approx([p.y for p in single.vertices])
    label.set_size(25, 1)
    assert label.num_vertices == 0


def test_indentation_shifts_first_line_by_pixel_size():
    plain = make_label(text="ab")
    indented = make_label()
    indented.append_font_flags(FontFlags.Indented)
    indented.set_text("ab")
    diff = indented.vertices[0].x - plain.vertices[0].x
    assert diff == pytest.approx(indented.pixel_size * 2 / WINDOW)


def test_kerning_moves_following_glyph():
    plain = make_label(text="ab")
    kerned = make_label(
        text="ab", kerning=lambda left, right: -2 * 64 if (left, right) == ("a", "b") else 0
    )
    assert kerned.vertices[0].x == pytest.approx(plain.vertices[0].x)
    diff = plain.vertices[6].x - kerned.vertices[6].x
    assert diff == pytest.approx(2 * 2 / WINDOW)


def test_set_color_round_trip():
    label = make_label()
    label.set_color(0.1, 0.2, 0.3, 0.4)
    assert label.color == (0.1, 0.2, 0.3, 0.4)


def test_invalid_window_size_raises():
    label = make_label()
    with pytest.raises(ValueError):
        label.set_window_size(0, 100)


def test_character_outside_atlas_raises():
    label = make_label()
    with pytest.raises(ValueError):
        label.set_text("é")


def test_pixel_size_atlas_is_cached():
    glyphs = make_glyphs()
    requested = []

    def loader(code, size):
        requested.append(size)
        return glyphs.get(code)

    label = Label(loader, WINDOW, WINDOW)
    first_count = len(requested)
    label.set_pixel_size(24)
    assert 24 in requested
    assert label.pixel_size == 24
    label.set_pixel_size(48)
    assert requested.count(48) == first_count


def test_scale_replaces_model():
    label = make_label()
    initial = label.mvp
    label.scale(2, 3, 4)
    assert label.mvp[0, 0] == pytest.approx(initial[0, 0] * 2)
    assert label.mvp[1, 1] == pytest.approx(initial[1, 1] * 3)
    label.scale(5, 5, 5)
    label.scale(1, 1, 1)
    assert np.allclose(label.mvp, initial)


def test_rotate_round_trip_and_half_turn():
    label = make_label()
    initial = label.mvp
    label.rotate(90, 0, 0, 1)
    label.rotate(-90, 0, 0, 1)
    assert np.allclose(label.mvp, initial)
    label.rotate(180, 0, 0, 1)
    assert label.mvp[0, 0] == pytest.approx(-initial[0, 0], abs=1e-6)


def test_rotate_zero_axis_raises():
    label = make_label()
    with pytest.raises(ValueError):
        label.rotate(45, 0, 0, 0)