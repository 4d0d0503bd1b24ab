import pytest

from billard.textfield import (
    ANIMATION_DURATION,
    FULLY_VISIBLE,
    HIDDEN,
    LINE_SPACING,
    SELECTED,
    SHOWN,
    Alignment,
    GlyphRun,
    TextField,
    TextId,
    glyph_width,
    text_aspect,
)


def _field(text="AB"):
    field = TextField()
    field.set_text(text)
    return field


def test_glyph_width_of_empty_cell():
    assert glyph_width(0) == pytest.approx(0.0625)


@pytest.mark.parametrize("code", [-1, 256, 1000])
def test_glyph_width_rejects_codes_outside_sheet(code):
    with pytest.raises(ValueError):
        glyph_width(code)


def test_text_aspect_is_additive():
    assert text_aspect("AB") == pytest.approx(glyph_width(ord("A")) + glyph_width(ord("B")))
    assert text_aspect("") == 0.0


def test_text_aspect_rejects_unknown_characters():
    with pytest.raises(ValueError):
        text_aspect("\u20ac")


def test_set_text_single_line_layout():
    field = TextField()
    runs = field.set_text("Hello")
    assert field.text == "Hello"
    assert field.aspect == pytest.approx(text_aspect("Hello"))
    assert field.lines == 1
    assert field.field_height() == pytest.approx(LINE_SPACING)
    assert len(runs) == 1
    assert [code for code, _ in runs[0].glyphs] == [ord(c) for c in "Hello"]
    xs = [x for _, x in runs[0].glyphs]
    assert xs == sorted(xs)


def test_space_is_not_drawn_but_advances():
    field = TextField()
    (run,) = field.set_text("A B")
    assert [code for code, _ in run.glyphs] == [ord("A"), ord("B")]
    (tight,) = field.set_text("AB")
    assert run.glyphs[1][1] > tight.glyphs[1][1]


def test_set_text_truncates_long_text():
    field = TextField()
    field.set_text("x" * 2500)
    assert len(field.text) == 1999


def test_set_text_stops_at_nul():
    field = _field("ab\0cd")
    assert field.text == "ab"


def test_set_text_rejects_unknown_characters():
    field = TextField()
    with pytest.raises(ValueError):
        field.set_text("\u4e2d")


def test_wrapped_layout_keeps_all_visible_glyphs_in_order():
    text = "the quick brown fox jumps over the lazy dog again and again"
    field = TextField()
    field.set_max_width(3.0)
    runs = field.set_text(text)
    assert field.lines == len(runs)
    assert field.lines > 1
    assert field.aspect == 0.0
    assert field.field_height() == pytest.approx(LINE_SPACING * field.lines)
    for index, run in enumerate(runs):
        assert run.line == index
        assert run.y == pytest.approx(-LINE_SPACING * index)
    drawn = [code for run in runs for code, _ in run.glyphs]
    assert drawn == [ord(c) for c in text if c != " "]


def test_negative_max_width_disables_wrapping():
    field = TextField()
    field.set_max_width(-5.0)
    assert field.max_width == 0.0
    runs = field.set_text("one two three four five six seven eight nine")
    assert field.lines == 1
    assert len(runs) == 1


def test_empty_wrapped_text_has_no_lines():
    field = TextField()
    field.set_max_width(2.0)
    assert field.set_text("") == ()
    assert field.lines == 0


@pytest.mark.parametrize(
    "alignment, shift",
    [(Alignment.LEFT, 0.0), (Alignment.CENTRE, 0.5), (Alignment.RIGHT, 1.0)],
)
def test_position_alignment(alignment, shift):
    field = _field()
    field.position(5.0, 4.0, 2.0, alignment)
    assert field.animating
    assert field.animate(ANIMATION_DURATION) is True
    assert field.x == pytest.approx(5.0 - shift * field.aspect * 2.0)
    assert field.y == 4.0
    assert field.height == 2.0
    assert field.alpha == SHOWN
    assert field.alignment is alignment


def test_position_keep_alignment_reuses_previous():
    field = _field()
    field.position_fixed(5.0, 4.0, 2.0, Alignment.RIGHT)
    field.position_fixed(6.0, 4.0, 1.0, Alignment.KEEP)
    assert field.alignment is Alignment.RIGHT
    assert field.x == pytest.approx(6.0 - field.aspect)


def test_position_from_hidden_zooms_in():
    field = _field()
    field.position(2.0, 3.0, 1.5, Alignment.LEFT)
    assert field.x == pytest.approx((2.0 - 8) / 1.5 + 8)
    assert field.y == pytest.approx((3.0 - 6) / 1.5 + 6)
    assert field.height == pytest.approx(1.5 / 1.5)


def test_animation_midpoint_and_completion():
    field = _field()
    field.position(2.0, 3.0, 1.5, Alignment.LEFT)
    start_x = field.x
    assert field.animate(ANIMATION_DURATION // 2) is False
    assert field.x == pytest.approx((start_x + 2.0) / 2)
    assert field.alpha == pytest.approx(SHOWN / 2)
    assert field.animate(ANIMATION_DURATION) is True
    assert field.animate(10) is False
    assert field.x == 2.0


def test_position_fixed_moves_at_once_and_resets_signal():
    field = _field()
    field.set_signal(7)
    field.position_fixed(3.0, 2.0, 1.0, Alignment.LEFT)
    assert (field.x, field.y, field.height) == (3.0, 2.0, 1.0)
    assert field.target_alpha == SHOWN
    assert field.alpha == HIDDEN
    assert field.signal == 0
    assert not field.animating


def test_key_ignored_when_not_listening():
    field = _field("ab")
    assert field.key("c") is False
    assert field.text == "ab"


def test_key_input_limited_to_nine_characters():
    field = _field("")
    field.start_listening()
    for char in "abcdefghijkl":
        assert field.key(char) is True
    assert field.text == "abcdefghi"
    assert field.aspect == pytest.approx(text_aspect("abcdefghi"))


@pytest.mark.parametrize("erase", ["\b", "\x7f"])
def test_key_backspace_removes_last(erase):
    field = _field("abc")
    field.start_listening()
    assert field.key(erase) is True
    assert field.text == "ab"
    field.set_text("")
    assert field.key(erase) is True
    assert field.text == ""


@pytest.mark.parametrize("enter", ["\r", "\n"])
def test_key_enter_stops_listening(enter):
    field = _field("abc")
    field.start_listening()
    field.animate(ANIMATION_DURATION)
    assert field.alpha == FULLY_VISIBLE
    assert field.key(enter) is True
    assert field.listening is False
    assert field.target_alpha == SHOWN
    assert field.animating


@pytest.mark.parametrize("char", ["\x01", "\x1b", "\xe9"])
def test_key_rejects_other_characters(char):
    field = _field("ab")
    field.start_listening()
    assert field.key(char) is False
    assert field.text == "ab"


def test_start_and_stop_listening():
    field = _field()
    field.start_listening()
    assert field.listening
    assert field.target_alpha == FULLY_VISIBLE
    field.animate(ANIMATION_DURATION)
    field.stop_listening()
    assert not field.listening
    assert field.target_alpha == SHOWN


def test_deactivate_fades_out_and_grows():
    field = _field()
    field.position(8.0, 6.0, 1.0, Alignment.LEFT)
    field.animate(ANIMATION_DURATION)
    assert field.height == 1.0
    field.deactivate()
    assert field.animate(ANIMATION_DURATION) is True
    assert field.alpha == HIDDEN
    assert field.height == pytest.approx(1.5)
    assert field.x == pytest.approx(8.0)
    assert not field.visible


def test_select_flashes_then_settles():
    field = _field()
    field.select()
    assert field.alpha == SELECTED
    assert field.target_alpha == SHOWN
    field.animate(ANIMATION_DURATION)
    assert field.alpha == SHOWN


def test_mouse_button_hit_and_miss():
    field = _field("AB")
    field.position_fixed(2.0, 3.0, 1.0, Alignment.LEFT)
    field.set_signal(5)
    inside = (210, 850, 1600, 1200)
    assert field.mouse_button(True, True, *inside) == -1
    assert field.alpha == SELECTED
    assert field.mouse_button(True, False, *inside) == 5
    assert field.mouse_button(False, False, *inside) == -1
    assert field.mouse_button(True, False, 100, 850, 1600, 1200) == 0


def test_mouse_button_without_signal_is_ignored():
    field = _field("AB")
    field.position_fixed(2.0, 3.0, 1.0, Alignment.LEFT)
    assert field.mouse_button(True, False, 210, 850, 1600, 1200) == 0


def test_text_ids_are_distinct_and_lookup_by_value():
    assert len({member.value for member in TextId}) == len(list(TextId))
    assert TextId(TextId.NINE_BALL_RULES.value) is TextId.NINE_BALL_RULES


def test_glyph_run_holds_layout():
    run = GlyphRun(2, -1.4, ((65, 0.0),))
    assert run.line == 2
    assert run.glyphs[0] == (65, 0.0)