from uiplatform.editor_geometry import EditorRect, Margins, editor_rect, measured_text


def test_measured_text_has_trailing_space():
    assert measured_text("abc") == "abc "
    assert measured_text("") == " "


def test_baseline_minus_ascent_without_frame():
    rect = editor_rect(x=100, y=50, ascent=12, text_width=40, min_width=10)
    assert rect == EditorRect(x=100, y=38, width=40)


def test_frame_shifts_origin_so_text_stays_in_place():
    padding = Margins(3, 2, 3, 2)
    border = Margins(1, 1, 1, 1)
    margin = Margins(0, 4, 0, 0)
    rect = editor_rect(100, 50, 12, 40, 10, padding, border, margin)
    assert rect.x == 100 - 3 - 1 - 0
    assert rect.y == 38 - 2 - 1 - 4
    assert rect.width == 40 + 3 + 3


def test_min_width_wins_for_short_text():
    rect = editor_rect(0, 20, 10, text_width=5, min_width=80, padding=Margins(2, 0, 2, 0))
    assert rect.width == 80


def test_fractional_width_rounds_up():
    rect = editor_rect(0, 20, 10, text_width=10.2, min_width=0)
    assert rect.width == 11
