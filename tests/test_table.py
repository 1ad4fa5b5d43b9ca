from algorun.ui.messages import KeyMsg, WindowSizeMsg
from algorun.ui.style import strip_ansi, visible_width
from algorun.ui.table import Column, Table


def make_table(**kwargs):
    params = dict(
        columns=[Column("Name", 6), Column("Value", 6)],
        rows=[["x1", "v1"], ["x2", "v2"], ["x3", "v3"]],
        focused=True,
        height=10,
    )
    params.update(kwargs)
    return Table(**params)


def test_selected_row_starts_at_first():
    assert make_table().selected_row() == ["x1", "v1"]


def test_empty_table_has_no_selection():
    assert Table().selected_row() is None


def test_down_and_up_move_and_clamp():
    table = make_table()
    table.handle_message(KeyMsg("down"))
    assert table.selected_row() == ["x2", "v2"]
    for _ in range(5):
        table.handle_message(KeyMsg("down"))
    assert table.selected_row() == ["x3", "v3"]
    table.handle_message(KeyMsg("up"))
    assert table.selected_row() == ["x2", "v2"]
    for _ in range(5):
        table.handle_message(KeyMsg("k"))
    assert table.cursor == 0


def test_top_and_bottom_keys():
    table = make_table()
    table.handle_message(KeyMsg("G"))
    assert table.selected_row() == ["x3", "v3"]
    table.handle_message(KeyMsg("g"))
    assert table.selected_row() == ["x1", "v1"]


def test_unfocused_table_ignores_keys():
    table = make_table(focused=False)
    table.handle_message(KeyMsg("down"))
    assert table.cursor == 0


def test_window_size_does_not_move_cursor():
    table = make_table()
    table.handle_message(KeyMsg("down"))
    table.handle_message(WindowSizeMsg(width=10, height=10))
    assert table.cursor == 1


def test_set_rows_clamps_cursor():
    table = make_table()
    table.handle_message(KeyMsg("G"))
    table.set_rows([["y1", "w1"]])
    assert table.selected_row() == ["y1", "w1"]
    table.set_rows([])
    assert table.cursor == 0
    assert table.selected_row() is None


def test_view_contains_headers_and_rows():
    text = strip_ansi(make_table().view())
    assert "Name" in text
    assert "Value" in text
    for value in ("x1", "x2", "x3", "v3"):
        assert value in text


def test_view_has_height_lines():
    table = make_table()
    assert len(table.view().split("\n")) == table.height


def test_long_values_are_truncated_with_ellipsis():
    table = make_table(columns=[Column("Name", 3)], rows=[["abcdef"]])
    text = strip_ansi(table.view())
    assert "ab…" in text
    assert "abcdef" not in text


def test_lines_fit_width():
    table = make_table(width=5)
    assert all(visible_width(line) <= 5 for line in table.view().split("\n"))


def test_scrolls_to_keep_cursor_visible():
    table = make_table(height=3)
    table.handle_message(KeyMsg("down"))
    text = strip_ansi(table.view())
    assert "x2" in text
    assert "x1" not in text