"""Tests for the rendered grid: full render, per-cell handlers and loading toggles."""

import pytest

from models import ALREADY_REVEALED, BoardModel, Category, Clue, IndexOutOfRange
from services.board_view import BoardView


def make_categories(num_categories=6, clues_per_category=5):
    return [
        Category(
            title=f"Cat{c}",
            clues=[Clue(question=f"Q{c}-{r}", answer=f"A{c}-{r}") for r in range(clues_per_category)],
        )
        for c in range(num_categories)
    ]


@pytest.fixture
def bound_view():
    model = BoardModel()
    model.reset(make_categories())
    view = BoardView(placeholder="?")
    view.bind(model.reveal_next)
    view.render_full(model.categories)
    return view, model


def test_render_full_headers_and_placeholders(bound_view):
    view, _ = bound_view
    assert view.headers == [f"Cat{i}" for i in range(6)]
    assert len(view.rows) == 5
    assert all(len(cells) == 6 for cells in view.rows)
    assert all(cell.text == "?" for cells in view.rows for cell in cells)
    assert [(c.row, c.col) for c in view.rows[2]] == [(2, col) for col in range(6)]


def test_click_patches_only_that_cell(bound_view):
    view, _ = bound_view
    before = view.snapshot()["cells"]
    cell = view.click(1, 4)
    assert cell.text == "Q4-1"
    after = view.snapshot()["cells"]
    changed = [(r, c) for r in range(5) for c in range(6) if before[r][c] != after[r][c]]
    assert changed == [(1, 4)]


def test_click_dispatches_captured_address():
    calls = []
    view = BoardView()
    view.bind(lambda row, col: calls.append((row, col)) or ALREADY_REVEALED)
    view.render_full(make_categories())
    view.click(3, 5)
    view.click(0, 0)
    assert calls == [(3, 5), (0, 0)]
    # already-revealed results leave the text alone
    assert view.rows[3][5].text == "?"


def test_rerender_drops_stale_handlers(bound_view):
    view, model = bound_view
    old_cell = view.rows[0][0]
    view.render_full(make_categories())
    assert view.rows[0][0] is not old_cell
    view.click(0, 0)
    assert old_cell.text == "?"


def test_click_unknown_cell(bound_view):
    view, _ = bound_view
    assert not view.has_cell(5, 0)
    with pytest.raises(IndexOutOfRange):
        view.click(5, 0)


def test_click_without_dispatcher():
    view = BoardView()
    view.render_full(make_categories())
    with pytest.raises(RuntimeError):
        view.click(0, 0)


def test_loading_toggles_are_idempotent(bound_view):
    view, _ = bound_view
    view.show_loading()
    view.show_loading()
    assert view.loading and not view.start_enabled
    # no stale grid while loading
    assert view.headers == [] and view.rows == []
    assert not view.has_cell(0, 0)

    view.hide_loading()
    view.hide_loading()
    assert not view.loading and view.start_enabled


def test_snapshot_shape(bound_view):
    view, _ = bound_view
    snap = view.snapshot()
    assert snap["loading"] is False
    assert snap["start_enabled"] is True
    assert len(snap["cells"]) == 5
    assert snap["headers"][0] == "Cat0"
