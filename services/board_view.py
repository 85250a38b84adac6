# services/board_view.py - rendered grid state and per-cell click routing
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from models import Category, IndexOutOfRange, RevealResult

Dispatch = Callable[[int, int], RevealResult]


@dataclass
class Cell:
    row: int
    col: int
    text: str
    on_click: Callable[[], None] = field(default=lambda: None, repr=False, compare=False)


class BoardView:
    """
    What the viewer currently sees: the header row of category titles, the
    body cells, the loading indicator and whether the start control is enabled.
    The HTML page and the JSON endpoints are both rendered from this state.
    """

    def __init__(self, placeholder: str = "?"):
        self.placeholder = placeholder
        self.headers: List[str] = []
        self.rows: List[List[Cell]] = []
        self.loading = False
        self.start_enabled = True
        self._cells: Dict[Tuple[int, int], Cell] = {}
        self._dispatch: Optional[Dispatch] = None

    def bind(self, dispatch: Dispatch) -> None:
        self._dispatch = dispatch

    def render_full(self, categories: Sequence[Category]) -> None:
        """Replace the whole grid; every cell starts on the placeholder with its own handler."""
        self.clear()
        self.headers = [category.title for category in categories]
        num_rows = len(categories[0].clues) if categories else 0
        for row in range(num_rows):
            cells = []
            for col in range(len(categories)):
                cell = Cell(row=row, col=col, text=self.placeholder)
                cell.on_click = self._make_handler(cell)
                self._cells[(row, col)] = cell
                cells.append(cell)
            self.rows.append(cells)

    def _make_handler(self, cell: Cell) -> Callable[[], None]:
        row, col = cell.row, cell.col

        def handler() -> None:
            if self._dispatch is None:
                raise RuntimeError("board view has no click dispatcher bound")
            result = self._dispatch(row, col)
            if not result.already_revealed:
                cell.text = result.text

        return handler

    def has_cell(self, row: int, col: int) -> bool:
        return (row, col) in self._cells

    def click(self, row: int, col: int) -> Cell:
        cell = self._cells.get((row, col))
        if cell is None:
            raise IndexOutOfRange(f"no rendered cell at ({row}, {col})")
        cell.on_click()
        return cell

    def clear(self) -> None:
        self.headers = []
        self.rows = []
        self._cells = {}

    def show_loading(self) -> None:
        # stale cells must not be clickable while a new board loads
        self.clear()
        self.loading = True
        self.start_enabled = False

    def hide_loading(self) -> None:
        self.loading = False
        self.start_enabled = True

    def snapshot(self) -> dict:
        return {
            "headers": list(self.headers),
            "cells": [[cell.text for cell in cells] for cells in self.rows],
            "loading": self.loading,
            "start_enabled": self.start_enabled,
        }
