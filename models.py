"""In-memory board model: categories, clues and their reveal progress.

The board is created fresh on every game start and replaced wholesale on
restart, so a new game always begins with every clue hidden.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple


class InvalidBoardShape(ValueError):
    """Raised when a board does not have the configured categories x clues shape."""


class IndexOutOfRange(IndexError):
    """Raised when a (row, col) address is outside the board."""


class RevealState(Enum):
    HIDDEN = "hidden"
    QUESTION = "question"
    ANSWER = "answer"

    def advance(self) -> "RevealState":
        if self is RevealState.HIDDEN:
            return RevealState.QUESTION
        if self is RevealState.QUESTION:
            return RevealState.ANSWER
        raise ValueError("a fully revealed clue has no next state")


@dataclass
class Clue:
    question: str
    answer: str
    reveal_state: RevealState = RevealState.HIDDEN

    def displayed_text(self) -> Optional[str]:
        """Text for the current state; None while hidden."""
        if self.reveal_state is RevealState.QUESTION:
            return self.question
        if self.reveal_state is RevealState.ANSWER:
            return self.answer
        return None


@dataclass
class Category:
    title: str
    clues: List[Clue] = field(default_factory=list)


@dataclass(frozen=True)
class RevealResult:
    state: RevealState
    text: Optional[str]

    @property
    def already_revealed(self) -> bool:
        return self is ALREADY_REVEALED


# Returned when a clue that already shows its answer is clicked again
ALREADY_REVEALED = RevealResult(state=RevealState.ANSWER, text=None)


class BoardModel:
    """Owns the board (a fixed number of categories, each with a fixed number of clues).

    ``reset`` and ``reveal_next`` are the only mutation paths.
    """

    def __init__(self, num_categories: int = 6, clues_per_category: int = 5):
        self.num_categories = num_categories
        self.clues_per_category = clues_per_category
        self._categories: List[Category] = []

    @property
    def categories(self) -> Tuple[Category, ...]:
        return tuple(self._categories)

    @property
    def is_ready(self) -> bool:
        return bool(self._categories)

    def reset(self, categories: Sequence[Category]) -> None:
        """Replace the whole board; the previous board is kept if the shape is wrong."""
        categories = list(categories)
        if len(categories) != self.num_categories:
            raise InvalidBoardShape(
                f"expected {self.num_categories} categories, got {len(categories)}"
            )
        for col, category in enumerate(categories):
            if len(category.clues) != self.clues_per_category:
                raise InvalidBoardShape(
                    f"category {col} ({category.title!r}) has {len(category.clues)} clues, "
                    f"expected {self.clues_per_category}"
                )
        self._categories = categories

    def category_at(self, col: int) -> Category:
        if not 0 <= col < len(self._categories):
            raise IndexOutOfRange(f"no category at column {col}")
        return self._categories[col]

    def clue_at(self, row: int, col: int) -> Clue:
        category = self.category_at(col)
        if not 0 <= row < len(category.clues):
            raise IndexOutOfRange(f"no clue at row {row} of column {col}")
        return category.clues[row]

    def reveal_next(self, row: int, col: int) -> RevealResult:
        """Advance the clue at (row, col) by one step and return the text it now shows."""
        clue = self.clue_at(row, col)
        if clue.reveal_state is RevealState.ANSWER:
            return ALREADY_REVEALED
        clue.reveal_state = clue.reveal_state.advance()
        return RevealResult(state=clue.reveal_state, text=clue.displayed_text())
