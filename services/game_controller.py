import logging
import threading
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional

from models import BoardModel, RevealResult
from services.board_view import BoardView
from services.clue_source import ClueSource, NetworkError

logger = logging.getLogger(__name__)


class GameBusy(RuntimeError):
    """A start was requested while a board is still loading."""


class GameNotReady(RuntimeError):
    """A cell was clicked while no board is ready."""


class GameState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"


def gather_all(func: Callable[[Any], Any], items: Iterable[Any], max_workers: Optional[int] = None) -> List[Any]:
    """
    Run func(item) for every item concurrently and return the results in input order.
    All or nothing: on the first failure the pending calls are cancelled and the
    exception is re-raised, so callers never see a partial result.
    """
    items = list(items)
    if not items:
        return []
    executor = ThreadPoolExecutor(max_workers=max_workers or len(items), thread_name_prefix="clue-fetch")
    try:
        futures = [executor.submit(func, item) for item in items]
        done, pending = wait(futures, return_when=FIRST_EXCEPTION)
        for future in futures:
            if future in done and future.exception() is not None:
                for sibling in pending:
                    sibling.cancel()
                raise future.exception()
        return [future.result() for future in futures]
    finally:
        executor.shutdown(wait=False, cancel_futures=True)


class GameController:
    def __init__(
        self,
        source: ClueSource,
        model: BoardModel,
        view: BoardView,
        max_workers: Optional[int] = None,
    ):
        self.source = source
        self.model = model
        self.view = view
        self.max_workers = max_workers
        self.state = GameState.IDLE
        self._state_lock = threading.Lock()
        view.bind(self.handle_click)

    def start(self) -> bool:
        """
        Load a brand-new board: fetch category ids, fetch every category
        concurrently, then populate the model and render the grid.
        Returns False (and stays idle) when any fetch fails; the model is
        left untouched in that case.
        """
        with self._state_lock:
            if self.state is GameState.LOADING:
                raise GameBusy("a board is already loading")
            self.state = GameState.LOADING
        self.view.show_loading()
        try:
            try:
                ids = self.source.fetch_category_ids(self.model.num_categories)
                categories = gather_all(self.source.fetch_category, ids, self.max_workers)
            except NetworkError as exc:
                logger.warning("board load abandoned: %s", exc)
                return False

            self.model.reset(categories)
            self.view.render_full(self.model.categories)
            self.state = GameState.READY
            logger.info("board ready categories=%s", [c.title for c in self.model.categories])
            return True
        finally:
            if self.state is not GameState.READY:
                self.state = GameState.IDLE
            self.view.hide_loading()

    def handle_click(self, row: int, col: int) -> RevealResult:
        if self.state is not GameState.READY:
            logger.info("click at (%s, %s) ignored in state=%s", row, col, self.state.value)
            raise GameNotReady(f"no board is ready (state={self.state.value})")
        return self.model.reveal_next(row, col)
