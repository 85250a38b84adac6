import html
import logging
import random
from typing import Any, Dict, List, Optional

import requests

from models import Category, Clue

logger = logging.getLogger(__name__)


class NetworkError(Exception):
    """The trivia API could not be reached or returned a malformed payload."""


class ClueSource:
    def __init__(
        self,
        base_url: str,
        pool_size: int = 100,
        clues_per_category: int = 5,
        timeout: Optional[int] = 5,
    ):
        self.base_url = base_url.rstrip("/")
        self.pool_size = pool_size
        self.clues_per_category = clues_per_category
        self.timeout = timeout

    def _get(self, path: str, params: Dict[str, Any]) -> Any:
        """GET one endpoint and return its decoded JSON body; no retries."""
        url = f"{self.base_url}/{path}"
        logger.debug("GET %s params=%s", url, params)
        try:
            resp = requests.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as exc:
            logger.warning("trivia request failed url=%s: %s", url, exc)
            raise NetworkError(f"request to {url} failed: {exc}") from exc
        except ValueError as exc:
            # body was not JSON
            logger.warning("trivia response not JSON url=%s", url)
            raise NetworkError(f"response from {url} is not JSON") from exc

    def fetch_category_ids(self, count: int) -> List[Any]:
        """
        Request a pool of category summaries and return `count` distinct ids
        sampled uniformly without replacement.
        """
        data = self._get("categories", {"count": self.pool_size})
        if not isinstance(data, list):
            raise NetworkError("category list payload is not an array")

        pool: List[Any] = []
        for entry in data:
            if not isinstance(entry, dict) or entry.get("id") is None:
                raise NetworkError("category summary without an id")
            pool.append(entry["id"])
        # collapse duplicates, keeping first-seen order
        pool = list(dict.fromkeys(pool))

        if len(pool) < count:
            raise NetworkError(f"only {len(pool)} categories available, need {count}")
        return random.sample(pool, count)

    def fetch_category(self, category_id: Any) -> Category:
        """Fetch one category and keep exactly the first `clues_per_category` clues."""
        data = self._get("category", {"id": category_id})
        if not isinstance(data, dict):
            raise NetworkError(f"category {category_id} payload is not an object")

        title = data.get("title")
        raw_clues = data.get("clues")
        if not isinstance(title, str) or not isinstance(raw_clues, list):
            raise NetworkError(f"category {category_id} payload is missing title or clues")
        if len(raw_clues) < self.clues_per_category:
            raise NetworkError(
                f"category {category_id} has {len(raw_clues)} clues, "
                f"need {self.clues_per_category}"
            )

        clues = []
        for raw in raw_clues[: self.clues_per_category]:
            if not isinstance(raw, dict) or raw.get("question") is None or raw.get("answer") is None:
                raise NetworkError(f"category {category_id} has a clue without question/answer")
            clues.append(
                Clue(question=html.unescape(str(raw["question"])), answer=html.unescape(str(raw["answer"])))
            )
        return Category(title=html.unescape(title), clues=clues)
