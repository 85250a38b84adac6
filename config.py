# config.py - configuration constants
import os

from dotenv import find_dotenv, load_dotenv

# Load .env (searched upward from the working directory) before Config reads the environment
load_dotenv(find_dotenv(usecwd=True))


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "supersecretkey")

    # Remote trivia API (two read-only endpoints: /categories and /category)
    TRIVIA_API_URL = os.getenv("TRIVIA_API_URL", "https://jservice.io/api")
    TRIVIA_TIMEOUT_SECONDS = _env_int("TRIVIA_TIMEOUT_SECONDS", 5)

    # Board shape: columns x rows
    NUM_CATEGORIES = _env_int("NUM_CATEGORIES", 6)
    CLUES_PER_CATEGORY = _env_int("CLUES_PER_CATEGORY", 5)
    # How many category ids to request before sampling NUM_CATEGORIES of them
    CATEGORY_POOL_SIZE = _env_int("CATEGORY_POOL_SIZE", 100)
    # 0 means one worker per category
    FETCH_WORKERS = _env_int("FETCH_WORKERS", 0)

    CLUE_PLACEHOLDER = os.getenv("CLUE_PLACEHOLDER", "?")

    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = os.getenv("SESSION_COOKIE_SAMESITE", "Lax")
    # Don't force Secure cookies locally unless explicitly enabled
    SESSION_COOKIE_SECURE = os.getenv("SESSION_COOKIE_SECURE", "0") == "1"
