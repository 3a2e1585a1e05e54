# mlb_board/config.py
"""
Configuration for the MLB schedule board.

This module centralizes all tunable settings (display timezone, API base URL,
day offsets, board ordering, paging, timeouts, cache TTL and logging).
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import List, Tuple

from .errors import ConfigError

NEWEST_FIRST = "newest_first"
OLDEST_FIRST = "oldest_first"
BOARD_ORDERS = (NEWEST_FIRST, OLDEST_FIRST)

DEFAULT_IMAGE_PATH = str(Path(__file__).parent / "static" / "default_game.png")


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, returning default on missing/invalid values."""
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    """Read a float environment variable, returning default on missing/invalid values."""
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def _env_int_list(name: str, default: List[int]) -> List[int]:
    """
    Read a comma-delimited integer list from the environment.

    Example:
      DAY_OFFSETS="0,-1,-2"

    Returns default if unset or if any item is not an integer.
    """
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        out = [int(x.strip()) for x in raw.split(",") if x.strip()]
    except ValueError:
        return default
    return out or default


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable app configuration.

    Notes on board layout:
      - day_offsets: signed day counts relative to today; one board row per date.
      - board_order: "newest_first" puts the most recent date in row 0,
        "oldest_first" the reverse. Fetch completion order never matters.
      - page_size: number of games visible at once in a row.
    """

    # Core settings
    tz: str = field(default_factory=lambda: os.getenv("TZ", "America/New_York"))
    mlb_api_base: str = field(default_factory=lambda: os.getenv("MLB_API_BASE", "https://statsapi.mlb.com"))
    sport_id: int = field(default_factory=lambda: _env_int("MLB_SPORT_ID", 1))

    # Board shape
    day_offsets: Tuple[int, ...] = field(
        default_factory=lambda: tuple(_env_int_list("DAY_OFFSETS", [0, -1, -2]))
    )
    board_order: str = field(default_factory=lambda: os.getenv("BOARD_ORDER", NEWEST_FIRST).strip().lower())
    page_size: int = field(default_factory=lambda: _env_int("PAGE_SIZE", 5))

    # Network controls
    request_timeout_seconds: float = field(default_factory=lambda: _env_float("REQUEST_TIMEOUT_SECONDS", 10.0))
    max_game_workers: int = field(default_factory=lambda: _env_int("MAX_GAME_WORKERS", 16))

    # Cache controls
    board_cache_ttl_seconds: int = field(default_factory=lambda: _env_int("BOARD_CACHE_TTL_SECONDS", 300))

    # Consumer assets
    default_image_path: str = field(default_factory=lambda: os.getenv("DEFAULT_IMAGE_PATH", DEFAULT_IMAGE_PATH))

    # Logging
    log_file: str = field(default_factory=lambda: os.getenv("LOG_FILE", ""))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    def __post_init__(self):
        """Normalize sequence fields so callers may pass lists."""
        # dataclass frozen => use object.__setattr__
        object.__setattr__(self, "day_offsets", tuple(self.day_offsets))

    def validate(self) -> "AppConfig":
        """
        Check settings that would make the board impossible to build.

        Raises:
            ConfigError on empty day offsets, non-positive page size/workers,
            or an unknown board order.
        """
        if not self.day_offsets:
            raise ConfigError("day_offsets must name at least one day")
        if self.page_size < 1:
            raise ConfigError(f"page_size must be >= 1, got {self.page_size}")
        if self.max_game_workers < 1:
            raise ConfigError(f"max_game_workers must be >= 1, got {self.max_game_workers}")
        if self.board_order not in BOARD_ORDERS:
            raise ConfigError(f"board_order must be one of {BOARD_ORDERS}, got {self.board_order!r}")
        return self
