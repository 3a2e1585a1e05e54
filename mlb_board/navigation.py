# mlb_board/navigation.py
"""
Grid focus navigation over a ScheduleBoard.

Rows are days, columns are the games inside a per-day sliding window of
page_size games. move_focus() is a pure transition; NavigationGrid holds the
current state for one board and applies directional events one at a time.

Short days (fewer games than a page) expose only their real games: focus never
lands on an empty slot and the window never scrolls.
"""

from __future__ import annotations

from enum import Enum
import threading
from typing import Optional, Sequence, Tuple

from .models import GameRecord, NavigationState, ScheduleBoard


class FocusDirection(Enum):
    """An enumeration of directions in which focus can move."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, raw: str) -> "FocusDirection":
        """Parse a case-insensitive direction name. Raises ValueError on unknown names."""
        try:
            return cls((raw or "").strip().lower())
        except ValueError:
            raise ValueError(f"unknown focus direction: {raw!r}") from None


def visible_count(size: int, page_size: int) -> int:
    """Number of focusable columns for a day with `size` games."""
    return min(page_size, size)


def max_window_begin(size: int, page_size: int) -> int:
    return max(0, size - page_size)


def _clamp_column(column: int, size: int, page_size: int) -> int:
    return min(column, max(0, visible_count(size, page_size) - 1))


def _normalized_windows(state: NavigationState, day_count: int) -> list[int]:
    begins = list(state.window_begins[:day_count])
    begins.extend([0] * (day_count - len(begins)))
    return begins


def move_focus(
    state: NavigationState,
    day_sizes: Sequence[int],
    direction: FocusDirection,
    page_size: int,
) -> NavigationState:
    """
    Return the state after one directional move.

    Moves against a boundary (and every move on an empty board) return an
    equivalent state rather than raising.
    """
    if not day_sizes:
        return state

    windows = _normalized_windows(state, len(day_sizes))
    day = min(max(state.focused_day, 0), len(day_sizes) - 1)
    column = state.focused_column
    size = day_sizes[day]

    if direction is FocusDirection.LEFT:
        if column > 0:
            column -= 1
        elif windows[day] > 0:
            windows[day] -= 1
    elif direction is FocusDirection.RIGHT:
        if column < visible_count(size, page_size) - 1:
            column += 1
        elif windows[day] + page_size < size:
            windows[day] += 1
    elif direction is FocusDirection.UP:
        if day > 0:
            day -= 1
            column = _clamp_column(column, day_sizes[day], page_size)
    elif direction is FocusDirection.DOWN:
        if day < len(day_sizes) - 1:
            day += 1
            column = _clamp_column(column, day_sizes[day], page_size)

    return NavigationState(focused_day=day, focused_column=column, window_begins=tuple(windows))


class NavigationGrid:
    """Owns the NavigationState for one board. The board itself is never mutated."""

    def __init__(self, board: ScheduleBoard, page_size: int = 5, state: Optional[NavigationState] = None) -> None:
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self.board = board
        self.page_size = page_size
        self._day_sizes = board.day_sizes
        self._state = state or NavigationState.initial(len(board.days))
        self._lock = threading.Lock()

    @property
    def state(self) -> NavigationState:
        return self._state

    def move(self, direction: FocusDirection) -> NavigationState:
        """Apply one directional event and return the new state."""
        with self._lock:
            self._state = move_focus(self._state, self._day_sizes, direction, self.page_size)
            return self._state

    def reset(self) -> NavigationState:
        with self._lock:
            self._state = NavigationState.initial(len(self.board.days))
            return self._state

    def visible_range(self, day_index: int) -> Tuple[int, int]:
        """Absolute [begin, end) indices of the visible window for a row."""
        size = self._day_sizes[day_index]
        begin = min(self._state.window_begin(day_index), max_window_begin(size, self.page_size))
        return begin, begin + visible_count(size, self.page_size)

    def visible_games(self, day_index: int) -> Tuple[GameRecord, ...]:
        begin, end = self.visible_range(day_index)
        return self.board.days[day_index].games[begin:end]

    def focused_game(self) -> Optional[GameRecord]:
        """Return the focused game, or None on an empty board or empty day."""
        s = self._state
        return self.board.game_at(s.focused_day, s.focused_index)
