# mlb_board/handlers/board_handler.py
"""
Handler/controller that owns the current board and its navigation grid.

Keeps Flask routes simple by concentrating assembly logic here. A board refresh
replaces the board wholesale and starts a fresh grid over it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import threading
from typing import Optional

from ..cache import TTLCache
from ..models import BoardViewModel, NavigationState, ScheduleBoard
from ..navigation import FocusDirection, NavigationGrid
from ..services.board_service import BoardService

BOARD_CACHE_KEY = "board"


@dataclass
class BoardHandler:
    """Orchestrates the board service, cache and navigation grid into view models."""

    board_service: BoardService
    cache: TTLCache
    page_size: int
    board_ttl: int

    _grid: Optional[NavigationGrid] = field(default=None, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def board(self) -> ScheduleBoard:
        """Return the cached board, building it when missing or expired."""
        return self.cache.get_or_set(
            key=BOARD_CACHE_KEY,
            ttl_seconds=self.board_ttl,
            loader=self.board_service.build,
        )

    def grid(self) -> NavigationGrid:
        """Return the grid for the current board; a new board gets a fresh grid."""
        board = self.board()
        with self._lock:
            if self._grid is None or self._grid.board is not board:
                self._grid = NavigationGrid(board, page_size=self.page_size)
            return self._grid

    def refresh(self) -> NavigationGrid:
        """Drop the cached board and rebuild it now."""
        self.cache.invalidate(BOARD_CACHE_KEY)
        return self.grid()

    def navigate(self, direction: FocusDirection) -> NavigationState:
        return self.grid().move(direction)

    def build(self) -> BoardViewModel:
        """
        Build a view model for the current frame.

        Returns:
            BoardViewModel with the board, cursor, per-row visible window and focused game.
        """
        grid = self.grid()
        board = grid.board
        return BoardViewModel(
            board=board,
            navigation=grid.state,
            page_size=grid.page_size,
            visible=[grid.visible_games(i) for i in range(len(board.days))],
            focused=grid.focused_game(),
        )
