# mlb_board/models.py
"""
Domain models for the schedule board.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Sequence, Tuple


@dataclass(frozen=True)
class RecapArticle:
    """Editorial recap attached to a game: headline plus the first image cut (if any)."""
    headline: str
    image_url: Optional[str] = None


@dataclass(frozen=True)
class RawGame:
    """A decoded schedule entry, before enrichment."""
    away_name: str
    home_name: str
    game_time: datetime   # tz-aware, UTC
    recap: Optional[RecapArticle] = None


@dataclass(frozen=True)
class GameRecord:
    """Display-ready game entry. image is None when no recap image could be obtained."""
    title: str
    summary: str
    image: Optional[bytes] = field(default=None, repr=False)

    @property
    def has_image(self) -> bool:
        return self.image is not None


@dataclass(frozen=True)
class DaySchedule:
    """All games for one calendar date, in upstream API order."""
    date: date
    games: Tuple[GameRecord, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "games", tuple(self.games))


@dataclass(frozen=True)
class ScheduleBoard:
    """Ordered rows of DaySchedule; built once per aggregation run."""
    days: Tuple[DaySchedule, ...] = ()
    generated_at: Optional[datetime] = None

    def __post_init__(self):
        object.__setattr__(self, "days", tuple(self.days))

    def __len__(self) -> int:
        return len(self.days)

    @property
    def day_sizes(self) -> Tuple[int, ...]:
        """Number of games per row, in board order."""
        return tuple(len(d.games) for d in self.days)

    def game_at(self, day_index: int, game_index: int) -> Optional[GameRecord]:
        """Return the game at absolute (row, index), or None when out of range."""
        if not 0 <= day_index < len(self.days):
            return None
        games = self.days[day_index].games
        if not 0 <= game_index < len(games):
            return None
        return games[game_index]


@dataclass(frozen=True)
class NavigationState:
    """
    Grid cursor.

    focused_column is relative to the focused day's window; window_begins holds
    the first visible game index for every row, indexed by day.
    """
    focused_day: int = 0
    focused_column: int = 0
    window_begins: Tuple[int, ...] = ()

    def window_begin(self, day_index: int) -> int:
        if 0 <= day_index < len(self.window_begins):
            return self.window_begins[day_index]
        return 0

    @property
    def focused_index(self) -> int:
        """Absolute index of the focused game within its day."""
        return self.window_begin(self.focused_day) + self.focused_column

    @classmethod
    def initial(cls, day_count: int) -> "NavigationState":
        return cls(focused_day=0, focused_column=0, window_begins=(0,) * day_count)


@dataclass(frozen=True)
class BoardViewModel:
    """All data a renderer needs for one frame."""
    board: ScheduleBoard
    navigation: NavigationState
    page_size: int
    visible: Sequence[Sequence[GameRecord]] = ()
    focused: Optional[GameRecord] = None
