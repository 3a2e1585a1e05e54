# mlb_board/services/board_service.py
"""
Board aggregation.

Responsibilities:
  - fan out one schedule fetch per configured day offset
  - within each fetched day, fan out one enrichment per game and join
  - drop failed days (logged), keep degraded games
  - sort surviving days by date into the configured board order
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date, datetime, timedelta
import logging
from typing import List, Optional, Sequence, Tuple

from dateutil import tz

from ..config import NEWEST_FIRST
from ..errors import ConfigError, FetchError, NoScheduleDataError
from ..models import DaySchedule, GameRecord, RawGame, ScheduleBoard
from .enrichment_service import GameEnricher
from .schedule_service import ScheduleFetcher

logger = logging.getLogger(__name__)


def target_dates(today: date, offsets: Sequence[int]) -> List[date]:
    """Resolve day offsets to distinct dates, keeping first occurrence order."""
    seen: set[date] = set()
    out: List[date] = []
    for off in offsets:
        d = today + timedelta(days=off)
        if d not in seen:
            seen.add(d)
            out.append(d)
    return out


def order_days(days: Sequence[DaySchedule], board_order: str) -> Tuple[DaySchedule, ...]:
    """Sort rows by date only; completion order is irrelevant."""
    return tuple(sorted(days, key=lambda d: d.date, reverse=(board_order == NEWEST_FIRST)))


@dataclass
class BoardService:
    """Service responsible for building a ScheduleBoard from the remote API."""

    fetcher: ScheduleFetcher
    enricher: GameEnricher
    tz_name: str
    day_offsets: Sequence[int]
    board_order: str = NEWEST_FIRST
    max_game_workers: int = 16

    @property
    def app_tz(self):
        return tz.gettz(self.tz_name)

    def _today(self) -> date:
        """Return today's date in the app timezone."""
        return datetime.now(tz=self.app_tz).date()

    def _enrich_games(self, games: Sequence[RawGame]) -> Tuple[GameRecord, ...]:
        """Enrich every game concurrently; results keep upstream order."""
        if not games:
            return ()
        workers = min(len(games), self.max_game_workers)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="enrich") as executor:
            return tuple(executor.map(self.enricher.enrich, games))

    def _build_day(self, day: date) -> DaySchedule:
        """Fetch one day and join its game enrichment. Raises FetchError on day failure."""
        games = self.fetcher.fetch_day(day)
        return DaySchedule(date=day, games=self._enrich_games(games))

    def build(self, today: Optional[date] = None) -> ScheduleBoard:
        """
        Build the board for the configured offsets relative to today.

        Raises:
            ConfigError if no day offsets are configured.
            NoScheduleDataError if every day failed to load.
        """
        if not self.day_offsets:
            raise ConfigError("day_offsets must name at least one day")

        today = today or self._today()
        dates = target_dates(today, self.day_offsets)
        logger.info("Building schedule board for %s", ", ".join(d.isoformat() for d in dates))

        survived: List[DaySchedule] = []
        with ThreadPoolExecutor(max_workers=len(dates), thread_name_prefix="day") as executor:
            futures = {executor.submit(self._build_day, d): d for d in dates}
            for future, d in futures.items():
                try:
                    survived.append(future.result())
                except FetchError as ex:
                    logger.error("Error while retrieving game data for %s: %s", d.isoformat(), ex)

        if not survived:
            raise NoScheduleDataError(f"no schedule data for any of {len(dates)} day(s)")

        board = ScheduleBoard(days=order_days(survived, self.board_order), generated_at=datetime.now(tz=self.app_tz))
        logger.info(
            "Schedule board built: %d/%d day(s), %d game(s)",
            len(board.days),
            len(dates),
            sum(board.day_sizes),
        )
        return board
