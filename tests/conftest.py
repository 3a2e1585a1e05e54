"""Shared payload builders and test doubles."""

from __future__ import annotations

import threading
from datetime import date, datetime, timezone
from typing import Callable, Dict, List, Optional

import pytest

from mlb_board.errors import TransportError
from mlb_board.models import GameRecord, RawGame, RecapArticle


def game_payload(
    away: str = "New York Yankees",
    home: str = "Boston Red Sox",
    game_date: str = "2024-06-01T23:05:00Z",
    headline: Optional[str] = None,
    image_src: Optional[str] = "https://img.mlbstatic.com/recap.jpg",
) -> dict:
    """Build one schedule game in the MLB Stats API shape."""
    game = {
        "gameDate": game_date,
        "teams": {
            "away": {"team": {"name": away}},
            "home": {"team": {"name": home}},
        },
        "content": {},
    }
    if headline is not None:
        cuts = [{"src": image_src}] if image_src else []
        game["content"] = {
            "editorial": {
                "recap": {
                    "mlb": {"headline": headline, "image": {"cuts": cuts}},
                }
            }
        }
    return game


def schedule_payload(*games: dict) -> dict:
    return {"dates": [{"games": list(games)}]}


def raw_game(
    away: str = "New York Yankees",
    home: str = "Boston Red Sox",
    headline: Optional[str] = None,
    image_url: Optional[str] = "https://img.mlbstatic.com/recap.jpg",
) -> RawGame:
    recap = RecapArticle(headline=headline, image_url=image_url) if headline is not None else None
    return RawGame(
        away_name=away,
        home_name=home,
        game_time=datetime(2024, 6, 1, 23, 5, tzinfo=timezone.utc),
        recap=recap,
    )


class FakeFetcher:
    """ScheduleFetcher double: games (or an error) per date, with optional per-date hooks."""

    def __init__(
        self,
        games_by_date: Dict[date, List[RawGame]],
        failing: Optional[set] = None,
        before_return: Optional[Callable[[date], None]] = None,
        on_complete: Optional[Callable[[date], None]] = None,
    ) -> None:
        self.games_by_date = games_by_date
        self.failing = failing or set()
        self.before_return = before_return
        self.on_complete = on_complete
        self.completed: List[date] = []
        self._lock = threading.Lock()

    def fetch_day(self, day: date) -> List[RawGame]:
        if self.before_return is not None:
            self.before_return(day)
        with self._lock:
            self.completed.append(day)
        if self.on_complete is not None:
            self.on_complete(day)
        if day in self.failing:
            raise TransportError("connection refused", url=f"http://test/{day.isoformat()}")
        return list(self.games_by_date.get(day, []))


class FakeEnricher:
    """GameEnricher double producing a GameRecord straight from the raw game."""

    def __init__(self, before_return: Optional[Callable[[RawGame], None]] = None) -> None:
        self.before_return = before_return

    def enrich(self, game: RawGame) -> GameRecord:
        if self.before_return is not None:
            self.before_return(game)
        return GameRecord(title=f"{game.away_name} at {game.home_name}", summary="Live 07:05 PM")


def records(n: int) -> tuple:
    return tuple(GameRecord(title=f"Game {i}", summary=f"Summary {i}") for i in range(n))


@pytest.fixture
def today() -> date:
    return date(2024, 6, 3)
