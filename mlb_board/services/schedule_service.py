# mlb_board/services/schedule_service.py
"""
Schedule retrieval + decoding.

Responsibilities:
  - fetch the hydrated schedule payload for one calendar date
  - validate it against the fields the board needs
  - decode each game into a RawGame (teams, UTC game time, optional recap)
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from ..errors import SchemaError
from ..mlb_client import SCHEDULE_PATH, MLBClient
from ..models import RawGame, RecapArticle

logger = logging.getLogger(__name__)


def get_nested(obj: Any, path: list[str], default=None):
    """Safely access nested dict keys by path; return default if missing."""
    cur = obj
    for k in path:
        if not isinstance(cur, dict):
            return default
        cur = cur.get(k)
    return cur if cur is not None else default


def parse_game_time(raw: Any) -> datetime:
    """
    Parse an ISO-8601 game timestamp ("2024-06-01T23:05:00Z") into an aware UTC datetime.

    Naive timestamps are taken to be UTC.

    Raises:
        SchemaError when the value is missing or not ISO-8601.
    """
    if not isinstance(raw, str) or not raw.strip():
        raise SchemaError(f"gameDate missing or not a string: {raw!r}")
    try:
        dt = datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
    except ValueError as ex:
        raise SchemaError(f"gameDate is not ISO-8601: {raw!r}") from ex
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _team_name(game: Dict[str, Any], side: str) -> str:
    name = get_nested(game, ["teams", side, "team", "name"])
    if not isinstance(name, str) or not name.strip():
        raise SchemaError(f"teams.{side}.team.name missing")
    return name.strip()


def _recap(game: Dict[str, Any]) -> Optional[RecapArticle]:
    """
    Extract the recap article at content.editorial.recap.mlb.

    Any missing link in that chain, or an article without a headline, means the
    game has no recap content.
    A recap without image cuts keeps image_url=None.
    """
    article = get_nested(game, ["content", "editorial", "recap", "mlb"])
    if not isinstance(article, dict):
        return None

    headline = article.get("headline")
    if not isinstance(headline, str) or not headline.strip():
        logger.warning("Recap without headline ignored for game %s", game.get("gamePk", "?"))
        return None

    image_url = None
    cuts = get_nested(article, ["image", "cuts"], [])
    if isinstance(cuts, list) and cuts:
        first = cuts[0]
        src = first.get("src") if isinstance(first, dict) else None
        if isinstance(src, str) and src.strip():
            image_url = src.strip()

    return RecapArticle(headline=headline, image_url=image_url)


def decode_game(game: Any) -> RawGame:
    """Decode a single schedule game object."""
    if not isinstance(game, dict):
        raise SchemaError(f"game entry is not an object: {type(game).__name__}")
    return RawGame(
        away_name=_team_name(game, "away"),
        home_name=_team_name(game, "home"),
        game_time=parse_game_time(game.get("gameDate")),
        recap=_recap(game),
    )


def decode_schedule(payload: Any) -> List[RawGame]:
    """
    Decode a schedule payload into games for its first listed date.

    An empty "dates" list is a valid day with no games.

    Raises:
        SchemaError when the structure does not match.
    """
    if not isinstance(payload, dict):
        raise SchemaError("schedule payload is not an object")

    dates = payload.get("dates")
    if not isinstance(dates, list):
        raise SchemaError("schedule payload has no 'dates' list")
    if not dates:
        return []

    first = dates[0]
    games = first.get("games") if isinstance(first, dict) else None
    if not isinstance(games, list):
        raise SchemaError("schedule date has no 'games' list")

    return [decode_game(g) for g in games]


@dataclass
class ScheduleFetcher:
    """Retrieves and decodes the schedule for one calendar day."""

    client: MLBClient

    def fetch_day(self, day: date) -> List[RawGame]:
        """
        Return the day's games in upstream order.

        Raises:
            FetchError subclasses (malformed URL, transport, response, schema).
        """
        payload = self.client.schedule_for_date(day.strftime("%Y-%m-%d"))
        try:
            return decode_schedule(payload)
        except SchemaError as ex:
            ex.url = ex.url or f"{self.client.base_url}{SCHEDULE_PATH}?date={day.isoformat()}"
            raise
