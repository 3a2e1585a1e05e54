# mlb_board/services/enrichment_service.py
"""
Per-game enrichment: title, summary and recap image.

Summary/image policy:
  - no recap content           -> "Live <local kickoff>", no image
  - recap + image fetched      -> recap headline, image bytes
  - recap + image fetch failed -> "Live <local kickoff>", no image (logged)
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from datetime import datetime

from dateutil import tz

from ..errors import FetchError
from ..mlb_client import MLBClient
from ..models import GameRecord, RawGame

logger = logging.getLogger(__name__)

KICKOFF_FORMAT = "%I:%M %p"


def game_title(game: RawGame) -> str:
    return f"{game.away_name} at {game.home_name}"


@dataclass
class GameEnricher:
    """Turns a RawGame into a display-ready GameRecord. Never raises on fetch failures."""

    client: MLBClient
    tz_name: str

    @property
    def app_tz(self):
        """Return the configured timezone object used for kickoff formatting."""
        return tz.gettz(self.tz_name)

    def fallback_summary(self, game: RawGame) -> str:
        """Time-based placeholder: the kickoff time in the display timezone."""
        local: datetime = game.game_time.astimezone(self.app_tz)
        return f"Live {local.strftime(KICKOFF_FORMAT)}"

    def _fetch_image(self, url: str | None) -> bytes:
        if not url:
            raise FetchError("recap has no image cuts")
        return self.client.get_bytes(url)

    def enrich(self, game: RawGame) -> GameRecord:
        title = game_title(game)

        if game.recap is None:
            return GameRecord(title=title, summary=self.fallback_summary(game))

        try:
            image = self._fetch_image(game.recap.image_url)
        except FetchError as ex:
            logger.error("Error while retrieving image for %s: %s", title, ex)
            return GameRecord(title=title, summary=self.fallback_summary(game))

        return GameRecord(title=title, summary=game.recap.headline, image=image)
