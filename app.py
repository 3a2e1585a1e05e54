# app.py
"""
Flask entrypoint for the MLB schedule board.

The app is the board's consumer: it reads the aggregated board and the
navigation state, serves game images (substituting the default image when a
game has none), and forwards directional events to the navigation grid.

Routes:
  JSON:
    - GET  /api/board
    - GET  /api/navigation
    - POST /api/navigation/<direction>   (left|right|up|down)
    - POST /api/board/refresh

  Images:
    - GET  /api/board/<day>/<game>/image

Notes:
  - The board is built lazily on first request and cached for BOARD_CACHE_TTL_SECONDS.
  - Navigation state is per-process and reset whenever the board is rebuilt.
"""

from __future__ import annotations

import logging
import mimetypes
import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from flask import Flask, Response, abort, jsonify, url_for

from mlb_board.cache import TTLCache
from mlb_board.config import DEFAULT_IMAGE_PATH, AppConfig
from mlb_board.errors import NoScheduleDataError
from mlb_board.handlers.board_handler import BoardHandler
from mlb_board.logging_setup import setup_logging
from mlb_board.mlb_client import MLBClient
from mlb_board.models import GameRecord, NavigationState
from mlb_board.navigation import FocusDirection
from mlb_board.services import BoardService, GameEnricher, ScheduleFetcher

logger = logging.getLogger(__name__)

GAME_IMAGE_MIMETYPE = "image/jpeg"


def load_default_image(path: str) -> Tuple[bytes, str]:
    """
    Read the fallback game image and guess its mimetype.

    Falls back to the bundled image if the configured path cannot be read.
    """
    try:
        raw = Path(path).read_bytes()
    except OSError as ex:
        logger.error("Could not read default image %s, using bundled image: %s", path, ex)
        path = DEFAULT_IMAGE_PATH
        raw = Path(path).read_bytes()
    mimetype, _ = mimetypes.guess_type(path)
    return raw, mimetype or "application/octet-stream"


def make_board_service(cfg: AppConfig, client: MLBClient) -> BoardService:
    """Wire the fetcher + enricher into the aggregator using one shared client."""
    return BoardService(
        fetcher=ScheduleFetcher(client=client),
        enricher=GameEnricher(client=client, tz_name=cfg.tz),
        tz_name=cfg.tz,
        day_offsets=cfg.day_offsets,
        board_order=cfg.board_order,
        max_game_workers=cfg.max_game_workers,
    )


def create_app(cfg: Optional[AppConfig] = None, board_service: Optional[BoardService] = None) -> Flask:
    """
    App factory.

    Builds shared dependencies (client + cache + board handler) once per process.
    Tests may pass their own config and board service.
    """
    cfg = (cfg or AppConfig()).validate()
    setup_logging(cfg.log_file, cfg.log_level)

    if board_service is None:
        client = MLBClient(cfg.mlb_api_base, timeout=cfg.request_timeout_seconds, sport_id=cfg.sport_id)
        board_service = make_board_service(cfg, client)

    handler = BoardHandler(
        board_service=board_service,
        cache=TTLCache(),
        page_size=cfg.page_size,
        board_ttl=cfg.board_cache_ttl_seconds,
    )
    default_image, default_mimetype = load_default_image(cfg.default_image_path)

    app = Flask(__name__)
    app.config["BOARD_HANDLER"] = handler

    # -------------------------
    # Serialization helpers
    # -------------------------

    def game_to_dict(g: GameRecord, day_index: int, game_index: int) -> Dict[str, Any]:
        """Serialize a GameRecord into JSON-safe primitives (image bytes are served separately)."""
        return {
            "title": g.title,
            "summary": g.summary,
            "hasImage": g.has_image,
            "imageUrl": url_for("game_image", day=day_index, game=game_index),
        }

    def navigation_to_dict(s: NavigationState) -> Dict[str, Any]:
        return {
            "focusedDay": s.focused_day,
            "focusedColumn": s.focused_column,
            "focusedIndex": s.focused_index,
            "windowBegins": list(s.window_begins),
        }

    # -------------------------
    # Error mapping
    # -------------------------

    @app.errorhandler(NoScheduleDataError)
    def no_schedule_data(ex: NoScheduleDataError):
        logger.error("Schedule board unavailable: %s", ex)
        return jsonify({"error": "schedule unavailable", "detail": str(ex)}), 503

    # -------------------------
    # Board routes
    # -------------------------

    @app.get("/api/board")
    def api_board():
        """Full board payload: every day and game in board order, plus the cursor."""
        vm = handler.build()
        return jsonify(
            {
                "generatedAt": vm.board.generated_at.isoformat() if vm.board.generated_at else None,
                "pageSize": vm.page_size,
                "days": [
                    {
                        "date": day.date.isoformat(),
                        "games": [game_to_dict(g, d, i) for i, g in enumerate(day.games)],
                    }
                    for d, day in enumerate(vm.board.days)
                ],
                "navigation": navigation_to_dict(vm.navigation),
            }
        )

    @app.get("/api/board/<int:day>/<int:game>/image")
    def game_image(day: int, game: int):
        """Recap image for a game, or the default image when the game has none."""
        record = handler.board().game_at(day, game)
        if record is None:
            abort(404)
        if record.image is None:
            return Response(default_image, mimetype=default_mimetype)
        return Response(record.image, mimetype=GAME_IMAGE_MIMETYPE)

    @app.post("/api/board/refresh")
    def api_board_refresh():
        """Rebuild the board now; navigation starts over."""
        grid = handler.refresh()
        return jsonify(
            {
                "days": len(grid.board.days),
                "games": sum(grid.board.day_sizes),
                "navigation": navigation_to_dict(grid.state),
            }
        )

    # -------------------------
    # Navigation routes
    # -------------------------

    @app.get("/api/navigation")
    def api_navigation():
        """Cursor, focused game and the visible window for every row."""
        vm = handler.build()
        focused = vm.navigation
        return jsonify(
            {
                "navigation": navigation_to_dict(focused),
                "focused": (
                    game_to_dict(vm.focused, focused.focused_day, focused.focused_index)
                    if vm.focused is not None
                    else None
                ),
                "visible": [
                    [
                        game_to_dict(g, d, focused.window_begin(d) + i)
                        for i, g in enumerate(row)
                    ]
                    for d, row in enumerate(vm.visible)
                ],
            }
        )

    @app.post("/api/navigation/<direction>")
    def api_navigate(direction: str):
        """Apply one directional event (left|right|up|down)."""
        try:
            parsed = FocusDirection.parse(direction)
        except ValueError as ex:
            return jsonify({"error": str(ex)}), 400
        state = handler.navigate(parsed)
        return jsonify({"navigation": navigation_to_dict(state)})

    # -------------------------
    # Health
    # -------------------------

    @app.get("/health")
    def health():
        """Simple health endpoint for Docker/monitoring checks."""
        return {"ok": True}

    return app


# WSGI entrypoint for gunicorn (Docker CMD uses: app:app)
app = create_app()

if __name__ == "__main__":
    # Dev server (not for production).
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "8000")), debug=True)
