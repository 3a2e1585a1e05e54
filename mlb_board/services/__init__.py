"""
Services package exports.
"""
from .board_service import BoardService
from .enrichment_service import GameEnricher
from .schedule_service import ScheduleFetcher

__all__ = ["BoardService", "GameEnricher", "ScheduleFetcher"]
