"""Tests for schedule payload decoding and ScheduleFetcher."""

from datetime import date, datetime, timezone
from unittest.mock import MagicMock

import pytest

from conftest import game_payload, schedule_payload
from mlb_board.errors import SchemaError, TransportError
from mlb_board.services.schedule_service import (
    ScheduleFetcher,
    decode_schedule,
    parse_game_time,
)


class TestParseGameTime:

    def test_zulu_suffix(self):
        assert parse_game_time("2024-06-01T23:05:00Z") == datetime(2024, 6, 1, 23, 5, tzinfo=timezone.utc)

    def test_offset_is_converted_to_utc(self):
        assert parse_game_time("2024-06-01T19:05:00-04:00") == datetime(2024, 6, 1, 23, 5, tzinfo=timezone.utc)

    def test_naive_is_utc(self):
        assert parse_game_time("2024-06-01T23:05:00").tzinfo == timezone.utc

    @pytest.mark.parametrize("raw", [None, "", "tomorrow", 12345])
    def test_invalid(self, raw):
        with pytest.raises(SchemaError):
            parse_game_time(raw)


class TestDecodeSchedule:

    def test_preserves_upstream_order(self):
        payload = schedule_payload(
            game_payload(away="A", home="B"),
            game_payload(away="C", home="D"),
            game_payload(away="E", home="F"),
        )
        games = decode_schedule(payload)
        assert [(g.away_name, g.home_name) for g in games] == [("A", "B"), ("C", "D"), ("E", "F")]

    def test_empty_dates_is_an_empty_day(self):
        assert decode_schedule({"dates": []}) == []

    def test_only_first_date_is_used(self):
        payload = {"dates": [{"games": [game_payload(away="A")]}, {"games": [game_payload(away="Z")]}]}
        assert [g.away_name for g in decode_schedule(payload)] == ["A"]

    def test_no_recap_content(self):
        (game,) = decode_schedule(schedule_payload(game_payload()))
        assert game.recap is None

    def test_missing_content_key_is_no_recap(self):
        raw = game_payload()
        del raw["content"]
        (game,) = decode_schedule(schedule_payload(raw))
        assert game.recap is None

    def test_recap_with_image(self):
        (game,) = decode_schedule(schedule_payload(game_payload(headline="Judge homers twice")))
        assert game.recap.headline == "Judge homers twice"
        assert game.recap.image_url == "https://img.mlbstatic.com/recap.jpg"

    def test_recap_without_headline_only_drops_that_recap(self):
        headless = game_payload(away="A", headline="x")
        del headless["content"]["editorial"]["recap"]["mlb"]["headline"]
        payload = schedule_payload(headless, game_payload(away="C", headline="Walk-off win"))

        games = decode_schedule(payload)

        assert [g.away_name for g in games] == ["A", "C"]
        assert games[0].recap is None
        assert games[1].recap.headline == "Walk-off win"

    def test_recap_without_cuts(self):
        (game,) = decode_schedule(schedule_payload(game_payload(headline="Rainout", image_src=None)))
        assert game.recap.headline == "Rainout"
        assert game.recap.image_url is None

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            {},
            {"dates": "2024-06-01"},
            {"dates": [{"no_games": []}]},
            {"dates": [{"games": ["not a game"]}]},
            {"dates": [{"games": [{"gameDate": "2024-06-01T23:05:00Z", "teams": {}}]}]},
        ],
    )
    def test_schema_mismatch(self, payload):
        with pytest.raises(SchemaError):
            decode_schedule(payload)


class TestScheduleFetcher:

    def test_fetch_day_formats_date(self):
        client = MagicMock()
        client.schedule_for_date.return_value = schedule_payload(game_payload())

        games = ScheduleFetcher(client=client).fetch_day(date(2024, 6, 1))

        client.schedule_for_date.assert_called_once_with("2024-06-01")
        assert len(games) == 1

    def test_schema_error_carries_url(self):
        client = MagicMock()
        client.base_url = "https://statsapi.mlb.com"
        client.schedule_for_date.return_value = {"unexpected": True}

        with pytest.raises(SchemaError) as info:
            ScheduleFetcher(client=client).fetch_day(date(2024, 6, 1))
        assert "2024-06-01" in info.value.url

    def test_transport_error_propagates(self):
        client = MagicMock()
        client.schedule_for_date.side_effect = TransportError("refused", url="http://x")

        with pytest.raises(TransportError):
            ScheduleFetcher(client=client).fetch_day(date(2024, 6, 1))
