# mlb_board/mlb_client.py
"""
Thin HTTP client wrapper for MLB Stats API endpoints.

Translates requests exceptions into the FetchError taxonomy so callers only
have to handle one family of errors.
"""

from __future__ import annotations

from concurrent.futures import Future, TimeoutError as FuturesTimeoutError
import logging
import threading
from typing import Any, Callable, Dict, Optional, TypeVar

import requests

from .errors import (
    FetchTimeoutError,
    MalformedURLError,
    ResponseError,
    TransportError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

SCHEDULE_PATH = "/api/v1/schedule"
SCHEDULE_HYDRATE = "game(content(editorial(recap))),decisions"


class MLBClient:
    """A minimal client for retrieving JSON and image bytes from the MLB Stats API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        sport_id: int = 1,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Store the base URL and build one shared session with request headers."""
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.sport_id = sport_id
        self._session = session or requests.Session()
        self._headers = {"User-Agent": "mlb-board/1.0"}

    def _call(self, url: str, fn: Callable[[], T]) -> T:
        """
        Run one network call (connect through last body byte) with a total deadline
        of self.timeout seconds. A call still running at the deadline is abandoned
        on its daemon thread.

        Raises:
            FetchTimeoutError at the deadline, or whatever fn raises.
        """
        future: Future = Future()

        def run() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                future.set_result(fn())
            except BaseException as ex:
                future.set_exception(ex)

        threading.Thread(target=run, name="mlb-fetch", daemon=True).start()
        try:
            return future.result(timeout=self.timeout)
        except FuturesTimeoutError:
            raise FetchTimeoutError(f"no complete response within {self.timeout}s", url) from None

    def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        """
        Execute a GET and return the response (body already read) after the status check.

        Raises:
            MalformedURLError, FetchTimeoutError, TransportError, ResponseError.
        """
        logger.debug("GET %s params=%s", url, params)
        try:
            r = self._session.get(url, params=params, timeout=self.timeout, headers=self._headers)
        except (requests.exceptions.MissingSchema, requests.exceptions.InvalidSchema, requests.exceptions.InvalidURL) as ex:
            raise MalformedURLError(f"malformed URL: {ex}", url) from ex
        except requests.exceptions.Timeout as ex:
            raise FetchTimeoutError(f"timed out after {self.timeout}s", url) from ex
        except requests.exceptions.ConnectionError as ex:
            raise TransportError(f"connection failed: {ex}", url) from ex
        except requests.exceptions.RequestException as ex:
            raise TransportError(f"request failed: {ex}", url) from ex

        try:
            r.raise_for_status()
        except requests.exceptions.HTTPError as ex:
            raise ResponseError(f"HTTP {r.status_code}", url, status_code=r.status_code) from ex
        return r

    def get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Execute a GET request to base_url + path and return parsed JSON.

        Raises:
            ResponseError when the body is not valid JSON, plus anything _get raises.
        """
        url = f"{self.base_url}{path}"

        def fetch() -> Dict[str, Any]:
            r = self._get(url, params=params)
            try:
                return r.json()
            except ValueError as ex:
                raise ResponseError(f"unreadable JSON body: {ex}", url, status_code=r.status_code) from ex

        return self._call(url, fetch)

    def get_bytes(self, url: str) -> bytes:
        """Fetch the raw body at an absolute URL (used for recap images)."""
        return self._call(url, lambda: self._get(url).content)

    def schedule_for_date(self, yyyy_mm_dd: str) -> Dict[str, Any]:
        """Fetch the schedule payload, hydrated with recap content, for a date (YYYY-MM-DD)."""
        return self.get_json(
            SCHEDULE_PATH,
            params={"hydrate": SCHEDULE_HYDRATE, "sportId": self.sport_id, "date": yyyy_mm_dd},
        )
