from __future__ import annotations

import logging
import threading
from typing import List, Optional

import requests

from .. import config as cfg
from ..core.contracts import SearchCandidate
from ..core.errors import (
    MalformedResponseError,
    RemoteStatusError,
    SearchCancelled,
    TransientSearchError,
)
from .http import make_session, query_params, safe_get
from .parse import SearchResult, parse_search_result, pretty_result
from .variants import search_variants

logger = logging.getLogger(__name__)

STATUS_ACCEPTED = 202
NO_DATA_STATUSES = (204, 404)


class Backoff:
    """
    Cancellable pause. Waits on `cancel` instead of sleeping so a caller can
    cut a throttle/transient pause short; raises SearchCancelled when it does.
    """

    def __init__(self, cancel: Optional[threading.Event] = None) -> None:
        self.cancel = cancel or threading.Event()
        self.last_retry_after: float = 0.0

    def pause(self, seconds: float) -> None:
        self.last_retry_after = seconds
        if seconds <= 0:
            if self.cancel.is_set():
                raise SearchCancelled("search cancelled")
            return
        if self.cancel.wait(seconds):
            raise SearchCancelled(f"search cancelled during {seconds:g}s pause")


class SearchClient:
    """
    DuckDuckGo Instant Answer client.

    Name candidates are tried as 'X', 'X company', 'X corporation' and the
    first response carrying an Infobox wins. Website candidates are a single
    literal query. One GET per attempt; statuses:
      - transport failure  -> pause, then TransientSearchError (aborts the candidate)
      - 204 / 404          -> no result
      - 2xx                -> parsed; 202 without Infobox pauses (throttled)
      - anything else      -> RemoteStatusError
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        *,
        url: Optional[str] = None,
        transient_pause_s: float = cfg.TRANSIENT_PAUSE_S,
        throttle_pause_s: float = cfg.THROTTLE_PAUSE_S,
        cancel: Optional[threading.Event] = None,
    ) -> None:
        self._session = session or make_session()
        self._url = url or cfg.DDG_API_URL
        self._transient_pause_s = transient_pause_s
        self._throttle_pause_s = throttle_pause_s
        self._backoff = Backoff(cancel)

    @property
    def last_retry_after(self) -> float:
        """Most recent pause requested by the client (backoff signal for schedulers)."""
        return self._backoff.last_retry_after

    def cancel(self) -> None:
        self._backoff.cancel.set()

    # single call -------------------------------------------------------
    def fetch(self, term: str) -> Optional[SearchResult]:
        """One GET for `term`; None for no-data outcomes."""
        if self._backoff.cancel.is_set():
            raise SearchCancelled("search cancelled")

        j, status, body = safe_get(
            self._session, query_params(term), url=self._url
        )

        if status < 0:
            self._backoff.pause(self._transient_pause_s)
            raise TransientSearchError(
                f"Could not execute external search query - {body}",
                retry_after=self._transient_pause_s,
            )

        if status in NO_DATA_STATUSES:
            return None

        if not (200 <= status < 300):
            raise RemoteStatusError(status, body)

        if j is None:
            raise MalformedResponseError(status, body)

        result = parse_search_result(j)
        if result.infobox is not None:
            return result

        if status == STATUS_ACCEPTED:
            logger.info(
                "throttled on q=%r; pausing %.1fs", term, self._throttle_pause_s
            )
            self._backoff.pause(self._throttle_pause_s)

        return result

    # candidate ---------------------------------------------------------
    def execute(self, candidate: SearchCandidate) -> Optional[SearchResult]:
        """
        Return the first usable (Infobox-bearing) result for the candidate,
        or None. Errors abort the candidate and propagate.
        """
        value = (candidate.value or "").strip()
        if not value:
            return None

        terms: List[str] = (
            search_variants(value) if candidate.is_name else [value]
        )
        for term in terms:
            result = self.fetch(term)
            if result is not None and result.infobox is not None:
                logger.debug("hit q=%r: %s", term, pretty_result(result))
                return result
            logger.debug("no infobox for q=%r", term)
        return None
