from __future__ import annotations

from typing import Optional


class EnrichmentError(RuntimeError):
    """Base for failures of a single enrichment attempt."""


# ---------- search ----------
class SearchError(EnrichmentError):
    pass


class TransientSearchError(SearchError):
    """Transport failure; the whole entity pass may be retried after `retry_after`."""

    def __init__(self, message: str, *, retry_after: float = 0.0) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class RemoteStatusError(SearchError):
    """Unexpected HTTP status; fatal for the current candidate."""

    def __init__(self, status: int, body: str) -> None:
        super().__init__(
            f"Could not execute external search query - StatusCode:{status}; Content: {body}"
        )
        self.status = status
        self.body = body


class MalformedResponseError(SearchError):
    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"Unparseable search response (HTTP {status}): {body}")
        self.status = status
        self.body = body


class SearchCancelled(SearchError):
    pass


# ---------- vocabulary ----------
class VocabularyError(EnrichmentError):
    pass


class LockTimeoutError(VocabularyError):
    def __init__(
        self, resource: str, timeout_s: float, detail: Optional[str] = None
    ) -> None:
        msg = f"Timed out after {timeout_s:g}s waiting for lock '{resource}'"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)
        self.resource = resource
        self.timeout_s = timeout_s
