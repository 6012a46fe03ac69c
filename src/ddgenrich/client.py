from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

import requests

from .core.contracts import (
    Clue,
    EnrichmentRequest,
    EnrichmentResult,
    JobConfig,
    ProviderSettings,
    SearchCandidate,
)
from .core.interfaces import (
    ClueSink,
    DistributedLock,
    ExpiringStore,
    PreviewDownloader,
    VocabularyRepository,
)
from .ddg.http import ConnectionVerification, make_session, verify_connection
from .ddg.parse import SearchResult
from .ddg.search import SearchClient
from .enrich.cache import process_cache
from .enrich.candidates import build_candidates
from .enrich.clues import build_clue
from .enrich.lock import FileLock
from .enrich.runner import enrich_entity
from .enrich.store import JsonlVocabularyRepository
from .enrich.vocabulary import VocabularySynchronizer


class DuckDuckGoEnricher:
    """
    Public façade. Wires one HTTP session, a SearchClient and a
    VocabularySynchronizer together; the work itself lives in ddg/ and enrich/.

    Without an explicit repository/lock it uses the JSONL store and file
    locks under the cache dir, so several processes can share a vocabulary.
    """

    def __init__(
        self,
        config: Union[JobConfig, Mapping[str, Any], None] = None,
        *,
        settings: Optional[ProviderSettings] = None,
        session: Optional[requests.Session] = None,
        repository: Optional[VocabularyRepository] = None,
        lock: Optional[DistributedLock] = None,
        cache: Optional[ExpiringStore] = None,
        store_path: Optional[Path] = None,
        cancel: Optional[threading.Event] = None,
        **client_kwargs: Any,
    ) -> None:
        if config is None or isinstance(config, JobConfig):
            self.config = config or JobConfig()
        else:
            self.config = JobConfig.from_dict(config)
        self.settings = settings or ProviderSettings()
        self._cancel = cancel or threading.Event()
        self._session = session or make_session()
        self.client = SearchClient(
            self._session, cancel=self._cancel, **client_kwargs
        )
        self.synchronizer = VocabularySynchronizer(
            repository or JsonlVocabularyRepository(store_path),
            lock or FileLock(cancel=self._cancel),
            cache if cache is not None else process_cache(),
            settings=self.settings,
        )

    def cancel(self) -> None:
        """Abort pending pauses and lock waits; in-flight calls raise."""
        self._cancel.set()

    def build_queries(
        self, request: EnrichmentRequest
    ) -> List[SearchCandidate]:
        return build_candidates(request, self.config)

    def execute_search(
        self, candidate: SearchCandidate
    ) -> Optional[SearchResult]:
        return self.client.execute(candidate)

    def build_clue(
        self,
        result: SearchResult,
        request: EnrichmentRequest,
        *,
        preview_downloader: Optional[PreviewDownloader] = None,
    ) -> Optional[Clue]:
        return build_clue(
            result,
            request,
            settings=self.settings,
            config=self.config,
            synchronizer=self.synchronizer,
            preview_downloader=preview_downloader,
        )

    def enrich(
        self,
        request: EnrichmentRequest,
        *,
        clue_sink: Optional[ClueSink] = None,
        preview_downloader: Optional[PreviewDownloader] = None,
    ) -> EnrichmentResult:
        return enrich_entity(
            request,
            client=self.client,
            config=self.config,
            settings=self.settings,
            synchronizer=self.synchronizer,
            clue_sink=clue_sink,
            preview_downloader=preview_downloader,
        )

    def predeclare_keys(self, limit: Optional[int] = None) -> int:
        return self.synchronizer.predeclare_related_topic_keys(limit)

    def verify_connection(self) -> ConnectionVerification:
        return verify_connection(self._session)
