"""
enrich
========
Turns an entity into DuckDuckGo search candidates, search results into
clues, and keeps the connector's vocabulary registered in the shared store.

Depends on:
- ddgenrich.ddg.* for search, parsing and normalization
- ddgenrich.common.orgnorm for name normalization & the default name filter

This package ONLY concerns:
  - building/deduplicating candidates for an entity,
  - registering dynamic vocabulary keys exactly once (lock + re-check),
  - assembling clues and running the per-entity pass.

Reference implementations of the host's shared services (expiring cache,
locks, append-only store) live here too, for standalone use and tests.
"""

from .cache import ExpiringCache, process_cache
from .candidates import build_candidates, field_values, parse_domain, uri_host
from .clues import build_clue, resolve_entity_code
from .lock import FileLock, ProcessLock
from .runner import enrich_entity
from .store import JsonlVocabularyRepository
from .vocabulary import VocabularySynchronizer, describe_key

__all__ = [
    "ExpiringCache",
    "process_cache",
    "build_candidates",
    "field_values",
    "parse_domain",
    "uri_host",
    "build_clue",
    "resolve_entity_code",
    "FileLock",
    "ProcessLock",
    "enrich_entity",
    "JsonlVocabularyRepository",
    "VocabularySynchronizer",
    "describe_key",
]
