"""
Core exports for ddgenrich.
"""

from .contracts import (
    CandidateOrigin,
    Clue,
    EnrichmentRequest,
    EnrichmentResult,
    EntityCode,
    EntityMetadata,
    JobConfig,
    NormalizedProperty,
    ProviderSettings,
    SearchCandidate,
    VocabularyKeyRecord,
    VocabularyRecord,
    is_entity_type,
)
from .errors import (
    EnrichmentError,
    LockTimeoutError,
    MalformedResponseError,
    RemoteStatusError,
    SearchCancelled,
    SearchError,
    TransientSearchError,
    VocabularyError,
)
from .interfaces import DistributedLock, ExpiringStore, VocabularyRepository

__all__ = [
    "CandidateOrigin",
    "SearchCandidate",
    "NormalizedProperty",
    "EntityCode",
    "EntityMetadata",
    "Clue",
    "VocabularyRecord",
    "VocabularyKeyRecord",
    "JobConfig",
    "ProviderSettings",
    "EnrichmentRequest",
    "EnrichmentResult",
    "is_entity_type",
    "EnrichmentError",
    "SearchError",
    "TransientSearchError",
    "RemoteStatusError",
    "MalformedResponseError",
    "SearchCancelled",
    "VocabularyError",
    "LockTimeoutError",
    "VocabularyRepository",
    "DistributedLock",
    "ExpiringStore",
]
