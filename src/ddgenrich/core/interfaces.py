from __future__ import annotations

from typing import Any, Callable, ContextManager, Optional, Protocol

from .contracts import Clue, VocabularyKeyRecord, VocabularyRecord

# Host-supplied collaborators that are plain callables
NameNormalizer = Callable[[str], str]
NameFilter = Callable[[str], bool]  # True -> acceptable organization name
EntityTypeCheck = Callable[[str, str], bool]  # (candidate, accepted)
ClueSink = Callable[[Clue], None]
PreviewDownloader = Callable[[str, Clue], None]  # (image_url, clue)


class VocabularyRepository(Protocol):
    """
    Shared schema store. Implementations must be safe to call from several
    processes at once; uniqueness is still only guaranteed under the lock.
    """

    def get_vocabulary_by_prefix(
        self, key_prefix: str
    ) -> Optional[VocabularyRecord]: ...

    def add_vocabulary(self, record: VocabularyRecord) -> str: ...

    def activate_vocabulary(self, vocabulary_id: str) -> None: ...

    def get_key_by_full_name(
        self, full_name: str
    ) -> Optional[VocabularyKeyRecord]: ...

    def add_key(self, record: VocabularyKeyRecord) -> str: ...

    def activate_key(self, key_id: str) -> None: ...


class DistributedLock(Protocol):
    """
    Named exclusive lock. `acquire` blocks up to `timeout_s` and raises
    LockTimeoutError when it cannot get the lock; the handle releases on exit.
    """

    def acquire(
        self, resource_name: str, timeout_s: float
    ) -> ContextManager[None]: ...


class ExpiringStore(Protocol):
    """Process-wide short-lived cache. A miss only means 'check again'."""

    def get(self, key: str) -> Optional[Any]: ...

    def set(self, key: str, value: Any, ttl_s: float) -> None: ...
