"""
Idempotent registration of the connector's vocabulary and its dynamic keys.

Per key:
  cache hit                     -> done
  store hit                     -> cache, done
  store miss                    -> lock -> re-check store -> add + activate -> cache

Only the store + lock decide uniqueness. The cache just saves round trips
for keys seen within its TTL.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Tuple

from ..core.contracts import ProviderSettings, VocabularyKeyRecord, VocabularyRecord
from ..core.interfaces import DistributedLock, ExpiringStore, VocabularyRepository
from ..ddg.normalize import RT_FIRST_URL, RT_ICON, RT_TEXT
from .cache import process_cache

logger = logging.getLogger(__name__)

INFOBOX_GROUP = "DuckDuckGo Organization Infobox"
RELATED_TOPICS_GROUP = "DuckDuckGo Organization Related Topics"

_RT_DISPLAY = {RT_FIRST_URL: "Url", RT_TEXT: "Text", RT_ICON: "Icon"}


def describe_key(relative_name: str) -> Optional[Tuple[str, str]]:
    """
    (display_name, group_name) for a dynamic key relative to the vocabulary
    prefix, e.g. 'infobox.founded' or 'relatedTopics.3.firstUrl'.
    None for anything that is not a dynamic key.
    """
    parts = relative_name.split(".")
    if len(parts) >= 2 and parts[0] == "infobox":
        label = ".".join(parts[1:])
        return (f"Infobox-{label}", INFOBOX_GROUP)
    if len(parts) == 3 and parts[0] == "relatedTopics" and parts[1].isdigit():
        post = _RT_DISPLAY.get(parts[2], "")
        return (f"Related Topics {parts[1]} {post}".rstrip(), RELATED_TOPICS_GROUP)
    return None


class VocabularySynchronizer:
    def __init__(
        self,
        repository: VocabularyRepository,
        lock: DistributedLock,
        cache: Optional[ExpiringStore] = None,
        *,
        settings: Optional[ProviderSettings] = None,
    ) -> None:
        self._repo = repository
        self._lock = lock
        self._cache = cache if cache is not None else process_cache()
        self._settings = settings or ProviderSettings()

    # cache keys ---------------------------------------------------------
    def _vocab_cache_key(self) -> str:
        return f"{self._settings.component_name}-GetExistingVocabulary"

    def _key_cache_key(self, full_name: str) -> str:
        return f"{self._settings.component_name}_EnsureKey_{full_name}"

    def relative_name(self, full_name: str) -> str:
        prefix = self._settings.vocabulary_prefix + "."
        return full_name[len(prefix):] if full_name.startswith(prefix) else full_name

    # public API ---------------------------------------------------------
    def ensure_vocabulary(self) -> str:
        """Id of the connector's vocabulary, creating and activating it once."""
        s = self._settings
        cached = self._cache.get(self._vocab_cache_key())
        if cached is not None:
            return cached

        existing = self._repo.get_vocabulary_by_prefix(s.vocabulary_prefix)
        if existing is not None:
            vid = existing.vocabulary_id
        else:
            with self._lock.acquire(s.lock_name, s.lock_timeout_s):
                existing = self._repo.get_vocabulary_by_prefix(s.vocabulary_prefix)
                if existing is None:
                    vid = self._repo.add_vocabulary(
                        VocabularyRecord(
                            vocabulary_id="",
                            name=s.vocabulary_name,
                            key_prefix=s.vocabulary_prefix,
                        )
                    )
                    self._repo.activate_vocabulary(vid)
                    logger.info(
                        "created vocabulary %s (%s)", s.vocabulary_prefix, vid
                    )
                else:
                    vid = existing.vocabulary_id

        self._cache.set(self._vocab_cache_key(), vid, s.cache_ttl_s)
        return vid

    def ensure_key(
        self, full_name: str, display_name: str, group_name: str
    ) -> None:
        """Register `full_name` in the store unless it is already there."""
        s = self._settings
        ck = self._key_cache_key(full_name)
        if self._cache.get(ck) is not None:
            return

        if self._repo.get_key_by_full_name(full_name) is not None:
            self._cache.set(ck, True, s.cache_ttl_s)
            return

        # resolved before taking the lock; the lock is not re-entrant
        vocabulary_id = self.ensure_vocabulary()

        with self._lock.acquire(s.lock_name, s.lock_timeout_s):
            if self._repo.get_key_by_full_name(full_name) is None:
                key_id = self._repo.add_key(
                    VocabularyKeyRecord(
                        full_name=full_name,
                        name=self.relative_name(full_name),
                        display_name=display_name,
                        group_name=group_name,
                        vocabulary_id=vocabulary_id,
                    )
                )
                self._repo.activate_key(key_id)
                logger.info("created vocabulary key %s", full_name)

        self._cache.set(ck, True, s.cache_ttl_s)

    def ensure_property_keys(self, full_names: Iterable[str]) -> int:
        """Ensure every dynamic key among `full_names`; returns how many were checked."""
        n = 0
        for full_name in full_names:
            desc = describe_key(self.relative_name(full_name))
            if desc is None:
                continue
            self.ensure_key(full_name, *desc)
            n += 1
        return n

    def predeclare_related_topic_keys(self, limit: Optional[int] = None) -> int:
        """Register relatedTopics.<i>.{firstUrl,text,icon} for i < limit ahead of use."""
        s = self._settings
        limit = s.related_topics_limit if limit is None else limit
        names = (
            f"{s.vocabulary_prefix}.relatedTopics.{i}.{sub}"
            for i in range(max(0, limit))
            for sub in (RT_FIRST_URL, RT_TEXT, RT_ICON)
        )
        return self.ensure_property_keys(names)
