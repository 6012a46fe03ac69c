from __future__ import annotations

import json
import threading
import uuid
from dataclasses import asdict, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from .. import config as cfg
from ..core.contracts import VocabularyKeyRecord, VocabularyRecord

# Append-only vocabulary store in JSONL. One line per event:
#   {"kind": "vocabulary", "record": {...}}
#   {"kind": "key", "record": {...}}
#   {"kind": "activate_vocabulary", "id": "..."}
#   {"kind": "activate_key", "id": "..."}
#
# Other processes may append at any time, so every lookup first reads whatever
# was written since the last read. Nothing here prevents a duplicate key; that
# is what the synchronizer's lock + re-check is for.
#
# NOTE: intentionally simple; upgrade to sqlite if/when needed.

_LOCK = threading.Lock()


class JsonlVocabularyRepository:
    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path or cfg.VOCAB_STORE_PATH)
        self._offset = 0
        self._vocabs: Dict[str, VocabularyRecord] = {}
        self._vocab_by_prefix: Dict[str, str] = {}
        self._keys: Dict[str, VocabularyKeyRecord] = {}
        self._key_by_name: Dict[str, str] = {}
        self._mem_lock = threading.Lock()

    # ---- reading -------------------------------------------------------
    def _apply(self, rec: Dict[str, Any]) -> None:
        kind = rec.get("kind")
        if kind == "vocabulary":
            v = VocabularyRecord(**rec["record"])
            self._vocabs[v.vocabulary_id] = v
            self._vocab_by_prefix.setdefault(v.key_prefix, v.vocabulary_id)
        elif kind == "key":
            k = VocabularyKeyRecord(**rec["record"])
            self._keys[k.key_id] = k
            self._key_by_name.setdefault(k.full_name, k.key_id)
        elif kind == "activate_vocabulary":
            v = self._vocabs.get(rec.get("id", ""))
            if v is not None:
                self._vocabs[v.vocabulary_id] = replace(v, active=True)
        elif kind == "activate_key":
            k = self._keys.get(rec.get("id", ""))
            if k is not None:
                self._keys[k.key_id] = replace(k, active=True)

    def _refresh(self) -> None:
        if not self.path.exists():
            return
        with self._mem_lock:
            with self.path.open("r", encoding="utf-8") as fh:
                fh.seek(self._offset)
                while True:
                    line = fh.readline()
                    if not line:
                        break
                    if not line.endswith("\n"):
                        # partial write from another process; pick it up next time
                        break
                    self._offset = fh.tell()
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        self._apply(json.loads(line))
                    except (ValueError, KeyError, TypeError):
                        continue

    def _append(self, rec: Dict[str, Any]) -> None:
        with _LOCK:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(json.dumps(rec, ensure_ascii=False) + "\n")

    # ---- VocabularyRepository ------------------------------------------
    def get_vocabulary_by_prefix(
        self, key_prefix: str
    ) -> Optional[VocabularyRecord]:
        self._refresh()
        vid = self._vocab_by_prefix.get(key_prefix)
        return self._vocabs.get(vid) if vid else None

    def add_vocabulary(self, record: VocabularyRecord) -> str:
        vid = record.vocabulary_id or str(uuid.uuid4())
        rec = replace(record, vocabulary_id=vid, active=False)
        self._append({"kind": "vocabulary", "record": asdict(rec)})
        return vid

    def activate_vocabulary(self, vocabulary_id: str) -> None:
        self._append({"kind": "activate_vocabulary", "id": vocabulary_id})

    def get_key_by_full_name(
        self, full_name: str
    ) -> Optional[VocabularyKeyRecord]:
        self._refresh()
        kid = self._key_by_name.get(full_name)
        return self._keys.get(kid) if kid else None

    def add_key(self, record: VocabularyKeyRecord) -> str:
        kid = record.key_id or str(uuid.uuid4())
        rec = replace(record, key_id=kid, active=False)
        self._append({"kind": "key", "record": asdict(rec)})
        return kid

    def activate_key(self, key_id: str) -> None:
        self._append({"kind": "activate_key", "id": key_id})

    # ---- inspection ----------------------------------------------------
    def keys(self) -> List[VocabularyKeyRecord]:
        self._refresh()
        return list(self._keys.values())

    def vocabularies(self) -> List[VocabularyRecord]:
        self._refresh()
        return list(self._vocabs.values())
