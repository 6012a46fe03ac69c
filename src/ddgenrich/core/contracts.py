from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    FrozenSet,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
)

from .. import config as cfg

if TYPE_CHECKING:
    from ..ddg.parse import SearchResult

DEFAULT_ENTITY_TYPE = "/Organization"

# Host vocabulary keys read when JobConfig does not name others
ORG_NAME_KEY = "organization.name"
ORG_WEBSITE_KEY = "organization.website"


class CandidateOrigin(str, Enum):
    NAME = "name"
    WEBSITE = "website"


@dataclass(frozen=True)
class SearchCandidate:
    value: str
    origin: CandidateOrigin

    @property
    def is_name(self) -> bool:
        return self.origin == CandidateOrigin.NAME


@dataclass(frozen=True)
class NormalizedProperty:
    key: str  # e.g. "organization.infobox.founded"
    value: str


@dataclass(frozen=True)
class EntityCode:
    entity_type: str
    origin: str
    value: str

    def __str__(self) -> str:
        return f"{self.entity_type}#{self.origin}:{self.value}"


@dataclass(frozen=True)
class EntityMetadata:
    entity_type: str
    name: str = ""
    description: Optional[str] = None
    uri: Optional[str] = None
    origin_entity_code: Optional[EntityCode] = None
    codes: FrozenSet[EntityCode] = frozenset()
    properties: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Clue:
    entity_code: Optional[EntityCode]
    organization_id: str
    origin_provider_id: str
    data: EntityMetadata


@dataclass(frozen=True)
class VocabularyRecord:
    vocabulary_id: str
    name: str
    key_prefix: str
    grouping: str = DEFAULT_ENTITY_TYPE
    active: bool = False


@dataclass(frozen=True)
class VocabularyKeyRecord:
    full_name: str  # e.g. "duckDuckGo.organization.infobox.founded"
    name: str  # relative to the vocabulary prefix, e.g. "infobox.founded"
    display_name: str
    group_name: str
    vocabulary_id: str
    data_type: str = "Text"
    visible: bool = True
    storage: str = "Keyword"
    key_id: str = ""
    active: bool = False


def is_entity_type(candidate: str, accepted: str) -> bool:
    """
    Type hierarchy check: '/Organization/Subsidiary' is an '/Organization'.
    Comparison is case-insensitive on path segments.
    """
    c = (candidate or "").strip().rstrip("/").lower()
    a = (accepted or "").strip().rstrip("/").lower()
    if not c or not a:
        return False
    return c == a or c.startswith(a + "/")


@dataclass(frozen=True)
class JobConfig:
    """
    Per-connector configuration as handed over by the host.
    Unset keys fall back to the organization defaults.
    """

    accepted_entity_type: Optional[str] = None
    org_name_key: Optional[str] = None
    website_key: Optional[str] = None
    create_entity_code: bool = False

    @classmethod
    def from_dict(cls, d: Optional[Mapping[str, Any]]) -> "JobConfig":
        d = d or {}

        def _s(k: str) -> Optional[str]:
            v = d.get(k)
            v = str(v).strip() if v is not None else ""
            return v or None

        flag = d.get("createEntityCode")
        if isinstance(flag, str):
            flag = flag.strip().lower() in {"1", "true", "yes", "on"}
        return cls(
            accepted_entity_type=_s("acceptedEntityType"),
            org_name_key=_s("orgNameKey"),
            website_key=_s("websiteKey"),
            create_entity_code=bool(flag),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "acceptedEntityType": self.accepted_entity_type,
            "orgNameKey": self.org_name_key,
            "websiteKey": self.website_key,
            "createEntityCode": self.create_entity_code,
        }

    def accepted_types(self) -> List[str]:
        if self.accepted_entity_type:
            return [self.accepted_entity_type]
        return [DEFAULT_ENTITY_TYPE]


@dataclass(frozen=True)
class ProviderSettings:
    """Fixed provider metadata and vocabulary/lock knobs, passed at construction."""

    provider_id: str = "c7ddbea4-d5a2-4f25-b2a0-ebfd36d2e8d6"
    provider_name: str = "Duck Duck Go"
    component_name: str = "DuckDuckGo"
    about: str = "Duck Duck Go is a search engine"
    icon: str = "Resources.duckduckgo.svg"
    domain: str = "N/A"
    # vocabulary
    vocabulary_name: str = "DuckDuckGo Organization"
    vocabulary_prefix: str = "duckDuckGo.organization"
    namespace: str = "duckDuckGo"
    code_origin: str = "duckDuckGo"
    # synchronization
    lock_name: str = "DuckDuckGo_CreateVocab_Lock"
    lock_timeout_s: float = cfg.LOCK_TIMEOUT_S
    cache_ttl_s: float = cfg.VOCAB_CACHE_TTL_S
    related_topics_limit: int = cfg.RELATED_TOPICS_LIMIT

    def full_key(self, key: str) -> str:
        """'organization.infobox.founded' -> 'duckDuckGo.organization.infobox.founded'"""
        return f"{self.namespace}.{key}"


@dataclass(frozen=True)
class EnrichmentRequest:
    """The entity context handed in by the host for one enrichment pass."""

    entity_type: str = DEFAULT_ENTITY_TYPE
    name: str = ""
    origin_entity_code: Optional[EntityCode] = None
    organization_id: str = ""
    properties: Mapping[str, Any] = field(default_factory=dict)
    prior_results: Sequence["SearchResult"] = ()


@dataclass(frozen=True)
class EnrichmentResult:
    candidates: List[SearchCandidate] = field(default_factory=list)
    results: List[Tuple[SearchCandidate, "SearchResult"]] = field(
        default_factory=list
    )
    clues: List[Clue] = field(default_factory=list)
    trace: List[Dict[str, Any]] = field(default_factory=list)
