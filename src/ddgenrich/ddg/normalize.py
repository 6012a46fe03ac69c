"""
Flatten a SearchResult into namespaced (key, value) properties.

Three namespaces come out of here:
  organization.<field>                         fixed top-level fields
  organization.infobox.<camelCaseLabel>        one per infobox content entry
  organization.relatedTopics.<i>.<sub-field>   firstUrl / text / icon per topic

Pure function of the input; the same result always yields the same list.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

from ..core.contracts import NormalizedProperty
from .parse import SearchResult

T = TypeVar("T")

ORGANIZATION = "organization"
INFOBOX = f"{ORGANIZATION}.infobox"
RELATED_TOPICS = f"{ORGANIZATION}.relatedTopics"

RT_FIRST_URL = "firstUrl"
RT_TEXT = "text"
RT_ICON = "icon"

# (key suffix, accessor) in emission order
FIXED_FIELDS: Tuple[Tuple[str, Callable[[SearchResult], Any]], ...] = (
    ("abstract", lambda r: r.abstract),
    ("abstractSource", lambda r: r.abstract_source),
    ("abstractText", lambda r: r.abstract_text),
    ("abstractURL", lambda r: r.abstract_url),
    ("answer", lambda r: r.answer),
    ("answerType", lambda r: r.answer_type),
    ("definition", lambda r: r.definition),
    ("definitionSource", lambda r: r.definition_source),
    ("definitionURL", lambda r: r.definition_url),
    ("entity", lambda r: r.entity),
    ("heading", lambda r: r.heading),
    ("image", lambda r: r.image),
    ("imageHeight", lambda r: r.image_height),
    ("imageWidth", lambda r: r.image_width),
    ("imageIsLogo", lambda r: r.image_is_logo),
    ("redirect", lambda r: r.redirect),
    ("type", lambda r: r.type),
)
WEBSITES = "websites"


# ---------- guards ----------
def is_usable(result: Optional[SearchResult]) -> bool:
    return result is not None and result.infobox is not None


def is_company_entity(result: Optional[SearchResult]) -> bool:
    return (
        result is not None
        and result.entity == "company"
        and bool(result.heading)
    )


# ---------- helpers ----------
def print_if_available(value: Any) -> Optional[str]:
    """None/''/whitespace/empty containers -> None; scalars -> str; containers -> JSON."""
    if value is None:
        return None
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, str):
        return value if value.strip() else None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (dict, list)):
        if not value:
            return None
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    s = str(value)
    return s if s.strip() else None


def format_label_to_property(label: Optional[str]) -> Optional[str]:
    """
    'Company type' -> 'companyType'. Blank labels give None.
    First token lowercased, later tokens get an upper-case first letter.
    """
    if label is None or not label.strip():
        return None
    tokens = [t for t in label.split() if t]
    head, rest = tokens[0], tokens[1:]
    return head.lower() + "".join(t[0].upper() + t[1:] for t in rest)


def join_values(
    items: Sequence[T], prop: Callable[[T], Optional[str]], separator: str = ";"
) -> Optional[str]:
    vals = [v for v in (prop(x) for x in items or []) if v]
    return separator.join(vals) if vals else None


def related_topic_key(index: int, sub_field: str) -> str:
    return f"{RELATED_TOPICS}.{index}.{sub_field}"


def infobox_key(label: str) -> str:
    return f"{INFOBOX}.{label}"


# ---------- public API ----------
def normalize_result(
    result: SearchResult, *, max_related_topics: Optional[int] = None
) -> List[NormalizedProperty]:
    """
    Map a result to NormalizedProperty entries (fixed, websites, related
    topics, infobox). `max_related_topics` caps related-topic indices; None
    leaves them unbounded.
    """
    out: Dict[str, str] = {}

    def put(key: str, value: Any) -> None:
        v = print_if_available(value)
        if v is not None:
            out[key] = v

    for suffix, get in FIXED_FIELDS:
        put(f"{ORGANIZATION}.{suffix}", get(result))

    put(
        f"{ORGANIZATION}.{WEBSITES}",
        join_values(result.results, lambda x: x.first_url),
    )

    topics = result.related_topics
    if max_related_topics is not None:
        topics = topics[: max(0, max_related_topics)]
    for i, topic in enumerate(topics):
        put(related_topic_key(i, RT_FIRST_URL), topic.first_url)
        put(related_topic_key(i, RT_TEXT), topic.text)
        if topic.icon is not None:
            put(related_topic_key(i, RT_ICON), topic.icon.url)

    if result.infobox is not None:
        for content in result.infobox.content:
            label = format_label_to_property(content.label)
            if label is None:
                continue
            key = infobox_key(label)
            v = print_if_available(content.value)
            # later entries with the same label overwrite earlier ones
            if v is None:
                out.pop(key, None)
            else:
                out[key] = v

    return [NormalizedProperty(key=k, value=v) for k, v in out.items()]


def is_dynamic_key(key: str) -> bool:
    return key.startswith(INFOBOX + ".") or key.startswith(RELATED_TOPICS + ".")
