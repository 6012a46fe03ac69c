from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


# ---------- field coercion ----------
def as_text(obj: Any) -> Optional[str]:
    """Strings pass through; numbers become text; everything else is None."""
    if obj is None or isinstance(obj, bool):
        return None
    if isinstance(obj, str):
        return obj
    if isinstance(obj, (int, float)):
        return str(obj)
    return None


def as_int(obj: Any) -> Optional[int]:
    if obj is None or isinstance(obj, bool):
        return None
    if isinstance(obj, int):
        return obj
    if isinstance(obj, float):
        return int(obj)
    if isinstance(obj, str) and obj.strip().lstrip("-").isdigit():
        return int(obj.strip())
    return None


def as_list(obj: Any) -> List[Any]:
    return obj if isinstance(obj, list) else []


def as_dict(obj: Any) -> Dict[str, Any]:
    return obj if isinstance(obj, dict) else {}


# ---------- wire model ----------
@dataclass(frozen=True)
class Icon:
    url: Optional[str] = None
    height: Optional[int] = None
    width: Optional[int] = None


@dataclass(frozen=True)
class RelatedTopic:
    text: Optional[str] = None
    first_url: Optional[str] = None
    result: Optional[str] = None
    icon: Optional[Icon] = None


@dataclass(frozen=True)
class CoreResult:
    text: Optional[str] = None
    first_url: Optional[str] = None
    result: Optional[str] = None
    icon: Optional[Icon] = None


@dataclass(frozen=True)
class InfoboxMeta:
    label: Optional[str] = None
    value: Any = None
    data_type: Optional[str] = None


@dataclass(frozen=True)
class InfoboxContent:
    label: Optional[str] = None
    value: Any = None
    data_type: Optional[str] = None
    sort_order: Optional[str] = None
    wiki_order: Any = None


@dataclass(frozen=True)
class Infobox:
    meta: List[InfoboxMeta] = field(default_factory=list)
    content: List[InfoboxContent] = field(default_factory=list)

    def primary_identifier(self) -> Optional[str]:
        """Value of the first meta entry (the article title); None when meta is empty."""
        if not self.meta:
            return None
        return as_text(self.meta[0].value)


@dataclass(frozen=True)
class SearchResult:
    abstract: Optional[str] = None
    abstract_text: Optional[str] = None
    abstract_source: Optional[str] = None
    abstract_url: Optional[str] = None
    answer: Optional[str] = None
    answer_type: Optional[str] = None
    definition: Optional[str] = None
    definition_source: Optional[str] = None
    definition_url: Optional[str] = None
    entity: Optional[str] = None
    heading: Optional[str] = None
    image: Optional[str] = None
    image_height: Optional[int] = None
    image_width: Optional[int] = None
    image_is_logo: Optional[int] = None
    redirect: Optional[str] = None
    type: Optional[str] = None
    infobox: Optional[Infobox] = None
    related_topics: List[RelatedTopic] = field(default_factory=list)
    results: List[CoreResult] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


def parse_icon(obj: Any) -> Optional[Icon]:
    if not isinstance(obj, dict):
        return None
    return Icon(
        url=as_text(obj.get("URL")),
        height=as_int(obj.get("Height")),
        width=as_int(obj.get("Width")),
    )


def parse_related_topics(arr: Any) -> List[RelatedTopic]:
    """
    One RelatedTopic per dict entry, in input order. Disambiguation pages
    group entries as {"Name": ..., "Topics": [...]}; a group keeps its slot
    as an empty RelatedTopic so later indices don't shift.
    """
    out: List[RelatedTopic] = []
    for x in as_list(arr):
        if not isinstance(x, dict):
            continue
        if "Topics" in x and "FirstURL" not in x:
            out.append(RelatedTopic())
            continue
        out.append(
            RelatedTopic(
                text=as_text(x.get("Text")),
                first_url=as_text(x.get("FirstURL")),
                result=as_text(x.get("Result")),
                icon=parse_icon(x.get("Icon")),
            )
        )
    return out


def parse_results(arr: Any) -> List[CoreResult]:
    out: List[CoreResult] = []
    for x in as_list(arr):
        if not isinstance(x, dict):
            continue
        out.append(
            CoreResult(
                text=as_text(x.get("Text")),
                first_url=as_text(x.get("FirstURL")),
                result=as_text(x.get("Result")),
                icon=parse_icon(x.get("Icon")),
            )
        )
    return out


def parse_infobox(obj: Any) -> Optional[Infobox]:
    # DDG sends "" (not null) when there is no infobox
    if not isinstance(obj, dict):
        return None
    meta = [
        InfoboxMeta(
            label=as_text(m.get("label")),
            value=m.get("value"),
            data_type=as_text(m.get("data_type")),
        )
        for m in as_list(obj.get("meta"))
        if isinstance(m, dict)
    ]
    content = [
        InfoboxContent(
            label=as_text(c.get("label")),
            value=c.get("value"),
            data_type=as_text(c.get("data_type")),
            sort_order=as_text(c.get("sort_order")),
            wiki_order=c.get("wiki_order"),
        )
        for c in as_list(obj.get("content"))
        if isinstance(c, dict)
    ]
    return Infobox(meta=meta, content=content)


def parse_search_result(d: Any) -> SearchResult:
    """
    Build a SearchResult from the decoded JSON body. Unknown or mistyped
    fields are dropped rather than raising.
    """
    d = as_dict(d)
    return SearchResult(
        abstract=as_text(d.get("Abstract")),
        abstract_text=as_text(d.get("AbstractText")),
        abstract_source=as_text(d.get("AbstractSource")),
        abstract_url=as_text(d.get("AbstractURL")),
        answer=as_text(d.get("Answer")),
        answer_type=as_text(d.get("AnswerType")),
        definition=as_text(d.get("Definition")),
        definition_source=as_text(d.get("DefinitionSource")),
        definition_url=as_text(d.get("DefinitionURL")),
        entity=as_text(d.get("Entity")),
        heading=as_text(d.get("Heading")),
        image=as_text(d.get("Image")),
        image_height=as_int(d.get("ImageHeight")),
        image_width=as_int(d.get("ImageWidth")),
        image_is_logo=as_int(d.get("ImageIsLogo")),
        redirect=as_text(d.get("Redirect")),
        type=as_text(d.get("Type")),
        infobox=parse_infobox(d.get("Infobox")),
        related_topics=parse_related_topics(d.get("RelatedTopics")),
        results=parse_results(d.get("Results")),
        raw=d,
    )


def pretty_result(r: SearchResult) -> str:
    sample = {
        "Heading": r.heading,
        "Entity": r.entity,
        "Infobox": None
        if r.infobox is None
        else {
            "meta": len(r.infobox.meta),
            "content": [c.label for c in r.infobox.content][:10],
        },
        "RelatedTopics": len(r.related_topics),
        "Results": [x.first_url for x in r.results][:3],
    }
    return json.dumps(sample, ensure_ascii=False)[:600]
