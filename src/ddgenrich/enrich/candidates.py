from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterable, List, Optional, Sequence
from urllib.parse import urlsplit

from ..common.orgnorm import cmp_norm, is_acceptable_org_name, norm
from ..core.contracts import (
    ORG_NAME_KEY,
    ORG_WEBSITE_KEY,
    CandidateOrigin,
    EnrichmentRequest,
    JobConfig,
    SearchCandidate,
    is_entity_type,
)
from ..core.interfaces import EntityTypeCheck, NameFilter, NameNormalizer
from ..ddg.parse import SearchResult

logger = logging.getLogger(__name__)

# RFC 1035-ish host name with at least one dot and an alphabetic TLD
_DOMAIN_RE = re.compile(
    r"^(?=.{1,253}$)(?:(?!-)[a-z0-9-]{1,63}(?<!-)\.)+[a-z][a-z0-9-]{1,62}$",
    re.I,
)


# ---------- field access ----------
def field_values(properties: Dict[str, Any], key: str) -> List[str]:
    """
    Values of one entity field as an insertion-ordered set of non-empty strings.
    A string is one value; lists/tuples/sets contribute each element.
    """
    raw = properties.get(key)
    if raw is None:
        return []
    items: Iterable[Any]
    if isinstance(raw, (list, tuple, set, frozenset)):
        items = raw
    else:
        items = [raw]
    out: Dict[str, None] = {}
    for x in items:
        if x is None:
            continue
        s = str(x).strip()
        if s:
            out.setdefault(s, None)
    return list(out)


# ---------- URI / domain checks ----------
def uri_host(value: str) -> Optional[str]:
    """Lower-cased host if `value` is an absolute http(s)/ftp URI, else None."""
    try:
        parts = urlsplit(value.strip())
    except ValueError:
        return None
    if parts.scheme.lower() not in {"http", "https", "ftp"}:
        return None
    host = (parts.hostname or "").lower()
    return host or None


def parse_domain(value: str) -> Optional[str]:
    v = value.strip()
    if not v or "/" in v or ":" in v or " " in v:
        return None
    return v if _DOMAIN_RE.match(v) else None


# ---------- prior-result dedupe ----------
def _prior_identifiers(prior: Sequence[SearchResult]) -> List[str]:
    ids: List[str] = []
    for r in prior:
        if r.infobox is None:
            continue
        # empty meta -> no usable prior identifier for this result
        pid = r.infobox.primary_identifier()
        if pid:
            ids.append(cmp_norm(pid))
    return ids


def _prior_urls(prior: Sequence[SearchResult]) -> List[str]:
    return [
        x.first_url
        for r in prior
        if r.infobox is not None
        for x in r.results
        if x.first_url
    ]


# ---------- public API ----------
def accepts(
    entity_type: str,
    config: JobConfig,
    type_check: EntityTypeCheck = is_entity_type,
) -> bool:
    return any(type_check(entity_type, t) for t in config.accepted_types())


def build_candidates(
    request: EnrichmentRequest,
    config: Optional[JobConfig] = None,
    *,
    name_filter: NameFilter = is_acceptable_org_name,
    normalizer: NameNormalizer = norm,
    type_check: EntityTypeCheck = is_entity_type,
) -> List[SearchCandidate]:
    """
    Search candidates for one entity: filtered names first, then hosts/domains.

    - names come from config.org_name_key (default organization.name), are
      normalized, and are dropped when the name filter rejects them or a prior
      result's primary infobox identifier matches case-insensitively;
    - websites come from config.website_key (default organization.website);
      absolute URIs contribute their lower-cased host, bare domains are kept
      verbatim, anything else is dropped; a candidate already contained in a
      prior result's URLs is dropped.
    """
    config = config or JobConfig()
    if not accepts(request.entity_type, config, type_check):
        logger.debug(
            "entity type %r not accepted (%s)",
            request.entity_type,
            config.accepted_types(),
        )
        return []

    props = dict(request.properties or {})
    prior = list(request.prior_results or ())
    prior_ids = _prior_identifiers(prior)
    prior_urls = _prior_urls(prior)

    out: List[SearchCandidate] = []

    names = field_values(props, config.org_name_key or ORG_NAME_KEY)
    normalized = list(dict.fromkeys(n for n in map(normalizer, names) if n))
    for value in normalized:
        if not name_filter(value):
            logger.debug("name %r rejected by filter", value)
            continue
        if cmp_norm(value) in prior_ids:
            continue
        out.append(SearchCandidate(value=value, origin=CandidateOrigin.NAME))

    websites = field_values(props, config.website_key or ORG_WEBSITE_KEY)
    uri_hosts: Dict[str, None] = {}
    domains: Dict[str, None] = {}
    for w in websites:
        host = uri_host(w)
        if host is not None:
            uri_hosts.setdefault(host, None)
            continue
        domain = parse_domain(w)
        if domain is not None:
            domains.setdefault(domain, None)

    hosts = list(dict.fromkeys([*uri_hosts, *domains]))
    for value in hosts:
        if any(value in u for u in prior_urls):
            continue
        out.append(SearchCandidate(value=value, origin=CandidateOrigin.WEBSITE))

    return out
