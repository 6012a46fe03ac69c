from __future__ import annotations

import logging
from typing import Dict, Optional
from urllib.parse import urljoin

from .. import config as cfg
from ..core.contracts import (
    DEFAULT_ENTITY_TYPE,
    Clue,
    EnrichmentRequest,
    EntityCode,
    EntityMetadata,
    JobConfig,
    ProviderSettings,
)
from ..core.interfaces import PreviewDownloader
from ..ddg.normalize import is_company_entity, is_dynamic_key, normalize_result
from ..ddg.parse import SearchResult
from .candidates import uri_host
from .vocabulary import VocabularySynchronizer, describe_key

logger = logging.getLogger(__name__)


def resolve_entity_code(
    result: SearchResult,
    request: EnrichmentRequest,
    settings: ProviderSettings,
    config: JobConfig,
) -> EntityCode:
    """
    Entity's own origin code by default; with `create_entity_code`, or when
    the entity carries no code, a new code keyed on the search heading under
    the connector's origin.
    """
    own = request.origin_entity_code
    if own is not None and not config.create_entity_code:
        return own
    return EntityCode(
        entity_type=request.entity_type or DEFAULT_ENTITY_TYPE,
        origin=settings.code_origin,
        value=result.heading or "",
    )


def first_result_uri(result: SearchResult) -> Optional[str]:
    if not result.results:
        return None
    uri = result.results[0].first_url
    return uri if uri and uri_host(uri) else None


def logo_url(result: SearchResult) -> Optional[str]:
    """Absolute image URL when the result's image is flagged as a logo."""
    if result.image_is_logo != 1 or not result.image:
        return None
    return urljoin(cfg.DDG_IMAGE_BASE_URL, result.image)


def build_clue(
    result: SearchResult,
    request: EnrichmentRequest,
    *,
    settings: Optional[ProviderSettings] = None,
    config: Optional[JobConfig] = None,
    synchronizer: Optional[VocabularySynchronizer] = None,
    preview_downloader: Optional[PreviewDownloader] = None,
) -> Optional[Clue]:
    """
    Clue for a company-typed result with a heading, else None.

    Every normalized property is written under the connector namespace
    ('duckDuckGo.organization....'). With a synchronizer, the vocabulary and
    each dynamic key are registered before the property is written.
    """
    settings = settings or ProviderSettings()
    config = config or JobConfig()

    if not is_company_entity(result):
        return None

    properties: Dict[str, str] = {}
    vocabulary_ready = False
    for prop in normalize_result(
        result, max_related_topics=settings.related_topics_limit
    ):
        full_name = settings.full_key(prop.key)
        if synchronizer is not None and is_dynamic_key(prop.key):
            desc = describe_key(synchronizer.relative_name(full_name))
            if desc is not None:
                if not vocabulary_ready:
                    synchronizer.ensure_vocabulary()
                    vocabulary_ready = True
                synchronizer.ensure_key(full_name, *desc)
        properties[full_name] = prop.value

    code = resolve_entity_code(result, request, settings, config)
    codes = frozenset(
        c for c in (code, request.origin_entity_code) if c is not None
    )
    metadata = EntityMetadata(
        entity_type=request.entity_type or DEFAULT_ENTITY_TYPE,
        name=request.name or result.heading or "",
        description=result.abstract or result.abstract_text or None,
        uri=first_result_uri(result),
        origin_entity_code=code,
        codes=codes,
        properties=properties,
    )
    clue = Clue(
        entity_code=code,
        organization_id=request.organization_id,
        origin_provider_id=settings.provider_id,
        data=metadata,
    )

    image = logo_url(result)
    if image and preview_downloader is not None:
        try:
            preview_downloader(image, clue)
        except Exception:
            logger.warning(
                "preview image download failed for %s", image, exc_info=True
            )

    return clue
