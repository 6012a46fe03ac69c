from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..core.contracts import (
    Clue,
    EnrichmentRequest,
    EnrichmentResult,
    JobConfig,
    ProviderSettings,
    SearchCandidate,
)
from ..core.interfaces import ClueSink, PreviewDownloader
from ..ddg.parse import SearchResult
from ..ddg.search import SearchClient
from .candidates import build_candidates
from .clues import build_clue
from .vocabulary import VocabularySynchronizer

logger = logging.getLogger(__name__)


def enrich_entity(
    request: EnrichmentRequest,
    *,
    client: SearchClient,
    config: Optional[JobConfig] = None,
    settings: Optional[ProviderSettings] = None,
    synchronizer: Optional[VocabularySynchronizer] = None,
    clue_sink: Optional[ClueSink] = None,
    preview_downloader: Optional[PreviewDownloader] = None,
) -> EnrichmentResult:
    """
    One sequential enrichment pass for an entity:
    candidates -> search -> clue per company-typed result.

    Search and vocabulary errors propagate to the caller; zero candidates or
    zero usable results is a successful, empty outcome.
    """
    config = config or JobConfig()
    settings = settings or ProviderSettings()

    candidates = build_candidates(request, config)
    results: List[Tuple[SearchCandidate, SearchResult]] = []
    clues: List[Clue] = []
    trace: List[Dict[str, Any]] = []

    for cand in candidates:
        result = client.execute(cand)
        trace.append(
            {
                "op": "search",
                "candidate": cand.value,
                "origin": cand.origin.value,
                "hit": result is not None,
                "heading": result.heading if result is not None else None,
            }
        )
        if result is None:
            continue
        results.append((cand, result))

        clue = build_clue(
            result,
            request,
            settings=settings,
            config=config,
            synchronizer=synchronizer,
            preview_downloader=preview_downloader,
        )
        trace.append(
            {
                "op": "clue",
                "candidate": cand.value,
                "built": clue is not None,
                "entity": result.entity,
                "properties_n": len(clue.data.properties) if clue else 0,
            }
        )
        if clue is None:
            continue
        clues.append(clue)
        if clue_sink is not None:
            clue_sink(clue)

    logger.debug(
        "enrich %r: %d candidates, %d results, %d clues",
        request.name,
        len(candidates),
        len(results),
        len(clues),
    )
    return EnrichmentResult(
        candidates=candidates, results=results, clues=clues, trace=trace
    )
