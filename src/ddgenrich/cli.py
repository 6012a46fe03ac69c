from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer

from .client import DuckDuckGoEnricher
from .core.contracts import (
    DEFAULT_ENTITY_TYPE,
    ORG_NAME_KEY,
    ORG_WEBSITE_KEY,
    CandidateOrigin,
    Clue,
    EnrichmentRequest,
    JobConfig,
    SearchCandidate,
)
from .ddg.normalize import normalize_result
from .ddg.variants import search_variants
from .enrich.lock import ProcessLock

app = typer.Typer(help="ddgenrich: DuckDuckGo organization enrichment")


def _setup_logging(debug: bool) -> None:
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def _echo_json(obj: Any) -> None:
    typer.echo(json.dumps(obj, ensure_ascii=False, indent=2))


def _clue_to_dict(clue: Clue) -> Dict[str, Any]:
    md = clue.data
    return {
        "entityCode": str(clue.entity_code) if clue.entity_code else None,
        "organizationId": clue.organization_id,
        "originProviderId": clue.origin_provider_id,
        "entityType": md.entity_type,
        "name": md.name,
        "description": md.description,
        "uri": md.uri,
        "codes": sorted(str(c) for c in md.codes),
        "properties": md.properties,
    }


@app.command("variants")
def variants(
    name: str = typer.Argument(..., help="Organization name (e.g., 'Acme')"),
):
    """List the query strings tried for an organization name, in order."""
    for q in search_variants(name):
        typer.echo(q)


@app.command("search")
def search(
    term: str = typer.Argument(..., help="Name or website/domain to look up"),
    website: bool = typer.Option(
        False, help="Treat the term as a website (single literal query)"
    ),
    debug: bool = typer.Option(False, help="Verbose HTTP/search diagnostics"),
):
    """Run one candidate search and print the normalized properties."""
    _setup_logging(debug)
    origin = CandidateOrigin.WEBSITE if website else CandidateOrigin.NAME
    enricher = DuckDuckGoEnricher(lock=ProcessLock())
    res = enricher.execute_search(SearchCandidate(value=term, origin=origin))
    if res is None:
        _echo_json({"term": term, "hit": False})
        return None
    _echo_json(
        {
            "term": term,
            "hit": True,
            "heading": res.heading,
            "entity": res.entity,
            "properties": {p.key: p.value for p in normalize_result(res)},
        }
    )
    return None


@app.command("enrich")
def enrich(
    name: List[str] = typer.Option(
        [], "--name", help="Organization name (repeatable)"
    ),
    website: List[str] = typer.Option(
        [], "--website", help="Website URI or bare domain (repeatable)"
    ),
    entity_type: str = typer.Option(
        DEFAULT_ENTITY_TYPE, help="Entity type of the input entity"
    ),
    accepted_entity_type: Optional[str] = typer.Option(
        None, help="Accepted entity type (defaults to /Organization)"
    ),
    create_entity_code: bool = typer.Option(
        False, help="Synthesize an entity code from the result heading"
    ),
    store: Optional[Path] = typer.Option(
        None, help="JSONL vocabulary store (defaults to the cache dir)"
    ),
    debug: bool = typer.Option(False, help="Verbose pipeline diagnostics"),
):
    """Run a full enrichment pass for one organization and print the clues."""
    _setup_logging(debug)
    if not name and not website:
        raise typer.BadParameter("give at least one --name or --website")

    config = JobConfig(
        accepted_entity_type=accepted_entity_type,
        create_entity_code=create_entity_code,
    )
    request = EnrichmentRequest(
        entity_type=entity_type,
        name=name[0] if name else "",
        properties={ORG_NAME_KEY: list(name), ORG_WEBSITE_KEY: list(website)},
    )
    enricher = DuckDuckGoEnricher(config, store_path=store)
    res = enricher.enrich(request)
    _echo_json(
        {
            "candidates": [
                {"value": c.value, "origin": c.origin.value}
                for c in res.candidates
            ],
            "clues": [_clue_to_dict(c) for c in res.clues],
            "trace": res.trace if debug else None,
        }
    )
    return None


@app.command("verify")
def verify(
    debug: bool = typer.Option(False, help="Verbose HTTP diagnostics"),
):
    """Check that the DuckDuckGo API answers; exits 1 when it does not."""
    _setup_logging(debug)
    res = DuckDuckGoEnricher(lock=ProcessLock()).verify_connection()
    if res.ok:
        typer.echo("ok")
        return None
    typer.echo(res.message, err=True)
    raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    app()
