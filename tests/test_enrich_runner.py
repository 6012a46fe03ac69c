import types

import pytest

from conftest import ddg_payload, infobox
from ddgenrich.core.contracts import CandidateOrigin, EnrichmentRequest
from ddgenrich.core.errors import RemoteStatusError, TransientSearchError
from ddgenrich.ddg import search as search_mod
from ddgenrich.ddg.normalize import is_dynamic_key
from ddgenrich.ddg.search import SearchClient
from ddgenrich.enrich.cache import ExpiringCache
from ddgenrich.enrich.lock import ProcessLock
from ddgenrich.enrich.runner import enrich_entity
from ddgenrich.enrich.store import JsonlVocabularyRepository
from ddgenrich.enrich.vocabulary import VocabularySynchronizer

PREFIX = "duckDuckGo."


@pytest.fixture
def world(monkeypatch, tmp_path):
    """
    Offline pipeline: safe_get answers from `responses` (q -> (json, status)),
    vocabulary lives in a JSONL store under tmp_path.
    """
    ns = types.SimpleNamespace(responses={}, calls=[])

    def fake_safe_get(session, params, *, url=None, timeout=None):
        q = params.get("q")
        ns.calls.append(q)
        j, status = ns.responses.get(q, (None, 404))
        return j, status, "body"

    monkeypatch.setattr(search_mod, "safe_get", fake_safe_get)
    ns.client = SearchClient(
        types.SimpleNamespace(), transient_pause_s=0, throttle_pause_s=0
    )
    ns.repo = JsonlVocabularyRepository(tmp_path / "vocab.jsonl")
    ns.sync = VocabularySynchronizer(ns.repo, ProcessLock(), ExpiringCache())

    def run(request, **kw):
        return enrich_entity(
            request, client=ns.client, synchronizer=ns.sync, **kw
        )

    ns.run = run
    return ns


def _org(name=None, website=None):
    props = {}
    if name is not None:
        props["organization.name"] = name
    if website is not None:
        props["organization.website"] = website
    return EnrichmentRequest(name=name or "", properties=props)


def _dynamic(clue):
    return {
        k[len(PREFIX):]: v
        for k, v in clue.data.properties.items()
        if is_dynamic_key(k[len(PREFIX):])
    }


def test_company_result_gives_one_clue(world):
    world.responses["acme"] = (
        ddg_payload(heading="Acme", infobox=infobox(("Founded", "1990"))),
        200,
    )
    res = world.run(_org(name="Acme"))

    assert len(res.clues) == 1
    props = res.clues[0].data.properties
    assert props["duckDuckGo.organization.infobox.founded"] == "1990"
    assert world.calls == ["acme"]
    assert [k.full_name for k in world.repo.keys()] == [
        "duckDuckGo.organization.infobox.founded"
    ]


def test_no_infobox_gives_nothing(world):
    for q in ("acme", "acme company", "acme corporation"):
        world.responses[q] = (ddg_payload(infobox=None), 200)
    res = world.run(_org(name="Acme"))

    assert res.clues == []
    assert res.results == []
    assert world.repo.keys() == []
    assert world.repo.vocabularies() == []


def test_person_result_gives_no_clue(world):
    world.responses["acme"] = (
        ddg_payload(entity="person", infobox=infobox(("Born", "1970"))),
        200,
    )
    res = world.run(_org(name="Acme"))

    assert len(res.results) == 1
    assert res.clues == []
    assert world.repo.keys() == []


def test_only_present_related_topic_fields(world):
    world.responses["acme"] = (
        ddg_payload(
            infobox=infobox(),
            related=[
                {"Text": "Acme Labs"},
                {"FirstURL": "https://duckduckgo.com/Acme_Labs"},
            ],
        ),
        200,
    )
    res = world.run(_org(name="Acme"))

    (clue,) = res.clues
    assert _dynamic(clue) == {
        "organization.relatedTopics.0.text": "Acme Labs",
        "organization.relatedTopics.1.firstUrl": (
            "https://duckduckgo.com/Acme_Labs"
        ),
    }
    assert sorted(k.name for k in world.repo.keys()) == [
        "relatedTopics.0.text",
        "relatedTopics.1.firstUrl",
    ]


def test_name_and_website_each_searched(world):
    hit = (ddg_payload(infobox=infobox(("Founded", "1990"))), 200)
    world.responses["acme corporation"] = hit
    world.responses["acme.example"] = hit
    sink = []

    res = world.run(
        _org(name="Acme", website="https://acme.example/"),
        clue_sink=sink.append,
    )

    assert [(c.value, c.origin) for c in res.candidates] == [
        ("acme", CandidateOrigin.NAME),
        ("acme.example", CandidateOrigin.WEBSITE),
    ]
    assert world.calls == [
        "acme",
        "acme company",
        "acme corporation",
        "acme.example",
    ]
    assert len(res.clues) == 2
    assert sink == res.clues
    assert [t["op"] for t in res.trace] == ["search", "clue", "search", "clue"]


def test_unaccepted_entity_type_makes_no_requests(world):
    req = EnrichmentRequest(
        entity_type="/Person", properties={"organization.name": "Acme"}
    )
    res = world.run(req)
    assert res.candidates == []
    assert world.calls == []


def test_trace_records_misses(world):
    res = world.run(_org(name="Acme"))
    assert res.trace == [
        {
            "op": "search",
            "candidate": "acme",
            "origin": "name",
            "hit": False,
            "heading": None,
        }
    ]


def test_transient_failure_propagates(world):
    world.responses["acme"] = (None, -1)
    with pytest.raises(TransientSearchError):
        world.run(_org(name="Acme"))


def test_remote_error_propagates(world):
    world.responses["acme"] = (None, 503)
    with pytest.raises(RemoteStatusError):
        world.run(_org(name="Acme"))
