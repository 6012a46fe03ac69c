import dataclasses

import pytest

from ddgenrich.core.contracts import (
    DEFAULT_ENTITY_TYPE,
    CandidateOrigin,
    EntityCode,
    JobConfig,
    ProviderSettings,
    SearchCandidate,
)
from ddgenrich.core.errors import (
    EnrichmentError,
    LockTimeoutError,
    RemoteStatusError,
    SearchError,
    TransientSearchError,
)


class TestJobConfig:
    def test_defaults(self):
        c = JobConfig()
        assert c.accepted_types() == [DEFAULT_ENTITY_TYPE]
        assert c.create_entity_code is False

    def test_from_dict_camel_case_keys(self):
        c = JobConfig.from_dict(
            {
                "acceptedEntityType": "/Organization/Company",
                "orgNameKey": "crm.org.name",
                "websiteKey": " ",
                "createEntityCode": "true",
            }
        )
        assert c.accepted_types() == ["/Organization/Company"]
        assert c.org_name_key == "crm.org.name"
        assert c.website_key is None
        assert c.create_entity_code is True

    @pytest.mark.parametrize("flag", ["0", "false", "", "no"])
    def test_false_flag_strings(self, flag):
        c = JobConfig.from_dict({"createEntityCode": flag})
        assert c.create_entity_code is False

    def test_dict_round_trip(self):
        c = JobConfig("/Organization", "a.name", "a.site", True)
        assert JobConfig.from_dict(c.to_dict()) == c

    def test_none_gives_defaults(self):
        assert JobConfig.from_dict(None) == JobConfig()


def test_provider_settings_are_immutable():
    s = ProviderSettings()
    with pytest.raises(dataclasses.FrozenInstanceError):
        s.lock_name = "other"  # type: ignore[misc]
    assert s.full_key("organization.infobox.founded") == (
        "duckDuckGo.organization.infobox.founded"
    )
    assert s.lock_name == "DuckDuckGo_CreateVocab_Lock"


def test_entity_code_str_and_hash():
    a = EntityCode("/Organization", "duckDuckGo", "Acme")
    b = EntityCode("/Organization", "duckDuckGo", "Acme")
    assert str(a) == "/Organization#duckDuckGo:Acme"
    assert {a, b} == {a}


def test_search_candidate_origin():
    assert SearchCandidate("acme", CandidateOrigin.NAME).is_name
    assert not SearchCandidate("acme.example", CandidateOrigin.WEBSITE).is_name


def test_error_hierarchy():
    assert issubclass(TransientSearchError, SearchError)
    assert issubclass(SearchError, EnrichmentError)
    assert issubclass(LockTimeoutError, EnrichmentError)

    e = RemoteStatusError(500, "oops")
    assert str(e) == (
        "Could not execute external search query - "
        "StatusCode:500; Content: oops"
    )
    assert TransientSearchError("x", retry_after=1.5).retry_after == 1.5
