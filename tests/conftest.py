import os
from typing import Any, Dict, List, Optional

import pytest

# Load .env if present, but don't fail if it's missing.
try:
    from dotenv import load_dotenv

    load_dotenv()
except Exception:
    pass

# ---- mode & env flags -------------------------------------------------------


def _truthy(s: str | None) -> bool:
    return str(s).strip().lower() in {"1", "true", "yes", "on"}


LIVE = _truthy(os.getenv("DDGENRICH_LIVE_TESTS"))


# =============================================================================
# MOCK HELPERS (used when DDGENRICH_LIVE_TESTS is NOT set)
# =============================================================================


class FakeResponse:
    """Just enough of requests.Response for safe_get / verify_connection."""

    def __init__(self, status=200, text="", json_obj=None, reason="OK"):
        self.status_code = status
        self.text = text
        self.reason = reason
        self._json = json_obj

    def json(self):
        if isinstance(self._json, Exception):
            raise self._json
        return self._json


def ddg_payload(
    *,
    heading: str = "Acme",
    entity: str = "company",
    infobox: Any = None,
    related: Optional[List[Dict[str, Any]]] = None,
    results: Optional[List[Dict[str, Any]]] = None,
    **extra: Any,
) -> Dict[str, Any]:
    """
    A DuckDuckGo Instant Answer body. `infobox=None` sends "" the way the
    API does when there is no infobox.
    """
    body: Dict[str, Any] = {
        "Abstract": "",
        "AbstractText": "",
        "AbstractSource": "",
        "AbstractURL": "",
        "Answer": "",
        "AnswerType": "",
        "Definition": "",
        "DefinitionSource": "",
        "DefinitionURL": "",
        "Entity": entity,
        "Heading": heading,
        "Image": "",
        "ImageHeight": "",
        "ImageWidth": "",
        "ImageIsLogo": "",
        "Redirect": "",
        "Type": "A",
        "Infobox": "" if infobox is None else infobox,
        "RelatedTopics": related or [],
        "Results": results or [],
    }
    body.update(extra)
    return body


def infobox(*pairs, meta_title: Optional[str] = None) -> Dict[str, Any]:
    """infobox(("Founded", "1990"), ...) -> {"content": [...], "meta": []}"""
    meta = []
    if meta_title is not None:
        meta.append(
            {
                "data_type": "string",
                "label": "article_title",
                "value": meta_title,
            }
        )
    return {
        "content": [
            {
                "data_type": "string",
                "label": label,
                "value": value,
                "wiki_order": i,
            }
            for i, (label, value) in enumerate(pairs)
        ],
        "meta": meta,
    }


@pytest.fixture
def acme_payload() -> Dict[str, Any]:
    return ddg_payload(
        heading="Acme",
        infobox=infobox(("Founded", "1990"), meta_title="Acme"),
        results=[
            {"FirstURL": "https://www.acme.example/", "Text": "Official site"}
        ],
        Abstract="Acme is a company.",
    )


# =============================================================================
# LIVE FIXTURES
# =============================================================================


@pytest.fixture(scope="session")
def ddg_session():
    """
    Live DuckDuckGo session; only created in LIVE mode.
    Otherwise skipped to avoid any network.
    """
    if not LIVE:
        pytest.skip("ddg_session skipped (offline mode)")
    from ddgenrich.ddg.http import make_session

    return make_session()


# =============================================================================
# PYTEST MARKER HANDLING
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    # Register a 'live' marker for any tests that explicitly want real I/O.
    config.addinivalue_line("markers", "live: test requires live API access")


def pytest_runtest_setup(item: pytest.Item) -> None:
    # If a test is marked live but we're not in LIVE mode, skip it proactively.
    if "live" in item.keywords and not LIVE:
        pytest.skip("live test skipped (DDGENRICH_LIVE_TESTS not enabled)")
