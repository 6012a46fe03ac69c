from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .. import config as cfg

logger = logging.getLogger(__name__)

PROVIDER_NAME = "Duck Duck Go"

_HTML_RE = re.compile(
    r"<(html|head|body|div|span|img|p>|a href)", re.I | re.S
)


def make_session() -> requests.Session:
    s = requests.Session()
    # Connection-level retries only; statuses are classified by the caller.
    retry = Retry(
        total=cfg.RETRY_TOTAL,
        connect=cfg.RETRY_TOTAL,
        read=0,
        status=0,
        backoff_factor=cfg.RETRY_BACKOFF_FACTOR,
        allowed_methods=cfg.RETRY_ALLOWED_METHODS,
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers.update(
        {
            "Accept": "application/json",
            "User-Agent": cfg.USER_AGENT,
        }
    )
    return s


def query_params(term: Optional[str]) -> Dict[str, str]:
    params: Dict[str, str] = {}
    if term is not None:
        params["q"] = term
    params["format"] = "json"
    # cache-buster (.NET-style ticks); helps with throttling
    params["timestamp"] = str(time.time_ns() // 100)
    return params


def safe_get(
    session: requests.Session,
    params: Dict[str, Any],
    *,
    url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> Tuple[Optional[Dict[str, Any]], int, str]:
    """
    Return (json_or_None, status_code, text_snippet). Never raises.
    Transport failures come back as status -1 with the exception in the snippet.
    """
    target = url or cfg.DDG_API_URL
    try:
        r = session.get(
            target, params=params, timeout=timeout or cfg.DEFAULT_TIMEOUT_S
        )
        status = r.status_code
        text_snippet = (r.text or "")[:300].replace("\n", " ")
        logger.debug("GET %s q=%r -> %s", target, params.get("q"), status)
        if status >= 300 or status == 204:
            return (None, status, text_snippet)
        try:
            return (r.json(), status, text_snippet)
        except ValueError:
            return (None, status, text_snippet)
    except requests.RequestException as e:
        logger.debug("GET %s q=%r failed: %s", target, params.get("q"), e)
        return (None, -1, f"{type(e).__name__}: {e}")


# ---------- connectivity self-test ----------
@dataclass(frozen=True)
class ConnectionVerification:
    ok: bool
    message: str = ""


def classify_response(
    status: int,
    reason: str,
    content: str,
    error: Optional[BaseException] = None,
) -> ConnectionVerification:
    base = f'{PROVIDER_NAME} returned "{status} {reason}".'
    if error is not None:
        detail = str(error).strip() or (
            "This could be due to breaking changes in the external system"
        )
        return ConnectionVerification(False, f"{base} {detail}.")

    if status == 401:
        return ConnectionVerification(
            False, f"{base} This could be due to invalid API key."
        )

    if 200 <= status < 300:
        return ConnectionVerification(True, "")

    if not (content or "").strip() or _HTML_RE.search(content or ""):
        return ConnectionVerification(
            False,
            f"{base} This could be due to breaking changes in the external system.",
        )
    return ConnectionVerification(False, f"{base} {content}.")


def verify_connection(
    session: requests.Session, *, url: Optional[str] = None
) -> ConnectionVerification:
    """Issue one unqualified query and classify the outcome for display."""
    try:
        r = session.get(
            url or cfg.DDG_API_URL,
            params=query_params(None),
            timeout=cfg.DEFAULT_TIMEOUT_S,
        )
    except requests.RequestException as e:
        return classify_response(0, "", "", error=e)
    return classify_response(r.status_code, r.reason or "", r.text or "")
