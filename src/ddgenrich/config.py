"""
Global configuration for ddgenrich.
Only infrastructure knobs live here (paths, URLs, retries, pauses, lock/cache windows).
Per-connector settings travel in `core.contracts.JobConfig` / `ProviderSettings`.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final, List, Optional

from dotenv import load_dotenv

load_dotenv()

# -----------------------------------------------------------------------------
# Storage roots
# -----------------------------------------------------------------------------
# XDG cache location: ~/.cache/ddgenrich (or $XDG_CACHE_HOME/ddgenrich)
_XDG_CACHE_HOME = Path(os.getenv("XDG_CACHE_HOME", Path.home() / ".cache"))
CACHE_DIR = _XDG_CACHE_HOME / "ddgenrich"
CACHE_DIR.mkdir(parents=True, exist_ok=True)

# Append-only vocabulary store and lock files (reference implementations)
VOCAB_STORE_PATH: Final[Path] = Path(
    os.getenv("DDGENRICH_VOCAB_STORE", str(CACHE_DIR / "vocabulary.jsonl"))
)
LOCK_DIR: Final[Path] = Path(
    os.getenv("DDGENRICH_LOCK_DIR", str(CACHE_DIR / "locks"))
)

# -----------------------------------------------------------------------------
# HTTP / retry / pacing
# -----------------------------------------------------------------------------
DDG_API_URL: Final[str] = os.getenv(
    "DDGENRICH_API_URL", "https://api.duckduckgo.com/"
)
# Relative image paths in responses ("/i/abc.png") resolve against this.
DDG_IMAGE_BASE_URL: Final[str] = os.getenv(
    "DDGENRICH_IMAGE_BASE_URL", "https://duckduckgo.com"
)

DEFAULT_TIMEOUT_S: Final[int] = int(os.getenv("DDGENRICH_TIMEOUT_S", "30"))

# Connection-level retries only; HTTP statuses are classified by the client.
RETRY_TOTAL: Final[int] = int(os.getenv("DDGENRICH_RETRY_TOTAL", "2"))
RETRY_BACKOFF_FACTOR: Final[float] = float(
    os.getenv("DDGENRICH_RETRY_BACKOFF", "0.5")
)
RETRY_ALLOWED_METHODS: Final[List[str]] = ["GET"]

# TODO: rotate user agents; a fixed one is throttled sooner under load.
USER_AGENT: Final[str] = os.getenv(
    "DDGENRICH_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/130.0.0.0 Safari/537.36 Edg/130.0.0.0",
)

# Backoff windows (seconds)
TRANSIENT_PAUSE_S: Final[float] = float(
    os.getenv("DDGENRICH_TRANSIENT_PAUSE_S", "1.0")
)
THROTTLE_PAUSE_S: Final[float] = float(
    os.getenv("DDGENRICH_THROTTLE_PAUSE_S", "30.0")
)

# -----------------------------------------------------------------------------
# Vocabulary synchronization
# -----------------------------------------------------------------------------
LOCK_TIMEOUT_S: Final[float] = float(
    os.getenv("DDGENRICH_LOCK_TIMEOUT_S", "60.0")
)
VOCAB_CACHE_TTL_S: Final[float] = float(
    os.getenv("DDGENRICH_VOCAB_CACHE_TTL_S", "60.0")
)
# Bound shared by related-topic pre-declaration and the clue pipeline.
RELATED_TOPICS_LIMIT: Final[int] = int(
    os.getenv("DDGENRICH_RELATED_TOPICS_LIMIT", "50")
)


def get_env(
    name: str, *, required: bool = False, default: Optional[str] = None
) -> Optional[str]:
    """Small helper to fetch env vars with an optional 'required' flag."""
    val = os.getenv(name, default)
    if required and not val:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return val


# -----------------------------------------------------------------------------
# Public exports
# -----------------------------------------------------------------------------
__all__ = [
    # roots
    "CACHE_DIR",
    "VOCAB_STORE_PATH",
    "LOCK_DIR",
    # http/retry/pacing
    "DDG_API_URL",
    "DDG_IMAGE_BASE_URL",
    "DEFAULT_TIMEOUT_S",
    "RETRY_TOTAL",
    "RETRY_BACKOFF_FACTOR",
    "RETRY_ALLOWED_METHODS",
    "USER_AGENT",
    "TRANSIENT_PAUSE_S",
    "THROTTLE_PAUSE_S",
    # vocabulary
    "LOCK_TIMEOUT_S",
    "VOCAB_CACHE_TTL_S",
    "RELATED_TOPICS_LIMIT",
    # env helpers
    "get_env",
]
