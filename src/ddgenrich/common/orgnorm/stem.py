from __future__ import annotations

from .constants import (
    ALNUM_PAT,
    GENERIC_NAMES,
    MIN_NAME_CHARS,
    STOPWORDS,
    SUFFIX_RE,
)
from .core import norm


def stem(s: str) -> str:
    """'The Acme Company Ltd.' -> 'acme' (legal forms and stopwords dropped)."""
    bare = SUFFIX_RE.sub("", norm(s))
    return " ".join(t for t in bare.split() if t not in STOPWORDS)


def is_acceptable_org_name(name: str) -> bool:
    """
    Default name filter. Rejects values that cannot identify a company:
    empty/too short, placeholders ('n/a', 'unknown', 'self-employed', ...),
    no letters/digits at all, or nothing left once legal forms are stripped
    ('Inc.', 'Ltd', 'GmbH & Co KG').
    """
    n = norm(name)
    if len(n) < MIN_NAME_CHARS:
        return False
    if n in GENERIC_NAMES:
        return False
    if not ALNUM_PAT.search(n):
        return False
    core = stem(n).replace(" and ", " ").strip()
    if not core or core == "and" or core in GENERIC_NAMES:
        return False
    return True
