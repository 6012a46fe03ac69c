from __future__ import annotations

import html
import re
import unicodedata
from typing import Tuple

from .constants import SPACE_RE, TRAILING_SLASH_TAG_RE

# (pattern, replacement) applied in order after lowercasing
_CLEANUPS: Tuple[Tuple[re.Pattern, str], ...] = (
    (TRAILING_SLASH_TAG_RE, ""),  # 'acme inc /de' -> 'acme inc '
    (re.compile(r"[^\w&\-/\. ]+"), ""),  # keep word chars, & - / . space
    (re.compile(r"\b([a-z])\.(?=\s|$)"), r"\1"),  # 'j. p.' -> 'j p'
    (re.compile(r"\.(?=\s|$)"), ""),  # 'corp.' -> 'corp'
)


def _unescape(s: str, rounds: int = 4) -> str:
    # double-escaped input shows up in CRM exports ('&amp;amp;')
    for _ in range(rounds):
        new = html.unescape(s)
        if new == s:
            break
        s = new
    return s


def _fold(s: str) -> str:
    """Drop diacritics, then NFKC (full-width forms, ligatures)."""
    s = "".join(
        ch
        for ch in unicodedata.normalize("NFKD", s)
        if not unicodedata.combining(ch)
    )
    return unicodedata.normalize("NFKC", s)


def norm(s: str) -> str:
    """
    Name -> search candidate form: unescaped, accent-folded, '&' spelled
    'and', lowercased, punctuation noise and trailing '/TAG' removed,
    whitespace collapsed.

      'Société Générale'  -> 'societe generale'
      'AT&amp;T'          -> 'at and t'
      'Acme Corp. /DE'    -> 'acme corp'
    """
    if not isinstance(s, str):
        return ""
    x = _fold(_unescape(s.strip()))
    x = x.replace("&", " and ").lower()
    for pat, repl in _CLEANUPS:
        x = pat.sub(repl, x)
    return SPACE_RE.sub(" ", x).strip()


def cmp_norm(s: str) -> str:
    """Case-folded, whitespace-collapsed form for equality checks on raw values."""
    return SPACE_RE.sub(" ", (s or "").strip()).casefold()
