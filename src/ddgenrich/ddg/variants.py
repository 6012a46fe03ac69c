from __future__ import annotations

from typing import List

VARIANT_SUFFIXES = ("", " company", " corporation")


def search_variants(name: str) -> List[str]:
    """
    Query strings tried for a name candidate, in order:
      'Acme' -> ['Acme', 'Acme company', 'Acme corporation']
    Website/host candidates do not go through here.
    """
    return [f"{name}{suffix}" for suffix in VARIANT_SUFFIXES]
