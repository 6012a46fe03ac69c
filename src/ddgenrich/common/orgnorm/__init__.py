from .constants import (
    GENERIC_NAMES,
    SPACE_RE,
    STOPWORDS,
    SUFFIX_RE,
    TRAILING_SLASH_TAG_RE,
)
from .core import (
    cmp_norm,
    norm,
)
from .stem import (
    is_acceptable_org_name,
    stem,
)

__all__ = [
    # core
    "SPACE_RE",
    "TRAILING_SLASH_TAG_RE",
    "norm",
    "cmp_norm",
    # stem
    "stem",
    "is_acceptable_org_name",
    # constants
    "STOPWORDS",
    "SUFFIX_RE",
    "GENERIC_NAMES",
]
