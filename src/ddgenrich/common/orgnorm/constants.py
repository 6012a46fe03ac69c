from __future__ import annotations

import re

SPACE_RE = re.compile(r"\s+")
# trailing state/country tag on a name: '/NY', '/DE', '/The' (not 'A/B')
TRAILING_SLASH_TAG_RE = re.compile(r"/(?:the|[A-Z]{2})$", re.I)
ALNUM_PAT = re.compile(r"[^\W_]", re.UNICODE)

# Legal-form tokens (regex fragments). A name made only of these is not a
# company name, e.g. 'Inc.' or 'GmbH & Co KG'.
LEGAL_FORMS = (
    # English-speaking
    r"incorporated", r"inc", r"corp(?:oration)?", r"co(?:mpany)?",
    r"ltd", r"limited", r"llc", r"plc", r"pte", r"pty",
    # German / Nordic / Benelux
    r"a\.?g\.?", r"ag", r"gmbh", r"kgaa", r"kg", r"aktiengesellschaft",
    r"n\.?v\.?", r"nv", r"bv", r"b\.?v\.?", r"bvba",
    r"oy", r"oyj", r"oy\.?j\.?", r"ab", r"aktiebolag", r"aktiebolaget",
    r"publ", r"asa", r"as", r"aps", r"a/?s",
    # Romance languages
    r"se", r"s\.?e\.?", r"s\.?a\.?", r"sa", r"s\.?a\.?s\.?", r"sas",
    r"s\.?a\.?u\.?", r"s\.?l\.?u?\.?", r"s\.?p\.?a\.?", r"spa",
    r"societa\s+per\s+azioni", r"società\s+per\s+azioni",
    r"societe\s+anonyme", r"société\s+anonyme",
    # Japanese
    r"k\.?k\.?", r"kk", r"kabushiki\s*kaisha",
)
SUFFIX_RE = re.compile(r"\b(" + "|".join(LEGAL_FORMS) + r")\b\.?", re.I)

STOPWORDS = {"the"}

# Placeholder values that turn up in organization-name fields
GENERIC_NAMES = {
    "n/a",
    "na",
    "none",
    "null",
    "unknown",
    "test",
    "tbd",
    "company",
    "organization",
    "organisation",
    "private",
    "self",
    "self employed",
    "self-employed",
    "freelance",
    "freelancer",
    "individual",
    "personal",
    "home",
    "student",
    "retired",
    "gmail",
    "hotmail",
    "yahoo",
}

MIN_NAME_CHARS = 2
