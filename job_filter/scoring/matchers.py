"""Term and tool matching utilities for Fit Scoring."""

from __future__ import annotations

import re
from collections.abc import Iterable
from difflib import SequenceMatcher

from job_filter.requirements.patterns import canonical_tool

# Tools that stand in for one another well enough to count as a related hit.
_TOOL_FAMILIES: dict[str, set[str]] = {
    "product analytics": {"amplitude", "mixpanel", "heap", "google analytics", "adobe analytics"},
    "crm": {"salesforce", "hubspot"},
    "marketing automation": {"marketo", "pardot", "hubspot", "braze", "iterable", "klaviyo", "mailchimp"},
    "bi": {"tableau", "looker", "power bi"},
    "data warehouse": {"snowflake", "bigquery", "redshift", "dbt"},
    "experimentation": {"optimizely", "launchdarkly", "vwo"},
    "paid ads": {"google ads", "meta ads", "linkedin ads", "tiktok ads"},
    "seo": {"semrush", "ahrefs"},
    "sales engagement": {"outreach.io", "salesloft", "gong"},
    "support": {"intercom", "zendesk"},
    "account intelligence": {"clearbit", "zoominfo", "6sense", "demandbase"},
    "session analytics": {"hotjar", "fullstory"},
    "spreadsheets": {"microsoft excel", "google sheets"},
    "ecommerce": {"shopify", "magento"},
    "project management": {"jira", "asana"},
}

_STOPWORDS: frozenset[str] = frozenset(
    {
        "about",
        "across",
        "ability",
        "able",
        "also",
        "and",
        "experience",
        "from",
        "have",
        "including",
        "into",
        "more",
        "other",
        "over",
        "plus",
        "preferred",
        "proven",
        "required",
        "strong",
        "that",
        "their",
        "these",
        "this",
        "through",
        "using",
        "with",
        "within",
        "work",
        "working",
        "years",
        "your",
    }
)

_WORD_RE = re.compile(r"[a-z0-9][a-z0-9+#.&'/-]*")


def normalize_term(term: str) -> str:
    """Normalize a term for comparison.

    Performs lowercasing, whitespace normalization, and trims common
    surrounding punctuation while preserving meaningful characters
    like "+", "#", and "." (e.g. "C++", "C#", "Outreach.io").
    """
    value = term.strip().lower()
    value = re.sub(r"\([^)]*\)", "", value)
    value = re.sub(r"\s+", " ", value)
    return value.strip(" ,;")


def tools_match(
    tool1: str, tool2: str, fuzzy: bool = True, threshold: float = 0.85
) -> bool:
    """Return True if two tool names are considered the same tool."""
    canonical1 = canonical_tool(normalize_term(tool1))
    canonical2 = canonical_tool(normalize_term(tool2))

    if canonical1 == canonical2:
        return True

    if not fuzzy:
        return False

    if threshold <= 0.0:
        return True
    if threshold > 1.0:
        return False

    similarity = SequenceMatcher(None, canonical1, canonical2).ratio()
    return similarity >= threshold


def related_tools(tool: str) -> set[str]:
    """Tools in the same family as `tool`, excluding the tool itself."""
    canonical = canonical_tool(normalize_term(tool))
    related: set[str] = set()
    for members in _TOOL_FAMILIES.values():
        if canonical in members:
            related.update(members)
    related.discard(canonical)
    return related


def keywords(text: str) -> list[str]:
    """Significant words of `text`: longer than three characters, no stopwords."""
    words = (word.strip(".'/-") for word in _WORD_RE.findall(text.lower()))
    unique: list[str] = []
    for word in words:
        if len(word) > 3 and word not in _STOPWORDS and word not in unique:
            unique.append(word)
    return unique


def keyword_overlap(terms: Iterable[str], text: str) -> float:
    """Share of `terms` that occur in `text` (0.0 when there are no terms)."""
    term_list = list(terms)
    if not term_list:
        return 0.0
    haystack = text.lower()
    hits = sum(1 for term in term_list if term in haystack)
    return hits / len(term_list)


def contains_phrase(text: str, phrase: str) -> bool:
    """Case-insensitive whole-word phrase search."""
    needle = normalize_term(phrase)
    if not needle:
        return False
    pattern = rf"(?<![\w]){re.escape(needle)}(?![\w])"
    return re.search(pattern, text, re.IGNORECASE) is not None
