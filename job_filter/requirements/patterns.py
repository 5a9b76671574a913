"""Vocabulary and regex patterns used to read job descriptions.

Section headings are matched against the whole heading label (the text before
a colon, or the entire line when there is no colon) so that an ordinary bullet
such as "MBA preferred" is never mistaken for a "Preferred" heading.
"""

from __future__ import annotations

import re

BULLET_PREFIX_RE = re.compile(r"^\s*[•◦▪▸►‣➢\-*]\s+")
MARKDOWN_HEADING_RE = re.compile(r"^\s*#{1,6}\s*")

MUST_HEADING_RE = re.compile(
    r"(?:(?:key|basic|minimum|core|job|required|essential|your)\s+)?"
    r"(?:requirements|qualifications|skills(?:\s+(?:and|&)\s+(?:experience|qualifications))?"
    r"|experience|must[- ]haves?|what you(?:'ll| will)? need|what we(?:'re| are)? looking for"
    r"|who you are|about you|you have|you bring|what you bring)"
)

PREFERRED_HEADING_RE = re.compile(
    r"(?:preferred|bonus|desired|additional|desirable|nice[- ]to[- ]have)\s+"
    r"(?:qualifications|skills|experience|requirements)"
    r"|preferred|nice[- ]to[- ]haves?|bonus(?: points)?|pluses|plus|desirable"
    r"|what sets you apart|extra credit|it'?s a plus(?: if you have)?|bonus if you have"
)

NEUTRAL_HEADING_RE = re.compile(
    r"(?:key\s+)?(?:responsibilities|duties)|what you(?:'ll| will) do"
    r"|what you(?:'ll| will) be doing|about the role|the role|role overview|your role"
    r"|in this role(?: you will)?|day[- ]to[- ]day|overview|the opportunity"
)

IGNORED_HEADING_RE = re.compile(
    r"benefits|perks(?:\s+(?:and|&)\s+benefits)?|benefits\s+(?:and|&)\s+perks"
    r"|compensation(?:\s+(?:and|&)\s+benefits)?|salary|(?:base\s+)?pay(?: range)?"
    r"|about us|about the company|about [a-z0-9' ]{1,30}|who we are|why join us"
    r"|why [a-z0-9' ]{1,30}|what we offer|our benefits|equal opportunity(?: employer)?"
    r"|eeo(?: statement)?|location|how to apply"
)

MAX_HEADING_WORDS = 6

INLINE_PREFERRED_RE = re.compile(
    r"\b(?:preferred|nice[- ]to[- ]have|bonus|a plus|desirable|ideally)\b", re.IGNORECASE
)
INLINE_MUST_RE = re.compile(r"\b(?:required|must[- ]have|essential)\b", re.IGNORECASE)

YEARS_RE = re.compile(
    r"(\d{1,2})\s*(?:\+|(?:-|–|to)\s*\d{1,2}\s*\+?)?\s*(?:years?|yrs?)\b",
    re.IGNORECASE,
)
YEARS_SUBJECT_PREFIX_RE = re.compile(
    r"^\s*(?:of\s+)?(?:(?:professional|relevant|progressive|proven)\s+)?"
    r"(?:experience\s+)?(?:(?:in|with|at|leading|building|managing)\s+)?",
    re.IGNORECASE,
)
SENIORITY_RE = re.compile(
    r"\b(?:senior|executive|leadership|management|director)[- ]level\b"
    r"|\bseasoned\b|\bproven track record\b",
    re.IGNORECASE,
)
EDUCATION_RE = re.compile(
    r"\b(?:bachelor|master|mba|phd|ph\.d|doctorate|degree)", re.IGNORECASE
)
CERTIFICATION_RE = re.compile(
    r"\b(?:certified|certification|certificate|licensed?|licensure)\b", re.IGNORECASE
)

MIN_SKILL_WORDS = 3

# Canonical tool key -> display name. Keys are matched on word boundaries.
TOOL_VOCABULARY: dict[str, str] = {
    "salesforce": "Salesforce",
    "hubspot": "HubSpot",
    "marketo": "Marketo",
    "pardot": "Pardot",
    "amplitude": "Amplitude",
    "mixpanel": "Mixpanel",
    "heap": "Heap",
    "google analytics": "Google Analytics",
    "adobe analytics": "Adobe Analytics",
    "adobe experience manager": "Adobe Experience Manager",
    "tableau": "Tableau",
    "looker": "Looker",
    "power bi": "Power BI",
    "dbt": "dbt",
    "snowflake": "Snowflake",
    "bigquery": "BigQuery",
    "redshift": "Redshift",
    "braze": "Braze",
    "iterable": "Iterable",
    "klaviyo": "Klaviyo",
    "mailchimp": "Mailchimp",
    "meta ads": "Meta Ads",
    "google ads": "Google Ads",
    "linkedin ads": "LinkedIn Ads",
    "tiktok ads": "TikTok Ads",
    "figma": "Figma",
    "jira": "Jira",
    "asana": "Asana",
    "optimizely": "Optimizely",
    "launchdarkly": "LaunchDarkly",
    "vwo": "VWO",
    "hotjar": "Hotjar",
    "fullstory": "FullStory",
    "semrush": "Semrush",
    "ahrefs": "Ahrefs",
    "intercom": "Intercom",
    "zendesk": "Zendesk",
    "gong": "Gong",
    "salesloft": "Salesloft",
    "outreach.io": "Outreach.io",
    "clearbit": "Clearbit",
    "zoominfo": "ZoomInfo",
    "6sense": "6sense",
    "demandbase": "Demandbase",
    "postscript": "Postscript",
    "yotpo": "Yotpo",
    "microsoft excel": "Microsoft Excel",
    "google sheets": "Google Sheets",
    "sql": "SQL",
    "python": "Python",
    "shopify": "Shopify",
    "magento": "Magento",
    "stripe": "Stripe",
}

# Alternate spellings -> canonical tool key.
TOOL_ALIASES: dict[str, str] = {
    "ga4": "google analytics",
    "google analytics 4": "google analytics",
    "sfdc": "salesforce",
    "facebook ads": "meta ads",
    "adwords": "google ads",
    "google adwords": "google ads",
    "powerbi": "power bi",
    "ms excel": "microsoft excel",
    "hub spot": "hubspot",
}


def _token_pattern(token: str) -> re.Pattern[str]:
    return re.compile(rf"(?<![\w]){re.escape(token)}(?![\w])", re.IGNORECASE)


TOOL_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    (key, _token_pattern(key)) for key in TOOL_VOCABULARY
] + [(alias, _token_pattern(alias)) for alias in TOOL_ALIASES]


def canonical_tool(name: str) -> str:
    """Return the canonical vocabulary key for a tool name (lower-cased)."""
    value = re.sub(r"\s+", " ", name.strip().lower())
    return TOOL_ALIASES.get(value, value)


def find_tools(text: str) -> list[str]:
    """Return canonical tool keys mentioned in `text`, in order of appearance."""
    hits: list[tuple[int, str]] = []
    for token, pattern in TOOL_PATTERNS:
        match = pattern.search(text)
        if match:
            hits.append((match.start(), canonical_tool(token)))

    found: list[str] = []
    for _pos, key in sorted(hits):
        if key not in found:
            found.append(key)
    return found
