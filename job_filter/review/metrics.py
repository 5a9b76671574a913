"""Metric extraction from claim bullets (e.g. '$40k', '35%', '3x')."""

from __future__ import annotations

import re
from dataclasses import dataclass

from job_filter.review.segmentation import normalize_text

MAX_CONTEXT_CHARS = 120

METRIC_RE = re.compile(
    r"(\$\s*\d[\d,.]*(?![\d,.])\s*(?:[kKmMbB](?![A-Za-z]))?|\d[\d,.]*\s*%|\d[\d,.]*\s*[xX](?![A-Za-z]))"
)
FALLBACK_METRIC_RE = re.compile(r"^(\$?\s*\d[\d,.]*)(\s*[kKmMbBxX%])?$")
_VALUE_RE = re.compile(r"^\$?\d[\d,.]*")


@dataclass(frozen=True)
class ParsedMetric:
    """Metric split into value, unit and surrounding context."""

    value: str = ""
    unit: str = ""
    context: str = ""

    @property
    def label(self) -> str:
        return f"{self.value}{self.unit}"

    def __bool__(self) -> bool:
        return bool(self.value)


def _clean_value(value: str) -> str:
    return re.sub(r"\s+", "", value).rstrip(".,")


def parse_metric(claim_text: str, fallback_metric: str | None = None) -> ParsedMetric:
    """Extract the first metric token from a claim bullet.

    A structured `fallback_metric` (e.g. '40%') wins when it matches the strict
    anchored pattern; otherwise the bullet text is scanned. Returns an empty
    ParsedMetric when nothing is found.
    """
    source = (fallback_metric or "").strip()
    source_match = FALLBACK_METRIC_RE.match(source)
    if source_match:
        return ParsedMetric(
            value=_clean_value(source_match.group(1)),
            unit=re.sub(r"\s+", "", source_match.group(2) or ""),
            context=normalize_text(claim_text)[:MAX_CONTEXT_CHARS],
        )

    match = METRIC_RE.search(claim_text or "")
    if not match:
        return ParsedMetric()

    token = re.sub(r"\s+", "", match.group(0))
    value_match = _VALUE_RE.match(token)
    value = value_match.group(0) if value_match else token
    unit = token[len(value) :]
    remainder = claim_text[: match.start()] + claim_text[match.end() :]

    return ParsedMetric(
        value=value.rstrip(".,"),
        unit=unit,
        context=normalize_text(remainder)[:MAX_CONTEXT_CHARS].strip(),
    )
