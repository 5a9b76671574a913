"""Compensation parsing from job description text."""

from __future__ import annotations

import re
from dataclasses import dataclass

# Annual base salaries outside this window are treated as noise (hourly
# rates, headcounts, funding amounts).
MIN_PLAUSIBLE_SALARY = 50_000
MAX_PLAUSIBLE_SALARY = 1_000_000

_NUMBER = r"(\d{1,3}(?:,\d{3})+|\d+(?:\.\d+)?)"
_SEPARATOR = r"\s*(?:-|–|—|to)\s*"

DOLLAR_RANGE_RE = re.compile(
    rf"\$\s*{_NUMBER}\s*([kK])?{_SEPARATOR}\$?\s*{_NUMBER}\s*([kK])?(?![\w])"
)
BARE_RANGE_RE = re.compile(r"(?<![\d$])(\d{3}),?(\d{3})\s*[-–]\s*(\d{3}),?(\d{3})(?!\d)")
DOLLAR_AMOUNT_RE = re.compile(rf"\$\s*{_NUMBER}\s*([kK])?(?![\w])")


@dataclass(frozen=True)
class CompRange:
    """Parsed compensation. Either side is None when it could not be read."""

    min: int | None = None
    max: int | None = None

    @property
    def label(self) -> str:
        if self.min is not None and self.max is not None:
            return f"${self.min:,} - ${self.max:,}"
        if self.min is not None:
            return f"${self.min:,}"
        if self.max is not None:
            return f"up to ${self.max:,}"
        return ""

    def __bool__(self) -> bool:
        return self.min is not None or self.max is not None


def _amount(number: str, suffix: str | None) -> int:
    value = float(number.replace(",", ""))
    if suffix:
        value *= 1000
    return int(value)


def _plausible(value: int) -> bool:
    return MIN_PLAUSIBLE_SALARY <= value <= MAX_PLAUSIBLE_SALARY


def parse_comp_from_text(text: str | None) -> CompRange:
    """Find a salary or salary range in free text.

    Recognizes `$150,000`, `$150k`, `$150,000 - $200,000`, `$150k - $200k` and
    bare `150,000 - 200,000` ranges. A `k` on either side of a range applies to
    a bare hundreds figure on the other side ("$150 - $200k"). Returns an
    empty CompRange when nothing plausible is found; never raises.
    """
    if not text:
        return CompRange()

    for match in DOLLAR_RANGE_RE.finditer(text):
        low_number, low_k, high_number, high_k = match.groups()
        shared_k = low_k or high_k
        low = _amount(low_number, low_k or (shared_k if "," not in low_number else None))
        high = _amount(high_number, high_k or (shared_k if "," not in high_number else None))
        if _plausible(low) and _plausible(high) and low <= high:
            return CompRange(min=low, max=high)

    for match in BARE_RANGE_RE.finditer(text):
        low = int(match.group(1) + match.group(2))
        high = int(match.group(3) + match.group(4))
        if _plausible(low) and _plausible(high) and low <= high:
            return CompRange(min=low, max=high)

    for match in DOLLAR_AMOUNT_RE.finditer(text):
        value = _amount(match.group(1), match.group(2))
        if _plausible(value):
            return CompRange(min=value)

    return CompRange()
