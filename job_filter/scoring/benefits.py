"""Benefits catalog and benefit detection in job descriptions."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

BenefitCategory = Literal["Health", "Financial", "Time Off", "Flexibility", "Family"]


@dataclass(frozen=True)
class Benefit:
    """One catalog benefit and the phrases that confirm it."""

    id: str
    label: str
    category: BenefitCategory
    keywords: tuple[str, ...]


BENEFITS_CATALOG: tuple[Benefit, ...] = (
    Benefit("health_medical", "Medical insurance", "Health", ("medical", "health insurance")),
    Benefit("health_dental", "Dental insurance", "Health", ("dental",)),
    Benefit("health_vision", "Vision insurance", "Health", ("vision insurance", "vision coverage")),
    Benefit("health_hsa_fsa", "HSA/FSA", "Health", ("hsa", "fsa")),
    Benefit(
        "financial_401k_match",
        "401(k) match",
        "Financial",
        ("401k", "401(k)", "retirement match"),
    ),
    Benefit("financial_equity", "Equity / stock", "Financial", ("equity", "stock", "rsu", "options")),
    Benefit("financial_bonus", "Annual bonus", "Financial", ("bonus", "incentive")),
    Benefit("financial_commission", "Commission", "Financial", ("commission",)),
    Benefit("financial_life_insurance", "Life insurance", "Financial", ("life insurance",)),
    Benefit("timeoff_pto", "Paid time off (PTO)", "Time Off", ("pto", "paid time off", "vacation")),
    Benefit("timeoff_sick", "Paid sick leave", "Time Off", ("sick leave", "sick time")),
    Benefit(
        "timeoff_parental",
        "Parental leave",
        "Family",
        ("parental leave", "maternity", "paternity"),
    ),
    Benefit("timeoff_holidays", "Paid holidays", "Time Off", ("holidays",)),
    Benefit("flex_remote", "Remote-friendly", "Flexibility", ("remote", "work from home")),
    Benefit("flex_hybrid", "Hybrid schedule", "Flexibility", ("hybrid",)),
    Benefit(
        "flex_flexible_hours",
        "Flexible hours",
        "Flexibility",
        ("flexible hours", "flex schedule"),
    ),
    Benefit("family_childcare", "Childcare support", "Family", ("childcare",)),
    Benefit("family_fertility", "Fertility support", "Family", ("fertility",)),
    Benefit(
        "learning_budget",
        "Learning budget",
        "Financial",
        ("learning budget", "education stipend"),
    ),
    Benefit("wellness_stipend", "Wellness stipend", "Health", ("wellness stipend", "wellness")),
)

_BENEFIT_BY_ID = {benefit.id: benefit for benefit in BENEFITS_CATALOG}

# Compensation-score signals: each distinct hit is worth a fixed number of points.
BENEFIT_SIGNALS: tuple[str, ...] = (
    "medical",
    "dental",
    "401k",
    "401(k)",
    "equity",
    "stock",
    "bonus",
    "rsu",
    "shares",
)


def _normalize_label(value: str) -> str:
    return re.sub(r"[^a-z0-9]+", " ", value.strip().lower()).strip()


def _mentions(text: str, phrase: str) -> bool:
    return re.search(rf"(?<![\w]){re.escape(phrase)}(?![\w])", text, re.IGNORECASE) is not None


def resolve_benefit(value: str) -> Benefit | None:
    """Resolve a catalog id, label or free-text benefit to a catalog entry."""
    if value in _BENEFIT_BY_ID:
        return _BENEFIT_BY_ID[value]

    normalized = _normalize_label(value)
    if not normalized:
        return None
    for benefit in BENEFITS_CATALOG:
        if _normalize_label(benefit.label) == normalized:
            return benefit
    for benefit in BENEFITS_CATALOG:
        if any(_normalize_label(keyword) in normalized for keyword in benefit.keywords):
            return benefit
    return None


def benefit_label(value: str) -> str:
    """Display label for a benefit id or free-text value."""
    benefit = resolve_benefit(value)
    return benefit.label if benefit else value.strip()


def job_mentions_benefit(text: str, value: str) -> bool:
    """Whether `text` positively mentions the benefit.

    Unknown benefits are searched for verbatim.
    """
    benefit = resolve_benefit(value)
    phrases = benefit.keywords if benefit else (value.strip(),)
    return any(phrase and _mentions(text, phrase) for phrase in phrases)


def count_benefit_signals(text: str) -> int:
    """Number of distinct compensation benefit signals present in `text`."""
    return sum(1 for signal in BENEFIT_SIGNALS if _mentions(text, signal))
