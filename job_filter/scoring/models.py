"""Data models for the Fit Scoring engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel, Field

from job_filter.requirements.models import Requirement

LocationType = Literal["Remote", "Hybrid", "In-person", "Unknown"]
EmploymentType = Literal["Full-time", "Contract", "Part-time", "Freelance", "Unknown"]
EmploymentFilter = Literal["exclude_contract", "ft_only"]
SeedStagePolicy = Literal["warn", "disqualify"]
FitLabel = Literal["Pursue", "Maybe", "Pass"]


class ResearchBrief(BaseModel):
    """Company research notes. Only read as extra text for domain fit."""

    company_identity: str | None = None
    company_overview: str | None = None
    business_model: str | None = None
    icp: str | None = None
    competitors: str | None = None
    gtm_channels: str | None = None
    org_leadership: str | None = None
    risks: str | None = None
    interview_hypotheses: list[str] = Field(default_factory=list)
    comp_signals: str | None = None
    raw_paste_content: str | None = None

    def text(self) -> str:
        """All free-text fields joined into one block."""
        parts = [
            self.company_identity,
            self.company_overview,
            self.business_model,
            self.icp,
            self.competitors,
            self.gtm_channels,
            self.org_leadership,
            self.risks,
            *self.interview_hypotheses,
            self.comp_signals,
            self.raw_paste_content,
        ]
        return "\n".join(part for part in parts if part)


class Job(BaseModel):
    """Job posting snapshot to score."""

    id: str = Field(default="", description="Job identifier")
    title: str = Field(default="", description="Job title")
    company: str = Field(default="", description="Company name")
    location: str | None = Field(default=None, description="Job location")
    location_type: LocationType = Field(default="Unknown", description="Work arrangement")
    employment_type: EmploymentType = Field(default="Unknown", description="Employment type")
    comp_range: str | None = Field(default=None, description="Compensation as written")
    comp_min: int | None = Field(default=None, ge=0, description="Minimum base salary")
    comp_max: int | None = Field(default=None, ge=0, description="Maximum base salary")
    job_description: str = Field(default="", description="Full job description text")
    research_brief: ResearchBrief | None = Field(
        default=None, description="Company research notes"
    )

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> Job:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


class HardFilters(BaseModel):
    """Profile constraints whose violation always zeroes the score."""

    requires_visa_sponsorship: bool = Field(
        default=False, description="Whether the user needs visa sponsorship"
    )
    min_base_salary: int = Field(
        default=0, ge=0, le=2_000_000, description="Minimum acceptable base salary"
    )
    max_onsite_days_per_week: int = Field(
        default=5, ge=0, le=5, description="Maximum in-office days per week"
    )
    max_travel_percent: int = Field(
        default=100, ge=0, le=100, description="Maximum acceptable travel percentage"
    )
    employment_type: EmploymentFilter = Field(
        default="exclude_contract", description="Allowed employment types"
    )


class ScoringPolicy(BaseModel):
    """User choices for borderline signals."""

    seed_stage: SeedStagePolicy = Field(
        default="warn", description="Seed-stage companies: warn or disqualify"
    )


class Profile(BaseModel):
    """User preferences used for fit scoring."""

    id: str = Field(default="", description="Profile identifier")
    name: str = Field(default="", description="Candidate name")
    target_roles: list[str] = Field(default_factory=list, description="Target job titles")
    comp_floor: int = Field(default=0, ge=0, description="Lowest acceptable compensation")
    comp_target: int = Field(default=0, ge=0, description="Target compensation")
    required_benefits: list[str] = Field(
        default_factory=list, description="Benefit ids or labels that must be offered"
    )
    preferred_benefits: list[str] = Field(
        default_factory=list, description="Benefit ids or labels that are nice to have"
    )
    location_preference: str = Field(default="", description="Free-text location preference")
    disqualifiers: list[str] = Field(
        default_factory=list, description="Phrases that rule a job out"
    )
    hard_filters: HardFilters = Field(default_factory=HardFilters)
    scoring_policy: ScoringPolicy = Field(default_factory=ScoringPolicy)

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> Profile:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


@dataclass
class ScoreBreakdown:
    """Points per scoring component."""

    role_scope_authority: int = 0
    compensation_benefits: int = 0
    company_stage_ability: int = 0
    domain_fit: int = 0
    risk_penalty: int = 0

    def __post_init__(self) -> None:
        for name in (
            "role_scope_authority",
            "compensation_benefits",
            "company_stage_ability",
            "domain_fit",
            "risk_penalty",
        ):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative (got {value})")

    @property
    def total(self) -> int:
        return (
            self.role_scope_authority
            + self.compensation_benefits
            + self.company_stage_ability
            + self.domain_fit
            - self.risk_penalty
        )


@dataclass
class MustHaveSummary:
    """Counts of Must requirements by match status."""

    total: int = 0
    met: int = 0
    partial: int = 0
    missing: int = 0

    def __post_init__(self) -> None:
        if self.met + self.partial + self.missing != self.total:
            raise ValueError(
                "MustHaveSummary counts must add up to total "
                f"(total={self.total}, met={self.met}, partial={self.partial}, "
                f"missing={self.missing})"
            )


@dataclass
class ConstraintResult:
    """Result of evaluating hard filters against a job."""

    passed: bool
    hard_violations: list[str] = field(default_factory=list)
    soft_warnings: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.passed and self.hard_violations:
            raise ValueError(
                "ConstraintResult.passed=True is incompatible with hard_violations"
            )
        if not self.passed and not self.hard_violations:
            raise ValueError(
                "ConstraintResult.passed=False requires at least one hard violation"
            )


@dataclass
class ScoreResult:
    """Full scoring result for a job."""

    fit_score: int
    fit_label: FitLabel
    breakdown: ScoreBreakdown = field(default_factory=ScoreBreakdown)
    disqualifiers: list[str] = field(default_factory=list)
    risk_warnings: list[str] = field(default_factory=list)
    reasons_to_pursue: list[str] = field(default_factory=list)
    reasons_to_pass: list[str] = field(default_factory=list)
    requirements_extracted: list[Requirement] = field(default_factory=list)
    must_have_summary: MustHaveSummary = field(default_factory=MustHaveSummary)
    gap_suggestions: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not (0 <= self.fit_score <= 100):
            raise ValueError(f"fit_score must be between 0 and 100 (got {self.fit_score})")
        if self.disqualifiers and self.fit_score != 0:
            raise ValueError("fit_score must be 0 when disqualifiers are present")
        if self.disqualifiers and self.fit_label != "Pass":
            raise ValueError("fit_label must be 'Pass' when disqualifiers are present")
        expected = max(0, min(100, self.breakdown.total))
        if self.fit_score != expected:
            raise ValueError(
                f"fit_score {self.fit_score} does not match breakdown total {expected}"
            )

    @property
    def disqualified(self) -> bool:
        return bool(self.disqualifiers)

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "fit_score": self.fit_score,
            "fit_label": self.fit_label,
            "breakdown": {
                "role_scope_authority": self.breakdown.role_scope_authority,
                "compensation_benefits": self.breakdown.compensation_benefits,
                "company_stage_ability": self.breakdown.company_stage_ability,
                "domain_fit": self.breakdown.domain_fit,
                "risk_penalty": self.breakdown.risk_penalty,
            },
            "disqualifiers": list(self.disqualifiers),
            "risk_warnings": list(self.risk_warnings),
            "reasons_to_pursue": list(self.reasons_to_pursue),
            "reasons_to_pass": list(self.reasons_to_pass),
            "requirements_extracted": [r.to_dict() for r in self.requirements_extracted],
            "must_have_summary": {
                "total": self.must_have_summary.total,
                "met": self.must_have_summary.met,
                "partial": self.must_have_summary.partial,
                "missing": self.must_have_summary.missing,
            },
            "gap_suggestions": list(self.gap_suggestions),
        }
