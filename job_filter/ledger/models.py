"""Data models for the Claims Ledger."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

ClaimType = Literal["Experience", "Skill", "Tool", "Outcome"]
ClaimSource = Literal["Resume", "LinkedIn", "Manual", "Interview"]
VerificationStatus = Literal["Approved", "Review Needed", "Rejected"]

# Shared with claims review reconciliation.
ReviewStatus = Literal["active", "needs_review", "conflict"]

ATOMIC_CLAIM_TYPES: tuple[ClaimType, ...] = ("Skill", "Tool", "Outcome")


def normalize_claim_text(text: str) -> str:
    """Lower-case and collapse whitespace for duplicate detection."""
    return re.sub(r"\s+", " ", text.lower()).strip()


def _has_identity(role: str | None, company: str | None) -> bool:
    return bool((role or "").strip() and (company or "").strip())


class ClaimOutcome(BaseModel):
    """Outcome line embedded in an experience record."""

    description: str = Field(..., description="Outcome text")
    metric: str | None = Field(default=None, description="Metric label, e.g. '40%'")
    is_numeric: bool = Field(default=False, description="Whether the metric is numeric")
    verified: bool = Field(default=False, description="Whether the outcome is approved")


class Claim(BaseModel):
    """Atomic unit of career evidence.

    Two variants share this model, discriminated by `type`:

    - Experience anchors carry `role` and `company` (and optionally dates).
    - Atomic claims (Skill, Tool, Outcome) carry `text` and must link to an
      anchor through `experience_id`.

    Legacy records that omit `type` but carry both `role` and `company` are
    normalized to Experience anchors during validation.
    """

    id: str = Field(..., description="Claim identifier")
    type: ClaimType = Field(..., description="Claim variant")
    text: str = Field(default="", description="Free claim text")
    normalized_text: str = Field(
        default="", description="Lower-cased, whitespace-collapsed text"
    )
    source: ClaimSource = Field(default="Manual", description="Where the claim came from")
    evidence_snippet: str | None = Field(default=None, description="Supporting excerpt")
    confidence: float = Field(default=0.5, ge=0.0, le=1.0, description="Parser confidence")
    verification_status: VerificationStatus = Field(
        default="Review Needed", description="User verification state"
    )

    # Atomic claim link
    experience_id: str | None = Field(
        default=None, description="Experience anchor this claim belongs to"
    )

    # Experience identity
    company: str | None = Field(default=None, description="Company name")
    role: str | None = Field(default=None, description="Role title")
    start_date: str | None = Field(default=None, description="Start date as written")
    end_date: str | None = Field(default=None, description="End date (None = Present)")
    location: str | None = Field(default=None, description="Role location")

    # Legacy embedded content from older import formats
    responsibilities: list[str] = Field(default_factory=list)
    tools: list[str] = Field(default_factory=list)
    outcomes: list[ClaimOutcome] = Field(default_factory=list)

    metric: str | None = Field(default=None, description="Outcome metric label")
    is_numeric: bool = Field(default=False, description="Whether the metric is numeric")

    auto_use: bool | None = Field(
        default=None, description="Explicit eligibility for automated matching"
    )
    review_status: ReviewStatus | None = Field(
        default=None, description="Status carried over from claims review"
    )

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @model_validator(mode="before")
    @classmethod
    def infer_legacy_type(cls, data: Any) -> Any:
        """Tag untyped records that carry an experience identity."""
        if isinstance(data, dict) and not data.get("type"):
            if _has_identity(data.get("role"), data.get("company")):
                data = {**data, "type": "Experience"}
        return data

    @model_validator(mode="after")
    def fill_derived_fields(self) -> Claim:
        """Derive normalized text and make timestamps timezone-aware."""
        if not self.normalized_text and self.text:
            self.normalized_text = normalize_claim_text(self.text)
        if self.created_at.tzinfo is None:
            self.created_at = self.created_at.replace(tzinfo=UTC)
        if self.updated_at.tzinfo is None:
            self.updated_at = self.updated_at.replace(tzinfo=UTC)
        return self

    @property
    def is_experience(self) -> bool:
        """True for Experience anchors, including untagged legacy anchors."""
        return self.type == "Experience" or _has_identity(self.role, self.company)

    @property
    def identity_key(self) -> tuple[str, str, str, str]:
        """Canonical experience identity: lower-cased (company, role, start, end)."""
        return (
            (self.company or "").strip().lower(),
            (self.role or "").strip().lower(),
            (self.start_date or "").strip().lower(),
            (self.end_date or "").strip().lower(),
        )

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> Claim:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


@dataclass
class ExperienceBundle:
    """Read-only view of one experience anchor and its linked claims."""

    id: str
    company: str
    role: str
    start_date: str | None = None
    end_date: str | None = None
    location: str | None = None
    responsibilities: list[str] = field(default_factory=list)
    skills: list[str] = field(default_factory=list)
    tools: list[str] = field(default_factory=list)
    outcomes: list[ClaimOutcome] = field(default_factory=list)
    confidence: float = 0.5
    verification_status: VerificationStatus = "Review Needed"

    @property
    def label(self) -> str:
        return f"{self.role} at {self.company}"

    def evidence_lines(self) -> list[str]:
        """All free-text lines in the bundle, in a stable order."""
        lines: list[str] = []
        lines.extend(self.responsibilities)
        lines.extend(self.skills)
        lines.extend(self.tools)
        lines.extend(outcome.description for outcome in self.outcomes)
        return lines


@dataclass
class DuplicateClaimGroup:
    """A set of claims that should be merged into `target_id`."""

    key: str
    type: ClaimType
    target_id: str
    source_ids: list[str] = field(default_factory=list)
    label: str = ""

    def __post_init__(self) -> None:
        if not self.source_ids:
            raise ValueError("DuplicateClaimGroup requires at least one source id")
        if self.target_id in self.source_ids:
            raise ValueError("DuplicateClaimGroup target cannot also be a source")

    @property
    def size(self) -> int:
        return len(self.source_ids) + 1
