"""Data models for the Requirement Extractor."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

RequirementType = Literal[
    "skill", "experience", "tool", "education", "certification", "other"
]
RequirementPriority = Literal["Must", "Preferred"]
RequirementMatch = Literal["Met", "Partial", "Missing"]
GapSeverity = Literal["None", "Low", "Medium", "High"]


class Requirement(BaseModel):
    """One parsed obligation from a job posting.

    Requirements belong to a single scoring run: they are extracted fresh from
    the job description every time a job is scored and then annotated with
    `match` / evidence by the fit-scoring engine.
    """

    type: RequirementType = Field(..., description="Requirement category")
    description: str = Field(..., description="Normalized requirement text")
    priority: RequirementPriority = Field(
        default="Must", description="Must-have or nice-to-have"
    )
    match: RequirementMatch = Field(
        default="Missing", description="Match status against the claims ledger"
    )
    years_needed: int | None = Field(
        default=None, description="Years of experience asked for (experience only)"
    )
    evidence: str | None = Field(
        default=None, description="Matching experience summary (role @ company: line)"
    )
    jd_evidence: str | None = Field(
        default=None, description="Original job description line"
    )
    user_evidence: str | None = Field(
        default=None, description="Matching line from the user's claims"
    )
    gap_severity: GapSeverity | None = Field(
        default=None, description="How much the gap matters (set when matched)"
    )

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> Requirement:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)
