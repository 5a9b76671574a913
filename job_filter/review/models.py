"""Data models for claims review reconciliation."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from job_filter.ledger.models import ReviewStatus


class ParsedOutcome(BaseModel):
    """Outcome bullet produced by the resume parser."""

    description: str = Field(..., description="Outcome text")
    metric: str | None = Field(default=None, description="Structured metric, e.g. '40%'")
    is_numeric: bool = Field(default=False, description="Whether the metric is numeric")


class ParsedClaim(BaseModel):
    """One role block produced by the resume parser, before review."""

    key: str = Field(default="", description="Parser-assigned key, used as id seed")
    role: str = Field(default="", description="Role title")
    company: str = Field(default="", description="Company name")
    start_date: str = Field(default="", description="Start date as written")
    end_date: str = Field(default="", description="End date ('' = Present)")
    responsibilities: list[str] = Field(default_factory=list)
    tools: list[str] = Field(default_factory=list)
    outcomes: list[ParsedOutcome] = Field(default_factory=list)

    # Flat fallback fields used when no bullets were recognized
    claim_text: str = Field(default="", description="Whole claim text")
    raw_snippet: str = Field(default="", description="Original snippet")
    metric_value: str = Field(default="", description="Parsed metric value")
    metric_unit: str = Field(default="", description="Parsed metric unit")

    included: bool = Field(default=True, description="Import this claim at all")
    auto_use: bool | None = Field(
        default=None, description="Eligibility for automated matching (None = default)"
    )

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> ParsedClaim:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


class ReviewItem(BaseModel):
    """One candidate bullet awaiting approval.

    `status` is computed by `regroup_claim_review_items` and must not be set by
    hand; `included` and `auto_use` are independent user choices.
    """

    id: str = Field(..., description="Item identifier")
    company: str = Field(default="", description="Company name")
    role: str = Field(default="", description="Role title")
    start_date: str = Field(default="", description="Start date as written")
    end_date: str = Field(default="", description="End date ('' = Present)")
    timeframe: str = Field(default="", description="Display timeframe")
    raw_snippet: str = Field(default="", description="Original text")
    claim_text: str = Field(default="", description="Editable claim text")
    metric_value: str = Field(default="", description="Metric value, e.g. '$40' or '35'")
    metric_unit: str = Field(default="", description="Metric unit, e.g. 'k', '%', 'x'")
    metric_context: str = Field(default="", description="Text around the metric")
    tools: list[str] = Field(default_factory=list)
    status: ReviewStatus = Field(default="active", description="Computed review status")
    included: bool = Field(default=True, description="Import this item")
    auto_use: bool = Field(default=True, description="Eligible for automated matching")

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> ReviewItem:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


@dataclass
class ReviewGroup:
    """Review items sharing a (company, role, timeframe) key."""

    key: str
    company: str
    role: str
    timeframe: str
    items: list[ReviewItem] = field(default_factory=list)


@dataclass
class SplitReviewResult:
    """Outcome of splitting a review item.

    `reason` explains why nothing was split; it is None on success.
    """

    items: list[ReviewItem]
    reason: str | None = None

    @property
    def split(self) -> bool:
        return self.reason is None and len(self.items) > 1
