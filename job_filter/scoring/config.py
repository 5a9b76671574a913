"""Environment-driven settings for fit scoring."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScoringConfig(BaseSettings):
    """Knobs for `FitScoringService`.

    Component maxima and label bands default to the standard rubric
    (30/25/20/15, risk cap 10, Pursue 70, Maybe 40). Override any field with a
    `SCORING_`-prefixed environment variable or in `.env`.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCORING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Profile settings
    profile_path: Path = Field(
        default=Path("profiles/profile.yaml"),
        description="Path to user profile file (YAML/JSON)",
    )

    # Component maxima (points)
    role_scope_max: Annotated[int, Field(ge=0, le=100)] = Field(
        default=30,
        description="Maximum points for role scope and authority",
    )
    compensation_max: Annotated[int, Field(ge=0, le=100)] = Field(
        default=25,
        description="Maximum points for compensation and benefits",
    )
    company_stage_max: Annotated[int, Field(ge=0, le=100)] = Field(
        default=20,
        description="Maximum points for company stage / ability to pay",
    )
    domain_fit_max: Annotated[int, Field(ge=0, le=100)] = Field(
        default=15,
        description="Maximum points for domain fit",
    )
    risk_penalty_max: Annotated[int, Field(ge=0, le=100)] = Field(
        default=10,
        description="Maximum points subtracted for risk language",
    )

    # Label bands
    pursue_min: Annotated[int, Field(ge=0, le=100)] = Field(
        default=70,
        description="Minimum score for the 'Pursue' label",
    )
    maybe_min: Annotated[int, Field(ge=0, le=100)] = Field(
        default=40,
        description="Minimum score for the 'Maybe' label",
    )

    # Matching settings
    keyword_match_ratio: Annotated[float, Field(gt=0.0, le=1.0)] = Field(
        default=0.3,
        description="Share of requirement keywords a claim must cover to count",
    )
    direct_match_ratio: Annotated[float, Field(gt=0.0, le=1.0)] = Field(
        default=0.6,
        description="Share of requirement keywords one line must cover for 'Met'",
    )
    tool_fuzzy_match: bool = Field(
        default=True,
        description="Enable fuzzy tool-name matching",
    )
    tool_fuzzy_threshold: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.85,
        description="Similarity threshold for fuzzy tool matching",
    )

    @model_validator(mode="after")
    def validate_bands_and_maxima(self) -> ScoringConfig:
        """Ensure label bands are ordered and components fit in 0-100."""
        if self.maybe_min >= self.pursue_min:
            raise ValueError(
                "maybe_min must be below pursue_min "
                f"(maybe_min={self.maybe_min}, pursue_min={self.pursue_min})."
            )
        component_sum = (
            self.role_scope_max
            + self.compensation_max
            + self.company_stage_max
            + self.domain_fit_max
        )
        if component_sum > 100:
            raise ValueError(
                "Component maxima must not sum to more than 100. "
                f"Got {component_sum} "
                f"(role_scope={self.role_scope_max}, compensation={self.compensation_max}, "
                f"company_stage={self.company_stage_max}, domain_fit={self.domain_fit_max})."
            )
        return self


_scoring_config: ScoringConfig | None = None


def get_scoring_config() -> ScoringConfig:
    """Return the shared ScoringConfig, loading it on first use."""
    global _scoring_config
    if _scoring_config is None:
        _scoring_config = ScoringConfig()
    return _scoring_config


def reset_scoring_config() -> None:
    """Forget the shared ScoringConfig so the next call reloads it."""
    global _scoring_config
    _scoring_config = None
