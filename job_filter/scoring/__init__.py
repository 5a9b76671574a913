"""Deterministic fit scoring for job postings.

This module scores a job posting against a user profile and the claims
ledger: hard filters, keyword disqualifiers, weighted components and
requirement matching.

Public API:
    - score_job: Score a job (one-off service)
    - FitScoringService: Main scoring service
    - ProfileService: Load and validate profiles and jobs
    - Job, Profile, HardFilters, ScoringPolicy, ResearchBrief: Input models
    - ScoreResult, ScoreBreakdown, MustHaveSummary: Output models
    - parse_comp_from_text: Salary parsing
    - ScoringConfig: Configuration settings
"""

from job_filter.scoring.bands import clamp_score, fit_label
from job_filter.scoring.compensation import CompRange, parse_comp_from_text
from job_filter.scoring.config import ScoringConfig, get_scoring_config, reset_scoring_config
from job_filter.scoring.models import (
    ConstraintResult,
    HardFilters,
    Job,
    MustHaveSummary,
    Profile,
    ResearchBrief,
    ScoreBreakdown,
    ScoreResult,
    ScoringPolicy,
)
from job_filter.scoring.profile import ProfileService
from job_filter.scoring.service import FitScoringService, score_job

__all__ = [
    "score_job",
    "FitScoringService",
    "ProfileService",
    "Job",
    "Profile",
    "HardFilters",
    "ScoringPolicy",
    "ResearchBrief",
    "ScoreResult",
    "ScoreBreakdown",
    "MustHaveSummary",
    "ConstraintResult",
    "CompRange",
    "parse_comp_from_text",
    "clamp_score",
    "fit_label",
    "ScoringConfig",
    "get_scoring_config",
    "reset_scoring_config",
]
