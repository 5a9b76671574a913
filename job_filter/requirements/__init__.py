"""Requirement extraction from job descriptions.

Public API:
    - extract_requirements: Job description text/lines -> ordered Requirement list
    - Requirement: Parsed requirement model
"""

from job_filter.requirements.extractor import (
    experience_subject,
    extract_requirements,
    normalize_requirement_text,
)
from job_filter.requirements.models import (
    GapSeverity,
    Requirement,
    RequirementMatch,
    RequirementPriority,
    RequirementType,
)

__all__ = [
    "extract_requirements",
    "experience_subject",
    "normalize_requirement_text",
    "Requirement",
    "RequirementType",
    "RequirementPriority",
    "RequirementMatch",
    "GapSeverity",
]
