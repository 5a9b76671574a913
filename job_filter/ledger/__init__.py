"""Claims ledger: canonical career evidence.

Public API:
    - Claim / ClaimOutcome: Ledger records
    - build_experience_bundles: Anchor + linked claims views
    - claim_review_queue: Claims awaiting review, most urgent first
    - group_claims_by_type: Four-bucket partition
    - find_duplicate_claim_groups: Merge suggestions
    - validate_claim_context / ClaimValidationError: Write-time invariants
"""

from job_filter.ledger.models import (
    Claim,
    ClaimOutcome,
    ClaimSource,
    ClaimType,
    DuplicateClaimGroup,
    ExperienceBundle,
    ReviewStatus,
    VerificationStatus,
    normalize_claim_text,
)
from job_filter.ledger.service import (
    build_experience_bundles,
    claim_review_queue,
    find_duplicate_claim_groups,
    get_auto_usable_claims,
    group_claims_by_type,
    is_claim_auto_usable,
)
from job_filter.ledger.validation import (
    ClaimValidationCode,
    ClaimValidationError,
    validate_claim,
    validate_claim_context,
)

__all__ = [
    "Claim",
    "ClaimOutcome",
    "ClaimSource",
    "ClaimType",
    "VerificationStatus",
    "ReviewStatus",
    "ExperienceBundle",
    "DuplicateClaimGroup",
    "normalize_claim_text",
    "build_experience_bundles",
    "claim_review_queue",
    "group_claims_by_type",
    "find_duplicate_claim_groups",
    "is_claim_auto_usable",
    "get_auto_usable_claims",
    "ClaimValidationCode",
    "ClaimValidationError",
    "validate_claim",
    "validate_claim_context",
]
