"""Write-time validation for claims ledger records.

Every claim write (import, manual entry, edit, approval) must pass
`validate_claim_context` against the current ledger snapshot before the
caller persists it. Failures raise `ClaimValidationError` carrying a stable
`code` that callers display verbatim.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

from job_filter.ledger.models import Claim, ClaimType, VerificationStatus

ClaimValidationCode = Literal[
    "missing-experience-anchor",
    "missing-experience-link",
    "invalid-experience-link",
    "missing-experience-identity",
    "missing-claim-text",
    "missing-approved-outcome-metric",
]

_MESSAGES: dict[str, str] = {
    "missing-experience-identity": "Experience claims must include both role and company.",
    "missing-claim-text": "Claim text is required for Skills, Tools, and Outcomes.",
    "missing-experience-anchor": (
        "Add at least one Experience claim before adding Skills, Tools, or Outcomes."
    ),
    "missing-experience-link": (
        "Link this claim to an Experience entry so evidence stays coherent."
    ),
    "invalid-experience-link": (
        "The selected Experience link no longer exists. Select a valid Experience entry."
    ),
    "missing-approved-outcome-metric": (
        "Approved outcome claims must include a metric for traceability."
    ),
}


class ClaimValidationError(ValueError):
    """Exception raised when a claim write would break ledger invariants."""

    def __init__(self, code: ClaimValidationCode, message: str | None = None):
        super().__init__(message or _MESSAGES[code])
        self.code = code


def validate_claim_context(
    *,
    claim_type: ClaimType,
    claims: Sequence[Claim],
    text: str | None = None,
    role: str | None = None,
    company: str | None = None,
    metric: str | None = None,
    verification_status: VerificationStatus | None = None,
    experience_id: str | None = None,
    current_claim_id: str | None = None,
) -> None:
    """Validate a candidate claim against the current ledger snapshot.

    Args:
        claim_type: Type of the claim being written.
        claims: Current ledger snapshot.
        text: Claim text (atomic claims).
        role: Role title (experience claims).
        company: Company name (experience claims).
        metric: Outcome metric label.
        verification_status: Status the claim is being written with.
        experience_id: Anchor the atomic claim links to.
        current_claim_id: Id of the claim being edited, excluded from anchors.

    Raises:
        ClaimValidationError: If the write would violate a ledger invariant.
    """
    if claim_type == "Experience":
        if not (role or "").strip() or not (company or "").strip():
            raise ClaimValidationError("missing-experience-identity")
        return

    if not (text or "").strip():
        raise ClaimValidationError("missing-claim-text")

    anchors = [
        claim
        for claim in claims
        if claim.is_experience and claim.id != current_claim_id
    ]
    if not anchors:
        raise ClaimValidationError("missing-experience-anchor")

    if not experience_id:
        raise ClaimValidationError("missing-experience-link")

    if not any(anchor.id == experience_id for anchor in anchors):
        raise ClaimValidationError("invalid-experience-link")

    if (
        claim_type == "Outcome"
        and verification_status == "Approved"
        and not (metric or "").strip()
    ):
        raise ClaimValidationError("missing-approved-outcome-metric")


def validate_claim(claim: Claim, claims: Sequence[Claim]) -> None:
    """Validate a full claim record against the ledger snapshot."""
    validate_claim_context(
        claim_type="Experience" if claim.is_experience else claim.type,
        claims=claims,
        text=claim.text,
        role=claim.role,
        company=claim.company,
        metric=claim.metric,
        verification_status=claim.verification_status,
        experience_id=claim.experience_id,
        current_claim_id=claim.id,
    )
