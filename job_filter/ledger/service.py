"""Claims ledger views: experience bundles, review queue and duplicate detection.

All functions are pure. They take a snapshot of claims and return new values
without mutating the input records.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from job_filter.ledger.models import (
    Claim,
    ClaimOutcome,
    DuplicateClaimGroup,
    ExperienceBundle,
    normalize_claim_text,
)

logger = logging.getLogger(__name__)


def _unique_trimmed(values: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        item = (value or "").strip()
        if not item or item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result


def _unique_outcomes(outcomes: Iterable[ClaimOutcome]) -> list[ClaimOutcome]:
    seen: set[tuple[str, str]] = set()
    result: list[ClaimOutcome] = []
    for outcome in outcomes:
        key = (
            (outcome.description or "").strip().lower(),
            (outcome.metric or "").strip().lower(),
        )
        if not key[0] or key in seen:
            continue
        seen.add(key)
        result.append(outcome)
    return result


def build_experience_bundles(claims: Sequence[Claim]) -> list[ExperienceBundle]:
    """Build one bundle per experience anchor, in input order.

    Atomic claims are folded into the anchor their `experience_id` points to;
    claims pointing nowhere are dropped. Anchors with no linked atomic claims
    fall back to their own legacy `tools`/`outcomes` fields so never-migrated
    records still produce non-empty bundles.
    """
    anchors = [claim for claim in claims if claim.is_experience]
    linked: dict[str, list[Claim]] = {anchor.id: [] for anchor in anchors}

    for claim in claims:
        if claim.is_experience or not claim.experience_id:
            continue
        if claim.experience_id in linked:
            linked[claim.experience_id].append(claim)

    bundles: list[ExperienceBundle] = []
    for anchor in anchors:
        skills: list[str] = []
        tools: list[str] = []
        outcomes: list[ClaimOutcome] = []

        atomic = linked[anchor.id]
        if atomic:
            for claim in atomic:
                if not claim.text:
                    continue
                if claim.type == "Skill":
                    skills.append(claim.text)
                elif claim.type == "Tool":
                    tools.append(claim.text)
                elif claim.type == "Outcome":
                    outcomes.append(
                        ClaimOutcome(
                            description=claim.text,
                            metric=claim.metric,
                            is_numeric=claim.is_numeric,
                            verified=claim.verification_status == "Approved",
                        )
                    )
        else:
            # Legacy fallback: content embedded directly on the anchor.
            tools.extend(anchor.tools)
            outcomes.extend(anchor.outcomes)

        bundles.append(
            ExperienceBundle(
                id=anchor.id,
                company=anchor.company or "Unknown Company",
                role=anchor.role or anchor.text or "Unknown Role",
                start_date=anchor.start_date,
                end_date=anchor.end_date,
                location=anchor.location,
                responsibilities=_unique_trimmed(anchor.responsibilities),
                skills=_unique_trimmed(skills),
                tools=_unique_trimmed(tools),
                outcomes=_unique_outcomes(outcomes),
                confidence=anchor.confidence,
                verification_status=anchor.verification_status,
            )
        )

    logger.debug(f"Built {len(bundles)} experience bundle(s) from {len(claims)} claim(s)")
    return bundles


def claim_review_queue(claims: Sequence[Claim]) -> list[Claim]:
    """Claims awaiting review, lowest confidence first, then oldest update first."""
    pending = [claim for claim in claims if claim.verification_status == "Review Needed"]
    return sorted(pending, key=lambda claim: (claim.confidence, claim.updated_at))


def group_claims_by_type(claims: Sequence[Claim]) -> dict[str, list[Claim]]:
    """Partition claims into fixed Experience/Skill/Tool/Outcome buckets."""
    groups: dict[str, list[Claim]] = {
        "Experience": [],
        "Skill": [],
        "Tool": [],
        "Outcome": [],
    }
    for claim in claims:
        if claim.is_experience:
            groups["Experience"].append(claim)
        else:
            groups[claim.type].append(claim)
    return groups


def _duplicate_key(claim: Claim) -> str:
    if claim.is_experience:
        role = normalize_claim_text(claim.role or claim.text or "")
        company = normalize_claim_text(claim.company or "")
        if not role or not company:
            return ""
        start = normalize_claim_text(claim.start_date or "")
        end = normalize_claim_text(claim.end_date or "")
        return f"Experience|{role}|{company}|{start}|{end}"

    if not claim.normalized_text:
        return ""
    return f"{claim.type}|{claim.normalized_text}|{claim.experience_id or 'unlinked'}"


def _duplicate_label(claim: Claim) -> str:
    if claim.is_experience:
        role = claim.role or claim.text or "Experience"
        company = f" @ {claim.company}" if claim.company else ""
        return f"{role}{company}"
    return claim.text or claim.type


def find_duplicate_claim_groups(claims: Sequence[Claim]) -> list[DuplicateClaimGroup]:
    """Find groups of duplicate claims and nominate a merge target for each.

    The earliest-created member (ties broken by id) is the target; the rest are
    sources to fold into it. Largest groups come first.
    """
    grouped: dict[str, list[Claim]] = {}
    for claim in claims:
        key = _duplicate_key(claim)
        if not key:
            continue
        grouped.setdefault(key, []).append(claim)

    groups: list[DuplicateClaimGroup] = []
    for key, members in grouped.items():
        if len(members) < 2:
            continue
        target, *sources = sorted(members, key=lambda claim: (claim.created_at, claim.id))
        groups.append(
            DuplicateClaimGroup(
                key=key,
                type="Experience" if target.is_experience else target.type,
                target_id=target.id,
                source_ids=[source.id for source in sources],
                label=_duplicate_label(target),
            )
        )

    return sorted(groups, key=lambda group: group.size, reverse=True)


def is_claim_auto_usable(claim: Claim) -> bool:
    """Whether a claim may feed automated matching and generation."""
    if claim.auto_use is not None:
        return claim.auto_use
    if claim.review_status is None:
        return True
    return claim.review_status == "active"


def get_auto_usable_claims(claims: Sequence[Claim]) -> list[Claim]:
    """Filter a snapshot down to auto-usable claims."""
    return [claim for claim in claims if is_claim_auto_usable(claim)]
