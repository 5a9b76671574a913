"""Pytest configuration and shared fixtures."""

from datetime import UTC, datetime

import pytest


@pytest.fixture
def scoring_config():
    """Scoring configuration isolated from .env files and environment."""
    from job_filter.scoring.config import ScoringConfig

    return ScoringConfig(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def experience_claim():
    """Approved experience anchor for a long-running growth role."""
    from job_filter.ledger.models import Claim

    return Claim(
        id="exp-1",
        type="Experience",
        role="Head of Growth",
        company="Northwind",
        start_date="Jan 2016",
        end_date="",
        responsibilities=["Led growth marketing across lifecycle and retention"],
        verification_status="Approved",
        confidence=0.9,
        created_at=datetime(2024, 1, 1, tzinfo=UTC),
        updated_at=datetime(2024, 1, 1, tzinfo=UTC),
    )


@pytest.fixture
def ledger_claims(experience_claim):
    """Small ledger: one anchor with two tools and one outcome."""
    from job_filter.ledger.models import Claim

    created = datetime(2024, 1, 2, tzinfo=UTC)
    return [
        experience_claim,
        Claim(
            id="tool-braze",
            type="Tool",
            text="Braze",
            experience_id="exp-1",
            verification_status="Approved",
            created_at=created,
            updated_at=created,
        ),
        Claim(
            id="tool-mixpanel",
            type="Tool",
            text="Mixpanel",
            experience_id="exp-1",
            verification_status="Approved",
            created_at=created,
            updated_at=created,
        ),
        Claim(
            id="outcome-1",
            type="Outcome",
            text="Grew repeat revenue 35% through lifecycle experimentation",
            metric="35%",
            is_numeric=True,
            experience_id="exp-1",
            verification_status="Approved",
            created_at=created,
            updated_at=created,
        ),
    ]
