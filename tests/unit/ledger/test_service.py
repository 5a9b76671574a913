"""Unit tests for claims ledger views."""

from __future__ import annotations

from datetime import UTC, datetime


def _claim(**kwargs):
    from job_filter.ledger.models import Claim

    return Claim(**kwargs)


class TestBuildExperienceBundles:
    """Test experience bundle construction."""

    def test_links_atomic_claims_to_anchor(self, ledger_claims):
        """Tools and outcomes are folded into their anchor."""
        from job_filter.ledger import build_experience_bundles

        bundles = build_experience_bundles(ledger_claims)

        assert len(bundles) == 1
        bundle = bundles[0]
        assert bundle.id == "exp-1"
        assert bundle.tools == ["Braze", "Mixpanel"]
        assert [o.description for o in bundle.outcomes] == [
            "Grew repeat revenue 35% through lifecycle experimentation"
        ]
        assert bundle.outcomes[0].metric == "35%"
        assert bundle.outcomes[0].verified is True

    def test_every_linked_claim_lands_in_exactly_one_bundle(self, ledger_claims):
        """Bundles preserve link integrity: one anchor per linked claim."""
        from job_filter.ledger import build_experience_bundles

        second_anchor = _claim(
            id="exp-2", type="Experience", role="Marketing Manager", company="Contoso"
        )
        skill = _claim(id="skill-2", type="Skill", text="Email strategy", experience_id="exp-2")
        bundles = build_experience_bundles([*ledger_claims, second_anchor, skill])

        by_id = {bundle.id: bundle for bundle in bundles}
        assert [b.id for b in bundles] == ["exp-1", "exp-2"]
        assert by_id["exp-2"].skills == ["Email strategy"]
        assert "Email strategy" not in by_id["exp-1"].skills

    def test_dangling_links_are_dropped(self, experience_claim):
        """Claims linked to a missing anchor do not appear anywhere."""
        from job_filter.ledger import build_experience_bundles

        orphan = _claim(id="t1", type="Tool", text="Looker", experience_id="missing")

        bundles = build_experience_bundles([experience_claim, orphan])

        assert bundles[0].tools == []

    def test_legacy_fallback_when_no_linked_claims(self):
        """Anchors with no atomic claims use their embedded tools/outcomes."""
        from job_filter.ledger import ClaimOutcome, build_experience_bundles

        legacy = _claim(
            id="legacy",
            type="Experience",
            role="Director",
            company="Acme",
            tools=["HubSpot", " HubSpot "],
            outcomes=[ClaimOutcome(description="Doubled pipeline", metric="2x")],
        )

        bundle = build_experience_bundles([legacy])[0]

        assert bundle.tools == ["HubSpot"]
        assert bundle.outcomes[0].description == "Doubled pipeline"

    def test_legacy_fields_ignored_when_atomic_claims_exist(self):
        """Once an anchor has linked claims its embedded fields are not used."""
        from job_filter.ledger import build_experience_bundles

        anchor = _claim(
            id="e1", type="Experience", role="Director", company="Acme", tools=["HubSpot"]
        )
        tool = _claim(id="t1", type="Tool", text="Braze", experience_id="e1")

        bundle = build_experience_bundles([anchor, tool])[0]

        assert bundle.tools == ["Braze"]

    def test_duplicate_lines_collapsed(self, experience_claim):
        """Repeated lines appear once."""
        from job_filter.ledger import build_experience_bundles

        claims = [
            experience_claim,
            _claim(id="t1", type="Tool", text="Braze", experience_id="exp-1"),
            _claim(id="t2", type="Tool", text="Braze", experience_id="exp-1"),
        ]

        assert build_experience_bundles(claims)[0].tools == ["Braze"]

    def test_missing_identity_uses_placeholders(self):
        """A legacy anchor with only text still renders a label."""
        from job_filter.ledger import build_experience_bundles

        anchor = _claim(id="e1", type="Experience", text="Consultant")

        bundle = build_experience_bundles([anchor])[0]

        assert bundle.role == "Consultant"
        assert bundle.company == "Unknown Company"

    def test_does_not_mutate_input(self, ledger_claims):
        """Inputs are left untouched."""
        from job_filter.ledger import build_experience_bundles

        before = [claim.model_dump() for claim in ledger_claims]
        build_experience_bundles(ledger_claims)

        assert [claim.model_dump() for claim in ledger_claims] == before


class TestClaimReviewQueue:
    """Test review queue ordering."""

    def test_orders_by_confidence_then_age(self):
        """Lowest confidence first, then oldest update."""
        from job_filter.ledger import claim_review_queue

        claims = [
            _claim(
                id="a",
                type="Skill",
                text="A",
                confidence=0.8,
                updated_at=datetime(2024, 1, 1, tzinfo=UTC),
            ),
            _claim(
                id="b",
                type="Skill",
                text="B",
                confidence=0.4,
                updated_at=datetime(2024, 3, 1, tzinfo=UTC),
            ),
            _claim(
                id="c",
                type="Skill",
                text="C",
                confidence=0.4,
                updated_at=datetime(2024, 2, 1, tzinfo=UTC),
            ),
            _claim(
                id="d",
                type="Skill",
                text="D",
                confidence=0.1,
                verification_status="Approved",
            ),
        ]

        assert [claim.id for claim in claim_review_queue(claims)] == ["c", "b", "a"]


class TestGroupClaimsByType:
    """Test the four-bucket partition."""

    def test_partitions_by_type(self, ledger_claims):
        """Every claim lands in exactly one bucket."""
        from job_filter.ledger import group_claims_by_type

        groups = group_claims_by_type(ledger_claims)

        assert list(groups) == ["Experience", "Skill", "Tool", "Outcome"]
        assert [c.id for c in groups["Experience"]] == ["exp-1"]
        assert groups["Skill"] == []
        assert [c.id for c in groups["Tool"]] == ["tool-braze", "tool-mixpanel"]
        assert sum(len(v) for v in groups.values()) == len(ledger_claims)


class TestFindDuplicateClaimGroups:
    """Test duplicate detection."""

    def test_groups_same_text_same_anchor(self, experience_claim):
        """Case and whitespace differences still count as duplicates."""
        from job_filter.ledger import find_duplicate_claim_groups

        claims = [
            experience_claim,
            _claim(
                id="late",
                type="Tool",
                text="Braze",
                experience_id="exp-1",
                created_at=datetime(2024, 2, 1, tzinfo=UTC),
            ),
            _claim(
                id="early",
                type="Tool",
                text="  braze ",
                experience_id="exp-1",
                created_at=datetime(2024, 1, 1, tzinfo=UTC),
            ),
        ]

        groups = find_duplicate_claim_groups(claims)

        assert len(groups) == 1
        assert groups[0].target_id == "early"
        assert groups[0].source_ids == ["late"]
        assert groups[0].type == "Tool"

    def test_different_anchors_are_not_duplicates(self):
        """The same tool under two experiences is legitimate."""
        from job_filter.ledger import find_duplicate_claim_groups

        claims = [
            _claim(id="e1", type="Experience", role="A", company="X"),
            _claim(id="e2", type="Experience", role="B", company="Y"),
            _claim(id="t1", type="Tool", text="Braze", experience_id="e1"),
            _claim(id="t2", type="Tool", text="Braze", experience_id="e2"),
        ]

        assert find_duplicate_claim_groups(claims) == []

    def test_experience_duplicates_use_identity(self):
        """Anchors with the same role, company and dates are duplicates."""
        from job_filter.ledger import find_duplicate_claim_groups

        claims = [
            _claim(
                id="e1",
                type="Experience",
                role="Director",
                company="Acme",
                start_date="2020",
                created_at=datetime(2024, 1, 1, tzinfo=UTC),
            ),
            _claim(
                id="e2",
                type="Experience",
                role="director",
                company="ACME",
                start_date="2020",
                created_at=datetime(2024, 2, 1, tzinfo=UTC),
            ),
            _claim(id="e3", type="Experience", role="Director", company="Acme", start_date="2018"),
        ]

        groups = find_duplicate_claim_groups(claims)

        assert len(groups) == 1
        assert groups[0].type == "Experience"
        assert groups[0].target_id == "e1"
        assert groups[0].source_ids == ["e2"]
        assert groups[0].label == "Director @ Acme"

    def test_largest_groups_first(self, experience_claim):
        """Groups are ordered by size, largest first."""
        from job_filter.ledger import find_duplicate_claim_groups

        claims = [experience_claim]
        for i in range(2):
            claims.append(_claim(id=f"s{i}", type="Skill", text="SQL", experience_id="exp-1"))
        for i in range(3):
            claims.append(_claim(id=f"t{i}", type="Tool", text="Braze", experience_id="exp-1"))

        groups = find_duplicate_claim_groups(claims)

        assert [group.size for group in groups] == [3, 2]


class TestAutoUse:
    """Test auto-use eligibility."""

    def test_defaults_to_usable(self):
        """Claims without review metadata are usable."""
        from job_filter.ledger import is_claim_auto_usable

        assert is_claim_auto_usable(_claim(id="a", type="Skill", text="SQL")) is True

    def test_explicit_flag_wins(self):
        """An explicit auto_use overrides the review status."""
        from job_filter.ledger import is_claim_auto_usable

        assert (
            is_claim_auto_usable(
                _claim(id="a", type="Skill", text="SQL", auto_use=False, review_status="active")
            )
            is False
        )

    def test_non_active_review_status_is_not_usable(self):
        """Conflict and needs_review claims are excluded by default."""
        from job_filter.ledger import get_auto_usable_claims

        claims = [
            _claim(id="a", type="Skill", text="A", review_status="active"),
            _claim(id="b", type="Skill", text="B", review_status="conflict"),
            _claim(id="c", type="Skill", text="C", review_status="needs_review"),
        ]

        assert [claim.id for claim in get_auto_usable_claims(claims)] == ["a"]
