"""Unit tests for claims review reconciliation."""

from __future__ import annotations


def _item(item_id: str, **kwargs):
    from job_filter.review import ReviewItem

    defaults = {
        "company": "Acme",
        "role": "VP Marketing",
        "start_date": "2020",
        "end_date": "2023",
        "claim_text": "Did a thing",
    }
    defaults.update(kwargs)
    return ReviewItem(id=item_id, **defaults)


def _parsed(**kwargs):
    from job_filter.review import ParsedClaim

    defaults = {"company": "Acme", "role": "VP Marketing", "start_date": "2020"}
    defaults.update(kwargs)
    return ParsedClaim(**defaults)


class TestBuildTimeframe:
    """Test timeframe formatting."""

    def test_start_and_end(self):
        from job_filter.review import build_timeframe

        assert build_timeframe("Jan 2020", "Mar 2023") == "Jan 2020 - Mar 2023"

    def test_open_ended(self):
        """Missing end date means the role is current."""
        from job_filter.review import build_timeframe

        assert build_timeframe("Jan 2020", "") == "Jan 2020 - Present"

    def test_end_only(self):
        from job_filter.review import build_timeframe

        assert build_timeframe("", "2019") == "2019"

    def test_unknown(self):
        from job_filter.review import build_timeframe

        assert build_timeframe("  ", "") == "Timeframe unknown"


class TestCreateClaimReviewItems:
    """Test review item creation from parsed claims."""

    def test_splits_responsibility_into_items(self):
        """'Led team; Grew revenue 30%' becomes two items."""
        from job_filter.review import create_claim_review_items

        items = create_claim_review_items(
            [_parsed(responsibilities=["Led team; Grew revenue 30%"])]
        )

        assert [item.claim_text for item in items] == ["Led team", "Grew revenue 30%"]
        assert (items[0].metric_value, items[0].metric_unit) == ("", "")
        assert (items[1].metric_value, items[1].metric_unit) == ("30", "%")
        assert all(item.status == "active" for item in items)
        assert len({item.id for item in items}) == 2

    def test_outcomes_come_before_responsibilities(self):
        """Outcome bullets are listed first and use their structured metric."""
        from job_filter.review import ParsedOutcome, create_claim_review_items

        items = create_claim_review_items(
            [
                _parsed(
                    responsibilities=["Owned lifecycle roadmap"],
                    outcomes=[ParsedOutcome(description="Lifted retention", metric="12%")],
                )
            ]
        )

        assert [item.claim_text for item in items] == [
            "Lifted retention",
            "Owned lifecycle roadmap",
        ]
        assert (items[0].metric_value, items[0].metric_unit) == ("12", "%")

    def test_falls_back_to_claim_text(self):
        """With no bullets, the flat claim text becomes the source."""
        from job_filter.review import create_claim_review_items

        items = create_claim_review_items(
            [_parsed(claim_text="• Launched loyalty program • Drove $4M in new bookings")]
        )

        assert [item.claim_text for item in items] == [
            "Launched loyalty program",
            "Drove $4M in new bookings",
        ]
        assert (items[1].metric_value, items[1].metric_unit) == ("$4", "M")

    def test_parent_fields_are_copied(self):
        """Items inherit identity, dates and normalized tools."""
        from job_filter.review import create_claim_review_items

        items = create_claim_review_items(
            [
                _parsed(
                    end_date="",
                    tools=["Braze", " Braze ", "", "Amplitude"],
                    responsibilities=["Owned lifecycle roadmap"],
                )
            ]
        )

        assert items[0].company == "Acme"
        assert items[0].timeframe == "2020 - Present"
        assert items[0].tools == ["Braze", "Amplitude"]

    def test_respects_explicit_auto_use(self):
        """A parsed claim opted out of auto-use stays opted out."""
        from job_filter.review import create_claim_review_items

        items = create_claim_review_items(
            [_parsed(auto_use=False, responsibilities=["Owned lifecycle roadmap"])]
        )

        assert items[0].auto_use is False

    def test_missing_role_needs_review(self):
        """Items without a role need review and are not auto-usable."""
        from job_filter.review import create_claim_review_items

        items = create_claim_review_items(
            [_parsed(role="", responsibilities=["Owned lifecycle roadmap"])]
        )

        assert items[0].status == "needs_review"
        assert items[0].auto_use is False

    def test_empty_claim_produces_no_items(self):
        """Parsed claims with no text contribute nothing."""
        from job_filter.review import create_claim_review_items

        assert create_claim_review_items([_parsed()]) == []


class TestRegroupClaimReviewItems:
    """Test status computation."""

    def test_conflicting_metrics_flag_both_items(self):
        """'150%' and '35%' for the same role conflict, symmetrically."""
        from job_filter.review import regroup_claim_review_items

        items = regroup_claim_review_items(
            [
                _item("a", claim_text="Grew revenue 150%", metric_value="150", metric_unit="%"),
                _item("b", claim_text="Grew revenue 35%", metric_value="35", metric_unit="%"),
            ]
        )

        assert [item.status for item in items] == ["conflict", "conflict"]
        assert [item.auto_use for item in items] == [False, False]

    def test_conflict_is_symmetric_under_reordering(self):
        """Swapping the inputs swaps the outputs and nothing else."""
        from job_filter.review import regroup_claim_review_items

        a = _item("a", metric_value="150", metric_unit="%")
        b = _item("b", metric_value="35", metric_unit="%")

        forward = {item.id: item.status for item in regroup_claim_review_items([a, b])}
        backward = {item.id: item.status for item in regroup_claim_review_items([b, a])}

        assert forward == backward

    def test_different_units_do_not_conflict(self):
        """Metrics with different units measure different things."""
        from job_filter.review import regroup_claim_review_items

        items = regroup_claim_review_items(
            [
                _item("a", metric_value="150", metric_unit="%"),
                _item("b", metric_value="$40", metric_unit="k"),
            ]
        )

        assert [item.status for item in items] == ["active", "active"]

    def test_same_value_does_not_conflict(self):
        """Repeating the same metric is consistent."""
        from job_filter.review import regroup_claim_review_items

        items = regroup_claim_review_items(
            [
                _item("a", metric_value="35", metric_unit="%"),
                _item("b", metric_value="35", metric_unit="%"),
            ]
        )

        assert [item.status for item in items] == ["active", "active"]

    def test_conflict_key_is_case_insensitive(self):
        """Company and role are compared case-insensitively."""
        from job_filter.review import regroup_claim_review_items

        items = regroup_claim_review_items(
            [
                _item("a", company="ACME", metric_value="150", metric_unit="%"),
                _item("b", role="vp marketing", metric_value="35", metric_unit="%"),
            ]
        )

        assert [item.status for item in items] == ["conflict", "conflict"]

    def test_needs_review_dominates_conflict(self):
        """An incomplete item stays needs_review while its metric still conflicts."""
        from job_filter.review import regroup_claim_review_items

        items = regroup_claim_review_items(
            [
                _item("a", claim_text="", metric_value="150", metric_unit="%"),
                _item("b", claim_text="Grew 35%", metric_value="35", metric_unit="%"),
            ]
        )

        assert [item.status for item in items] == ["needs_review", "conflict"]
        assert items[0].auto_use is False
        assert items[1].auto_use is False

    def test_incomplete_sibling_metric_flags_complete_item(self):
        """A differing metric on an item missing its text still conflicts the key."""
        from job_filter.review import regroup_claim_review_items

        items = regroup_claim_review_items(
            [
                _item("a", claim_text="Grew revenue 150%", metric_value="150", metric_unit="%"),
                _item("b", claim_text="", metric_value="35", metric_unit="%"),
            ]
        )

        assert [(item.id, item.status, item.auto_use) for item in items] == [
            ("a", "conflict", False),
            ("b", "needs_review", False),
        ]

    def test_incomplete_sibling_with_same_metric_is_no_conflict(self):
        """Matching values stay active even when one sibling is incomplete."""
        from job_filter.review import regroup_claim_review_items

        items = regroup_claim_review_items(
            [
                _item("a", metric_value="35", metric_unit="%"),
                _item("b", claim_text="", metric_value="35", metric_unit="%"),
            ]
        )

        assert [item.status for item in items] == ["active", "needs_review"]

    def test_status_is_recomputed_from_scratch(self):
        """A stale conflict clears once the conflicting item is gone."""
        from job_filter.review import regroup_claim_review_items

        stale = _item("a", metric_value="150", metric_unit="%", status="conflict")

        assert regroup_claim_review_items([stale])[0].status == "active"

    def test_user_auto_use_choice_kept_for_active_items(self):
        """Active items keep whatever auto_use the user chose."""
        from job_filter.review import regroup_claim_review_items

        items = regroup_claim_review_items([_item("a", auto_use=False)])

        assert items[0].auto_use is False

    def test_idempotent(self):
        """Regrouping its own output is a no-op."""
        from job_filter.review import create_claim_review_items, regroup_claim_review_items

        items = create_claim_review_items(
            [
                _parsed(responsibilities=["Led team; Grew revenue 30%"], tools=["Braze"]),
                _parsed(responsibilities=["Grew revenue 45%"]),
                _parsed(role="", claim_text="Orphan bullet"),
            ]
        )

        assert regroup_claim_review_items(items) == items

    def test_does_not_mutate_input(self):
        """Inputs are copied, never edited in place."""
        from job_filter.review import regroup_claim_review_items

        item = _item("a", role="", tools=[" Braze "])
        regroup_claim_review_items([item])

        assert item.status == "active"
        assert item.tools == [" Braze "]


class TestGroupClaimReviewItems:
    """Test grouping for display."""

    def test_groups_by_company_role_timeframe(self):
        """Groups keep first-seen order and use placeholders for blanks."""
        from job_filter.review import group_claim_review_items, regroup_claim_review_items

        items = regroup_claim_review_items(
            [
                _item("a"),
                _item("b", company="", role=""),
                _item("c"),
            ]
        )

        groups = group_claim_review_items(items)

        assert [(g.company, g.role, g.timeframe) for g in groups] == [
            ("Acme", "VP Marketing", "2020 - 2023"),
            ("Unknown Company", "Unknown Role", "2020 - 2023"),
        ]
        assert [item.id for item in groups[0].items] == ["a", "c"]


class TestSplitAndMerge:
    """Test editor operations."""

    def test_split_review_item(self):
        """Splitting yields fresh ids with per-segment metrics."""
        from job_filter.review import split_review_item

        item = _item("a", claim_text="Led team; Grew revenue 30%", included=False)

        result = split_review_item(item)

        assert result.split is True
        assert result.reason is None
        assert [i.claim_text for i in result.items] == ["Led team", "Grew revenue 30%"]
        assert result.items[1].metric_value == "30"
        assert all(i.id != "a" for i in result.items)
        assert all(i.included is False for i in result.items)

    def test_split_without_boundaries_reports_reason(self):
        """Unsplittable text is returned unchanged with a reason."""
        from job_filter.review import split_review_item
        from job_filter.review.service import NO_SPLIT_REASON

        item = _item("a", claim_text="Led team")

        result = split_review_item(item)

        assert result.split is False
        assert result.items == [item]
        assert result.reason == NO_SPLIT_REASON

    def test_can_merge_requires_same_identity_and_dates(self):
        from job_filter.review import can_merge_with_previous

        assert can_merge_with_previous(_item("a"), _item("b")) is True
        assert can_merge_with_previous(_item("a"), _item("b", end_date="2024")) is False
        assert can_merge_with_previous(_item("a"), _item("b", company="Other")) is False

    def test_merge_review_items(self):
        """Text joins with a line break; tools union; flags OR."""
        from job_filter.review import merge_review_items

        primary = _item("a", claim_text="Led team", tools=["Braze"], auto_use=False)
        secondary = _item(
            "b",
            claim_text="Grew revenue 30%",
            metric_value="30",
            metric_unit="%",
            tools=["Braze", "Amplitude"],
        )

        merged = merge_review_items(primary, secondary)

        assert merged.id == "a"
        assert merged.claim_text == "Led team\nGrew revenue 30%"
        assert (merged.metric_value, merged.metric_unit) == ("30", "%")
        assert merged.tools == ["Braze", "Amplitude"]
        assert merged.auto_use is True

    def test_merge_keeps_primary_metric(self):
        """The primary's metric survives a merge."""
        from job_filter.review import merge_review_items

        primary = _item("a", claim_text="Cut CAC 22%", metric_value="22", metric_unit="%")
        secondary = _item("b", claim_text="Grew LTV 3x", metric_value="3", metric_unit="x")

        merged = merge_review_items(primary, secondary)

        assert (merged.metric_value, merged.metric_unit) == ("22", "%")

    def test_split_item_in_list(self):
        """Split items replace the original in place."""
        from job_filter.review import split_item_in_list

        items = [_item("a"), _item("b", claim_text="Led team; Grew revenue 30%"), _item("c")]

        result, reason = split_item_in_list(items, "b")

        assert reason is None
        assert [i.claim_text for i in result] == [
            "Did a thing",
            "Led team",
            "Grew revenue 30%",
            "Did a thing",
        ]
        assert result[0].id == "a"
        assert result[-1].id == "c"

    def test_split_item_in_list_unknown_id(self):
        """Unknown ids leave the list as is."""
        from job_filter.review import regroup_claim_review_items, split_item_in_list

        items = regroup_claim_review_items([_item("a")])

        result, reason = split_item_in_list(items, "missing")

        assert result == items
        assert reason is None

    def test_merge_item_with_previous(self):
        """Merging folds an item into its predecessor and regroups."""
        from job_filter.review import create_claim_review_items, merge_item_with_previous

        items = create_claim_review_items(
            [_parsed(responsibilities=["Led team; Grew revenue 30%"])]
        )

        merged = merge_item_with_previous(items, items[1].id)

        assert len(merged) == 1
        assert merged[0].id == items[0].id
        assert merged[0].claim_text == "Led team\nGrew revenue 30%"
        assert merged[0].metric_value == "30"

    def test_merge_first_item_is_noop(self):
        """The first item has nothing to merge into."""
        from job_filter.review import create_claim_review_items, merge_item_with_previous

        items = create_claim_review_items(
            [_parsed(responsibilities=["Led team; Grew revenue 30%"])]
        )

        assert merge_item_with_previous(items, items[0].id) == items

    def test_merge_across_roles_is_noop(self):
        """Items from different roles are never merged."""
        from job_filter.review import merge_item_with_previous, regroup_claim_review_items

        items = regroup_claim_review_items([_item("a"), _item("b", role="Director")])

        assert merge_item_with_previous(items, "b") == items

    def test_split_then_merge_restores_text(self):
        """Merging split parts back reproduces the segments joined by line breaks."""
        from job_filter.review import merge_item_with_previous, split_item_in_list

        items, _ = split_item_in_list([_item("a", claim_text="Led team; Grew revenue 30%")], "a")

        merged = merge_item_with_previous(items, items[1].id)

        assert [i.claim_text for i in merged] == ["Led team\nGrew revenue 30%"]


class TestUpdateReviewItem:
    """Test field edits."""

    def test_edit_recomputes_status(self):
        """Clearing the role makes the item need review."""
        from job_filter.review import regroup_claim_review_items, update_review_item

        items = regroup_claim_review_items([_item("a"), _item("b")])

        updated = update_review_item(items, "b", role="")

        assert [i.status for i in updated] == ["active", "needs_review"]

    def test_status_cannot_be_set_directly(self):
        """Direct status edits are ignored."""
        from job_filter.review import regroup_claim_review_items, update_review_item

        items = regroup_claim_review_items([_item("a")])

        updated = update_review_item(items, "a", status="conflict")

        assert updated[0].status == "active"

    def test_editing_metric_creates_conflict(self):
        """Changing a metric value can introduce a conflict."""
        from job_filter.review import regroup_claim_review_items, update_review_item

        items = regroup_claim_review_items(
            [
                _item("a", metric_value="35", metric_unit="%"),
                _item("b", metric_value="35", metric_unit="%"),
            ]
        )

        updated = update_review_item(items, "b", metric_value="150")

        assert [i.status for i in updated] == ["conflict", "conflict"]


class TestReviewItemToClaimInput:
    """Test mapping reviewed items to claim payloads."""

    def test_metric_item_becomes_outcome(self):
        from job_filter.review import review_item_to_claim_input

        payload = review_item_to_claim_input(
            _item(
                "a",
                end_date="",
                claim_text="Grew revenue 30%",
                raw_snippet="Grew revenue 30%",
                metric_value="30",
                metric_unit="%",
                tools=["Braze"],
            )
        )

        assert payload["end_date"] is None
        assert payload["metric"] == "30%"
        assert payload["is_numeric"] is True
        assert payload["responsibilities"] == []
        assert payload["outcomes"] == [
            {"description": "Grew revenue 30%", "metric": "30%", "is_numeric": True}
        ]
        assert payload["tools"] == ["Braze"]

    def test_plain_item_becomes_responsibility(self):
        from job_filter.review import review_item_to_claim_input

        payload = review_item_to_claim_input(_item("a", claim_text="Owned  the roadmap"))

        assert payload["metric"] is None
        assert payload["is_numeric"] is False
        assert payload["responsibilities"] == ["Owned the roadmap"]
        assert payload["outcomes"] == []
        assert payload["review_status"] == "active"
