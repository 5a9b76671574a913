"""Claims review reconciliation.

Turns parsed resume claims into reviewable items and keeps their grouping and
status consistent across edits. `regroup_claim_review_items` is the only
place status is computed; every edit, split or merge must be followed by it.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Sequence

from job_filter.ledger.models import ReviewStatus
from job_filter.review.metrics import parse_metric
from job_filter.review.models import (
    ParsedClaim,
    ReviewGroup,
    ReviewItem,
    SplitReviewResult,
)
from job_filter.review.segmentation import normalize_text, smart_split

logger = logging.getLogger(__name__)

UNKNOWN_TIMEFRAME = "Timeframe unknown"
UNKNOWN_COMPANY = "Unknown Company"
UNKNOWN_ROLE = "Unknown Role"
NO_SPLIT_REASON = "No bullet boundaries found. Try adding line breaks before splitting."


def _new_id() -> str:
    return str(uuid.uuid4())


def build_timeframe(start_date: str, end_date: str) -> str:
    """Display timeframe for a role: 'start - end', 'end' or 'Timeframe unknown'."""
    start = (start_date or "").strip()
    end = (end_date or "").strip()
    if not start and not end:
        return UNKNOWN_TIMEFRAME
    if not start:
        return end
    return f"{start} - {end or 'Present'}"


def normalize_tool_list(tools: Iterable[str]) -> list[str]:
    """Trim, drop empties and de-duplicate tools, keeping first-seen order."""
    seen: set[str] = set()
    result: list[str] = []
    for tool in tools:
        value = (tool or "").strip()
        if value and value not in seen:
            seen.add(value)
            result.append(value)
    return result


def _base_status(item: ReviewItem) -> ReviewStatus:
    if not item.company.strip() or not item.role.strip() or not item.claim_text.strip():
        return "needs_review"
    return "active"


def _conflict_key(item: ReviewItem) -> str:
    return "::".join(
        (
            item.company.strip().lower(),
            item.role.strip().lower(),
            item.metric_unit.strip().lower(),
        )
    )


def _conflicting_keys(items: Sequence[ReviewItem]) -> set[str]:
    values: dict[str, set[str]] = {}
    for item in items:
        if not item.metric_value.strip():
            continue
        values.setdefault(_conflict_key(item), set()).add(item.metric_value.strip())
    return {key for key, seen in values.items() if len(seen) > 1}


def regroup_claim_review_items(items: Sequence[ReviewItem]) -> list[ReviewItem]:
    """Recompute timeframe, tools and status for every item.

    Status is derived from scratch on each call: items missing company, role
    or claim text are `needs_review`. Every item with a metric value counts
    toward its (company, role, metric unit) key, and complete items whose key
    carries more than one distinct value are `conflict`. Everything else is
    `active`. Any item that ends up `needs_review` or `conflict` has
    `auto_use` forced to False. Running the function on its own output
    returns an equal list.
    """
    staged = [
        item.model_copy(
            update={
                "timeframe": build_timeframe(item.start_date, item.end_date),
                "tools": normalize_tool_list(item.tools),
                "status": _base_status(item),
            }
        )
        for item in items
    ]

    conflicts = _conflicting_keys(staged)

    result: list[ReviewItem] = []
    for item in staged:
        status = item.status
        if status == "active" and item.metric_value.strip() and _conflict_key(item) in conflicts:
            status = "conflict"
        auto_use = item.auto_use if status == "active" else False
        result.append(item.model_copy(update={"status": status, "auto_use": auto_use}))

    if conflicts:
        logger.debug(f"Flagged {len(conflicts)} metric conflict key(s)")
    return result


def _source_lines(claim: ParsedClaim) -> list[tuple[str, str]]:
    """(text, fallback metric) pairs: outcomes first, then responsibilities."""
    lines = [
        (normalize_text(outcome.description), outcome.metric or "")
        for outcome in claim.outcomes
    ]
    lines.extend((normalize_text(line), "") for line in claim.responsibilities)
    lines = [(text, metric) for text, metric in lines if text]
    if lines:
        return lines

    fallback = normalize_text(claim.claim_text or claim.raw_snippet)
    if not fallback:
        return []
    metric = f"{claim.metric_value}{claim.metric_unit}" if claim.metric_value else ""
    return [(fallback, metric)]


def create_claim_review_items(parsed_claims: Sequence[ParsedClaim]) -> list[ReviewItem]:
    """Build review items from parsed resume claims.

    Each outcome or responsibility is split into bullet segments and every
    segment becomes one item carrying the parent's identity, dates and tools.
    A parsed claim's explicit `auto_use` is respected; it defaults to True.
    """
    items: list[ReviewItem] = []

    for claim in parsed_claims:
        tools = normalize_tool_list(claim.tools)
        auto_use = True if claim.auto_use is None else claim.auto_use

        for text, fallback_metric in _source_lines(claim):
            segments = smart_split(text) or [text]
            for segment in segments:
                metric = parse_metric(segment, fallback_metric)
                items.append(
                    ReviewItem(
                        id=_new_id(),
                        company=claim.company,
                        role=claim.role,
                        start_date=claim.start_date,
                        end_date=claim.end_date,
                        raw_snippet=segment,
                        claim_text=segment,
                        metric_value=metric.value,
                        metric_unit=metric.unit,
                        metric_context=metric.context,
                        tools=tools,
                        included=claim.included,
                        auto_use=auto_use,
                    )
                )

    logger.debug(f"Created {len(items)} review item(s) from {len(parsed_claims)} parsed claim(s)")
    return regroup_claim_review_items(items)


def group_claim_review_items(items: Sequence[ReviewItem]) -> list[ReviewGroup]:
    """Bucket items by (company, role, timeframe) in first-seen key order."""
    groups: dict[str, ReviewGroup] = {}
    for item in items:
        company = item.company or UNKNOWN_COMPANY
        role = item.role or UNKNOWN_ROLE
        key = "::".join((company, role, item.timeframe))
        if key not in groups:
            groups[key] = ReviewGroup(
                key=key, company=company, role=role, timeframe=item.timeframe
            )
        groups[key].items.append(item)
    return list(groups.values())


def split_review_item(item: ReviewItem) -> SplitReviewResult:
    """Split one item into per-bullet items.

    Returns the item unchanged with a reason when no boundary is found. New
    items keep the parent's identity and flags but get fresh ids and
    per-segment metric fields. Status is not recomputed here.
    """
    parts = smart_split(item.claim_text)
    if len(parts) <= 1:
        return SplitReviewResult(items=[item], reason=NO_SPLIT_REASON)

    split_items: list[ReviewItem] = []
    for part in parts:
        metric = parse_metric(part)
        split_items.append(
            item.model_copy(
                update={
                    "id": _new_id(),
                    "claim_text": part,
                    "raw_snippet": part,
                    "metric_value": metric.value,
                    "metric_unit": metric.unit,
                    "metric_context": metric.context,
                }
            )
        )
    return SplitReviewResult(items=split_items)


def can_merge_with_previous(previous: ReviewItem, current: ReviewItem) -> bool:
    """Whether two items share company, role and dates exactly."""
    return (
        previous.company == current.company
        and previous.role == current.role
        and previous.start_date == current.start_date
        and previous.end_date == current.end_date
    )


def _join_lines(first: str, second: str) -> str:
    return "\n".join(part for part in (normalize_text(first), normalize_text(second)) if part)


def merge_review_items(primary: ReviewItem, secondary: ReviewItem) -> ReviewItem:
    """Fold `secondary` into `primary`.

    Claim text is joined with a line break. The primary's metric is kept when
    it has one; otherwise the metric is parsed from the combined text. Tools
    are unioned and `included`/`auto_use` are OR-ed. Adjacency is the
    caller's concern (see `can_merge_with_previous`).
    """
    merged_text = _join_lines(primary.claim_text, secondary.claim_text)

    if primary.metric_value.strip():
        value, unit = primary.metric_value, primary.metric_unit
        context = primary.metric_context or secondary.metric_context
    else:
        metric = parse_metric(merged_text)
        value, unit = metric.value, metric.unit
        context = metric.context or secondary.metric_context

    return primary.model_copy(
        update={
            "claim_text": merged_text,
            "raw_snippet": _join_lines(primary.raw_snippet, secondary.raw_snippet),
            "metric_value": value,
            "metric_unit": unit,
            "metric_context": context,
            "tools": normalize_tool_list([*primary.tools, *secondary.tools]),
            "included": primary.included or secondary.included,
            "auto_use": primary.auto_use or secondary.auto_use,
        }
    )


def update_review_item(
    items: Sequence[ReviewItem], item_id: str, **changes: object
) -> list[ReviewItem]:
    """Apply a field edit to one item and regroup.

    `status` cannot be edited; it is always recomputed.
    """
    changes.pop("status", None)
    edited = [
        item.model_copy(update=changes) if item.id == item_id else item for item in items
    ]
    return regroup_claim_review_items(edited)


def split_item_in_list(
    items: Sequence[ReviewItem], item_id: str
) -> tuple[list[ReviewItem], str | None]:
    """Split one item in place within the list and regroup.

    Returns the new list and the reason when nothing was split.
    """
    result: list[ReviewItem] = []
    reason: str | None = None
    for item in items:
        if item.id != item_id:
            result.append(item)
            continue
        split = split_review_item(item)
        reason = split.reason
        result.extend(split.items)
    return regroup_claim_review_items(result), reason


def merge_item_with_previous(items: Sequence[ReviewItem], item_id: str) -> list[ReviewItem]:
    """Merge an item into the one before it when they share identity and dates.

    The list is returned regrouped but otherwise unchanged when the item is
    first, unknown or not mergeable with its predecessor.
    """
    index = next((i for i, item in enumerate(items) if item.id == item_id), -1)
    if index <= 0 or not can_merge_with_previous(items[index - 1], items[index]):
        return regroup_claim_review_items(items)

    merged = merge_review_items(items[index - 1], items[index])
    result = [*items[: index - 1], merged, *items[index + 1 :]]
    return regroup_claim_review_items(result)


def review_item_to_claim_input(item: ReviewItem) -> dict:
    """Map a reviewed item into a claim payload for the caller to persist.

    Items with a metric become outcomes; the rest become responsibilities.
    """
    claim_text = normalize_text(item.claim_text)
    value = item.metric_value.strip()
    metric_label = f"{value}{item.metric_unit.strip()}"

    return {
        "company": item.company.strip(),
        "role": item.role.strip(),
        "start_date": item.start_date.strip(),
        "end_date": item.end_date.strip() or None,
        "text": claim_text,
        "evidence_snippet": normalize_text(item.raw_snippet),
        "review_status": item.status,
        "auto_use": item.auto_use,
        "metric": metric_label or None,
        "is_numeric": bool(value),
        "responsibilities": [] if value or not claim_text else [claim_text],
        "outcomes": (
            [{"description": claim_text, "metric": metric_label, "is_numeric": True}]
            if value
            else []
        ),
        "tools": normalize_tool_list(item.tools),
    }
