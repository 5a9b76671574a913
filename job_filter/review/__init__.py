"""Claims review reconciliation: staging parsed resume bullets for approval.

Public API:
    create_claim_review_items: Build review items from parsed claims
    regroup_claim_review_items: Recompute timeframe and status after edits
    group_claim_review_items: Bucket items by company, role and timeframe
    split_review_item / merge_review_items / can_merge_with_previous: Edits
    smart_split / parse_metric: Text segmentation and metric parsing
"""

from job_filter.review.metrics import ParsedMetric, parse_metric
from job_filter.review.models import (
    ParsedClaim,
    ParsedOutcome,
    ReviewGroup,
    ReviewItem,
    SplitReviewResult,
)
from job_filter.review.segmentation import smart_split
from job_filter.review.service import (
    build_timeframe,
    can_merge_with_previous,
    create_claim_review_items,
    group_claim_review_items,
    merge_item_with_previous,
    merge_review_items,
    regroup_claim_review_items,
    review_item_to_claim_input,
    split_item_in_list,
    split_review_item,
    update_review_item,
)

__all__ = [
    "ParsedClaim",
    "ParsedMetric",
    "ParsedOutcome",
    "ReviewGroup",
    "ReviewItem",
    "SplitReviewResult",
    "build_timeframe",
    "can_merge_with_previous",
    "create_claim_review_items",
    "group_claim_review_items",
    "merge_item_with_previous",
    "merge_review_items",
    "parse_metric",
    "regroup_claim_review_items",
    "review_item_to_claim_input",
    "smart_split",
    "split_item_in_list",
    "split_review_item",
    "update_review_item",
]
