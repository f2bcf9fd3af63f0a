"""Consensus resolution: turn a ReviewSummary into a ReviewResult.

Rules, in priority order:

1. Any rejecting approver (``/reject``) vetoes the change.
2. The change is approved when every touched file has cleared the per-file
   approver quorum and enough approvers agreed overall.
3. Approvers also count toward the LGTM tally.
4. Approval always overrides reviewer objections (``/lbtm``).
5. Without approval, more objecting reviewers than concurring voters
   soft-blocks the change.
6. Otherwise report LGTM status and how many more votes are needed.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from quorum_core.coverage import PullRequestCoverage
from quorum_core.models import ReviewResult, ReviewSummary


def resolve(
    summary: ReviewSummary,
    all_files_approved: Callable[[Iterable[str], int], bool],
    approvers_per_file: int,
    total_approvers: int,
    total_reviewers: int,
) -> ReviewResult:
    if summary.disagreed_approvers:
        return ReviewResult(is_rejected=True)

    approver_count = len(summary.agreed_approvers)
    is_approved = False
    if all_files_approved(summary.agreed_approvers, approvers_per_file):
        is_approved = approver_count >= total_approvers

    combined = approver_count + len(summary.agreed_reviewers)

    def with_lgtm() -> ReviewResult:
        is_lgtm = combined >= total_reviewers
        return ReviewResult(
            is_approved=is_approved,
            is_lgtm=is_lgtm,
            need_lgtm_num=0 if is_lgtm else total_reviewers - combined,
        )

    if is_approved:
        return with_lgtm()

    if combined < len(summary.disagreed_reviewers):
        return ReviewResult(is_lbtm=True)

    return with_lgtm()


def resolve_with_config(summary: ReviewSummary, coverage: PullRequestCoverage, review_config: dict) -> ReviewResult:
    """Resolve using the ``review`` section of the loaded configuration."""
    return resolve(
        summary,
        coverage.all_files_approved,
        approvers_per_file=review_config["number_of_approvers"],
        total_approvers=review_config["total_number_of_approvers"],
        total_reviewers=review_config["total_number_of_reviewers"],
    )
