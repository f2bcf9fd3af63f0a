"""Bodies of the comments the bot posts.

Review notifications carry a hidden marker so the bot can find and replace
its own notifications without touching anything else it has said.
"""

from __future__ import annotations

from quorum_core.coverage import PullRequestCoverage
from quorum_core.models import ReviewResult, ReviewSummary

NOTIFICATION_MARKER = "<!-- quorum-review-notification -->"

# Files listed before the pending-files section is cut short.
_MAX_PENDING_FILES = 20


def is_notification_comment(body: str) -> bool:
    return NOTIFICATION_MARKER in (body or "")


def _mentions(identities) -> str:
    return ", ".join(f"@{i}" for i in identities) or "-"


def start_review_comment(reviewers: list[str], commands_endpoint: str = "") -> str:
    lines = [
        NOTIFICATION_MARKER,
        f"{_mentions(reviewers)}, this pull request is ready for your review.",
        "",
        "Comment `/lgtm` if it looks good to you or `/lbtm` if it does not. "
        "Approvers can also comment `/approve` or `/reject`.",
    ]
    if commands_endpoint:
        lines.append(f"\nSee the [command usage]({commands_endpoint}) for details.")
    return "\n".join(lines)


def review_status_comment(
    summary: ReviewSummary,
    result: ReviewResult,
    coverage: PullRequestCoverage,
    approvers_per_file: int,
) -> str:
    lines = [NOTIFICATION_MARKER, f"**Review status: {result.status}**", ""]
    lines.append("| Role | Agreed | Disagreed |")
    lines.append("|------|--------|-----------|")
    lines.append(f"| Approvers | {_mentions(summary.agreed_approvers)} | {_mentions(summary.disagreed_approvers)} |")
    lines.append(f"| Reviewers | {_mentions(summary.agreed_reviewers)} | {_mentions(summary.disagreed_reviewers)} |")

    if result.is_rejected:
        lines.append("\nThis pull request was rejected by an approver.")
        return "\n".join(lines)

    if not result.is_approved:
        counts = coverage.approval_counts(summary.agreed_approvers)
        pending = [path for path in coverage.files if counts[path] < approvers_per_file]
        if pending:
            lines.append(f"\nFiles still needing {approvers_per_file} approval(s):")
            for path in pending[:_MAX_PENDING_FILES]:
                owners = sorted(coverage.approvers_of_file(path))
                lines.append(f"- `{path}` ({counts[path]}/{approvers_per_file}), approvers: {_mentions(owners)}")
            if len(pending) > _MAX_PENDING_FILES:
                lines.append(f"- … and {len(pending) - _MAX_PENDING_FILES} more")

    if result.is_lbtm:
        lines.append("\nReviewers have requested changes.")
    elif not result.is_lgtm:
        lines.append(f"\n{result.need_lgtm_num} more `/lgtm` needed.")

    return "\n".join(lines)


def invalid_command_comment(commenter: str, cmd: str, commands_endpoint: str) -> str:
    return (
        f"@{commenter}, you can't comment `/{cmd.lower()}`. "
        f"Please see the [*Command Usage*]({commands_endpoint}) to get detail."
    )


def welcome_comment(maintainers: list[str], commands_endpoint: str, doc: str = "") -> str:
    lines = ["Thank you for your pull request."]
    if maintainers:
        lines.append(f"\n**{', '.join(maintainers)}** will help you to merge this pull request.")
    lines.append("\nYou can comment **/can-review** to start reviewing when the pull request is ready.")
    if commands_endpoint:
        lines.append(f"\nThe full list of commands accepted by me can be found [**here**]({commands_endpoint}).")
    if doc:
        lines.append(f"\n{doc}")
    return "\n".join(lines)


def labels_removed_comment(labels: list[str]) -> str:
    return f"New changes are detected. Remove the following labels: {', '.join(labels)}."


CI_REQUIRED_COMMENT = "It needs to pass the CI checks before review can start."
READY_FOR_REVIEW_COMMENT = "You can comment **/can-review** to start reviewing, the pull request is ready."
