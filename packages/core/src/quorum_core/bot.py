"""Review trigger orchestration.

Every handler recomputes its decision from what the platform shows right
now (comment history, changed files, ownership files on the target
branch); nothing is remembered between events, so replaying an event is
harmless.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from github import GithubException

from quorum_core.commands import CMD_ASSIGN, CommentInfo, normalize_login
from quorum_core.config import recommend_url_for
from quorum_core.coverage import PullRequestCoverage
from quorum_core.errors import MultiError, OwnersUnavailableError, QuorumError, RecommendError
from quorum_core.gh.pr_info import PRInfo
from quorum_core.gh.pull_request import (
    add_label,
    assign,
    create_comment,
    delete_comment,
    get_changed_files,
    get_code_update_time,
    get_labels,
    list_collaborators,
    list_comments,
    remove_label,
    remove_labels,
    unassign,
)
from quorum_core.ledger import ReviewStats
from quorum_core.models import Comment, ReviewResult, ReviewSummary
from quorum_core.notification import (
    CI_REQUIRED_COMMENT,
    READY_FOR_REVIEW_COMMENT,
    invalid_command_comment,
    is_notification_comment,
    labels_removed_comment,
    review_status_comment,
    start_review_comment,
    welcome_comment,
)
from quorum_core.recommend import RecommendClient
from quorum_core.suggest import suggest_reviewers
from quorum_owners.base import BaseOwners
from quorum_owners.github import load_repo_owners
from quorum_owners.members import MembersAsOwners

logger = logging.getLogger(__name__)

LABEL_CAN_REVIEW = "can-review"
LABEL_LGTM = "lgtm"
LABEL_APPROVED = "approved"
LABEL_REQUEST_CHANGE = "request-change"

REVIEW_LABELS = (LABEL_APPROVED, LABEL_LGTM, LABEL_REQUEST_CHANGE)


@dataclass
class Evaluation:
    """Outcome of recounting the votes on a pull request."""

    coverage: PullRequestCoverage
    summary: ReviewSummary
    result: ReviewResult
    notifications: list[Comment] = field(default_factory=list)


def desired_labels(result: ReviewResult) -> dict[str, bool]:
    return {
        LABEL_APPROVED: result.is_approved,
        LABEL_LGTM: result.is_lgtm,
        LABEL_REQUEST_CHANGE: result.is_rejected or result.is_lbtm,
    }


class ReviewTrigger:
    """Handles review events for one repository."""

    def __init__(self, repo, config: dict, rng: random.Random | None = None, recommend_factory=RecommendClient):
        self.repo = repo
        self.config = config
        self.bot_name = normalize_login(config["bot_name"])
        self.rng = rng or random.Random()
        self._recommend_factory = recommend_factory

    @property
    def review_config(self) -> dict:
        return self.config["review"]

    # --- Inputs ---

    def gen_repo_owners(self, branch: str) -> BaseOwners:
        """Ownership of branch, falling back to collaborators where configured.

        Raises OwnersUnavailableError when the branch has no ownership
        files and is not configured for the collaborator fallback.
        """
        owners_cfg = self.config["owners"]
        error: Exception | None = None
        try:
            owners = load_repo_owners(self.repo, branch, owners_cfg["file_name"])
        except GithubException as e:
            owners, error = None, e

        if owners is not None:
            return owners

        if branch in (owners_cfg.get("branches_without_owners") or []):
            logger.info("Using collaborators as owners of %s@%s", self.repo.full_name, branch)
            return MembersAsOwners(list_collaborators(self.repo))

        raise OwnersUnavailableError(f"no ownership files found on {self.repo.full_name}@{branch}") from error

    def gen_pull_request(self, pull, info: PRInfo, owners: BaseOwners) -> PullRequestCoverage:
        return PullRequestCoverage(get_changed_files(pull), owners, author=info.author)

    def _stats(self, coverage: PullRequestCoverage, owners: BaseOwners) -> ReviewStats:
        return ReviewStats(coverage, self.review_config, owners.all_reviewers())

    def _count_votes(self, pull, info: PRInfo, coverage: PullRequestCoverage, stats: ReviewStats) -> Evaluation:
        comments = list_comments(pull)
        since = get_code_update_time(self.repo, info.head_sha)
        summary, result = stats.stat_review(comments, since, self.bot_name)
        notifications = [c for c in comments if c.author == self.bot_name and is_notification_comment(c.body)]
        return Evaluation(coverage=coverage, summary=summary, result=result, notifications=notifications)

    def evaluate(self, pull, info: PRInfo) -> Evaluation:
        """Recount every vote on the pull request without changing anything."""
        owners = self.gen_repo_owners(info.target_branch)
        coverage = self.gen_pull_request(pull, info, owners)
        return self._count_votes(pull, info, coverage, self._stats(coverage, owners))

    def can_start_review(self, labels: set[str]) -> bool:
        ci = self.config["ci"]
        return bool(ci.get("no_ci")) or ci["label_for_ci_passed"] in labels

    # --- Comment events ---

    def handle_comment(self, pull, info: PRInfo, commenter: str, body: str) -> None:
        comment = CommentInfo.parse(body, commenter)
        if comment.commenter == self.bot_name:
            return

        if comment.has_assign_cmd():
            self.handle_assign_comment(pull, comment)

        if comment.has_can_review_cmd() and comment.commenter == info.author:
            self.handle_can_review(pull, info)
            return

        if comment.has_review_cmd():
            self.handle_review_comment(pull, info, comment)

    def handle_assign_comment(self, pull, comment: CommentInfo) -> None:
        errs = MultiError()
        for cmd in comment.assign_cmds:
            logins = list(cmd.args) or [comment.commenter]
            try:
                if cmd.token == CMD_ASSIGN:
                    assign(pull, logins)
                else:
                    unassign(pull, logins)
            except GithubException as e:
                errs.add(f"{cmd.token.lower()} {', '.join(logins)}: {e}")
        errs.raise_if_any()

    def handle_review_comment(self, pull, info: PRInfo, comment: CommentInfo) -> Evaluation | None:
        owners = self.gen_repo_owners(info.target_branch)
        coverage = self.gen_pull_request(pull, info, owners)
        stats = self._stats(coverage, owners)

        cmd, invalid_cmd = comment.validate_review_cmd(stats.check_cmd_func())
        if invalid_cmd:
            self._reply_invalid_command(pull, comment.commenter, invalid_cmd)

        if not cmd or not stats.is_reviewer(comment.commenter):
            logger.info(
                "Ignoring comment: cmd(%s) is empty or commenter(%s) is not a reviewer. There are %d reviewers.",
                cmd,
                comment.commenter,
                stats.number_of_reviewers(),
            )
            return None

        evaluation = self._count_votes(pull, info, coverage, stats)
        self.post_review_result(pull, evaluation, can_review=self.can_start_review(get_labels(pull)))
        return evaluation

    def _reply_invalid_command(self, pull, commenter: str, cmd: str) -> None:
        body = invalid_command_comment(commenter, cmd, self.config.get("commands_endpoint", ""))
        try:
            create_comment(pull, body)
        except GithubException as e:
            logger.warning("Could not reply to invalid command /%s from %s: %s", cmd.lower(), commenter, e)

    def post_review_result(self, pull, evaluation: Evaluation, can_review: bool) -> None:
        """Sync review labels (once review has started) and refresh the notification."""
        errs = MultiError()
        if can_review:
            try:
                self.apply_result(pull, evaluation.result)
            except QuorumError as e:
                errs.add_error(e)

        try:
            self.update_notification(pull, evaluation)
        except QuorumError as e:
            errs.add_error(e)

        errs.raise_if_any()

    def apply_result(self, pull, result: ReviewResult) -> tuple[list[str], list[str]]:
        """Add and remove review labels to match result; return (added, removed)."""
        try:
            current = get_labels(pull)
        except GithubException as e:
            raise QuorumError(f"read labels: {e}") from e
        added: list[str] = []
        removed: list[str] = []
        errs = MultiError()

        for label, wanted in desired_labels(result).items():
            try:
                if wanted and label not in current:
                    add_label(pull, label)
                    added.append(label)
                elif not wanted and label in current:
                    remove_label(pull, label)
                    removed.append(label)
            except GithubException as e:
                errs.add(f"update label {label}: {e}")

        errs.raise_if_any()
        logger.info("Review labels updated on #%s: added=%s removed=%s", pull.number, added, removed)
        return added, removed

    def update_notification(self, pull, evaluation: Evaluation) -> None:
        errs = MultiError()
        for old in evaluation.notifications:
            try:
                delete_comment(pull, old.id)
            except GithubException as e:
                errs.add(f"delete notification {old.id}: {e}")

        body = review_status_comment(
            evaluation.summary,
            evaluation.result,
            evaluation.coverage,
            self.review_config["number_of_approvers"],
        )
        try:
            create_comment(pull, body)
        except GithubException as e:
            errs.add(f"create notification: {e}")
        errs.raise_if_any()

    # --- Starting a review ---

    def handle_can_review(self, pull, info: PRInfo) -> None:
        labels = get_labels(pull)
        if labels & {LABEL_CAN_REVIEW, *REVIEW_LABELS}:
            return

        if self.can_start_review(labels):
            self.ready_to_review(pull, info)
        else:
            create_comment(pull, CI_REQUIRED_COMMENT)

    def ready_to_review(self, pull, info: PRInfo) -> None:
        errs = MultiError()

        try:
            if LABEL_CAN_REVIEW not in get_labels(pull):
                add_label(pull, LABEL_CAN_REVIEW)
        except GithubException as e:
            errs.add(f"add label {LABEL_CAN_REVIEW}: {e}")

        try:
            self.add_review_notification(pull, info)
        except (GithubException, QuorumError) as e:
            errs.add(f"suggest reviewers: {e}")

        errs.raise_if_any()

    def add_review_notification(self, pull, info: PRInfo) -> list[str]:
        owners = self.gen_repo_owners(info.target_branch)
        reviewers = self.suggest(pull, info, owners)
        if reviewers:
            create_comment(pull, start_review_comment(reviewers, self.config.get("commands_endpoint", "")))
        return reviewers

    def suggest(self, pull, info: PRInfo, owners: BaseOwners, count: int | None = None) -> list[str]:
        """Pick reviewers, asking the recommendation service first when enabled."""
        if count is None:
            count = self.review_config["total_number_of_reviewers"]

        url = recommend_url_for(self.config, info.org)
        if url:
            client = self._recommend_factory(url)
            try:
                recommended = client.recommend(info.org, info.url, info.title, owners.all_reviewers())
            except RecommendError as e:
                logger.warning("Recommendation service failed, using ownership files instead: %s", e)
            else:
                # the service ranks its answer; keep its order up to count
                ranked = [r for r in dict.fromkeys(recommended) if r != info.author]
                recommended = sorted(ranked[:count])
                if recommended:
                    return recommended
                logger.info("Recommendation service returned no reviewers for #%s", info.number)
            finally:
                client.close()

        return suggest_reviewers(owners, get_changed_files(pull), info.author, count, rng=self.rng)

    # --- Pull request events ---

    def welcome(self, pull, info: PRInfo) -> None:
        body = welcome_comment(
            self.config.get("maintainers") or [],
            self.config.get("commands_endpoint", ""),
            self.config.get("doc", ""),
        )
        create_comment(pull, body)

    def reset_to_review(self, pull, info: PRInfo) -> list[str]:
        """Drop review state after new commits; return the labels removed."""
        errs = MultiError()
        removed: list[str] = []

        try:
            removed = self.reset_labels(pull)
        except (GithubException, QuorumError) as e:
            errs.add(f"remove labels when source code changed: {e}")

        try:
            self.delete_review_notifications(pull)
        except (GithubException, QuorumError) as e:
            errs.add(f"delete notifications: {e}")

        errs.raise_if_any()
        return removed

    def reset_labels(self, pull) -> list[str]:
        removed = remove_labels(pull, [*REVIEW_LABELS, LABEL_CAN_REVIEW], get_labels(pull))
        if removed:
            try:
                create_comment(pull, labels_removed_comment(removed))
            except GithubException as e:
                logger.warning("Could not announce removed labels on #%s: %s", pull.number, e)
        return removed

    def delete_review_notifications(self, pull) -> None:
        errs = MultiError()
        for c in list_comments(pull):
            if c.author != self.bot_name or not is_notification_comment(c.body):
                continue
            try:
                delete_comment(pull, c.id)
            except GithubException as e:
                errs.add(f"delete notification {c.id}: {e}")
        errs.raise_if_any()

    def comment_after_ci(self, pull, info: PRInfo, label: str) -> None:
        """Tell the author review can start once a basic CI label lands."""
        if label not in (self.config["ci"].get("labels_for_basic_ci_passed") or []):
            return
        if LABEL_CAN_REVIEW in get_labels(pull):
            return
        create_comment(pull, READY_FOR_REVIEW_COMMENT)
