"""Vote ledger: reduce a comment history to each voter's effective stance.

Only comments made after the most recent code push count: a push
invalidates every earlier review command. Each voter keeps the stance of
their latest comment that carries a valid review command.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime

from quorum_core.commands import (
    CMD_APPROVE,
    CMD_LBTM,
    CMD_LGTM,
    CMD_REJECT,
    CommentInfo,
    can_apply_cmd,
    normalize_login,
)
from quorum_core.consensus import resolve_with_config
from quorum_core.coverage import PullRequestCoverage
from quorum_core.models import Comment, ReviewCommand, ReviewResult, ReviewSummary

logger = logging.getLogger(__name__)


def gen_review_summary(cmds: Iterable[ReviewCommand]) -> ReviewSummary:
    buckets: dict[str, set[str]] = {CMD_APPROVE: set(), CMD_LGTM: set(), CMD_REJECT: set(), CMD_LBTM: set()}
    for c in cmds:
        if c.command in buckets:
            buckets[c.command].add(c.author)

    return ReviewSummary(
        agreed_approvers=tuple(sorted(buckets[CMD_APPROVE])),
        agreed_reviewers=tuple(sorted(buckets[CMD_LGTM])),
        disagreed_approvers=tuple(sorted(buckets[CMD_REJECT])),
        disagreed_reviewers=tuple(sorted(buckets[CMD_LBTM])),
    )


class ReviewStats:
    """Eligibility rules and vote counting for one pull request evaluation."""

    def __init__(self, pr: PullRequestCoverage, review_config: dict, reviewers: Iterable[str]):
        self.pr = pr
        self.cfg = review_config
        self.reviewers = frozenset(normalize_login(r) for r in reviewers)

    def is_reviewer(self, author: str) -> bool:
        return author in self.reviewers or self.pr.is_approver(author)

    def number_of_reviewers(self) -> int:
        return len(self.reviewers | self.pr.approvers())

    def check_cmd_func(self) -> Callable[[str, str], bool]:
        pr_author = self.pr.pr_author()
        allow_self_approve = bool(self.cfg.get("allow_self_approve", False))

        def check(cmd: str, author: str) -> bool:
            return can_apply_cmd(cmd, author == pr_author, self.pr.is_approver(author), allow_self_approve)

        return check

    def filter_comments(self, comments: list[Comment], since: datetime, bot_name: str) -> list[ReviewCommand]:
        """Pick each eligible voter's latest valid review command.

        ``comments`` must be in chronological order. Walking stops at the
        first comment not strictly after ``since``.
        """
        check = self.check_cmd_func()
        bot = normalize_login(bot_name)
        done: set[str] = set()
        cmds: list[ReviewCommand] = []

        for c in reversed(comments):
            if c.created_at <= since:
                break
            author = normalize_login(c.author)
            if not author or author == bot or author in done:
                continue
            if not self.is_reviewer(author):
                continue

            cmd, _ = CommentInfo.parse(c.body, author).validate_review_cmd(check)
            if cmd:
                done.add(author)
                cmds.append(ReviewCommand(author=author, command=cmd))

        logger.debug("Counted %d review command(s) since %s", len(cmds), since.isoformat())
        return cmds

    def stat_review(
        self, comments: list[Comment], since: datetime, bot_name: str
    ) -> tuple[ReviewSummary, ReviewResult]:
        summary = gen_review_summary(self.filter_comments(comments, since, bot_name))
        return summary, resolve_with_config(summary, self.pr, self.cfg)
