"""Tests for the bodies of comments posted by the bot."""

from quorum_core.coverage import PullRequestCoverage
from quorum_core.models import ReviewResult, ReviewSummary
from quorum_core.notification import (
    NOTIFICATION_MARKER,
    invalid_command_comment,
    is_notification_comment,
    labels_removed_comment,
    review_status_comment,
    start_review_comment,
    welcome_comment,
)


class TestStartReviewComment:
    def test_mentions_reviewers_and_carries_marker(self):
        body = start_review_comment(["alice", "bob"], "https://example.com/commands")
        assert is_notification_comment(body)
        assert "@alice, @bob" in body
        assert "https://example.com/commands" in body

    def test_without_endpoint(self):
        assert "command usage" not in start_review_comment(["alice"])


class TestReviewStatusComment:
    def test_lists_pending_files(self, make_owners):
        owners = make_owners(approvers={"a.go": {"alice"}, "b.go": {"bob"}})
        cov = PullRequestCoverage(["a.go", "b.go"], owners)
        summary = ReviewSummary(agreed_approvers=("alice",))
        body = review_status_comment(summary, ReviewResult(need_lgtm_num=1), cov, 1)

        assert body.startswith(NOTIFICATION_MARKER)
        assert "**Review status: pending**" in body
        assert "`b.go` (0/1)" in body
        assert "`a.go`" not in body
        assert "@bob" in body
        assert "1 more `/lgtm` needed." in body

    def test_pending_list_is_capped(self, make_owners):
        files = [f"f{i}.go" for i in range(25)]
        cov = PullRequestCoverage(files, make_owners())
        body = review_status_comment(ReviewSummary(), ReviewResult(need_lgtm_num=2), cov, 1)
        assert "and 5 more" in body
        assert "`f19.go`" in body
        assert "`f20.go`" not in body

    def test_rejected(self, make_owners):
        cov = PullRequestCoverage(["a.go"], make_owners())
        summary = ReviewSummary(disagreed_approvers=("carol",))
        body = review_status_comment(summary, ReviewResult(is_rejected=True), cov, 1)
        assert "rejected by an approver" in body
        assert "Files still needing" not in body

    def test_approved_has_no_pending_section(self, make_owners):
        owners = make_owners(approvers={"a.go": {"alice"}})
        cov = PullRequestCoverage(["a.go"], owners)
        summary = ReviewSummary(agreed_approvers=("alice",), agreed_reviewers=("rita",))
        body = review_status_comment(summary, ReviewResult(is_approved=True, is_lgtm=True), cov, 1)
        assert "**Review status: approved**" in body
        assert "Files still needing" not in body
        assert "more `/lgtm` needed" not in body

    def test_changes_requested(self, make_owners):
        cov = PullRequestCoverage([], make_owners())
        summary = ReviewSummary(disagreed_reviewers=("sam",))
        body = review_status_comment(summary, ReviewResult(is_lbtm=True), cov, 1)
        assert "requested changes" in body


class TestOtherComments:
    def test_invalid_command(self):
        body = invalid_command_comment("rita", "REJECT", "https://example.com/commands")
        assert body.startswith("@rita, you can't comment `/reject`.")
        assert "https://example.com/commands" in body

    def test_welcome(self):
        body = welcome_comment(["alice", "bob"], "https://example.com/commands", doc="See CONTRIBUTING.md")
        assert "**alice, bob**" in body
        assert "/can-review" in body
        assert body.endswith("See CONTRIBUTING.md")
        assert not is_notification_comment(body)

    def test_welcome_without_maintainers(self):
        assert "will help you" not in welcome_comment([], "")

    def test_labels_removed(self):
        assert labels_removed_comment(["lgtm", "approved"]).endswith("lgtm, approved.")

    def test_is_notification_handles_none(self):
        assert not is_notification_comment(None)
