"""Tests for the per-file ownership coverage model."""

import pytest

from quorum_core.coverage import PullRequestCoverage

FILES = ["a.go", "b.go"]


@pytest.fixture
def coverage(make_owners):
    owners = make_owners(
        approvers={"a.go": {"alice", "carol"}, "b.go": {"bob", "carol"}},
        reviewers={"a.go": {"rita"}, "b.go": {"rita", "sam"}},
    )
    return PullRequestCoverage(FILES, owners, author="Dev")


class TestIndices:
    def test_file_to_approvers(self, coverage):
        assert coverage.approvers_of_file("a.go") == {"alice", "carol"}

    def test_approver_to_files(self, coverage):
        assert coverage.files_approved_by("carol") == {"a.go", "b.go"}
        assert coverage.files_approved_by("alice") == {"a.go"}

    def test_unknown_identity_has_no_files(self, coverage):
        assert coverage.files_approved_by("nobody") == frozenset()
        assert coverage.files_reviewed_by("nobody") == frozenset()

    def test_unknown_file_has_no_owners(self, coverage):
        assert coverage.approvers_of_file("c.go") == frozenset()

    def test_reviewer_indices(self, coverage):
        assert coverage.reviewers_of_file("b.go") == {"rita", "sam"}
        assert coverage.files_reviewed_by("rita") == {"a.go", "b.go"}

    def test_indices_are_symmetric(self, coverage):
        for path in coverage.files:
            for approver in coverage.approvers_of_file(path):
                assert path in coverage.files_approved_by(approver)

    def test_role_checks(self, coverage):
        assert coverage.is_approver("alice")
        assert not coverage.is_approver("rita")
        assert coverage.is_file_reviewer("rita")

    def test_author_normalised(self, coverage):
        assert coverage.pr_author() == "dev"

    def test_duplicate_files_collapsed(self, make_owners):
        cov = PullRequestCoverage(["a.go", "a.go", "b.go"], make_owners())
        assert cov.files == ("a.go", "b.go")
        assert cov.number_of_files() == 2


class TestAllFilesApprovedQuorumOne:
    def test_scenario_a_union_covers_all_files(self, make_owners):
        owners = make_owners(approvers={"a.go": {"alice"}, "b.go": {"bob"}})
        cov = PullRequestCoverage(FILES, owners)
        assert cov.all_files_approved(["alice", "bob"], 1) is True

    def test_uncovered_file_fails(self, coverage):
        assert coverage.all_files_approved(["alice"], 1) is False

    def test_single_approver_owning_everything(self, coverage):
        assert coverage.all_files_approved(["carol"], 1) is True

    def test_non_owner_votes_do_not_count(self, coverage):
        assert coverage.all_files_approved(["rita", "sam"], 1) is False

    def test_file_without_owners_never_covered(self, make_owners):
        owners = make_owners(approvers={"a.go": {"alice"}})
        cov = PullRequestCoverage(FILES, owners)
        assert cov.all_files_approved(["alice"], 1) is False

    def test_zero_files_vacuously_true(self, make_owners):
        cov = PullRequestCoverage([], make_owners())
        assert cov.all_files_approved([], 1) is True


class TestAllFilesApprovedQuorumMany:
    def test_scenario_b_one_approver_is_not_enough(self, make_owners):
        owners = make_owners(approvers={"a.go": {"alice"}, "b.go": {"alice"}})
        cov = PullRequestCoverage(FILES, owners)
        assert cov.all_files_approved(["alice"], 2) is False

    def test_every_file_reaches_quorum(self, coverage):
        assert coverage.all_files_approved(["alice", "bob", "carol"], 2) is True

    def test_one_file_short_fails(self, coverage):
        # a.go has alice+carol, b.go only carol.
        assert coverage.all_files_approved(["alice", "carol"], 2) is False

    def test_file_with_zero_approvers_fails(self, make_owners):
        owners = make_owners(approvers={"a.go": {"alice", "bob"}})
        cov = PullRequestCoverage(FILES, owners)
        assert cov.all_files_approved(["alice", "bob"], 2) is False

    def test_duplicate_votes_count_once(self, coverage):
        assert coverage.all_files_approved(["carol", "carol"], 2) is False

    def test_zero_files_vacuously_true(self, make_owners):
        cov = PullRequestCoverage([], make_owners())
        assert cov.all_files_approved([], 3) is True

    def test_approval_counts(self, coverage):
        assert coverage.approval_counts(["alice", "carol"]) == {"a.go": 2, "b.go": 1}


class TestReviewerCoverage:
    def test_all_files_commented_quorum_one(self, coverage):
        assert coverage.all_files_commented(["rita"], 1) is True
        assert coverage.all_files_commented(["sam"], 1) is False

    def test_all_files_commented_quorum_two(self, coverage):
        assert coverage.all_files_commented(["rita", "sam"], 2) is False

    def test_all_files_reviewed_by(self, coverage):
        assert coverage.all_files_reviewed_by(["rita"]) is True
