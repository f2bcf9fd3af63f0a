"""Tests for PR facts read from webhook payloads and API objects."""

from unittest.mock import MagicMock

import pytest

from quorum_core.gh.pr_info import EventPRInfo, PullPRInfo


def _pr_payload():
    return {
        "repository": {"full_name": "demo/widgets"},
        "pull_request": {
            "number": 7,
            "title": "Add widget",
            "html_url": "https://github.com/demo/widgets/pull/7",
            "user": {"login": "Dev"},
            "base": {"ref": "main"},
            "head": {"sha": "abc123"},
            "labels": [{"name": "ci-passed"}, {"name": "lgtm"}],
        },
    }


def _comment_payload():
    return {
        "repository": {"full_name": "demo/widgets"},
        "issue": {
            "number": 7,
            "title": "Add widget",
            "html_url": "https://github.com/demo/widgets/pull/7",
            "user": {"login": "dev"},
            "labels": [],
            "pull_request": {"url": "https://api.github.com/repos/demo/widgets/pulls/7"},
        },
    }


class TestEventPRInfo:
    def test_pull_request_payload(self):
        info = EventPRInfo(_pr_payload())
        assert info.repo_name == "demo/widgets"
        assert info.org == "demo"
        assert info.number == 7
        assert info.author == "dev"
        assert info.target_branch == "main"
        assert info.head_sha == "abc123"
        assert info.title == "Add widget"
        assert info.url.endswith("/pull/7")
        assert info.labels == {"ci-passed", "lgtm"}

    def test_label_helpers(self):
        info = EventPRInfo(_pr_payload())
        assert info.has_label("lgtm")
        assert not info.has_label("approved")
        assert info.has_any_label(["approved", "lgtm"])
        assert not info.has_any_label([])

    def test_issue_payload_uses_pull_for_branch_data(self):
        pull = MagicMock()
        pull.base.ref = "release"
        pull.head.sha = "def456"
        info = EventPRInfo(_comment_payload(), pull=pull)
        assert info.target_branch == "release"
        assert info.head_sha == "def456"
        assert info.labels == frozenset()

    def test_issue_payload_without_pull(self):
        info = EventPRInfo(_comment_payload())
        with pytest.raises(ValueError, match="#7"):
            info.target_branch


class TestPullPRInfo:
    def test_reads_pull(self):
        pull = MagicMock()
        pull.number = 3
        pull.base.ref = "main"
        pull.head.sha = "abc"
        pull.user.login = "Dev"
        pull.html_url = "https://github.com/demo/widgets/pull/3"
        pull.title = "Fix"
        label = MagicMock()
        label.name = "approved"
        pull.labels = [label]

        info = PullPRInfo("demo/widgets", pull)
        assert info.repo_name == "demo/widgets"
        assert info.number == 3
        assert info.target_branch == "main"
        assert info.head_sha == "abc"
        assert info.author == "dev"
        assert info.title == "Fix"
        assert info.labels == {"approved"}
