"""Tests for quorum-owners ownership sources."""

from __future__ import annotations

import types
from unittest.mock import MagicMock

import pytest

from quorum_owners.github import find_owners_files, load_repo_owners
from quorum_owners.members import MembersAsOwners
from quorum_owners.models import OwnersEntry, parse_owners_file
from quorum_owners.tree import OwnersTree


def _entry(approvers=(), reviewers=(), no_parent_owners=False):
    return OwnersEntry(
        approvers=frozenset(approvers),
        reviewers=frozenset(reviewers),
        no_parent_owners=no_parent_owners,
    )


def _tree():
    return OwnersTree(
        {
            "": _entry(approvers={"root"}, reviewers={"rootrev"}),
            "src": _entry(approvers={"alice"}, reviewers={"carol", "dave"}),
            "src/api": _entry(reviewers={"erin"}),
            "vendor": _entry(approvers={"vend"}, no_parent_owners=True),
        }
    )


# ---------------------------------------------------------------------------
# parse_owners_file
# ---------------------------------------------------------------------------


class TestParseOwnersFile:
    def test_parses_roles(self):
        entry = parse_owners_file("approvers:\n  - Alice\n  - '@Bob'\nreviewers:\n  - carol\n")
        assert entry.approvers == {"alice", "bob"}
        assert entry.reviewers == {"carol"}
        assert entry.no_parent_owners is False

    def test_parses_no_parent_owners_option(self):
        entry = parse_owners_file("approvers: [a]\noptions:\n  no_parent_owners: true\n")
        assert entry.no_parent_owners is True

    def test_empty_document_yields_empty_entry(self):
        entry = parse_owners_file("")
        assert entry.approvers == frozenset()
        assert entry.reviewers == frozenset()

    def test_non_mapping_raises(self):
        with pytest.raises(ValueError):
            parse_owners_file("- alice\n- bob\n")


# ---------------------------------------------------------------------------
# OwnersTree
# ---------------------------------------------------------------------------


class TestOwnersTree:
    def test_leaf_reviewers_use_nearest_declaring_directory(self):
        assert _tree().leaf_reviewers("src/api/handler.go") == {"erin"}

    def test_leaf_approvers_skip_directories_without_approvers(self):
        # src/api declares only reviewers, so the approver leaf is src.
        assert _tree().leaf_approvers("src/api/handler.go") == {"alice"}

    def test_all_reviewers_of_path_include_ancestors(self):
        assert _tree().reviewers("src/api/handler.go") == {"erin", "carol", "dave", "rootrev"}

    def test_all_approvers_of_path_include_root(self):
        assert _tree().approvers("src/main.go") == {"alice", "root"}

    def test_root_file_owned_by_root(self):
        tree = _tree()
        assert tree.approvers("README.md") == {"root"}
        assert tree.leaf_reviewers("README.md") == {"rootrev"}

    def test_no_parent_owners_stops_inheritance(self):
        tree = _tree()
        assert tree.approvers("vendor/lib/x.go") == {"vend"}
        assert tree.reviewers("vendor/lib/x.go") == set()

    def test_unknown_path_without_root_entry_is_empty(self):
        tree = OwnersTree({"src": _entry(approvers={"alice"})})
        assert tree.approvers("docs/index.md") == set()
        assert tree.leaf_reviewers("docs/index.md") == set()

    def test_directory_keys_are_normalised(self):
        tree = OwnersTree({"/src/": _entry(approvers={"alice"}), ".": _entry(approvers={"root"})})
        assert tree.approvers("src/a.go") == {"alice", "root"}

    def test_all_reviewers(self):
        assert _tree().all_reviewers() == {"rootrev", "carol", "dave", "erin"}

    def test_returned_sets_are_copies(self):
        tree = _tree()
        tree.leaf_approvers("src/a.go").add("mallory")
        assert tree.leaf_approvers("src/a.go") == {"alice"}


# ---------------------------------------------------------------------------
# MembersAsOwners
# ---------------------------------------------------------------------------


class TestMembersAsOwners:
    def test_members_own_every_path_in_both_roles(self):
        owners = MembersAsOwners(["Alice", "bob", " "])
        for lookup in (owners.approvers, owners.reviewers, owners.leaf_approvers, owners.leaf_reviewers):
            assert lookup("any/path.py") == {"alice", "bob"}
        assert owners.all_reviewers() == {"alice", "bob"}


# ---------------------------------------------------------------------------
# load_repo_owners
# ---------------------------------------------------------------------------


def _repo_with_files(files: dict[str, str]):
    repo = MagicMock()
    repo.full_name = "owner/repo"
    blobs = [types.SimpleNamespace(path=p, type="blob") for p in files]
    blobs.append(types.SimpleNamespace(path="src", type="tree"))
    repo.get_git_tree.return_value = types.SimpleNamespace(tree=blobs)

    def get_contents(path, ref):
        return types.SimpleNamespace(decoded_content=files[path].encode())

    repo.get_contents.side_effect = get_contents
    return repo


class TestLoadRepoOwners:
    def test_finds_only_owners_blobs(self):
        repo = _repo_with_files({"OWNERS": "", "src/OWNERS": "", "src/main.go": ""})
        assert find_owners_files(repo, "main") == ["OWNERS", "src/OWNERS"]
        repo.get_git_tree.assert_called_once_with("main", recursive=True)

    def test_builds_tree_from_files(self):
        repo = _repo_with_files(
            {
                "OWNERS": "approvers: [root]\n",
                "src/OWNERS": "approvers: [alice]\nreviewers: [bob]\n",
                "src/main.go": "package main",
            }
        )
        owners = load_repo_owners(repo, "main")
        assert owners is not None
        assert owners.approvers("src/main.go") == {"alice", "root"}
        assert owners.leaf_reviewers("src/main.go") == {"bob"}

    def test_returns_none_when_no_owners_files(self):
        repo = _repo_with_files({"src/main.go": "package main"})
        assert load_repo_owners(repo, "main") is None

    def test_malformed_file_is_skipped(self):
        repo = _repo_with_files({"OWNERS": "approvers: [root]\n", "src/OWNERS": "- not\n- a mapping\n"})
        owners = load_repo_owners(repo, "main")
        assert owners is not None
        assert owners.approvers("src/main.go") == {"root"}

    def test_custom_file_name(self):
        repo = _repo_with_files({"CODEOWNERS.yml": "approvers: [root]\n"})
        owners = load_repo_owners(repo, "main", file_name="CODEOWNERS.yml")
        assert owners.approvers("a.go") == {"root"}
