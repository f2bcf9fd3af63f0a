"""Ownership coverage of a pull request's touched files.

Built once per evaluation from the changed-file list and an ownership
directory. Holds four indices (file→approvers, approver→files,
file→reviewers, reviewer→files) and answers "has every file cleared its
quorum" for either role.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from quorum_core.commands import normalize_login
from quorum_owners.base import BaseOwners


def _invert(file_map: dict[str, frozenset[str]]) -> dict[str, frozenset[str]]:
    inverted: dict[str, set[str]] = {}
    for path, owners in file_map.items():
        for owner in owners:
            inverted.setdefault(owner, set()).add(path)
    return {owner: frozenset(paths) for owner, paths in inverted.items()}


def _all_files_cleared(files: tuple[str, ...], owner_files: dict[str, frozenset[str]], agreed, quorum: int) -> bool:
    if quorum <= 1:
        covered: set[str] = set()
        for identity in set(agreed):
            covered |= owner_files.get(identity, frozenset())
        return covered >= set(files)

    counts: Counter[str] = Counter()
    for identity in set(agreed):
        counts.update(owner_files.get(identity, frozenset()))
    return all(counts[path] >= quorum for path in files)


class PullRequestCoverage:
    """Symmetric approver/reviewer indices over one change's touched files.

    Read-only after construction. Paths without any owner keep an empty set
    in the file→owner maps and never appear in the owner→file maps.
    """

    def __init__(self, files: Iterable[str], owners: BaseOwners, author: str = ""):
        self.files: tuple[str, ...] = tuple(dict.fromkeys(files))
        self.author = normalize_login(author) if author else ""

        self._file_approvers = {p: frozenset(owners.approvers(p)) for p in self.files}
        self._file_reviewers = {p: frozenset(owners.reviewers(p)) for p in self.files}
        self._approver_files = _invert(self._file_approvers)
        self._reviewer_files = _invert(self._file_reviewers)

    def number_of_files(self) -> int:
        return len(self.files)

    def pr_author(self) -> str:
        return self.author

    # approver role

    def is_approver(self, identity: str) -> bool:
        return identity in self._approver_files

    def files_approved_by(self, identity: str) -> frozenset[str]:
        return self._approver_files.get(identity, frozenset())

    def approvers_of_file(self, path: str) -> frozenset[str]:
        return self._file_approvers.get(path, frozenset())

    def approvers(self) -> frozenset[str]:
        return frozenset(self._approver_files)

    def all_files_approved(self, agreed_approvers: Iterable[str], quorum: int) -> bool:
        """True when every touched file has at least ``quorum`` distinct agreeing approvers.

        With quorum 1 this is a plain coverage check: the union of files the
        agreeing approvers own must be the whole touched set.
        """
        return _all_files_cleared(self.files, self._approver_files, agreed_approvers, quorum)

    def approval_counts(self, agreed_approvers: Iterable[str]) -> dict[str, int]:
        """Distinct agreeing approvers per touched file, zero included."""
        counts: Counter[str] = Counter()
        for identity in set(agreed_approvers):
            counts.update(self.files_approved_by(identity))
        return {path: counts[path] for path in self.files}

    # reviewer role

    def is_file_reviewer(self, identity: str) -> bool:
        return identity in self._reviewer_files

    def files_reviewed_by(self, identity: str) -> frozenset[str]:
        return self._reviewer_files.get(identity, frozenset())

    def reviewers_of_file(self, path: str) -> frozenset[str]:
        return self._file_reviewers.get(path, frozenset())

    def all_files_commented(self, agreed_reviewers: Iterable[str], quorum: int) -> bool:
        return _all_files_cleared(self.files, self._reviewer_files, agreed_reviewers, quorum)

    def all_files_reviewed_by(self, reviewers: Iterable[str]) -> bool:
        return self.all_files_commented(reviewers, 1)
