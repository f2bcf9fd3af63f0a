"""Collaborators as owners: the fallback for branches without OWNERS files.

Some branches (release branches, forks of upstream code) carry no
ownership declarations. For those the repository's collaborators own
every path in both roles.
"""

from __future__ import annotations

from collections.abc import Iterable

from quorum_owners.base import BaseOwners
from quorum_owners.models import normalize_identity


class MembersAsOwners(BaseOwners):
    """Every member approves and reviews every path."""

    def __init__(self, members: Iterable[str]):
        self._members = frozenset(normalize_identity(m) for m in members if m and m.strip())

    def approvers(self, path: str) -> set[str]:
        return set(self._members)

    def reviewers(self, path: str) -> set[str]:
        return set(self._members)

    def leaf_approvers(self, path: str) -> set[str]:
        return set(self._members)

    def leaf_reviewers(self, path: str) -> set[str]:
        return set(self._members)

    def all_reviewers(self) -> set[str]:
        return set(self._members)
