"""Abstract ownership directory interface.

Any ownership source (OWNERS files, repository collaborators, a remote
cache) implements this interface. The decision core only sees BaseOwners.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseOwners(ABC):
    """Read-only map from a file path to the identities that own it.

    Every per-path query must answer independently and return an empty set
    for paths without an entry and never raise.
    """

    @abstractmethod
    def approvers(self, path: str) -> set[str]:
        """Approvers of path, including those inherited from ancestor directories."""

    @abstractmethod
    def reviewers(self, path: str) -> set[str]:
        """Reviewers of path, including those inherited from ancestor directories."""

    @abstractmethod
    def leaf_approvers(self, path: str) -> set[str]:
        """Approvers declared by the nearest directory that declares any."""

    @abstractmethod
    def leaf_reviewers(self, path: str) -> set[str]:
        """Reviewers declared by the nearest directory that declares any."""

    @abstractmethod
    def all_reviewers(self) -> set[str]:
        """Every identity that reviews at least one path."""
