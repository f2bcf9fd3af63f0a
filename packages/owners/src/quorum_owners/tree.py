"""OwnersTree: ownership resolved from per-directory OWNERS declarations.

Lookups walk from the directory containing a path up to the repository
root. The walk stops early at a directory whose entry sets
``no_parent_owners``.
"""

from __future__ import annotations

import posixpath
from collections.abc import Iterator, Mapping

from quorum_owners.base import BaseOwners
from quorum_owners.models import OwnersEntry


def _ancestors(path: str) -> Iterator[str]:
    """Yield the directories containing path, nearest first, ending with the root ""."""
    directory = posixpath.dirname(path.strip("/"))
    while directory:
        yield directory
        directory = posixpath.dirname(directory)
    yield ""


def _normalize_dir(directory: str) -> str:
    d = directory.strip().strip("/")
    return "" if d == "." else d


class OwnersTree(BaseOwners):
    """Ownership directory backed by a mapping of directory → OwnersEntry.

    The root directory is keyed by the empty string. Keys are normalised so
    ``"src/"``, ``"/src"`` and ``"src"`` name the same directory.
    """

    def __init__(self, entries: Mapping[str, OwnersEntry]):
        self._entries = {_normalize_dir(d): e for d, e in entries.items()}

    def __len__(self) -> int:
        return len(self._entries)

    def _chain(self, path: str) -> Iterator[OwnersEntry]:
        for directory in _ancestors(path):
            entry = self._entries.get(directory)
            if entry is None:
                continue
            yield entry
            if entry.no_parent_owners:
                return

    def _leaf(self, path: str, role: str) -> set[str]:
        for entry in self._chain(path):
            owners = getattr(entry, role)
            if owners:
                return set(owners)
        return set()

    def _all(self, path: str, role: str) -> set[str]:
        result: set[str] = set()
        for entry in self._chain(path):
            result |= getattr(entry, role)
        return result

    def approvers(self, path: str) -> set[str]:
        return self._all(path, "approvers")

    def reviewers(self, path: str) -> set[str]:
        return self._all(path, "reviewers")

    def leaf_approvers(self, path: str) -> set[str]:
        return self._leaf(path, "approvers")

    def leaf_reviewers(self, path: str) -> set[str]:
        return self._leaf(path, "reviewers")

    def all_reviewers(self) -> set[str]:
        result: set[str] = set()
        for entry in self._entries.values():
            result |= entry.reviewers
        return result
