import pytest

from quorum_owners.base import BaseOwners


class StubOwners(BaseOwners):
    """Ownership directory given as explicit per-path tables.

    ``approvers``/``reviewers`` map a path to its full owner set; the leaf
    tables default to the full tables when omitted.
    """

    def __init__(self, approvers=None, reviewers=None, leaf_approvers=None, leaf_reviewers=None):
        self._approvers = approvers or {}
        self._reviewers = reviewers or {}
        self._leaf_approvers = self._approvers if leaf_approvers is None else leaf_approvers
        self._leaf_reviewers = self._reviewers if leaf_reviewers is None else leaf_reviewers

    def approvers(self, path):
        return set(self._approvers.get(path, ()))

    def reviewers(self, path):
        return set(self._reviewers.get(path, ()))

    def leaf_approvers(self, path):
        return set(self._leaf_approvers.get(path, ()))

    def leaf_reviewers(self, path):
        return set(self._leaf_reviewers.get(path, ()))

    def all_reviewers(self):
        result = set()
        for owners in self._reviewers.values():
            result |= set(owners)
        return result


@pytest.fixture
def make_owners():
    return StubOwners
