"""Reviewer suggestion: pick a shortlist of owners for a changed file set.

Candidates come in two tiers per role: the leaf owners of each file first,
then owners inherited from ancestor directories. Reviewers are tried
before approvers; approvers only fill a shortfall.
"""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from collections.abc import Iterable

from quorum_core.commands import normalize_login
from quorum_owners.base import BaseOwners

logger = logging.getLogger(__name__)


def pick_n(candidates: Iterable[str], n: int, rng: random.Random | None = None) -> list[str]:
    """Uniformly sample n distinct candidates without replacement.

    The candidates are sorted first so the result depends only on the
    random source, then a partial Fisher–Yates shuffle runs n swap steps
    from the tail and the last n items are returned. Every candidate has
    the same chance of being picked. When n is not smaller than the pool
    (or n <= 0) the whole sorted pool comes back unshuffled.
    """
    pool = sorted(set(candidates))
    size = len(pool)
    if size <= n or n <= 0:
        return pool

    rng = rng or random.Random()
    for i in range(n):
        j = rng.randrange(size - i)
        k = size - i - 1
        pool[j], pool[k] = pool[k], pool[j]
    return pool[size - n :]


class ReviewersSource(ABC):
    """Where candidate reviewers come from for a given path."""

    @abstractmethod
    def reviewers(self, path: str) -> set[str]:
        """All candidates for path, inherited ones included."""

    @abstractmethod
    def leaf_reviewers(self, path: str) -> set[str]:
        """Candidates declared nearest to path."""


class OwnersReviewers(ReviewersSource):
    """Candidates are the reviewers of the ownership directory."""

    def __init__(self, owners: BaseOwners):
        self._owners = owners

    def reviewers(self, path: str) -> set[str]:
        return self._owners.reviewers(path)

    def leaf_reviewers(self, path: str) -> set[str]:
        return self._owners.leaf_reviewers(path)


class ApproversAsReviewers(ReviewersSource):
    """Candidates are approvers standing in for missing reviewers."""

    def __init__(self, owners: BaseOwners):
        self._owners = owners

    def reviewers(self, path: str) -> set[str]:
        return self._owners.approvers(path)

    def leaf_reviewers(self, path: str) -> set[str]:
        return self._owners.leaf_approvers(path)


def get_reviewers(
    source: ReviewersSource,
    files: Iterable[str],
    count: int,
    excluded: Iterable[str] = (),
    rng: random.Random | None = None,
) -> list[str]:
    """Select up to ``count`` candidates from source for files, sorted.

    Returns fewer than ``count`` when the source cannot supply enough;
    reporting the shortfall is left to the caller.
    """
    if count <= 0:
        return []
    files = list(files)
    excluded = {normalize_login(e) for e in excluded}

    leaf: set[str] = set()
    for path in files:
        leaf |= {normalize_login(r) for r in source.leaf_reviewers(path)} - excluded

    n = len(leaf)
    if n == count:
        return sorted(leaf)
    if n > count:
        return sorted(pick_n(leaf, count, rng))

    inherited: set[str] = set()
    for path in files:
        inherited |= {normalize_login(r) for r in source.reviewers(path)} - excluded - leaf

    remaining = count - n
    if len(inherited) <= remaining:
        return sorted(leaf | inherited)
    return sorted(leaf | set(pick_n(inherited, remaining, rng)))


def suggest_reviewers(
    owners: BaseOwners,
    files: Iterable[str],
    author: str,
    count: int,
    excluded: Iterable[str] = (),
    rng: random.Random | None = None,
) -> list[str]:
    """Suggest ``count`` reviewers for files, never including the author.

    Approvers fill in when there are not enough reviewers. The result is
    sorted and may still be short; a warning is logged in that case.
    """
    files = list(files)
    rng = rng or random.Random()
    excluded_set = {normalize_login(author)} | {normalize_login(e) for e in excluded}

    reviewers = get_reviewers(OwnersReviewers(owners), files, count, excluded_set, rng)
    if len(reviewers) < count:
        approvers = get_reviewers(
            ApproversAsReviewers(owners),
            files,
            count - len(reviewers),
            excluded_set | set(reviewers),
            rng,
        )
        reviewers = sorted(reviewers + approvers)
        logger.info("Added %d approvers as reviewers.", len(approvers))

    if len(reviewers) < count:
        logger.warning(
            "Not enough reviewers found in OWNERS files for files touched by this PR. %d/%d reviewers found.",
            len(reviewers),
            count,
        )
    return reviewers
