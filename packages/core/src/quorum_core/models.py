"""Value types shared by the consensus and suggestion engines.

Everything here is immutable and rebuilt for each evaluation; nothing is
carried between events.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Comment:
    """A pull request comment as observed on the platform."""

    id: int
    author: str  # normalised login
    body: str
    created_at: datetime


@dataclass(frozen=True)
class ReviewCommand:
    author: str
    command: str  # one of commands.REVIEW_CMDS


@dataclass(frozen=True)
class ReviewSummary:
    """Each voter's single effective stance, grouped by role and direction."""

    agreed_approvers: tuple[str, ...] = ()
    agreed_reviewers: tuple[str, ...] = ()
    disagreed_approvers: tuple[str, ...] = ()
    disagreed_reviewers: tuple[str, ...] = ()

    def number_of_assentors(self) -> int:
        return len(self.agreed_approvers) + len(self.agreed_reviewers)

    def is_empty(self) -> bool:
        return not (
            self.agreed_approvers or self.agreed_reviewers or self.disagreed_approvers or self.disagreed_reviewers
        )


@dataclass(frozen=True)
class ReviewResult:
    is_rejected: bool = False
    is_approved: bool = False
    is_lgtm: bool = False
    is_lbtm: bool = False
    need_lgtm_num: int = 0  # meaningful only while is_lgtm is False

    @property
    def status(self) -> str:
        """Short label for the dominant outcome."""
        if self.is_rejected:
            return "rejected"
        if self.is_approved:
            return "approved"
        if self.is_lbtm:
            return "changes requested"
        if self.is_lgtm:
            return "lgtm"
        return "pending"
