"""Slash-command parsing for review comments.

A command is a line of the form ``/<token> [args]`` anchored at the start
of the line. Tokens are case-insensitive; unknown tokens are ignored.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from quorum_owners.models import normalize_identity as normalize_login

CMD_CAN_REVIEW = "CAN-REVIEW"
CMD_LGTM = "LGTM"
CMD_LBTM = "LBTM"
CMD_APPROVE = "APPROVE"
CMD_REJECT = "REJECT"
CMD_ASSIGN = "ASSIGN"
CMD_UNASSIGN = "UNASSIGN"

REVIEW_CMDS = frozenset({CMD_LGTM, CMD_LBTM, CMD_APPROVE, CMD_REJECT})
AUTHOR_CMDS = frozenset({CMD_CAN_REVIEW})
ASSIGN_CMDS = frozenset({CMD_ASSIGN, CMD_UNASSIGN})
ALL_CMDS = REVIEW_CMDS | AUTHOR_CMDS | ASSIGN_CMDS

NEGATIVE_CMDS = frozenset({CMD_REJECT, CMD_LBTM})
POSITIVE_CMDS = frozenset({CMD_APPROVE, CMD_LGTM})
APPROVER_CMDS = frozenset({CMD_APPROVE, CMD_REJECT})

_COMMAND_RE = re.compile(r"^/(\S+)[\t ]*([^\n\r]*)", re.MULTILINE)


@dataclass(frozen=True)
class ParsedCommand:
    token: str
    args: tuple[str, ...] = ()


def _parse_mentions(text: str) -> tuple[str, ...]:
    mentions = []
    for word in text.split():
        login = normalize_login(word)
        if login and login not in mentions:
            mentions.append(login)
    return tuple(mentions)


def parse_commands(text: str, allowed: Iterable[str] | None = None) -> list[ParsedCommand]:
    """Extract every recognised command from a comment body, in line order.

    ``allowed`` restricts the result to a subset of the vocabulary. Only
    ASSIGN/UNASSIGN carry arguments: the identities they mention.
    """
    vocabulary = ALL_CMDS if allowed is None else ALL_CMDS & frozenset(allowed)
    commands = []
    for match in _COMMAND_RE.finditer(text or ""):
        token = match.group(1).upper()
        if token not in vocabulary:
            continue
        args = _parse_mentions(match.group(2)) if token in ASSIGN_CMDS else ()
        commands.append(ParsedCommand(token=token, args=args))
    return commands


def parse_review_commands(text: str) -> list[str]:
    """Return the distinct review/author command tokens found in text."""
    tokens = []
    for cmd in parse_commands(text, REVIEW_CMDS | AUTHOR_CMDS):
        if cmd.token not in tokens:
            tokens.append(cmd.token)
    return tokens


def can_apply_cmd(cmd: str, is_pr_author: bool, is_approver: bool, allow_self_approve: bool) -> bool:
    if cmd == CMD_REJECT:
        return is_approver and not is_pr_author
    if cmd == CMD_LGTM:
        return not is_pr_author
    if cmd == CMD_APPROVE:
        return is_approver and (allow_self_approve or not is_pr_author)
    return True


@dataclass
class CommentInfo:
    """The commands found in one comment, grouped by kind."""

    comment: str
    commenter: str
    review_cmds: set[str] = field(default_factory=set)
    author_cmds: set[str] = field(default_factory=set)
    assign_cmds: list[ParsedCommand] = field(default_factory=list)

    @classmethod
    def parse(cls, comment: str, commenter: str) -> CommentInfo:
        info = cls(comment=comment, commenter=normalize_login(commenter))
        for cmd in parse_commands(comment):
            if cmd.token in REVIEW_CMDS:
                info.review_cmds.add(cmd.token)
            elif cmd.token in AUTHOR_CMDS:
                info.author_cmds.add(cmd.token)
            else:
                info.assign_cmds.append(cmd)
        return info

    def has_review_cmd(self) -> bool:
        return bool(self.review_cmds)

    def has_can_review_cmd(self) -> bool:
        return CMD_CAN_REVIEW in self.author_cmds

    def has_assign_cmd(self) -> bool:
        return bool(self.assign_cmds)

    def validate_review_cmd(self, is_valid: Callable[[str, str], bool]) -> tuple[str, str]:
        """Resolve this comment's review commands to ``(valid_cmd, invalid_cmd)``.

        ``invalid_cmd`` is the first (alphabetically) command the commenter
        may not issue. A valid APPROVE wins whenever no valid negative command
        accompanies it; otherwise negatives outrank positives and REJECT
        outranks LBTM. Either value may be "".
        """
        invalid_cmd = ""
        valid: set[str] = set()

        for cmd in sorted(self.review_cmds):
            if is_valid(cmd, self.commenter):
                valid.add(cmd)
            elif not invalid_cmd:
                invalid_cmd = cmd

        if not valid & NEGATIVE_CMDS and CMD_APPROVE in valid:
            return CMD_APPROVE, invalid_cmd

        for cmd in (CMD_REJECT, CMD_LBTM, CMD_LGTM):
            if cmd in valid:
                return cmd, invalid_cmd
        return "", invalid_cmd


def get_review_command(text: str, commenter: str, is_valid: Callable[[str, str], bool]) -> tuple[str, str]:
    return CommentInfo.parse(text, commenter).validate_review_cmd(is_valid)
