from __future__ import annotations

from datetime import datetime

from github import Github, GithubException

from quorum_core.commands import normalize_login
from quorum_core.errors import MultiError
from quorum_core.models import Comment


def get_repo(repo_name: str, token: str):
    return Github(token).get_repo(repo_name)


def get_pull(repo, pr_number: int):
    return repo.get_pull(pr_number)


def list_comments(pr) -> list[Comment]:
    """Return the conversation comments of a PR in chronological order."""
    comments = []
    for c in pr.get_issue_comments():
        login = c.user.login if c.user is not None else ""
        comments.append(Comment(id=c.id, author=normalize_login(login), body=c.body or "", created_at=c.created_at))
    comments.sort(key=lambda c: (c.created_at, c.id))
    return comments


def get_changed_files(pr) -> list[str]:
    return [f.filename for f in pr.get_files()]


def get_code_update_time(repo, head_sha: str) -> datetime:
    """When the head commit was committed. Votes older than this are stale."""
    return repo.get_commit(head_sha).commit.committer.date


def create_comment(pr, body: str):
    return pr.create_issue_comment(body)


def delete_comment(pr, comment_id: int) -> None:
    pr.get_issue_comment(comment_id).delete()


def get_labels(pr) -> set[str]:
    return {label.name for label in pr.get_labels()}


def add_label(pr, label: str) -> None:
    pr.add_to_labels(label)


def remove_label(pr, label: str) -> None:
    pr.remove_from_labels(label)


def remove_labels(pr, labels: list[str], current: set[str]) -> list[str]:
    """Remove those of labels present in current; return the ones removed.

    Every removal is attempted; failures are raised together afterwards.
    """
    errs = MultiError()
    removed = []
    for label in labels:
        if label not in current:
            continue
        try:
            remove_label(pr, label)
            removed.append(label)
        except GithubException as e:
            errs.add(f"remove label {label}: {e}")
    errs.raise_if_any()
    return removed


def list_collaborators(repo) -> list[str]:
    return [normalize_login(u.login) for u in repo.get_collaborators()]


def assign(pr, logins: list[str]) -> None:
    if logins:
        pr.add_to_assignees(*logins)


def unassign(pr, logins: list[str]) -> None:
    if logins:
        pr.remove_from_assignees(*logins)
