"""What the bot needs to know about a pull request, from either source.

Webhook deliveries already carry the pull request in their payload, so
handlers built from an event read it from there instead of refetching.
Commands run by hand fetch the pull request from the API. The caller picks
the variant; the rest of the code only sees PRInfo.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from quorum_core.commands import normalize_login


class PRInfo(ABC):
    @property
    @abstractmethod
    def repo_name(self) -> str:
        """``owner/name`` of the base repository."""

    @property
    @abstractmethod
    def number(self) -> int: ...

    @property
    @abstractmethod
    def target_branch(self) -> str: ...

    @property
    @abstractmethod
    def author(self) -> str:
        """Normalised login of the PR author."""

    @property
    @abstractmethod
    def head_sha(self) -> str: ...

    @property
    @abstractmethod
    def url(self) -> str: ...

    @property
    @abstractmethod
    def title(self) -> str: ...

    @property
    @abstractmethod
    def labels(self) -> frozenset[str]: ...

    @property
    def org(self) -> str:
        return self.repo_name.split("/", 1)[0]

    def has_label(self, label: str) -> bool:
        return label in self.labels

    def has_any_label(self, labels) -> bool:
        return bool(self.labels & set(labels))


class EventPRInfo(PRInfo):
    """PR facts read from a ``pull_request`` or ``issue_comment`` webhook payload.

    ``issue_comment`` payloads describe the PR as an issue and carry no
    branch or head SHA; pass the fetched pull as ``pull`` to fill those in.
    """

    def __init__(self, payload: dict, pull=None):
        self._payload = payload
        self._pr = payload.get("pull_request") or payload.get("issue") or {}
        self._pull = pull

    @property
    def repo_name(self) -> str:
        return self._payload["repository"]["full_name"]

    @property
    def number(self) -> int:
        return int(self._pr["number"])

    @property
    def target_branch(self) -> str:
        base = self._pr.get("base")
        if base:
            return base["ref"]
        return self._require_pull().base.ref

    @property
    def author(self) -> str:
        return normalize_login((self._pr.get("user") or {}).get("login", ""))

    @property
    def head_sha(self) -> str:
        head = self._pr.get("head")
        if head:
            return head["sha"]
        return self._require_pull().head.sha

    @property
    def url(self) -> str:
        return self._pr.get("html_url", "")

    @property
    def title(self) -> str:
        return self._pr.get("title", "")

    @property
    def labels(self) -> frozenset[str]:
        return frozenset(label["name"] for label in self._pr.get("labels") or [])

    def _require_pull(self):
        if self._pull is None:
            raise ValueError(f"payload for #{self._pr.get('number')} lacks branch data and no pull was given")
        return self._pull


class PullPRInfo(PRInfo):
    """PR facts read from a PyGithub PullRequest fetched through the API."""

    def __init__(self, repo_name: str, pull):
        self._repo_name = repo_name
        self._pull = pull

    @property
    def repo_name(self) -> str:
        return self._repo_name

    @property
    def number(self) -> int:
        return self._pull.number

    @property
    def target_branch(self) -> str:
        return self._pull.base.ref

    @property
    def author(self) -> str:
        return normalize_login(self._pull.user.login)

    @property
    def head_sha(self) -> str:
        return self._pull.head.sha

    @property
    def url(self) -> str:
        return self._pull.html_url or ""

    @property
    def title(self) -> str:
        return self._pull.title or ""

    @property
    def labels(self) -> frozenset[str]:
        return frozenset(label.name for label in self._pull.labels)
