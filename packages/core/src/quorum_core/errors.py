"""Exception types and the multi-error collector."""

from __future__ import annotations


class QuorumError(Exception):
    """Base class for errors raised by quorum."""


class OwnersUnavailableError(QuorumError):
    """No ownership source could be built for a branch."""


class RecommendError(QuorumError):
    """The reviewer recommendation service failed or refused the request."""


class MultiError:
    """Collects failures of independent side effects attempted together.

    One failing action must not stop the others from being attempted, so
    callers record each failure here and raise the combination at the end:

        errs = MultiError()
        for label in labels:
            try:
                remove_label(pr, label)
            except GithubException as e:
                errs.add_error(e)
        errs.raise_if_any()
    """

    def __init__(self) -> None:
        self._messages: list[str] = []

    def add(self, message: str) -> None:
        if message:
            self._messages.append(message)

    def add_error(self, error: BaseException | None) -> None:
        if error is not None:
            self.add(str(error) or type(error).__name__)

    def __bool__(self) -> bool:
        return bool(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    @property
    def messages(self) -> list[str]:
        return list(self._messages)

    def message(self) -> str:
        return "; ".join(self._messages)

    def err(self) -> QuorumError | None:
        if not self._messages:
            return None
        return QuorumError(self.message())

    def raise_if_any(self) -> None:
        error = self.err()
        if error is not None:
            raise error
