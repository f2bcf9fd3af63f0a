"""Client for the optional external reviewer recommendation service.

The service receives the pull request and the candidate reviewer pool and
answers with its own shortlist:

    POST {"community", "prUrl", "prTitle", "reviewers"}
      -> {"code": 0, "msg": "...", "data": ["alice", "bob"]}
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable

import httpx

from quorum_core.commands import normalize_login
from quorum_core.errors import RecommendError

logger = logging.getLogger(__name__)

_MAX_RETRIES = 3
_USER_AGENT = "quorum-review-trigger"


class RecommendClient:
    MAX_RETRIES: int = _MAX_RETRIES

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
        backoff: float = 1.0,
    ):
        self.url = url
        self.backoff = backoff
        self._client = httpx.Client(
            timeout=timeout,
            transport=transport,
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
                "User-Agent": _USER_AGENT,
            },
        )

    def close(self) -> None:
        self._client.close()

    def recommend(self, community: str, pr_url: str, pr_title: str, reviewers: Iterable[str]) -> list[str]:
        """Ask the service for reviewers; raises RecommendError on failure."""
        payload = {
            "community": community,
            "prUrl": pr_url,
            "prTitle": pr_title,
            "reviewers": sorted(reviewers),
        }
        body = self._post_with_retry(payload)
        if not isinstance(body, dict):
            raise RecommendError("recommendation service returned a non-object body")

        if body.get("code", 0) != 0:
            raise RecommendError(f"recommendation service refused request: {body.get('msg', '')}")
        data = body.get("data") or []
        if not isinstance(data, list):
            raise RecommendError("recommendation service returned non-list data")
        return [normalize_login(r) for r in data if isinstance(r, str) and r.strip()]

    def _post_with_retry(self, payload: dict) -> dict:
        """POST payload, retrying transport errors and 5xx responses.

        4xx responses are not retried. Delay doubles after each attempt.
        """
        for attempt in range(self.MAX_RETRIES):
            try:
                response = self._client.post(self.url, json=payload)
                if response.status_code < 500:
                    response.raise_for_status()
                    return response.json()
                error: Exception = httpx.HTTPStatusError(
                    f"server error {response.status_code}", request=response.request, response=response
                )
            except httpx.HTTPStatusError as e:
                raise RecommendError(f"recommendation service returned {e.response.status_code}") from e
            except ValueError as e:
                raise RecommendError("recommendation service returned invalid JSON") from e
            except httpx.TransportError as e:
                error = e

            if attempt == self.MAX_RETRIES - 1:
                logger.error("Recommendation service failed after %d attempts: %s", self.MAX_RETRIES, error)
                raise RecommendError(str(error)) from error

            delay = self.backoff * 2**attempt
            logger.warning(
                "Recommendation service error (attempt %d/%d): %s. Retrying in %.1fs...",
                attempt + 1,
                self.MAX_RETRIES,
                error,
                delay,
            )
            time.sleep(delay)

        raise RecommendError("recommendation service was not attempted")
