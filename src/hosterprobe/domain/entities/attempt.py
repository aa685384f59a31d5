"""Explicit per-link attempt state for the retry/redirect state machine."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class AttemptContext:
    """State carried from one attempt of a link to the next.

    ``is_last`` marks the final link of the input batch and is carried
    unchanged through every retry and redirect so the end-of-batch summary
    fires on the eventual terminal resolution of that link.
    """

    url: str
    retries_left: int = 0
    redirects: int = 0
    is_last: bool = False
    attempt: int = 1

    def __post_init__(self) -> None:
        if self.retries_left < 0:
            raise ValueError("retries_left must be >= 0")

    @property
    def can_retry(self) -> bool:
        return self.retries_left > 0

    def retry(self) -> AttemptContext:
        """Next attempt on the same URL with one retry consumed."""
        return replace(
            self, retries_left=self.retries_left - 1, attempt=self.attempt + 1
        )

    def redirect(self, url: str) -> AttemptContext:
        """Next attempt on ``url``; the retry budget carries over unchanged."""
        return replace(
            self, url=url, redirects=self.redirects + 1, attempt=self.attempt + 1
        )
