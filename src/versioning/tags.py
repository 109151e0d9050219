"""Tag existence checkers.

The resolver only depends on :class:`TagChecker`; how a tag is actually
looked up is left to the implementation that gets injected.
"""
from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, Timer

logger = logging.getLogger(__name__)


def format_tag(version: str) -> str:
    """Return the tag name a release of ``version`` is published under."""
    return f"{Constants.TAG_PREFIX}{version}"


class TagChecker(ABC):
    """Asynchronous predicate answering whether a tag already exists."""

    @abstractmethod
    async def tag_exists(self, tag_name: str) -> bool:
        """Return True if ``tag_name`` exists.

        Must not raise for well-formed tag names.
        """


class StubTagChecker(TagChecker):
    """Checker that never finds a tag."""

    async def tag_exists(self, tag_name: str) -> bool:
        return False


class StaticTagChecker(TagChecker):
    """Checker backed by a fixed set of known tag names.

    Useful when an earlier pipeline step already listed the repository tags.
    """

    def __init__(self, tags: Iterable[str]):
        self._tags = frozenset(tags)

    async def tag_exists(self, tag_name: str) -> bool:
        return tag_name in self._tags

    def __len__(self) -> int:
        return len(self._tags)


class GuardedTagChecker(TagChecker):
    """Wrap another checker with a per-attempt timeout and bounded retries.

    Retries use exponential backoff starting at ``base_delay`` seconds. After
    the last attempt the most recent failure is re-raised unchanged.
    """

    def __init__(
        self,
        inner: TagChecker,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
        base_delay: Optional[float] = None,
    ):
        """Initialize the guard.

        Args:
            inner: Checker performing the actual lookup
            timeout: Seconds per attempt (defaults to Constants.TAG_CHECK_TIMEOUT_SEC)
            retries: Total attempts (defaults to Constants.TAG_CHECK_RETRY_MAX)
            base_delay: First backoff delay (defaults to Constants.TAG_CHECK_RETRY_BASE_DELAY_SEC)
        """
        self.inner = inner
        self.timeout = Constants.TAG_CHECK_TIMEOUT_SEC if timeout is None else timeout
        self.retries = max(1, Constants.TAG_CHECK_RETRY_MAX if retries is None else retries)
        self.base_delay = (
            Constants.TAG_CHECK_RETRY_BASE_DELAY_SEC if base_delay is None else base_delay
        )

    async def tag_exists(self, tag_name: str) -> bool:
        last_exception: Optional[Exception] = None

        for attempt in range(self.retries):
            with Timer() as t:
                try:
                    exists = await asyncio.wait_for(self.inner.tag_exists(tag_name), self.timeout)
                except Exception as exc:  # pylint: disable=broad-exception-caught
                    last_exception = exc
                    timed_out = isinstance(exc, asyncio.TimeoutError)
                    outcome = "timeout" if timed_out else "error"
                    logger.warning(
                        "Tag check for %s failed (attempt %d/%d): %s",
                        tag_name,
                        attempt + 1,
                        self.retries,
                        f"timed out after {self.timeout}s" if timed_out else exc,
                        extra=extra_context(
                            event="tag_check",
                            component="tags",
                            outcome=outcome,
                            attempt=attempt + 1,
                            tag=tag_name,
                        ),
                    )
                    if attempt + 1 < self.retries:
                        await asyncio.sleep(self.base_delay * (2 ** attempt))
                    continue

            if is_debug_enabled(logger):
                logger.debug(
                    "Tag check ok",
                    extra=extra_context(
                        event="tag_check",
                        component="tags",
                        outcome="success",
                        attempt=attempt + 1,
                        duration_ms=t.duration_ms(),
                        tag=tag_name,
                        exists=exists,
                    ),
                )
            return exists

        assert last_exception is not None
        raise last_exception
