"""
Fan-out / fan-in helpers for parallel generation.

Variations and infographic tiles are requested concurrently and awaited
together. A batch succeeds when at least one task succeeds; if every task
fails, the first captured failure is raised.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Generic, Iterable, TypeVar

from .errors import BatchFailedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class BatchResult(Generic[T]):
    """Outcome of settling a batch, in submission order."""

    successes: list[T] = field(default_factory=list)
    failures: list[BaseException] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.successes) + len(self.failures)


async def settle_all(tasks: Iterable[Awaitable[T]]) -> BatchResult[T]:
    """Await every task, collecting results and exceptions without raising."""
    outcomes = await asyncio.gather(*tasks, return_exceptions=True)

    result: BatchResult[T] = BatchResult()
    for outcome in outcomes:
        if isinstance(outcome, asyncio.CancelledError):
            raise outcome
        if isinstance(outcome, BaseException):
            result.failures.append(outcome)
        else:
            result.successes.append(outcome)
    return result


async def require_any(tasks: Iterable[Awaitable[T]]) -> list[T]:
    """
    Await every task and return the successful results.

    Raises:
        The first failure, if no task succeeded
        BatchFailedError: If there were no tasks at all
    """
    result = await settle_all(tasks)

    if not result.successes:
        if result.failures:
            raise result.failures[0]
        raise BatchFailedError("Batch contained no tasks")

    if result.failures:
        logger.warning(
            "Batch partially failed: %d of %d tasks succeeded",
            len(result.successes),
            result.total,
            extra={"succeeded": len(result.successes), "failed": len(result.failures)},
        )
    return result.successes
