"""Cooperative cancellation shared across one generation session."""

import asyncio
from typing import Awaitable, TypeVar

T = TypeVar("T")


class GenerationAborted(Exception):
    """Raised when the session's cancellation token fires.

    Kept outside the LLMError hierarchy: an abort is not a failure to report.
    """

    def __init__(self, message: str = "Generation aborted by caller"):
        super().__init__(message)


class CancellationToken:
    """One-shot cancellation signal. Every network wait and backoff sleep observes it."""

    def __init__(self):
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise GenerationAborted()

    async def sleep(self, seconds: float) -> None:
        """Sleep for `seconds`, waking early with GenerationAborted if cancelled."""
        self.raise_if_cancelled()
        try:
            await asyncio.wait_for(self._event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return
        raise GenerationAborted()

    async def run(self, awaitable: Awaitable[T]) -> T:
        """Await `awaitable`, abandoning it if the token fires first."""
        if self.cancelled:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise GenerationAborted()
        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            done, _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            waiter.cancel()

        if task in done:
            return task.result()

        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        raise GenerationAborted()
