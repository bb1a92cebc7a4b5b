"""Batch Orchestrator — sequential, pausable, cancellable actor generation.

One ``BatchOrchestrator`` drives exactly one run: it owns the accumulator,
the batch counter and the pause/cancel signals for that run, and nothing else
touches them. Batches are requested one at a time; the next request is never
issued before the previous one settles.
"""

import asyncio
import logging
import math
from typing import Awaitable, Callable, Protocol, TypeVar

from wiz.errors import BatchGenerationError, GenerationCancelled
from wiz.state import BATCH_SIZE, BatchRequest, GeneratedActor, ParsedIntent

logger = logging.getLogger(__name__)

T = TypeVar("T")

ProgressCallback = Callable[[int, int, list[GeneratedActor]], None]


class CancellationToken:
    """Per-run cancel signal shared with the in-flight request."""

    def __init__(self):
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        await self._event.wait()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise GenerationCancelled()


class BatchGenerator(Protocol):
    async def __call__(
        self, request: BatchRequest, token: CancellationToken | None = None
    ) -> list[GeneratedActor]: ...


async def run_cancellable(awaitable: Awaitable[T], token: CancellationToken) -> T:
    """Await ``awaitable`` unless ``token`` fires first.

    On cancellation the in-flight task is cancelled (aborting its transport)
    and ``GenerationCancelled`` is raised. Any other failure propagates.
    """
    if token.cancelled:
        if asyncio.iscoroutine(awaitable):
            awaitable.close()
        raise GenerationCancelled()

    task = asyncio.ensure_future(awaitable)
    cancel_wait = asyncio.ensure_future(token.wait())
    try:
        done, _ = await asyncio.wait({task, cancel_wait}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        cancel_wait.cancel()
        if not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

    if task in done and not token.cancelled:
        return task.result()

    # Cancellation wins even if the request settled at the same time.
    if task.done() and not task.cancelled():
        task.exception()
    raise GenerationCancelled()


def batch_count(total_count: int, batch_size: int = BATCH_SIZE) -> int:
    return math.ceil(total_count / batch_size)


class BatchOrchestrator:
    """Request ``agentCount`` actors from ``generate_batch`` in fixed-size batches.

    ``pause()`` holds the loop before the next batch; ``cancel()`` aborts the
    in-flight request, discards everything accumulated and makes ``run`` raise
    ``GenerationCancelled``. A failing batch stops the loop with
    ``BatchGenerationError``; there is no retry.
    """

    def __init__(
        self,
        generate_batch: BatchGenerator,
        *,
        batch_size: int = BATCH_SIZE,
        token: CancellationToken | None = None,
        on_progress: ProgressCallback | None = None,
    ):
        if batch_size <= 0:
            raise ValueError("batch_size must be positive.")

        self._generate_batch = generate_batch
        self.batch_size = batch_size
        self.token = token or CancellationToken()
        self._on_progress = on_progress

        self._resumed = asyncio.Event()
        self._resumed.set()
        self._accumulator: list[GeneratedActor] = []
        self._started = False
        self.current_batch = 0  # 1-based for display; 0 before the first batch
        self.total_batches = 0

    # --- Control signals ---

    @property
    def paused(self) -> bool:
        return not self._resumed.is_set()

    @property
    def cancelled(self) -> bool:
        return self.token.cancelled

    def pause(self) -> None:
        self._resumed.clear()

    def resume(self) -> None:
        self._resumed.set()

    def toggle_pause(self) -> None:
        if self.paused:
            self.resume()
        else:
            self.pause()

    def cancel(self) -> None:
        self.token.cancel()

    @property
    def actors(self) -> list[GeneratedActor]:
        """Snapshot of the actors accumulated so far."""
        return list(self._accumulator)

    # --- Loop ---

    async def _wait_while_paused(self) -> None:
        if self.paused and not self.cancelled:
            logger.info("Generation paused before batch %d", self.current_batch + 1)
            await run_cancellable(self._resumed.wait(), self.token)
        self.token.raise_if_cancelled()

    def _build_request(self, batch_index: int, intent: ParsedIntent, task_context: str) -> BatchRequest:
        request: BatchRequest = {
            "batchNumber": batch_index,
            "batchSize": self.batch_size,
            "totalCount": intent["agentCount"],
            "agentNoun": intent["agentNoun"],
            "agentNounPlural": intent["agentNounPlural"],
            "namingStyle": intent["namingStyle"],
            "taskType": intent["taskType"],
            "taskVerb": intent["taskVerb"],
            "taskContext": task_context,
        }
        if intent.get("demographicMix"):
            request["demographicMix"] = list(intent["demographicMix"])
        return request

    async def run(self, intent: ParsedIntent, task_context: str | None = None) -> list[GeneratedActor]:
        """Generate every actor for ``intent`` and return them in insertion order."""
        if self._started:
            raise RuntimeError("BatchOrchestrator instances drive a single run.")
        self._started = True

        total = intent["agentCount"]
        self.total_batches = batch_count(total, self.batch_size)
        context = task_context if task_context is not None else intent["taskDescription"]

        try:
            for batch_index in range(self.total_batches):
                await self._wait_while_paused()

                self.current_batch = batch_index + 1
                logger.info(
                    "Generating batch %d/%d (%s)",
                    self.current_batch, self.total_batches, intent["agentNounPlural"],
                )
                request = self._build_request(batch_index, intent, context)

                try:
                    agents = await run_cancellable(self._generate_batch(request, self.token), self.token)
                except GenerationCancelled:
                    raise
                except Exception as exc:
                    logger.error("Batch %d failed: %s", self.current_batch, exc)
                    raise BatchGenerationError(self.current_batch, str(exc) or f"Batch {self.current_batch} failed") from exc

                self._accumulator.extend(agents)
                if self._on_progress is not None:
                    self._on_progress(self.current_batch, self.total_batches, list(self._accumulator))

        except GenerationCancelled:
            logger.info("Generation cancelled after %d actors", len(self._accumulator))
            self._accumulator = []
            raise

        actors, self._accumulator = self._accumulator, []
        return actors
