"""Workflow Wizard — the per-user session that turns a request into a workflow graph.

Steps::

    idle -> parsing -> generating -> complete
               |            |
               |            +-> error      (batch failure, with its message)
               |            +-> error      (any other failure, "Failed to generate workflow")
               +-> error                   (parse or single-shot failure, generic message)
    parsing | generating -> idle           (cancel)

``complete`` and ``error`` are left only through ``reset()``.
"""

import logging
from typing import Callable

from wiz.errors import (
    GENERATION_FAILURE_MESSAGE,
    PARSE_FAILURE_MESSAGE,
    BatchGenerationError,
    GenerationCancelled,
    InvalidTransitionError,
    LegacyGenerationError,
    ParseFailureError,
)
from wiz.graph import graph
from wiz.orchestrator import BatchOrchestrator, CancellationToken
from wiz.services.protocol import WizardServices
from wiz.state import (
    BATCH_SIZE,
    GeneratedActor,
    ParsedIntent,
    WizardStep,
    WizardSuggestion,
    WorkflowSkeleton,
)
from wiz.utils.validator import validate_input

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, list[GeneratedActor]], None]


class WorkflowWizard:
    def __init__(
        self,
        services: WizardServices,
        on_select_workflow: Callable[[WizardSuggestion], None],
        *,
        on_close: Callable[[], None] | None = None,
        on_progress: ProgressCallback | None = None,
        on_step: Callable[[WizardStep], None] | None = None,
        batch_size: int = BATCH_SIZE,
    ):
        self.services = services
        self._on_select_workflow = on_select_workflow
        self._on_close = on_close
        self._on_progress = on_progress
        self._on_step = on_step
        self.batch_size = batch_size

        self.step: WizardStep = "idle"
        self.error: str | None = None
        self._orchestrator: BatchOrchestrator | None = None
        self._token: CancellationToken | None = None
        self._clear_view()

    # --- Progress view ---

    def _clear_view(self) -> None:
        self.intent: ParsedIntent | None = None
        self.skeleton: WorkflowSkeleton | None = None
        self.generated_actors: list[GeneratedActor] = []
        self._estimated_batches = 0
        self._orchestrator = None

    @property
    def current_batch(self) -> int:
        return self._orchestrator.current_batch if self._orchestrator else 0

    @property
    def total_batches(self) -> int:
        if self._orchestrator and self._orchestrator.total_batches:
            return self._orchestrator.total_batches
        return self._estimated_batches

    @property
    def paused(self) -> bool:
        return self._orchestrator.paused if self._orchestrator else False

    @property
    def running(self) -> bool:
        return self.step in ("parsing", "generating")

    def _set_step(self, step: WizardStep) -> None:
        if step != self.step:
            logger.debug("Wizard step %s -> %s", self.step, step)
        self.step = step
        if self._on_step is not None:
            self._on_step(step)

    def _handle_progress(self, completed: int, total: int, actors: list[GeneratedActor]) -> None:
        self.generated_actors = actors
        if self._on_progress is not None:
            self._on_progress(completed, total, actors)

    def _absorb(self, update: dict) -> WizardSuggestion | None:
        """Fold one node's state update into the progress view."""
        suggestion = None
        for node_update in update.values():
            if not node_update:
                continue
            if "intent" in node_update:
                self.intent = node_update["intent"]
                self.skeleton = node_update["skeleton"]
                self._estimated_batches = node_update.get("estimated_batches", 0)
            if "actors" in node_update:
                self.generated_actors = list(node_update["actors"])
            if "suggestion" in node_update:
                suggestion = node_update["suggestion"]
        return suggestion

    # --- Actions ---

    async def submit(self, query: str) -> WizardSuggestion | None:
        """Run one request to completion.

        Returns the assembled suggestion, or None when the run was cancelled
        or failed (``step`` and ``error`` say which). Raises ValueError for an
        empty request and InvalidTransitionError outside ``idle``.
        """
        if self.step != "idle":
            raise InvalidTransitionError(f"Cannot submit while {self.step}.")
        validated = validate_input(query)

        self._clear_view()
        self.error = None
        token = CancellationToken()
        self._token = token
        self._orchestrator = BatchOrchestrator(
            self.services.generate_batch,
            batch_size=self.batch_size,
            token=token,
            on_progress=self._handle_progress,
        )
        self._set_step("parsing")

        config = {
            "configurable": {
                "services": self.services,
                "orchestrator": self._orchestrator,
                "token": token,
                "on_step": self._set_step,
            }
        }

        suggestion = None
        try:
            async for update in graph.astream({"query": validated}, config=config, stream_mode="updates"):
                result = self._absorb(update)
                if result is not None:
                    suggestion = result
            token.raise_if_cancelled()
        except GenerationCancelled:
            logger.info("Run cancelled")
            self._clear_view()
            self._set_step("idle")
            return None
        except BatchGenerationError as exc:
            logger.warning("Batch %d failed: %s", exc.batch_number, exc)
            self.error = str(exc)
            self._set_step("error")
            return None
        except (ParseFailureError, LegacyGenerationError) as exc:
            logger.warning("Request not understood: %s", exc.__cause__ or exc)
            self.error = str(exc)
            self._set_step("error")
            return None
        except Exception:
            # Every other failure also lands in error, so reset() can recover.
            logger.exception("Run failed unexpectedly")
            self.error = GENERATION_FAILURE_MESSAGE
            self._set_step("error")
            return None
        finally:
            self._token = None

        if suggestion is None:
            self.error = PARSE_FAILURE_MESSAGE
            self._set_step("error")
            return None

        self._set_step("complete")
        self._on_select_workflow(suggestion)
        return suggestion

    def pause(self) -> None:
        if self._orchestrator is not None and self.running:
            self._orchestrator.pause()

    def resume(self) -> None:
        if self._orchestrator is not None:
            self._orchestrator.resume()

    def toggle_pause(self) -> None:
        if self.paused:
            self.resume()
        else:
            self.pause()

    def cancel(self) -> None:
        """Abort the in-flight run. ``submit`` returns None and the step goes back to idle."""
        if self._token is not None:
            self._token.cancel()

    def reset(self) -> None:
        """Return from ``complete`` or ``error`` to ``idle``."""
        if self.running:
            raise InvalidTransitionError("Cancel the running request before resetting.")
        self._clear_view()
        self.error = None
        self._set_step("idle")

    def close(self) -> None:
        """Abandon the wizard: cancel any run and notify ``on_close``."""
        self.cancel()
        if self._on_close is not None:
            self._on_close()
