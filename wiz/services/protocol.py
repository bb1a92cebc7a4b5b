"""The service boundary the wizard talks to.

Two implementations: ``LocalWizardService`` (in-process) and
``HttpWizardService`` (a deployed generation service).
"""

from typing import Protocol

from wiz.orchestrator import CancellationToken
from wiz.state import BatchRequest, GeneratedActor, ParseResult, WizardSuggestion


class WizardServices(Protocol):
    async def parse_intent(self, query: str) -> ParseResult:
        """Extract the intent and skeleton for a request."""
        ...

    async def generate_batch(
        self, request: BatchRequest, token: CancellationToken | None = None
    ) -> list[GeneratedActor]:
        """Generate one batch of actors. Returns [] once past ``totalCount``."""
        ...

    async def generate_workflow(self, query: str) -> WizardSuggestion:
        """Single-shot generation for requests without a count."""
        ...
