"""In-process service: extractor + skeleton, persona factory and the legacy LLM generator."""

import logging
import random

from wiz.agents.legacy import generate_workflow as legacy_generate_workflow
from wiz.compiler.intent import extract_intent
from wiz.compiler.skeleton import SkeletonTemplates, build_skeleton, estimate_batches
from wiz.orchestrator import CancellationToken
from wiz.personas import batch_bounds, generate_batch_actors
from wiz.state import BATCH_SIZE, BatchRequest, GeneratedActor, ParseResult, WizardSuggestion
from wiz.vocabulary import Vocabulary

logger = logging.getLogger(__name__)


class LocalWizardService:
    """Runs every wizard service call inside this process.

    ``seed`` makes persona ages and personalities reproducible; names are
    always deterministic.
    """

    def __init__(
        self,
        vocabulary: Vocabulary | None = None,
        templates: SkeletonTemplates | None = None,
        seed: int | None = None,
    ):
        self.vocabulary = vocabulary
        self.templates = templates
        self._rng = random.Random(seed)

    async def parse_intent(self, query: str) -> ParseResult:
        intent = extract_intent(query, self.vocabulary)
        skeleton = build_skeleton(intent, self.templates)
        count = intent["agentCount"]
        logger.info("Parsed request: %d %s (%s)", count, intent["agentNounPlural"], intent["taskType"])
        return {
            "intent": intent,
            "skeleton": skeleton,
            "needsBatchGeneration": count > 1,
            "estimatedBatches": estimate_batches(count, BATCH_SIZE),
        }

    async def generate_batch(
        self, request: BatchRequest, token: CancellationToken | None = None
    ) -> list[GeneratedActor]:
        start, end = batch_bounds(request)
        if end <= start:
            return []
        logger.info(
            "Generating batch %d: %d %s (%s naming)",
            request["batchNumber"] + 1, end - start, request["agentNounPlural"], request["namingStyle"],
        )
        return await generate_batch_actors(request, self._rng, token)

    async def generate_workflow(self, query: str) -> WizardSuggestion:
        return await legacy_generate_workflow(query)
