"""HTTP client for a deployed generation service."""

import logging
from typing import Any

import httpx

from wiz.config import get_config
from wiz.errors import ServiceResponseError
from wiz.orchestrator import CancellationToken
from wiz.state import BatchRequest, GeneratedActor, ParseResult, WizardSuggestion

logger = logging.getLogger(__name__)

PARSE_PATH = "/api/workflows/generate/parse"
BATCH_PATH = "/api/workflows/generate/batch"
GENERATE_PATH = "/api/workflows/generate"

_PARSE_FIELDS = ("intent", "skeleton", "needsBatchGeneration", "estimatedBatches")
_ACTOR_FIELDS = ("type", "label", "persona", "behavior")
_PERSONA_FIELDS = ("displayName", "culturalBackground", "ageGroup", "age", "personality", "traits")


def _require(data: Any, fields: tuple[str, ...], what: str) -> dict:
    if not isinstance(data, dict):
        raise ServiceResponseError(f"{what} response is not an object.")
    missing = [f for f in fields if f not in data]
    if missing:
        raise ServiceResponseError(f"{what} response missing fields: {missing}")
    return data


def flatten_actor(raw: dict) -> GeneratedActor:
    """Accept an actor either flat or as ``{type, label, payload: {...}}``."""
    if not isinstance(raw, dict):
        raise ServiceResponseError("Batch actor is not an object.")
    merged = {**raw.get("payload", {}), **{k: v for k, v in raw.items() if k != "payload"}}
    _require(merged, _ACTOR_FIELDS, "Batch actor")
    persona = _require(merged["persona"], _PERSONA_FIELDS, "Batch actor persona")
    persona.setdefault("name", persona["displayName"])
    return {
        "type": merged["type"],
        "label": merged["label"],
        "agentNoun": merged.get("agentNoun", ""),
        "persona": persona,
        "behavior": merged["behavior"],
    }


class HttpWizardService:
    """Talks to the generation service over HTTP.

    Non-2xx responses raise ``httpx.HTTPStatusError``; transport timeouts
    raise ``httpx.TimeoutException``. Both surface as failures of the calling
    step. Cancelling the awaiting task aborts the in-flight request.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        config = get_config()
        self.base_url = (base_url or config["service_base_url"]).rstrip("/")
        self.timeout = timeout if timeout is not None else config.get("request_timeout", 60)
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)

    async def __aenter__(self) -> "HttpWizardService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _post(self, path: str, payload: dict) -> Any:
        response = await self._client.post(path, json=payload)
        response.raise_for_status()
        return response.json()

    async def parse_intent(self, query: str) -> ParseResult:
        data = _require(await self._post(PARSE_PATH, {"query": query}), _PARSE_FIELDS, "Parse")
        return {
            "intent": data["intent"],
            "skeleton": data["skeleton"],
            "needsBatchGeneration": bool(data["needsBatchGeneration"]),
            "estimatedBatches": int(data["estimatedBatches"]),
        }

    async def generate_batch(
        self, request: BatchRequest, token: CancellationToken | None = None
    ) -> list[GeneratedActor]:
        if token is not None:
            token.raise_if_cancelled()
        data = _require(await self._post(BATCH_PATH, dict(request)), ("agents",), "Batch")
        agents = data["agents"]
        if not isinstance(agents, list):
            raise ServiceResponseError("Batch response 'agents' is not a list.")
        logger.debug("Batch %d returned %d actors", request["batchNumber"] + 1, len(agents))
        return [flatten_actor(agent) for agent in agents]

    async def generate_workflow(self, query: str) -> WizardSuggestion:
        data = _require(await self._post(GENERATE_PATH, {"query": query}), ("suggestion",), "Generate")
        suggestion = _require(data["suggestion"], ("id", "name", "nodes", "connections"), "Suggestion")
        suggestion.setdefault("description", "")
        suggestion.setdefault("category", "analysis")
        return suggestion
