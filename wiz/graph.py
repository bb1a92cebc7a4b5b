"""LangGraph StateGraph definition for one wizard submission.

    START -> parse -> generate -> assemble -> END   (requests with a count)
    START -> legacy -> END                          (everything else)
    parse -> legacy -> END                          (parsed, but one actor)

Per-run collaborators (services, orchestrator, cancellation token, step
callback) travel in ``config["configurable"]`` so the compiled graph stays a
module-level singleton.
"""

import logging

from langchain_core.runnables import RunnableConfig
from langgraph.graph import END, START, StateGraph

from wiz.compiler.assembler import assemble
from wiz.compiler.intent import looks_like_multi_agent
from wiz.errors import GenerationCancelled, LegacyGenerationError, ParseFailureError
from wiz.orchestrator import BatchOrchestrator, CancellationToken, run_cancellable
from wiz.state import WizardState
from wiz.utils.graph_check import check_graph

logger = logging.getLogger(__name__)


def _configurable(config: RunnableConfig) -> dict:
    return (config or {}).get("configurable", {})


def _token(config: RunnableConfig) -> CancellationToken:
    return _configurable(config).get("token") or CancellationToken()


def _notify_step(config: RunnableConfig, step: str) -> None:
    on_step = _configurable(config).get("on_step")
    if on_step is not None:
        on_step(step)


# --- Routing ---

def _route_entry(state: WizardState) -> str:
    """Requests shaped like "<count> <noun> ..." are parsed; everything else is single-shot."""
    return "parse" if looks_like_multi_agent(state["query"]) else "legacy"


def _route_after_parse(state: WizardState) -> str:
    """Batch generation only when the service asks for it and there is more than one actor."""
    intent = state.get("intent") or {}
    if state.get("needs_batch_generation") and intent.get("agentCount", 0) > 1:
        return "generate"
    return "legacy"


# --- Nodes ---

async def parse_node(state: WizardState, config: RunnableConfig) -> dict:
    """Call the intent service. Any non-cancellation failure becomes ParseFailureError."""
    services = _configurable(config)["services"]
    try:
        result = await run_cancellable(services.parse_intent(state["query"]), _token(config))
    except GenerationCancelled:
        raise
    except Exception as exc:
        logger.error("Intent parsing failed: %s", exc)
        raise ParseFailureError() from exc

    return {
        "intent": result["intent"],
        "skeleton": result["skeleton"],
        "needs_batch_generation": result["needsBatchGeneration"],
        "estimated_batches": result["estimatedBatches"],
    }


async def generate_node(state: WizardState, config: RunnableConfig) -> dict:
    """Run the batch orchestrator for the parsed intent."""
    orchestrator: BatchOrchestrator = _configurable(config)["orchestrator"]
    _notify_step(config, "generating")
    actors = await orchestrator.run(state["intent"])
    return {"actors": actors}


def assemble_node(state: WizardState, config: RunnableConfig) -> dict:
    # A cancelled run never reaches the assembler.
    _token(config).raise_if_cancelled()
    return {"suggestion": assemble(state["intent"], state["skeleton"], state.get("actors", []))}


async def legacy_node(state: WizardState, config: RunnableConfig) -> dict:
    """Single-shot generation. Failures are reported like a parse failure."""
    services = _configurable(config)["services"]
    try:
        suggestion = await run_cancellable(services.generate_workflow(state["query"]), _token(config))
    except (GenerationCancelled, LegacyGenerationError):
        raise
    except Exception as exc:
        logger.error("Single-shot generation failed: %s", exc)
        raise LegacyGenerationError() from exc

    issues = check_graph(suggestion)
    if issues:
        logger.error("Single-shot workflow is not a valid graph: %s", "; ".join(issues))
        raise LegacyGenerationError()
    return {"suggestion": suggestion}


# --- Build the graph ---

workflow = StateGraph(WizardState)

workflow.add_node("parse", parse_node)
workflow.add_node("generate", generate_node)
workflow.add_node("assemble", assemble_node)
workflow.add_node("legacy", legacy_node)

workflow.add_conditional_edges(
    START,
    _route_entry,
    {"parse": "parse", "legacy": "legacy"},
)

workflow.add_conditional_edges(
    "parse",
    _route_after_parse,
    {"generate": "generate", "legacy": "legacy"},
)

workflow.add_edge("generate", "assemble")
workflow.add_edge("assemble", END)
workflow.add_edge("legacy", END)

graph = workflow.compile()
