"""Legacy Generator — single-shot LLM workflow generation for requests without a count.

Requests like "analyze brain scans for tumor detection" have no "<count>
<noun>" shape, so they skip intent parsing and ask the model for a whole
workflow graph in one call. The model answers with JSON of the
WizardSuggestion shape (id, name, description, category, nodes,
connections). There is no re-prompt: any failure is a LegacyGenerationError.
"""

import logging

from langchain_google_genai import ChatGoogleGenerativeAI

from wiz.config import get_config
from wiz.errors import LegacyGenerationError
from wiz.state import WizardSuggestion
from wiz.utils.graph_check import check_graph
from wiz.utils.parsing import parse_json_object

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("id", "name", "nodes", "connections")
VALID_CATEGORIES = {"research", "clinical", "comparison", "analysis"}

# Node types the model may use, with what each one is for.
NODE_CATALOG: dict[str, dict] = {
    "dataNode": {
        "description": "Input data sources. The label must say what data is fed in "
                       "(e.g., \"Game Performance Data\", \"Match Statistics\"), not just \"Data\".",
        "use_cases": ["file uploads", "research datasets", "external data", "performance metrics"],
    },
    "contentUrlInputNode": {
        "description": "A URL to external content such as a video or an article.",
        "use_cases": ["video links", "article links", "web pages"],
    },
    "referenceDatasetNode": {
        "description": "Large reference datasets for comparison (HCP 1200, OpenNeuro, Allen Brain Atlas).",
        "use_cases": ["healthy controls", "normative data", "population baselines"],
    },
    "preprocessingNode": {
        "description": "Data preprocessing steps.",
        "use_cases": ["clean data", "standardize inputs", "remove artifacts"],
    },
    "analysisNode": {
        "description": "Statistical and analytical operations, with a descriptive label "
                       "(e.g., \"Performance Trend Analysis\").",
        "use_cases": ["aggregation", "trend analysis", "volume measurements", "frequency analysis"],
    },
    "mlNode": {
        "description": "Machine learning inference and classification.",
        "use_cases": ["classification", "segmentation", "outcome prediction", "clustering"],
    },
    "comparisonAgentNode": {
        "description": "Compares subject data against reference populations. Needs two inputs.",
        "use_cases": ["deviation detection", "percentile ranking"],
    },
    "brainNode": {
        "description": "AI-powered interpretation. Also used to simulate individual people or "
                       "entities that react to or analyze content.",
        "use_cases": ["interpret results", "generate insights", "simulate viewer reactions"],
    },
    "outputNode": {
        "description": "Output and visualization, with a descriptive label (e.g., \"Performance Report\").",
        "use_cases": ["reports", "dashboards", "exports", "notifications"],
    },
}


def _catalog_text() -> str:
    return "\n".join(
        f"- {node_type}: {info['description']}\n   Use cases: {', '.join(info['use_cases'])}"
        for node_type, info in NODE_CATALOG.items()
    )


SYSTEM_PROMPT = f"""\
You are the Workflow Wizard. You help users build analysis workflows by selecting \
and connecting the right nodes.

AVAILABLE NODE TYPES:
{_catalog_text()}

NODE LABELING:
Every node needs a descriptive label that explains its purpose. When a brainNode \
represents a person or entity, include a name and role (e.g., "Viewer - Sarah Chen").

WORKFLOW RULES:
1. Every workflow needs at least one input node (dataNode, contentUrlInputNode or referenceDatasetNode).
2. Analysis nodes process data from input nodes.
3. comparisonAgentNode requires two inputs: subject data and reference data.
4. outputNode is the final node and produces the results.
5. Connect nodes by data flow. Connections are 0-based indices into the nodes array.
6. Generate a unique kebab-case id for the workflow based on its purpose.

You MUST respond with valid JSON matching this exact schema:
{{
  "id": "unique-kebab-case-id",
  "name": "Short Descriptive Name",
  "description": "One sentence describing the workflow",
  "category": "research | clinical | comparison | analysis",
  "nodes": [
    {{"type": "nodeType", "label": "Descriptive Display Label", "payload": {{"label": "..."}}}}
  ],
  "connections": [
    {{"from": 0, "to": 1}}
  ]
}}

Respond ONLY with the JSON object. No markdown fences, no commentary.
"""


def _validate_response(data: dict) -> WizardSuggestion:
    """Validate and normalize the model's workflow to the WizardSuggestion shape."""
    if not isinstance(data, dict):
        raise ValueError("Response is not a JSON object.")

    missing = [f for f in REQUIRED_FIELDS if not data.get(f)]
    if missing:
        raise ValueError(f"Workflow missing required fields: {missing}")

    for node in data["nodes"]:
        if isinstance(node, dict):
            node.setdefault("label", node.get("type", ""))
            node.setdefault("payload", {"label": node["label"]})

    issues = check_graph(data)
    if issues:
        raise ValueError("; ".join(issues))

    # Default top-level optional fields
    data.setdefault("description", "")
    if data.get("category") not in VALID_CATEGORIES:
        data["category"] = "analysis"

    return {
        "id": data["id"],
        "name": data["name"],
        "description": data["description"],
        "category": data["category"],
        "nodes": data["nodes"],
        "connections": data["connections"],
    }


async def generate_workflow(query: str) -> WizardSuggestion:
    """Ask the configured model for a complete workflow in a single call.

    Raises LegacyGenerationError on any model, parsing or validation failure.
    """
    config = get_config()
    llm = ChatGoogleGenerativeAI(
        model=config["legacy_model"],
        temperature=config.get("legacy_temperature", 0.7),
    )

    messages = [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": f'User request: "{query}"'},
    ]

    try:
        response = await llm.ainvoke(messages)
    except Exception as exc:
        logger.error("Legacy generation call failed: %s", exc)
        raise LegacyGenerationError() from exc

    try:
        suggestion = _validate_response(parse_json_object(response.content))
    except ValueError as exc:
        logger.error("Legacy generation returned an unusable workflow: %s", exc)
        raise LegacyGenerationError() from exc

    logger.info("Legacy generation produced %d nodes", len(suggestion["nodes"]))
    return suggestion
