"""Wizard records — the typed shapes passed between extractor, skeleton, orchestrator and assembler.

Keys of the wire records keep the camelCase names of the HTTP contract.
"""

from typing import Any, Literal, TypedDict

# Actors per batch request. Shared by the orchestrator and every batch service.
BATCH_SIZE = 25

WorkflowType = Literal["parallel-agents", "sequential", "simple", "content-analysis"]
NamingStyle = Literal["professional", "casual", "fantasy", "numbered"]
TaskType = Literal["rating", "reaction", "analysis", "testing", "creation", "voting", "debate", "custom"]
InputType = Literal["test", "video", "article", "document", "data", "food", "product", "custom"]
OutputType = Literal["scores", "reactions", "analysis", "grades", "selections", "consensus", "summary"]
AggregationType = Literal["average", "sentiment", "consensus", "grades", "best-of", "majority", "synthesis"]
WizardStep = Literal["idle", "parsing", "generating", "complete", "error"]

TASK_TYPES: tuple[str, ...] = (
    "rating", "reaction", "analysis", "testing", "creation", "voting", "debate", "custom",
)


class _ParsedIntentBase(TypedDict):
    workflowType: WorkflowType
    agentCount: int
    agentNoun: str
    agentNounPlural: str
    namingStyle: NamingStyle
    taskDescription: str
    taskVerb: str
    taskType: TaskType
    inputType: InputType
    outputType: OutputType
    aggregationType: AggregationType


class ParsedIntent(_ParsedIntentBase, total=False):
    demographicMix: list[str]


# "from" is a keyword, so the connection record uses the functional syntax.
Connection = TypedDict("Connection", {"from": int, "to": int})


class SkeletonNode(TypedDict):
    type: str
    label: str
    payload: dict[str, Any]


class WorkflowSkeleton(TypedDict):
    id: str
    name: str
    description: str
    category: str
    nodes: list[SkeletonNode]
    connections: list[Connection]


class _PersonaBase(TypedDict):
    name: str
    displayName: str
    culturalBackground: str
    ageGroup: str
    age: int
    personality: str
    traits: list[str]


class Persona(_PersonaBase, total=False):
    specialization: str
    title: str


class GeneratedActor(TypedDict):
    type: str
    label: str
    agentNoun: str
    persona: Persona
    behavior: str


class WizardSuggestion(TypedDict):
    id: str
    name: str
    description: str
    category: str
    nodes: list[SkeletonNode]
    connections: list[Connection]


class ParseResult(TypedDict):
    intent: ParsedIntent
    skeleton: WorkflowSkeleton
    needsBatchGeneration: bool
    estimatedBatches: int


class _BatchRequestBase(TypedDict):
    batchNumber: int  # 0-indexed
    batchSize: int
    totalCount: int
    agentNoun: str
    agentNounPlural: str
    namingStyle: NamingStyle
    taskType: TaskType
    taskVerb: str
    taskContext: str


class BatchRequest(_BatchRequestBase, total=False):
    demographicMix: list[str]


class WizardState(TypedDict, total=False):
    """LangGraph pipeline state for one wizard submission."""

    query: str  # Validated user request. Immutable after init.
    intent: ParsedIntent
    skeleton: WorkflowSkeleton
    needs_batch_generation: bool
    estimated_batches: int
    actors: list[GeneratedActor]  # Filled only by a completed (not cancelled) run.
    suggestion: WizardSuggestion
