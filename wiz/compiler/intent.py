"""Intent Extractor — turns a free-text request into a ParsedIntent.

Pattern/heuristic based, not a language model. Every sub-extractor has a
fallback, so ``extract_intent`` is total over strings:

    >>> extract_intent("75 teenagers reacting to a video")["taskType"]
    'reaction'
"""

import logging
import re

from wiz.state import ParsedIntent
from wiz.vocabulary import Vocabulary, default_vocabulary

logger = logging.getLogger(__name__)

DEFAULT_NOUN = ("agent", "agents")

_DIRECT_COUNT_RE = re.compile(r"(\d+)\s+\w+")


def _vocab(vocabulary: Vocabulary | None) -> Vocabulary:
    return vocabulary if vocabulary is not None else default_vocabulary()


def _alternation(words) -> str:
    return "|".join(re.escape(w) for w in words)


def extract_count(text: str, vocabulary: Vocabulary | None = None) -> int:
    """Extract how many actors the request asks for.

    Order: "<digits> <word>", then "<base> <scale>" (base may be a digit string
    or a small number word), then the first number word found anywhere, then
    the table default (10). A count of zero is ignored so the result is always positive.
    """
    counts = _vocab(vocabulary).counts
    lowered = text.lower()

    direct = _DIRECT_COUNT_RE.search(lowered)
    if direct and int(direct.group(1)) > 0:
        return int(direct.group(1))

    if counts.scales:
        bases = _alternation(counts.multiplier_bases)
        base_group = rf"\d+|{bases}" if bases else r"\d+"
        multiplier = re.search(
            rf"({base_group})\s*({_alternation(counts.scales)})", lowered
        )
        if multiplier:
            base_token, scale_token = multiplier.groups()
            base = counts.value_of(base_token)
            if base is None:
                base = int(base_token)
            if base > 0:
                return base * counts.value_of(scale_token)

    for word, value in counts.word_numbers:
        if word in lowered:
            return value

    return counts.default


def _singular_plural(noun: str, min_stem: int) -> tuple[str, str]:
    # Heuristic: "chefs" -> "chef"; short words keep their trailing "s".
    if noun.endswith("s") and len(noun) - 1 > min_stem:
        singular = noun[:-1]
    else:
        singular = noun
    plural = noun if noun.endswith("s") else noun + "s"
    return singular, plural


def _anchor_group(vocabulary: Vocabulary) -> str:
    anchors = _alternation(vocabulary.counts.anchors)
    return rf"(?:\d+|{anchors})" if anchors else r"(?:\d+)"


def extract_agent_noun(text: str, vocabulary: Vocabulary | None = None) -> tuple[str, str]:
    """Extract the subject noun as ``(singular, plural)``.

    Primary pattern: one or two tokens after the count, followed by a gerund
    ("solving") or a verb-like token and an article ("review the"). The
    shortest phrase wins, so "75 teenagers reacting to a video" yields
    "teenager" rather than "teenagers reacting".
    """
    vocab = _vocab(vocabulary)
    lowered = text.lower()
    anchor = _anchor_group(vocab)

    primary = re.search(
        rf"{anchor}\s+(\w+(?:\s+\w+)??)\s+(?:who\s+are\s+)?(?:\w+ing\b|\w+s?\s+(?:a|an|the)\b)",
        lowered,
    )
    if primary:
        return _singular_plural(primary.group(1).strip(), min_stem=2)

    fallback = re.search(rf"{anchor}\s+(\w+)", lowered)
    if fallback:
        return _singular_plural(fallback.group(1).strip(), min_stem=3)

    return DEFAULT_NOUN


def get_naming_style(agent_noun: str, vocabulary: Vocabulary | None = None) -> str:
    """Classify the noun as professional, fantasy or casual (age terms and everything else)."""
    table = _vocab(vocabulary).naming_styles
    hit = table.first_match(agent_noun)
    return hit[0] if hit else (table.default or "casual")


def detect_task_type(text: str, vocabulary: Vocabulary | None = None) -> tuple[str, str]:
    """Return ``(taskType, taskVerb)`` for the first verb category present."""
    table = _vocab(vocabulary).task_verbs
    hit = table.first_match(text)
    if hit:
        return hit
    return table.default or "custom", table.default_matcher or "processing"


def detect_input_type(text: str, vocabulary: Vocabulary | None = None) -> str:
    table = _vocab(vocabulary).input_types
    hit = table.first_match(text)
    return hit[0] if hit else (table.default or "custom")


def detect_demographics(text: str, vocabulary: Vocabulary | None = None) -> list[str] | None:
    """Collect every demographic cohort mentioned, or None if there are none."""
    detected = _vocab(vocabulary).demographics.all_matches(text)
    return detected or None


def determine_output_types(task_type: str, vocabulary: Vocabulary | None = None) -> tuple[str, str]:
    """Look up ``(outputType, aggregationType)``; unknown task types use the custom row."""
    outputs = _vocab(vocabulary).outputs
    return outputs.get(task_type, outputs["custom"])


def determine_workflow_type(agent_count: int, input_type: str) -> str:
    if input_type == "video":
        return "content-analysis"
    if agent_count > 1:
        return "parallel-agents"
    return "simple"


_MULTI_AGENT_RE = re.compile(r"(?:\d+|\bhundred|\bthousand|\bmillion|\bdozen)\s+(\w+)", re.IGNORECASE)


def looks_like_multi_agent(text: str) -> bool:
    """True when the request has a count followed by a subject ("500 chefs ...").

    Requests without this shape skip intent parsing and go to single-shot generation.
    """
    return _MULTI_AGENT_RE.search(text) is not None


def extract_intent(text: str, vocabulary: Vocabulary | None = None) -> ParsedIntent:
    """Build the full ParsedIntent for a request. Deterministic, never raises on a string."""
    vocab = _vocab(vocabulary)

    agent_count = extract_count(text, vocab)
    agent_noun, agent_noun_plural = extract_agent_noun(text, vocab)
    naming_style = get_naming_style(agent_noun, vocab)
    task_type, task_verb = detect_task_type(text, vocab)
    input_type = detect_input_type(text, vocab)
    demographic_mix = detect_demographics(text, vocab)
    output_type, aggregation_type = determine_output_types(task_type, vocab)

    intent: ParsedIntent = {
        "workflowType": determine_workflow_type(agent_count, input_type),
        "agentCount": agent_count,
        "agentNoun": agent_noun,
        "agentNounPlural": agent_noun_plural,
        "namingStyle": naming_style,
        "taskDescription": text,
        "taskVerb": task_verb,
        "taskType": task_type,
        "inputType": input_type,
        "outputType": output_type,
        "aggregationType": aggregation_type,
    }
    if demographic_mix:
        intent["demographicMix"] = demographic_mix

    logger.debug(
        "Parsed intent (vocabulary v%s): count=%s noun=%s style=%s task=%s input=%s aggregation=%s",
        vocab.version, agent_count, agent_noun, naming_style, task_type, input_type, aggregation_type,
    )
    return intent
