"""Wizard exception hierarchy."""

PARSE_FAILURE_MESSAGE = "Failed to understand request"
GENERATION_FAILURE_MESSAGE = "Failed to generate workflow"


class WizardError(Exception):
    """Base class for wizard failures surfaced to the user."""


class ParseFailureError(WizardError):
    """The intent service call failed."""

    def __init__(self, message: str = PARSE_FAILURE_MESSAGE):
        super().__init__(message)


class LegacyGenerationError(WizardError):
    """The single-shot generation path failed. Reported like a parse failure."""

    def __init__(self, message: str = PARSE_FAILURE_MESSAGE):
        super().__init__(message)


class BatchGenerationError(WizardError):
    """A batch request failed for a reason other than cancellation."""

    def __init__(self, batch_number: int, message: str):
        self.batch_number = batch_number
        super().__init__(message)


class GenerationCancelled(Exception):
    """The run was cancelled by the user. Not an error state."""


class InvalidTransitionError(WizardError):
    """A wizard action was requested from a step that does not allow it."""


class InvalidBatchRequestError(ValueError):
    """Batch parameters are out of range."""


class ServiceResponseError(WizardError):
    """A generation service answered with a payload missing required fields."""


class VocabularyError(ValueError):
    """A vocabulary file is malformed or incomplete."""
