"""
Error taxonomy shared by the stores, the diagram editor and the chat relay.

Every error is handled at the boundary that detects it and surfaced as a flat
message; nothing here carries a severity or is retried.
"""


class RuleboardError(Exception):
    """Base class for all ruleboard errors"""

    message = "Unexpected error"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)


class StorageError(RuleboardError):
    pass


class ViewNotFound(StorageError):
    """The root view has no persisted document yet."""

    message = "View not found"

    def __init__(self, view_id: str):
        self.view_id = view_id
        super().__init__(f"View '{view_id}' not found")


class StorageReadError(StorageError):
    message = "Failed to read data"


class StorageWriteError(StorageError):
    message = "Failed to save data"


class RuleNotFound(RuleboardError):
    def __init__(self, rule_id: str):
        self.rule_id = rule_id
        super().__init__(f"Rule '{rule_id}' not found")


class EditorError(RuleboardError):
    pass


class EditorStateError(EditorError):
    message = "Switch to edit mode to change the diagram"


class FactoryResetNotAllowed(EditorError):
    message = "Reset to default is only available for the root view"


class UpstreamUnavailable(RuleboardError):
    message = "Ollama service not available. Make sure Ollama is running locally."


class PhaseNotFound(RuleboardError):
    def __init__(self, phase_id: str):
        self.phase_id = phase_id
        super().__init__(f"Phase '{phase_id}' not found")
