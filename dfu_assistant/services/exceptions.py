"""
Service Layer Exceptions

Typed error taxonomy for a conversation turn. Errors are carried as values
(or raised and caught inside the component that owns them) and only turned
into text by the ChatService when the reply is written out.
"""


class AssistantError(Exception):
    """Base class for every error the assistant knows how to report."""
    pass


class InvalidUserInputError(AssistantError):
    """
    The user's reply was rejected at the current step (unknown platform token,
    unmatched variant selection, empty required field). State is unchanged.
    """

    def __init__(self, message: str, hint: str = ""):
        super().__init__(message)
        self.hint = hint


class WorkspaceProbeError(AssistantError):
    """A single workspace file could not be searched or read."""
    pass


class OracleUnavailableError(AssistantError):
    """No code-generation model is reachable."""
    pass


class InternalFaultError(AssistantError):
    """Anything unexpected that escaped a turn."""
    pass
