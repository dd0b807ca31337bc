"""
DFU Integration Assistant

A conversational wizard that collects the three integration points of the
DFU/DMIU debug-mode-unlocking subsystem, merges the answers with facts
detected in the user's workspace, and hands the finished configuration to a
code-generation model.
"""

from dfu_assistant.domain import (
    CatalogEntry,
    Platform,
    Variant,
    WorkspaceAnalysis,
)
from dfu_assistant.state import (
    SessionState,
    WizardStep,
)
from dfu_assistant.schemas.generation import GenerationConfig
from dfu_assistant.execution import DialogueEngine, StateMachineTransition, TurnResult

__all__ = [
    # Domain Layer
    "CatalogEntry",
    "Platform",
    "Variant",
    "WorkspaceAnalysis",
    # State Layer
    "SessionState",
    "WizardStep",
    # Schemas
    "GenerationConfig",
    # Execution Layer
    "DialogueEngine",
    "StateMachineTransition",
    "TurnResult",
]
