"""
State Layer - Runtime Data Models

Defines the runtime state model that tracks a user's progress through the
integration wizard.
"""

from dfu_assistant.state.models import (
    SessionState,
    WizardStep,
)

__all__ = [
    "SessionState",
    "WizardStep",
]
