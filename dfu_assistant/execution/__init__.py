"""
Execution Layer - Integration Wizard State Machine

Defines the DialogueEngine (deterministic, forward-only state machine) and
the transition types it reports for every turn.
"""

from dfu_assistant.execution.engine import DialogueEngine
from dfu_assistant.execution.schemas.state_machine import StateMachineTransition, TurnResult


__all__ = [
    "DialogueEngine",
    "StateMachineTransition",
    "TurnResult",
]
