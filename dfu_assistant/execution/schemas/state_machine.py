"""
Transition Types - FSM State Transition Definitions

Type definitions for the wizard's state machine transitions.
Produced by the engine for every turn and consumed by the ChatService,
which formats them into the outbound reply.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from ...schemas.generation import GenerationConfig
from ...services.exceptions import AssistantError


class StateMachineTransition(Enum):
    """
    What happened to the session's step pointer during one turn.
    """

    HOLD = auto()  # The step did not change (help text or rejected input).
    ADVANCE = auto()  # The step moved exactly one position forward.
    COMPLETE = auto()  # The last answer was captured; generation is due.


@dataclass
class TurnResult:
    """
    Outcome of applying one user message to a session.

    `error` is set when the input was rejected; `reply` then re-asks the
    same question. `generation` is set only on COMPLETE.
    """

    transition: StateMachineTransition
    reply: str
    error: Optional[AssistantError] = None
    generation: Optional[GenerationConfig] = None
