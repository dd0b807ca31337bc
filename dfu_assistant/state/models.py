"""
State Layer - Runtime Data Models

This module defines the runtime state that tracks where a user is in the
integration wizard. One SessionState exists per conversation; it is mutated
only by the DialogueEngine, one captured field per turn.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel

from ..domain.models import Platform, Variant
from ..schemas.generation import GenerationConfig


class WizardStep(str, Enum):
    """
    Position in the wizard. Advances strictly forward; the only way back is
    the reset to AWAITING_START that follows DONE.
    """
    AWAITING_START = "AWAITING_START"
    AWAITING_VARIANT_SELECTION = "AWAITING_VARIANT_SELECTION"
    AWAITING_MEMORY_FN = "AWAITING_MEMORY_FN"
    AWAITING_DATASET_FN = "AWAITING_DATASET_FN"
    AWAITING_ALT_FN = "AWAITING_ALT_FN"
    DONE = "DONE"


class SessionState(BaseModel):
    """
    The state of a single integration conversation.
    """
    step: WizardStep = WizardStep.AWAITING_START

    # Write-once
    platform: Optional[Platform] = None
    variant: Optional[Variant] = None
    integration_path: Optional[str] = None

    # Captured verbatim, in this order
    memory_fn: Optional[str] = None
    dataset_fn: Optional[str] = None
    alt_fn: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return self.alt_fn is not None

    def reset(self) -> None:
        """Back to a fresh AWAITING_START; nothing survives into the next run."""
        self.restore(SessionState())

    def restore(self, snapshot: "SessionState") -> None:
        """
        Copies every field from a snapshot. Keeps this object's identity,
        which the conversation store relies on.
        """
        for name in type(self).model_fields:
            setattr(self, name, getattr(snapshot, name))

    def generation_config(self) -> GenerationConfig:
        if not self.is_complete or self.platform is None:
            raise ValueError(f"Session is not ready for generation (step={self.step.value}).")
        return GenerationConfig(
            platform=self.platform,
            memory_fn=self.memory_fn,
            dataset_fn=self.dataset_fn,
            alt_fn=self.alt_fn,
            variant=self.variant,
            integration_path=self.integration_path,
        )
