"""
Schemas - Generation Request Models

This module defines the structured configuration handed to the
code-generation oracle once the wizard has collected every answer.
"""
from typing import Optional
from pydantic import BaseModel, Field

from ..domain.models import Platform, Variant


class GenerationConfig(BaseModel):
    """
    Everything the oracle needs to generate dmiu_integration.h/.c (and main.c on POSIX).
    Values are passed exactly as the user typed them; interpreting "none" is left to the prompt.
    """
    platform: Platform = Field(
        ...,
        description="Target platform of the integration layer."
    )
    memory_fn: str = Field(
        ...,
        description="Function (or 'static') providing the memory that holds the two magic flags."
    )
    dataset_fn: str = Field(
        ...,
        description="Function loading the debug level from persistent storage."
    )
    alt_fn: str = Field(
        ...,
        description="Alternative debug-level source combined with OR logic, or 'none'."
    )
    variant: Optional[Variant] = Field(
        None,
        description="Deployment variant, only set in variant-aware mode."
    )
    integration_path: Optional[str] = Field(
        None,
        description="Directory the generated files belong in."
    )
