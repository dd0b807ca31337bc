"""
Schemas - Structured Models exchanged with the Code-Generation Oracle

Defines the Pydantic model describing a finished integration configuration.
"""

from dfu_assistant.schemas.generation import GenerationConfig

__all__ = [
    "GenerationConfig",
]
