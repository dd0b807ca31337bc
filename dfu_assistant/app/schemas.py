"""
API Layer - Request/Response Schemas

Pydantic models for API request and response validation.
"""

from typing import Optional

from pydantic import BaseModel, Field


class TurnRequest(BaseModel):
    text: str = ""
    # Number of prior turns in the conversation (turn-count keying)
    turn_count: int = Field(0, ge=0)
    # Stable conversation id (session-id keying)
    session_id: Optional[str] = None
    # Verb sent separately from the text, e.g. a host's slash command
    command: Optional[str] = None


class SessionRead(BaseModel):
    step: str
    platform: Optional[str] = None
    variant: Optional[str] = None
    integration_path: Optional[str] = None
    memory_fn: Optional[str] = None
    dataset_fn: Optional[str] = None
    alt_fn: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    oracle: bool
