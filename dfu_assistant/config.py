from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Security: Read from .env, never hardcode defaults here.
    # Without a key the code-generation oracle is reported as unavailable.
    OPENAI_API_KEY: str | None = None
    OPENAI_BASE_URL: str | None = None

    # Model Configuration
    OPENAI_MODEL: str = "gpt-4o"

    # Generation Parameters
    LLM_TEMPERATURE: float = 0.0

    # Workspace probed for platform, variant and candidate functions
    WORKSPACE_ROOT: str = "."

    # "turn_count" follows the host's growing history length (collision-prone),
    # "session_id" requires the caller to send a stable id.
    SESSION_KEYING: Literal["turn_count", "session_id"] = "turn_count"

    # Whether an empty reply is recorded for the memory/dataset questions
    ALLOW_EMPTY_CAPTURE: bool = True

    # Whether a bare number picks from the "Found in workspace" list
    PICK_NUMBERED_CANDIDATES: bool = False

    LOG_LEVEL: str = "INFO"

    # Loads from a .env file in the root directory
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

# Singleton instance
settings = Settings()
