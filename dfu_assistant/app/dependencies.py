"""
Dependency Injection Wiring (Composition Root).

This module acts as the central "container" for the application's services.
It is responsible for:
1. Instantiating the core Singleton services (Store, Catalog, Prober, LLM Adapter, Engine).
2. Wiring them together (e.g., injecting the Prober and Generation Adapter into the Engine).
3. Managing the lifecycle of these objects using @lru_cache to ensure
   they are created only once per application process.

The conversation store is the only process-wide mutable state; the app's
lifespan clears it on shutdown, and tests override these providers with
their own instances.
"""


from functools import lru_cache
from fastapi import Depends

from ..config import settings
from ..llm.interface import LLMProvider
from ..llm.adapters.openai_adapter import OpenAIAdapter
from ..repositories.catalog import ConfigurationCatalog, StaticConfigurationCatalog
from ..repositories.session import (
    ConversationStore,
    SessionIdConversationStore,
    TurnCountConversationStore,
)
from ..execution.engine import DialogueEngine
from ..services.chat import ChatService
from ..services.generation import GenerationAdapter
from ..services.workspace_prober import WorkspaceProber

# LLM Provider (Singleton)
@lru_cache()
def get_llm_provider() -> LLMProvider:
    return OpenAIAdapter(
        api_key=settings.OPENAI_API_KEY,
        model_name=settings.OPENAI_MODEL,
        base_url=settings.OPENAI_BASE_URL,
    )

# Conversation Store (Singleton)
# Note: In-memory storage must be a singleton so data persists across requests!
@lru_cache()
def get_conversation_store() -> ConversationStore:
    if settings.SESSION_KEYING == "session_id":
        return SessionIdConversationStore()
    return TurnCountConversationStore()

# Configuration Catalog (Singleton)
@lru_cache()
def get_catalog() -> ConfigurationCatalog:
    return StaticConfigurationCatalog()

# Workspace Prober (Singleton; it holds no results between calls)
@lru_cache()
def get_workspace_prober() -> WorkspaceProber:
    return WorkspaceProber(
        root=settings.WORKSPACE_ROOT,
        detection_rules=get_catalog().detection_rules(),
    )

# The Engine (Singleton Service)
@lru_cache()
def get_dialogue_engine() -> DialogueEngine:
    return DialogueEngine(
        catalog=get_catalog(),
        prober=get_workspace_prober(),
        generator=GenerationAdapter(get_llm_provider(), temperature=settings.LLM_TEMPERATURE),
        allow_empty_capture=settings.ALLOW_EMPTY_CAPTURE,
        pick_numbered_candidates=settings.PICK_NUMBERED_CANDIDATES,
    )

# The Chat Service
def get_chat_service(
    store: ConversationStore = Depends(get_conversation_store),
    engine: DialogueEngine = Depends(get_dialogue_engine),
    prober: WorkspaceProber = Depends(get_workspace_prober),
    catalog: ConfigurationCatalog = Depends(get_catalog),
) -> ChatService:
    """
    Injects all necessary components into the ChatService.
    """
    return ChatService(
        store=store,
        engine=engine,
        prober=prober,
        catalog=catalog,
    )
