import logging
from contextlib import aclosing, asynccontextmanager
from typing import AsyncIterator, Hashable

from fastapi import FastAPI, HTTPException, Depends, Request, status
from fastapi.responses import Response, StreamingResponse

from ..config import settings
from ..llm.interface import LLMProvider
from .dependencies import get_chat_service, get_conversation_store, get_llm_provider
from ..services.chat import ChatService
from .schemas import (
    HealthResponse,
    SessionRead,
    TurnRequest,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    get_conversation_store()
    logger.info(f"Conversation store ready (keying: {settings.SESSION_KEYING})")
    yield
    get_conversation_store().clear()
    logger.info("Conversation store cleared")


app = FastAPI(title="DFU Integration Assistant", lifespan=lifespan)

# --- Endpoints ---

async def stream_reply(request: Request, turn: AsyncIterator[str]) -> AsyncIterator[bytes]:
    """
    Encodes a turn's chunks for the response. The turn is closed before the
    response ends, so a disconnect rolls the session back right away.
    """
    async with aclosing(turn) as chunks:
        async for chunk in chunks:
            if await request.is_disconnected():
                logger.info("Client disconnected; stopping turn.")
                break
            yield chunk.encode("utf-8")


def _session_key(payload: TurnRequest) -> Hashable:
    if settings.SESSION_KEYING == "session_id":
        if not payload.session_id:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="session_id is required when SESSION_KEYING=session_id",
            )
        return payload.session_id
    return payload.turn_count


@app.post("/turns")
async def handle_turn(
    request: Request,
    payload: TurnRequest,
    service: ChatService = Depends(get_chat_service)
) -> StreamingResponse:
    """
    Processes one user message and streams the markdown reply chunk by chunk.
    """
    key = _session_key(payload)
    logger.info(f"TURN {key}: {payload.text[:120]!r}")

    turn = service.process_message(key, payload.text, payload.command)
    return StreamingResponse(stream_reply(request, turn), media_type="text/markdown")


@app.get("/sessions/{key}", response_model=SessionRead)
def get_session(
    key: str,
    service: ChatService = Depends(get_chat_service)
):
    """
    Retrieves the wizard state a turn with this key would continue.
    """
    lookup: Hashable = key
    if settings.SESSION_KEYING == "turn_count":
        if not key.isdigit():
            raise HTTPException(status_code=404, detail="Session not found")
        lookup = int(key)

    session = service.get_session(lookup)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")

    return SessionRead(
        step=session.step.value,
        platform=session.platform.value if session.platform else None,
        variant=session.variant.value if session.variant else None,
        integration_path=session.integration_path,
        memory_fn=session.memory_fn,
        dataset_fn=session.dataset_fn,
        alt_fn=session.alt_fn,
    )


@app.delete("/sessions", status_code=status.HTTP_204_NO_CONTENT)
def clear_sessions(
    service: ChatService = Depends(get_chat_service)
):
    """
    Drops every in-flight conversation.
    """
    service.clear_sessions()

    # For 204, we must explicitly return a Response object with no content
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.get("/health", response_model=HealthResponse)
def health(llm: LLMProvider = Depends(get_llm_provider)):
    return HealthResponse(status="ok", oracle=llm.is_available)
