"""
Chat Service - Application Orchestration Layer

This service is the entry point for every conversation turn. It resolves the
session through the Conversation Store, dispatches directives, runs the
Dialogue Engine and streams the reply. It is also the outbound boundary:
typed errors become text here and nowhere else.

Nothing escapes a turn except cancellation. If a turn is cancelled or fails
unexpectedly, the session is restored to exactly what it was before the turn.
"""

import asyncio
import logging
from typing import AsyncIterator, Hashable, Optional

from ..domain.models import WorkspaceAnalysis
from ..execution.engine import DialogueEngine
from ..execution.schemas.state_machine import StateMachineTransition, TurnResult
from ..prompts import Template, render
from ..repositories.catalog import ConfigurationCatalog
from ..repositories.session import ConversationStore
from ..state.models import SessionState
from .directives import Directive, DirectiveKind, parse_directive
from .exceptions import AssistantError, InternalFaultError, InvalidUserInputError
from .workspace_prober import WorkspaceProber

logger = logging.getLogger(__name__)


class ChatService:
    def __init__(
        self,
        store: ConversationStore,
        engine: DialogueEngine,
        prober: WorkspaceProber,
        catalog: ConfigurationCatalog,
    ):
        self.store = store
        self.engine = engine
        self.prober = prober
        self.catalog = catalog

    def get_session(self, key: Hashable) -> Optional[SessionState]:
        return self.store.get(key)

    def clear_sessions(self) -> None:
        self.store.clear()

    async def process_message(
        self, key: Hashable, user_text: str, command: Optional[str] = None
    ) -> AsyncIterator[str]:
        """
        The Core Loop:
        1. Resolve Session
        2. Directive vs. Free Text
        3. Stream Reply (and generation output on completion)
        4. Roll back on cancellation or internal fault
        """
        session = self.store.get_or_create(key)
        snapshot = session.model_copy(deep=True)

        try:
            directive = parse_directive(user_text, command)
            if directive is not None:
                async for chunk in self._dispatch(session, directive):
                    yield chunk
                return

            result = await self.engine.advance(session, user_text)
            async for chunk in self._emit(session, result):
                yield chunk

        except (asyncio.CancelledError, GeneratorExit):
            # Client went away mid-turn
            session.restore(snapshot)
            logger.info(f"Turn cancelled, session {key} rolled back to {session.step.value}")
            raise
        except Exception as e:  # noqa: BLE001
            session.restore(snapshot)
            logger.exception(f"Unexpected fault while handling turn for session {key}")
            yield self._format_error(InternalFaultError(str(e) or type(e).__name__))

    # ==========================================================================
    # Dispatch
    # ==========================================================================

    async def _dispatch(self, session: SessionState, directive: Directive) -> AsyncIterator[str]:
        logger.info(f"Directive {directive.kind.value} '{directive.argument}'")
        match directive.kind:
            case DirectiveKind.BEGIN_INTEGRATION:
                result = await self.engine.begin_integration(session, directive.argument)
                async for chunk in self._emit(session, result):
                    yield chunk
            case DirectiveKind.INSPECT_WORKSPACE:
                yield await self._inspect_workspace()
            case DirectiveKind.WRAP_FUNCTION:
                yield render(Template.WRAP_FUNCTION, function_name=directive.argument)

    async def _emit(self, session: SessionState, result: TurnResult) -> AsyncIterator[str]:
        if result.error is not None:
            yield self._format_error(result.error)
        yield result.reply
        if result.transition == StateMachineTransition.COMPLETE and result.generation is not None:
            async for chunk in self.engine.complete(session, result.generation):
                yield chunk

    async def _inspect_workspace(self) -> str:
        analysis = WorkspaceAnalysis(
            detected_platform=await self.prober.detect_platform(),
            detected_variant=await self.prober.detect_variant(),
            existing_integration_files=await self.prober.find_existing_integration(),
        )
        detected = self.catalog.get(analysis.detected_variant) if analysis.detected_variant else None
        return render(Template.INSPECT_REPORT, analysis=analysis, detected=detected)

    # ==========================================================================
    # Outbound Formatting
    # ==========================================================================

    @staticmethod
    def _format_error(error: AssistantError) -> str:
        if isinstance(error, InvalidUserInputError):
            line = f"⚠️ {error}"
            if error.hint:
                line += f" {error.hint}"
            return line + "\n\n"
        return f"\n\n❌ Error: {error}\n"
