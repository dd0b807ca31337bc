"""
Engine - Integration Wizard State Machine

The DialogueEngine is the deterministic state machine that decides, for one
incoming message, which question to ask next, what to record, and when the
configuration is complete.
-----------------------------------------------

The conversation is strictly linear once the platform (or variant) is known:

    AWAITING_START -> [AWAITING_VARIANT_SELECTION] -> AWAITING_MEMORY_FN
        -> AWAITING_DATASET_FN -> AWAITING_ALT_FN -> DONE -> AWAITING_START

Every valid answer moves the pointer exactly one position (ADVANCE). Invalid
answers never move it (HOLD) and re-ask the same question, so repeating
garbage is always safe. Capturing the last answer yields COMPLETE; the
caller then streams complete(), which invokes the Generation Adapter and
resets the session.

Workspace probing always happens before any field is written, so a turn
that is cancelled while probing leaves the session untouched.
"""

import logging
from typing import AsyncIterator, Optional, Tuple

from ..domain.models import CatalogEntry, Platform, Variant, WorkspaceAnalysis
from ..prompts import Template, render
from ..repositories.catalog import ConfigurationCatalog
from ..schemas.generation import GenerationConfig
from ..services.exceptions import InvalidUserInputError
from ..services.generation import GenerationAdapter
from ..services.workspace_prober import WorkspaceProber, describe_analysis
from ..state.models import SessionState, WizardStep
from ..data.knowledge import DFU_KNOWLEDGE
from .schemas.state_machine import StateMachineTransition, TurnResult

logger = logging.getLogger(__name__)

VARIANT_AWARE_TOKEN = "variant-aware"


class DialogueEngine:
    def __init__(
        self,
        catalog: ConfigurationCatalog,
        prober: WorkspaceProber,
        generator: GenerationAdapter,
        allow_empty_capture: bool = True,
        pick_numbered_candidates: bool = False,
    ):
        self.catalog = catalog
        self.prober = prober
        self.generator = generator
        self.allow_empty_capture = allow_empty_capture
        self.pick_numbered_candidates = pick_numbered_candidates

    # ==========================================================================
    # Entry Points
    # ==========================================================================

    async def begin_integration(self, session: SessionState, token: str) -> TurnResult:
        """
        Handles `begin-integration <token>`. A run already in progress is
        discarded and the wizard starts over.
        """
        choice = token.strip().lower()
        if choice not in (Platform.POSIX.value, Platform.AUTOSAR.value, VARIANT_AWARE_TOKEN):
            message = f"Unknown platform '{token.strip()}'." if choice else "No platform given."
            return self._reject(message, render(Template.PLATFORM_REQUIRED))

        analysis = await self.prober.analyze()
        logger.info(f"begin-integration {choice}: {describe_analysis(analysis)}")

        if session.step != WizardStep.AWAITING_START:
            logger.info(f"Discarding unfinished integration at {session.step.value}")
        session.reset()

        if choice == VARIANT_AWARE_TOKEN:
            session.step = WizardStep.AWAITING_VARIANT_SELECTION
            return self._advance(self._render_variant_selection(analysis))

        platform = Platform(choice)
        session.platform = platform
        session.integration_path = self.catalog.resolve(Variant.GENERIC)
        session.step = WizardStep.AWAITING_MEMORY_FN
        return self._advance(render(
            Template.BEGIN_INTEGRATION,
            platform=platform,
            analysis=analysis,
            integration_path=session.integration_path,
        ))

    async def advance(self, session: SessionState, user_input: str) -> TurnResult:
        """
        Applies one free-text message to the session.
        """
        match session.step:
            case WizardStep.AWAITING_START:
                return self._hold(render(Template.OVERVIEW, knowledge=DFU_KNOWLEDGE))
            case WizardStep.AWAITING_VARIANT_SELECTION:
                return await self._select_variant(session, user_input)
            case WizardStep.AWAITING_MEMORY_FN:
                return await self._capture_memory(session, user_input)
            case WizardStep.AWAITING_DATASET_FN:
                return await self._capture_dataset(session, user_input)
            case WizardStep.AWAITING_ALT_FN:
                return self._capture_alternative(session, user_input)
            case WizardStep.DONE:
                # complete() normally resets before the next turn arrives
                session.reset()
                return self._hold(render(Template.OVERVIEW, knowledge=DFU_KNOWLEDGE))

    async def complete(self, session: SessionState, config: GenerationConfig) -> AsyncIterator[str]:
        """
        Streams the generated integration, then returns the session to
        AWAITING_START. Captured values are not reused by the next run.
        """
        async for chunk in self.generator.generate(config):
            yield chunk
        yield render(Template.INTEGRATION_COMPLETE)
        session.reset()
        logger.info("Integration generated, session reset")

    # ==========================================================================
    # Step Handlers
    # ==========================================================================

    async def _select_variant(self, session: SessionState, user_input: str) -> TurnResult:
        entry, platform_hint = self._parse_variant_reply(user_input)
        if entry is None:
            return self._reject(
                f"Invalid selection '{user_input.strip()}'.",
                self._render_variant_selection(WorkspaceAnalysis()),
            )

        platform = entry.platform or platform_hint or await self.prober.detect_platform()
        if platform is None:
            return self._reject(
                f"The {entry.title} variant needs a platform.",
                self._render_variant_selection(WorkspaceAnalysis()),
                hint=f"Reply `{entry.variant.value} posix` or `{entry.variant.value} autosar`.",
            )

        memory_functions, dataset_functions = await self.prober.find_candidate_functions()

        session.variant = entry.variant
        session.platform = platform
        session.integration_path = self.catalog.resolve(entry.variant)
        session.step = WizardStep.AWAITING_MEMORY_FN
        logger.info(f"Variant {entry.variant.value} selected ({platform.value})")

        return self._advance(render(
            Template.VARIANT_SELECTED,
            entry=entry,
            platform=platform,
            integration_path=session.integration_path,
            analysis=WorkspaceAnalysis(
                memory_functions=memory_functions,
                dataset_functions=dataset_functions,
            ),
        ))

    async def _capture_memory(self, session: SessionState, user_input: str) -> TurnResult:
        value = user_input.strip()
        if not value and not self.allow_empty_capture:
            return self._reject(
                "A memory allocation function is required.",
                render(Template.MEMORY_PROMPT, platform=session.platform, analysis=WorkspaceAnalysis()),
            )

        memory_functions, dataset_functions = await self.prober.find_candidate_functions()
        if self.pick_numbered_candidates:
            value = _pick_candidate(value, memory_functions)

        session.memory_fn = value
        session.step = WizardStep.AWAITING_DATASET_FN
        return self._advance(render(Template.DATASET_PROMPT, memory_fn=value, candidates=dataset_functions))

    async def _capture_dataset(self, session: SessionState, user_input: str) -> TurnResult:
        value = user_input.strip()
        if not value and not self.allow_empty_capture:
            return self._reject(
                "A dataset loading function is required.",
                render(Template.DATASET_PROMPT, memory_fn=session.memory_fn, candidates=[]),
            )

        if self.pick_numbered_candidates and value.isdigit():
            _, dataset_functions = await self.prober.find_candidate_functions()
            value = _pick_candidate(value, dataset_functions)

        session.dataset_fn = value
        session.step = WizardStep.AWAITING_ALT_FN
        return self._advance(render(Template.ALTERNATIVE_PROMPT, dataset_fn=value))

    def _capture_alternative(self, session: SessionState, user_input: str) -> TurnResult:
        # Any text is accepted here; "none" is interpreted by the generation prompt.
        value = user_input.strip()

        session.alt_fn = value
        session.step = WizardStep.DONE
        return TurnResult(
            transition=StateMachineTransition.COMPLETE,
            reply=render(Template.GENERATION_STARTED, alt_fn=value),
            generation=session.generation_config(),
        )

    # ==========================================================================
    # Standard Helpers
    # ==========================================================================

    def _parse_variant_reply(self, user_input: str) -> Tuple[Optional[CatalogEntry], Optional[Platform]]:
        """
        "2", "s32g_linux", "S32G Linux" or, for entries without a fixed
        platform, the same followed by a platform ("generic autosar").
        """
        entry = self.catalog.match_selection(user_input)
        if entry is not None:
            return entry, None

        head, _, last = user_input.strip().rpartition(" ")
        if not head:
            return None, None
        try:
            platform = Platform(last.lower())
        except ValueError:
            return None, None
        return self.catalog.match_selection(head), platform

    def _render_variant_selection(self, analysis: WorkspaceAnalysis) -> str:
        detected = (
            self.catalog.get(analysis.detected_variant)
            if analysis.detected_variant else None
        )
        return render(
            Template.VARIANT_SELECTION,
            entries=self.catalog.entries(),
            detected=detected,
            analysis=analysis,
        )

    def _hold(self, reply: str) -> TurnResult:
        return TurnResult(transition=StateMachineTransition.HOLD, reply=reply)

    def _advance(self, reply: str) -> TurnResult:
        return TurnResult(transition=StateMachineTransition.ADVANCE, reply=reply)

    def _reject(self, message: str, reprompt: str, hint: str = "") -> TurnResult:
        logger.warning(f"Input rejected: {message}")
        return TurnResult(
            transition=StateMachineTransition.HOLD,
            reply=reprompt,
            error=InvalidUserInputError(message, hint=hint),
        )


def _pick_candidate(value: str, candidates: list[str]) -> str:
    """A number refers to the "Found in workspace" list; anything else is kept verbatim."""
    if value.isdigit() and 1 <= int(value) <= len(candidates):
        return candidates[int(value) - 1]
    return value
