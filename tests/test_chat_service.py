"""Tests for the chat service: directives, continuity, rollback."""

import asyncio

import pytest

from dfu_assistant.state.models import WizardStep

from .helpers import HangingLLMProvider, UnconfiguredLLMProvider, collect, write_file


async def run_turns(service, *texts, start=0):
    """Sends texts the way a chat host does: the turn count grows by two per exchange."""
    outputs = []
    for i, text in enumerate(texts):
        outputs.append(await collect(service.process_message(start + 2 * i, text)))
    return outputs


class TestDirectives:
    async def test_inspect_empty_workspace(self, service):
        (output,) = await run_turns(service, "inspect-workspace")

        assert "❌ No integration files found" in output
        assert "`begin-integration posix`" in output
        assert service.get_session(1).step == WizardStep.AWAITING_START

    async def test_inspect_reports_files_and_variant(self, make_service, posix_workspace, llm):
        service = make_service(posix_workspace, llm)
        (output,) = await run_turns(service, "inspect-workspace")

        assert "Platform: posix" in output
        assert "Variant: S32G Linux" in output
        assert "✅ 1800-EcuIntegration/S32G_Linux/core/development/dmiu/src/dmiu_integration.c" in output

    async def test_inspect_mid_run_keeps_progress(self, service):
        await run_turns(service, "begin-integration posix", "ShmM_MapOwner")
        await run_turns(service, "inspect-workspace", start=4)

        session = service.get_session(6)
        assert session.step == WizardStep.AWAITING_DATASET_FN
        assert session.memory_fn == "ShmM_MapOwner"

    async def test_wrap_function(self, service):
        (output,) = await run_turns(service, "wrap-function MyDatasetFunction")
        assert "## Generating Adapter for `MyDatasetFunction`" in output

    async def test_wrap_function_without_name(self, service):
        (output,) = await run_turns(service, "wrap-function")
        assert "Please provide a function name." in output

    async def test_slash_command(self, service):
        await collect(service.process_message(0, "/begin-integration autosar"))
        assert service.get_session(1).step == WizardStep.AWAITING_MEMORY_FN

    async def test_command_sent_separately(self, service):
        output = await collect(service.process_message(0, "posix", command="begin-integration"))
        assert "Step 1/3" in output

    async def test_missing_platform_reprompts(self, service):
        (output,) = await run_turns(service, "begin-integration")
        assert output.startswith("⚠️ No platform given.")
        assert "Please specify platform" in output


class TestConversation:
    async def test_full_run(self, service, llm):
        outputs = await run_turns(
            service,
            "begin-integration posix",
            "ShmM_MapOwner",
            "MyReader",
            "none",
        )

        assert "Step 1/3" in outputs[0]
        assert "Step 2/3" in outputs[1]
        assert "Step 3/3" in outputs[2]
        assert "## Generating Integration Files..." in outputs[3]
        assert "// dmiu_integration.h" in outputs[3]
        assert outputs[3].rstrip().endswith("3. Use `inspect-workspace` to check")
        assert len(llm.requests) == 1
        assert service.get_session(8).step == WizardStep.AWAITING_START

    async def test_off_by_one_host_keeps_conversation(self, service):
        await collect(service.process_message(0, "begin-integration posix"))
        # Host reports one turn instead of two
        await collect(service.process_message(1, "ShmM_MapOwner"))

        session = service.get_session(2)
        assert session.memory_fn == "ShmM_MapOwner"

    async def test_empty_answer_is_recorded(self, service):
        outputs = await run_turns(service, "begin-integration posix", "")

        assert "⚠️" not in outputs[1]
        assert "Step 2/3" in outputs[1]
        assert service.get_session(4).memory_fn == ""

    async def test_invalid_answer_is_reported_and_repeated(self, make_service, workspace, llm):
        service = make_service(workspace, llm, allow_empty_capture=False)
        outputs = await run_turns(service, "begin-integration posix", "", "")

        for output in outputs[1:]:
            assert output.startswith("⚠️ A memory allocation function is required.")
            assert "Step 1/3" in output
        assert service.get_session(6).step == WizardStep.AWAITING_MEMORY_FN

    async def test_generation_fallback(self, make_service, workspace):
        service = make_service(workspace, UnconfiguredLLMProvider())
        outputs = await run_turns(service, "begin-integration autosar", "static", "MyReader", "none")

        assert "⚠️ Language Model not available" in outputs[-1]
        assert "Config: Platform=autosar, Memory=static, Dataset=MyReader, Alt=none" in outputs[-1]
        assert service.get_session(8).step == WizardStep.AWAITING_START


class TestRollback:
    async def _at_last_step(self, make_service, workspace):
        service = make_service(workspace, HangingLLMProvider())
        await run_turns(service, "begin-integration posix", "ShmM_MapOwner", "MyReader")
        return service

    async def test_closing_stream_restores_state(self, make_service, workspace):
        service = await self._at_last_step(make_service, workspace)
        session = service.get_session(6)

        stream = service.process_message(6, "none")
        assert "## Generating Integration Files..." in await stream.__anext__()
        assert await stream.__anext__() == "partial"
        await stream.aclose()

        assert service.get_session(6) is session
        assert session.step == WizardStep.AWAITING_ALT_FN
        assert session.dataset_fn == "MyReader"
        assert session.alt_fn is None

    async def test_cancelled_task_restores_state(self, make_service, workspace):
        service = await self._at_last_step(make_service, workspace)
        received = []

        async def consume():
            async for chunk in service.process_message(6, "none"):
                received.append(chunk)

        task = asyncio.create_task(consume())
        while "partial" not in received:
            await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        session = service.get_session(6)
        assert session.step == WizardStep.AWAITING_ALT_FN
        assert session.alt_fn is None

    async def test_cancelled_probe_restores_state(self, make_service, workspace, monkeypatch):
        service = await self._at_last_step(make_service, workspace)
        await run_turns(service, "begin-integration posix", start=6)
        session = service.get_session(8)

        async def hang():
            await asyncio.Event().wait()

        monkeypatch.setattr(service.engine.prober, "find_candidate_functions", hang)
        task = asyncio.create_task(collect(service.process_message(8, "ShmM_MapOwner")))
        await asyncio.sleep(0.01)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert session.step == WizardStep.AWAITING_MEMORY_FN
        assert session.memory_fn is None

    async def test_internal_fault_is_reported_and_rolled_back(self, service, monkeypatch):
        await run_turns(service, "begin-integration posix")
        session = service.get_session(2)

        async def broken(session, text):
            session.memory_fn = "half-written"
            raise RuntimeError("boom")

        monkeypatch.setattr(service.engine, "advance", broken)
        output = await collect(service.process_message(2, "ShmM_MapOwner"))

        assert output == "\n\n❌ Error: boom\n"
        assert session.memory_fn is None
        assert session.step == WizardStep.AWAITING_MEMORY_FN

    async def test_unreadable_workspace_is_not_a_fault(self, service, workspace):
        write_file(workspace, "app/main.c", "PFSW_BUILD_OS_POSIX")
        (workspace / "include").mkdir()
        (workspace / "include" / "dangling.h").symlink_to(workspace / "nowhere.h")

        outputs = await run_turns(service, "begin-integration posix", "1")

        assert "❌" not in "".join(outputs)
        assert service.get_session(4).memory_fn == "1"
