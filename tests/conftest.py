"""Shared test fixtures for dfu_assistant tests."""

from pathlib import Path

import pytest

from dfu_assistant.execution.engine import DialogueEngine
from dfu_assistant.llm.interface import LLMProvider
from dfu_assistant.repositories.catalog import StaticConfigurationCatalog
from dfu_assistant.repositories.session import TurnCountConversationStore
from dfu_assistant.services.chat import ChatService
from dfu_assistant.services.generation import GenerationAdapter
from dfu_assistant.services.workspace_prober import WorkspaceProber

from .helpers import FakeLLMProvider, write_file


@pytest.fixture
def workspace(tmp_path):
    """An empty project directory."""
    root = tmp_path / "workspace"
    root.mkdir()
    return root


@pytest.fixture
def posix_workspace(workspace):
    """A POSIX project with detectable functions and an S32G Linux integration tree."""
    write_file(workspace, "app/main.c", "#ifdef PFSW_BUILD_OS_POSIX\nint main(void) { return 0; }\n#endif\n")
    write_file(workspace, "include/shm.h", "void* ShmM_MapOwner(const char* name);\n")
    write_file(workspace, "include/shm_copy.h", "/* ShmM_MapOwner again */\n")
    write_file(workspace, "include/per.h", "int Per_DS_ReadDSElement(int id);\n")
    write_file(
        workspace,
        "1800-EcuIntegration/S32G_Linux/core/development/dmiu/src/dmiu_integration.c",
        "/* generated */\n",
    )
    return workspace


@pytest.fixture
def catalog():
    return StaticConfigurationCatalog()


@pytest.fixture
def llm():
    return FakeLLMProvider()


@pytest.fixture
def make_engine(catalog):
    def _make(root: Path, provider: LLMProvider, **options) -> DialogueEngine:
        prober = WorkspaceProber(root=root, detection_rules=catalog.detection_rules())
        return DialogueEngine(
            catalog=catalog,
            prober=prober,
            generator=GenerationAdapter(provider),
            **options,
        )
    return _make


@pytest.fixture
def engine(make_engine, workspace, llm):
    return make_engine(workspace, llm)


@pytest.fixture
def make_service(catalog, make_engine):
    def _make(root: Path, provider: LLMProvider, **options) -> ChatService:
        engine = make_engine(root, provider, **options)
        return ChatService(
            store=TurnCountConversationStore(),
            engine=engine,
            prober=engine.prober,
            catalog=catalog,
        )
    return _make


@pytest.fixture
def service(make_service, workspace, llm):
    return make_service(workspace, llm)
