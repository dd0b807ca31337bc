"""
Interactive console for the integration wizard.

Runs the same ChatService the HTTP API uses, against a local workspace,
without starting a server.

Usage:
    python -m dfu_assistant.scripts.chat_cli --workspace path/to/project
"""

import argparse
import asyncio

from dfu_assistant.config import settings
from dfu_assistant.execution.engine import DialogueEngine
from dfu_assistant.llm.adapters.openai_adapter import OpenAIAdapter
from dfu_assistant.repositories.catalog import StaticConfigurationCatalog
from dfu_assistant.repositories.session import TurnCountConversationStore
from dfu_assistant.services.chat import ChatService
from dfu_assistant.services.generation import GenerationAdapter
from dfu_assistant.services.workspace_prober import WorkspaceProber


def build_service(workspace: str) -> ChatService:
    catalog = StaticConfigurationCatalog()
    prober = WorkspaceProber(root=workspace, detection_rules=catalog.detection_rules())
    llm = OpenAIAdapter(
        api_key=settings.OPENAI_API_KEY,
        model_name=settings.OPENAI_MODEL,
        base_url=settings.OPENAI_BASE_URL,
    )
    engine = DialogueEngine(
        catalog=catalog,
        prober=prober,
        generator=GenerationAdapter(llm, temperature=settings.LLM_TEMPERATURE),
        allow_empty_capture=settings.ALLOW_EMPTY_CAPTURE,
        pick_numbered_candidates=settings.PICK_NUMBERED_CANDIDATES,
    )
    return ChatService(
        store=TurnCountConversationStore(),
        engine=engine,
        prober=prober,
        catalog=catalog,
    )


async def chat(service: ChatService):
    print("DFU Integration Assistant. Type 'exit' to quit.\n")

    # A chat host's history grows by a request and a response per exchange.
    history_length = 0
    while True:
        try:
            text = await asyncio.to_thread(input, "> ")
        except EOFError:
            break
        if text.strip().lower() in ("exit", "quit"):
            break

        async for chunk in service.process_message(history_length, text):
            print(chunk, end="", flush=True)
        print()
        history_length += 2


def main():
    parser = argparse.ArgumentParser(description="Chat with the DFU integration wizard.")
    parser.add_argument("--workspace", default=settings.WORKSPACE_ROOT, help="Project to probe.")
    args = parser.parse_args()

    asyncio.run(chat(build_service(args.workspace)))


if __name__ == "__main__":
    main()
