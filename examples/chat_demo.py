"""Minimal demonstration of the chat service."""

from groq_chat.api.service import get_default_service
from groq_chat.api.status import summarize_models
from groq_chat.prompts import language_name
from groq_chat.providers.registry import display_name

if __name__ == "__main__":
    service = get_default_service()
    status = service.connection_status()
    print(status.message)
    if status.success:
        print("Models:", ", ".join(summarize_models([m.get("id", "") for m in status.models])))
        orchestrator = service.orchestrator
        orchestrator.set_language("fr")
        print(f"Using {display_name(orchestrator.model)} in {language_name(orchestrator.language)}")
        state = service.send_text("Présente-toi en une phrase.")
        print("User:", state.messages[0].content)
        print("Assistant:", state.error or state.messages[-1].content)
