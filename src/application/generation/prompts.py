"""
Default system instructions and message construction for the generation node.
See docs/CleanArchitecture.md — Phase 3 for the architectural rationale.
langchain_core.messages is treated as framework (not infrastructure), as in the use case.
"""

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from src.domain.entities.generation import GenerationMode

DEFAULT_SYSTEM_INSTRUCTIONS: dict[GenerationMode, str] = {
    GenerationMode.CHAT: (
        "You are a helpful assistant embedded in an automation workflow. "
        "Answer the user's instruction directly and concisely."
    ),
    GenerationMode.CODE: (
        "You are a code generator embedded in an automation workflow. "
        "Reply with code only, in the language the user asks for, "
        "adding brief comments where they help."
    ),
}


def build_messages(system_instruction: str, user_instruction: str) -> list[BaseMessage]:
    """Return the two-message sequence sent for every mode: system first, then user."""
    return [
        SystemMessage(content=system_instruction),
        HumanMessage(content=user_instruction),
    ]
