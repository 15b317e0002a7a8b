"""
Prompt templates for grounded answers, detailed reports and the live session.

Dependencies: langchain_core.prompts
System role: Prompt construction for every model call
"""

from collections.abc import Sequence

from langchain_core.prompts import PromptTemplate

from samastha_ai.models.chunk import Chunk

SEARCH_TOOL_NAME = "search_knowledge_base"

FALLBACK_SYSTEM_INSTRUCTION = "You are an AI assistant."

FALLBACK_LIVE_INSTRUCTION = "You are a helpful assistant."

RAG_QUERY_PROMPT = PromptTemplate.from_template(
    "Context Information:\n{context}\n\nUser Query:\n{query}"
)

SYSTEM_INSTRUCTION_PROMPT = PromptTemplate.from_template(
    "{base_instruction}\n\nYour name is {app_name}."
)

DETAILED_REPORT_PROMPT = PromptTemplate.from_template(
    'The user has requested a detailed report on: "{topic}". '
    "Provide a comprehensive explanation using the context provided. "
    "Structure it clearly with a Title, Introduction, Key Points (bulleted), and Conclusion."
)

LIVE_INSTRUCTION_PROMPT = PromptTemplate.from_template(
    "{instruction} You MUST use the '" + SEARCH_TOOL_NAME + "' tool to answer questions "
    "before answering from general knowledge if the question is specific."
)


def format_context(chunks: Sequence[Chunk]) -> str:
    """Render retrieved chunks as source-prefixed context paragraphs."""
    return "\n\n".join(f"[Source: {chunk.doc_title}]: {chunk.text}" for chunk in chunks)


def build_rag_prompt(query: str, chunks: Sequence[Chunk]) -> str:
    """Combine retrieved context and the user query into one prompt."""
    return RAG_QUERY_PROMPT.format(context=format_context(chunks), query=query)


def build_system_instruction(base_instruction: str | None, app_name: str | None) -> str:
    """Append the assistant's display name to the configured policy text."""
    return SYSTEM_INSTRUCTION_PROMPT.format(
        base_instruction=base_instruction or FALLBACK_SYSTEM_INSTRUCTION,
        app_name=app_name or "Samastha AI",
    )


def build_report_query(topic: str) -> str:
    """Structured detailed-report request for a topic."""
    return DETAILED_REPORT_PROMPT.format(topic=topic)


def build_live_instruction(instruction: str | None) -> str:
    """System instruction for the live session, mandating the search tool."""
    return LIVE_INSTRUCTION_PROMPT.format(instruction=instruction or FALLBACK_LIVE_INSTRUCTION)
