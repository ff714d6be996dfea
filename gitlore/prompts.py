"""
Prompt builders, one per endpoint.

Each builder embeds its input into a fixed template and returns a
single-message conversation. Inputs are validated by the caller.
"""

import logging
from typing import List, Optional

import gitlore.constants as constants
from gitlore.schemas import ChatMessage


def truncate(text: str, limit: int) -> str:
    return text[:limit]


def build_impact_messages(code_snippet: str) -> List[ChatMessage]:
    return [
        ChatMessage(
            id="impact-prompt",
            content=constants.IMPACT_PROMPT.format(code=code_snippet),
        )
    ]


def build_narrate_messages(file_content: str, file_path: Optional[str]) -> List[ChatMessage]:
    return [
        ChatMessage(
            id="narrate-prompt",
            content=constants.NARRATE_PROMPT.format(path=file_path or "unknown", content=file_content),
        )
    ]


def build_risk_messages(function_code: str) -> List[ChatMessage]:
    if len(function_code) > constants.MAX_FUNCTION_CODE_CHARS:
        logging.warning(f"Function code truncated to {constants.MAX_FUNCTION_CODE_CHARS} characters")
        function_code = truncate(function_code, constants.MAX_FUNCTION_CODE_CHARS)

    return [
        ChatMessage(
            id="risk-prompt",
            content=constants.RISK_PROMPT.format(code=function_code),
        )
    ]


def build_search_messages(query: str, context: Optional[str]) -> List[ChatMessage]:
    if context:
        context = truncate(context, constants.MAX_SEARCH_CONTEXT_CHARS)
    else:
        context = "No context provided."

    return [
        ChatMessage(
            id="search-prompt",
            content=constants.SEARCH_PROMPT.format(context=context, query=query),
        )
    ]


def build_file_summary_messages(file_content: str, path: str) -> List[ChatMessage]:
    return [
        ChatMessage(
            id="file-summary",
            content=constants.FILE_SUMMARY_PROMPT.format(
                path=path,
                content=truncate(file_content, constants.MAX_SUMMARY_FILE_CHARS),
            ),
        )
    ]


def echo_file_content(file_content: str) -> str:
    """File content as returned to the web UI, capped with a visible marker."""
    if len(file_content) > constants.MAX_ECHOED_FILE_CHARS:
        return truncate(file_content, constants.MAX_ECHOED_FILE_CHARS) + constants.TRUNCATION_MARKER
    return file_content
