"""
Recovers structured values from free-text model completions.

Models are asked for raw JSON but routinely wrap it in Markdown fences or
surround it with prose. `normalize` extracts the outermost JSON object,
validates it against a pydantic schema and degrades to a typed fallback
instead of raising.
"""

import json
import logging
import re
from typing import Callable, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar("T", bound=BaseModel)

FENCE_MARKERS = re.compile(r"```json|```")


def strip_fences(text: str) -> str:
    """Remove Markdown code fence markers and surrounding whitespace."""
    return FENCE_MARKERS.sub("", text).strip()


def extract_json_span(text: str) -> Optional[str]:
    """
    Return the slice from the first '{' to the last '}' of `text`.

    Returns None when either brace is missing or they are out of order.
    """
    first = text.find("{")
    last = text.rfind("}")
    if first == -1 or last == -1 or last <= first:
        return None
    return text[first:last + 1]


def normalize(text: Optional[str], schema: Type[T], fallback: Callable[[str], T]) -> T:
    """
    Parse `text` into an instance of `schema`, or return `fallback(text)`.

    Args:
        text: Raw completion returned by the model.
        schema: Pydantic model describing the expected fields. Type checks and
            clamping live on the model's validators.
        fallback: Builds the value returned when any step fails. Receives
            the raw completion.

    Returns:
        A validated `schema` instance or the fallback value.
    """
    raw = text or ""
    span = extract_json_span(strip_fences(raw))
    if span is None:
        logging.warning("No JSON object found in model response")
        logging.debug(f"Unparseable model response: {raw!r}")
        return fallback(raw)

    try:
        data = json.loads(span)
    except (ValueError, RecursionError) as e:
        logging.warning(f"Model response is not valid JSON: {e}")
        logging.debug(f"Candidate JSON: {span!r}")
        return fallback(raw)

    if not isinstance(data, dict):
        logging.warning("Model response JSON is not an object")
        return fallback(raw)

    try:
        return schema.model_validate(data)
    except ValidationError as e:
        logging.warning(f"Model response failed {schema.__name__} validation: {e.error_count()} error(s)")
        logging.debug(str(e))
        return fallback(raw)
