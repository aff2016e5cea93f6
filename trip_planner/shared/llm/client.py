"""
OpenAI client with retry logic.

Provides a client factory and a wrapper for LLM calls with automatic
retries using tenacity, plus JSON extraction for model replies.
"""

import re
from typing import Dict, List, Optional

from openai import OpenAI
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from trip_planner.shared.errors import LLMProviderError


def create_client(api_key: Optional[str], timeout: float = 30.0) -> OpenAI:
    """
    Create an OpenAI client.

    Args:
        api_key: OpenAI API key
        timeout: Per-request timeout in seconds

    Returns:
        Configured OpenAI client.

    Raises:
        LLMProviderError: If no API key is configured.
    """
    if not api_key:
        raise LLMProviderError(
            "OPENAI_API_KEY environment variable is not set. "
            "Please set it to your OpenAI API key."
        )
    return OpenAI(api_key=api_key, timeout=timeout, max_retries=0)


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    retry=retry_if_exception_type((Exception,)),
    reraise=True,
)
def call_llm(
    messages: List[Dict[str, str]],
    client: OpenAI,
    model: str = "gpt-4.1-mini",
    json_mode: bool = False,
) -> str:
    """
    Call the OpenAI Chat Completion API with automatic retries.

    Args:
        messages: List of message dicts with 'role' and 'content' keys
        client: OpenAI client instance
        model: Model identifier to use (default: gpt-4.1-mini)
        json_mode: Ask the model for a JSON object response

    Returns:
        The assistant's response content as a string.

    Raises:
        Exception: If all retry attempts fail.
    """
    kwargs = {"model": model, "messages": messages}
    if json_mode:
        kwargs["response_format"] = {"type": "json_object"}

    response = client.chat.completions.create(**kwargs)
    content = response.choices[0].message.content
    if not content:
        raise LLMProviderError("Empty response from language model")
    return content.strip()


def extract_json_from_response(raw_response: str) -> str:
    """
    Extract JSON content from an LLM response.

    Handles raw JSON, JSON in markdown code blocks (```json ... ```), and
    JSON surrounded by prose.

    Args:
        raw_response: Raw LLM response string

    Returns:
        Cleaned JSON string ready for parsing
    """
    content = raw_response.strip()

    match = re.search(r"```(?:json)?\s*([\s\S]*?)```", content)
    if match:
        content = match.group(1).strip()

    # Trim prose around the outermost object/array
    starts = [i for i in (content.find("{"), content.find("[")) if i != -1]
    if not starts:
        return content
    start = min(starts)
    closer = "}" if content[start] == "{" else "]"
    end = content.rfind(closer)
    if end > start:
        return content[start : end + 1]
    return content[start:]
