"""LLM client for job-description extraction.

Uses LiteLLM to request structured JSON and validates it with Pydantic.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from jobfit.extractor.config import ExtractorConfig, get_extractor_config

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

# LiteLLM loads `.env` into the process environment in DEV mode; stay in
# PRODUCTION unless the user opted in.
os.environ.setdefault("LITELLM_MODE", "PRODUCTION")

MAX_RETRY_DELAY = 8.0


class ExtractorLLMError(Exception):
    """Exception raised when an extraction LLM call fails or returns bad data."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error


class ExtractorLLM:
    """LLM client returning Pydantic models."""

    def __init__(self, config: ExtractorConfig | None = None) -> None:
        self.config = config or get_extractor_config()

    def model_name(self) -> str:
        """Return the provider-qualified model name for LiteLLM routing."""
        model = self.config.llm_model
        if "/" in model:
            return model
        if self.config.llm_base_url:
            return f"openai/{model}"
        if self.config.llm_provider == "openai":
            return model
        return f"{self.config.llm_provider}/{model}"

    def generate_structured(
        self,
        *,
        prompt: str,
        output_model: type[T],
        system_prompt: str | None = None,
    ) -> T:
        """Generate output matching `output_model`.

        Transient failures are retried with exponential backoff; timeouts and
        unparseable responses are not.

        Raises:
            ExtractorLLMError: If no valid response could be obtained.
        """
        from litellm.exceptions import Timeout

        messages: list[dict[str, str]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        attempts = self.config.llm_max_retries + 1
        last_error: Exception | None = None
        for attempt in range(attempts):
            try:
                response = self._call_completion(
                    messages=messages, response_format=output_model
                )
            except Timeout as e:
                raise ExtractorLLMError(
                    "LLM request timed out. Increase EXTRACTOR_LLM_TIMEOUT "
                    f"(timeout={self.config.llm_timeout}s).",
                    e,
                ) from e
            except Exception as e:
                last_error = e
                if attempt + 1 >= attempts:
                    break
                delay = min(0.5 * (2**attempt), MAX_RETRY_DELAY)
                logger.warning(
                    "LLM call failed (attempt %s/%s), retrying in %.1fs: %s",
                    attempt + 1,
                    attempts,
                    delay,
                    e,
                )
                time.sleep(delay)
                continue

            return self._parse_response(response, output_model)

        raise ExtractorLLMError(
            f"LLM call failed after {attempts} attempt(s): {last_error}", last_error
        ) from last_error

    def _parse_response(self, response, output_model: type[T]) -> T:
        try:
            message = response.choices[0].message
        except (AttributeError, IndexError, TypeError) as e:
            raise ExtractorLLMError(f"LLM returned a malformed response: {e}", e) from e
        return self._parse_message(message, output_model)

    def _call_completion(
        self,
        *,
        messages: list[dict[str, str]],
        response_format: type[BaseModel] | None = None,
    ):
        from litellm import completion

        kwargs: dict[str, Any] = {
            "model": self.model_name(),
            "messages": messages,
            "timeout": self.config.llm_timeout,
            "temperature": self.config.llm_temperature,
        }

        reasoning_effort = _normalize_reasoning_effort(self.config.llm_reasoning_effort)
        if reasoning_effort is not None:
            kwargs["reasoning_effort"] = reasoning_effort
        if self.config.llm_api_key:
            kwargs["api_key"] = self.config.llm_api_key
        if self.config.llm_base_url:
            kwargs["base_url"] = self.config.llm_base_url
        if response_format is not None:
            kwargs["response_format"] = response_format

        return completion(**kwargs)

    def _parse_message(self, message, output_model: type[T]) -> T:
        content = getattr(message, "content", None)

        if content is None:
            # Some providers return structured output as a tool call.
            tool_calls = getattr(message, "tool_calls", None) or []
            if tool_calls:
                arguments = getattr(
                    getattr(tool_calls[0], "function", None), "arguments", None
                )
                if isinstance(arguments, str) and arguments.strip():
                    content = arguments

        if content is None:
            raise ExtractorLLMError("LLM returned no content to parse.")

        payload = extract_json(str(content))
        try:
            return output_model.model_validate_json(payload)
        except ValidationError as e:
            raise ExtractorLLMError(
                f"LLM response is not valid {output_model.__name__} JSON: {e}", e
            ) from e


def strip_code_fences(content: str) -> str:
    """Remove a surrounding markdown code fence (```json ... ```)."""
    content = content.strip()
    if content.startswith("```"):
        first_newline = content.find("\n")
        content = content[first_newline + 1 :] if first_newline != -1 else ""
        if content.rstrip().endswith("```"):
            content = content.rstrip()[:-3]
    return content.strip()


def extract_json(content: str) -> str:
    """Return the JSON document embedded in an LLM reply.

    Code fences are removed; if prose surrounds the JSON, the first balanced
    object (or array) is returned. Otherwise the cleaned text is returned
    unchanged and validation reports the error.
    """
    content = strip_code_fences(content)
    if content.startswith("{") or content.startswith("["):
        return content

    for open_char, close_char in (("{", "}"), ("[", "]")):
        extracted = _extract_balanced(content, open_char, close_char)
        if extracted is not None:
            return extracted
    return content


def _extract_balanced(text: str, open_char: str, close_char: str) -> str | None:
    start = text.find(open_char)
    if start == -1:
        return None

    depth = 0
    for idx in range(start, len(text)):
        ch = text[idx]
        if ch == open_char:
            depth += 1
        elif ch == close_char:
            depth -= 1
            if depth == 0:
                return text[start : idx + 1].strip()
    return None


def _normalize_reasoning_effort(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = str(value).strip().lower()
    if not normalized:
        return None
    if normalized in {"off", "disabled", "0", "false"}:
        return "disable"
    return normalized
