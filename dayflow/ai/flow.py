# ai/flow.py
"""Typed prompt-completion flows on top of Google Gemini.

A ``Flow`` renders a validated input model into a prompt, asks Gemini for
a JSON answer and validates that answer against the flow's output type.
"""
import logging
from typing import Any, Callable, Optional, Type

import google.generativeai as genai
from pydantic import BaseModel, TypeAdapter, ValidationError as PydanticValidationError

from dayflow.core.config import settings
from dayflow.core.exceptions import ConfigurationError, ExternalServiceError

logger = logging.getLogger(__name__)


class GeminiClient:
    """Thin wrapper around ``google.generativeai`` that always asks for JSON."""

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        self.api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.model_name = model_name or settings.GEMINI_MODEL

    def generate_json(self, prompt: str) -> str:
        """
        Run one completion.

        Raises:
            ConfigurationError: If no API key is set
            ExternalServiceError: If the Gemini call fails
        """
        if not self.api_key:
            raise ConfigurationError("The AI service is not configured on the server.")

        genai.configure(api_key=self.api_key)
        model = genai.GenerativeModel(
            self.model_name,
            generation_config={"response_mime_type": "application/json"},
        )
        try:
            response = model.generate_content(prompt)
            return response.text
        except Exception as e:
            logger.error(f"Gemini request failed: {e}")
            raise ExternalServiceError("The AI service is unavailable. Please try again later.") from e


def _strip_code_fence(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text.strip()


class Flow:
    """
    A named prompt with a typed input and output.

    Args:
        name: Used in logs
        input_model: Pydantic model the caller's data is validated against
        output_type: Any type pydantic can validate (a model, ``List[Model]``...)
        render: Builds the prompt text from the validated input
        failure_message: Message of the error raised on empty or malformed output
    """

    def __init__(
        self,
        name: str,
        input_model: Type[BaseModel],
        output_type: Any,
        render: Callable[[Any], str],
        failure_message: str = "The AI failed to generate a response.",
    ):
        self.name = name
        self.input_model = input_model
        self.output_adapter = TypeAdapter(output_type)
        self.render = render
        self.failure_message = failure_message

    def __call__(self, data: Any, client: Optional[GeminiClient] = None):
        payload = data if isinstance(data, self.input_model) else self.input_model.model_validate(data)
        prompt = self.render(payload)

        text = (client or GeminiClient()).generate_json(prompt)
        if not text or not text.strip():
            logger.error(f"Flow {self.name} returned no output")
            raise ExternalServiceError(self.failure_message)

        try:
            return self.output_adapter.validate_json(_strip_code_fence(text))
        except PydanticValidationError as e:
            logger.error(f"Flow {self.name} returned invalid output: {e}")
            raise ExternalServiceError(self.failure_message) from e
