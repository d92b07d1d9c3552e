"""
Chat Completion Client
======================

A small client for the hosted chat-completion endpoint (Azure AI inference,
OpenAI-compatible ``/chat/completions``). It encapsulates authentication,
headers and payload construction, and reduces every failure mode to a single
``CompletionError`` so callers only have one thing to catch.

``CompletionClient`` is the capability the generation layer depends on; tests
substitute any object with a compatible ``complete`` method.
"""

import json
import logging
import time
from typing import Any, Dict, List, Optional, Protocol

import requests

from ..constants import DEFAULT_MODEL_NAME

logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = "2024-05-01-preview"


class CompletionError(Exception):
    """The completion service could not produce a reply."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class CompletionHTTPError(CompletionError):
    """The endpoint answered, but with a non-2xx status."""


class CompletionClient(Protocol):
    """Anything that turns a chat transcript into reply text."""

    model_name: str

    def complete(self, messages: List[Dict[str, Any]], *, max_tokens: int = 2048,
                 temperature: float = 0.3) -> str:
        ...


class AzureChatCompletionClient:
    """
    Client for Azure AI inference chat completions.

    Configuration is checked lazily: a client built without endpoint or key
    is valid but every ``complete`` call raises ``CompletionError``.
    """

    def __init__(
        self,
        endpoint: Optional[str],
        api_key: Optional[str],
        model_name: str = DEFAULT_MODEL_NAME,
        timeout: int = 120,
        api_version: str = DEFAULT_API_VERSION,
        session: Optional[requests.Session] = None,
    ):
        self.endpoint = (endpoint or '').rstrip('/')
        self.api_key = api_key or ''
        self.model_name = model_name or DEFAULT_MODEL_NAME
        self.timeout = timeout
        self.api_version = api_version
        self.session = session or requests.Session()

        if not self.is_configured:
            logger.warning(
                "Azure AI configuration missing. Set AZURE_AI_ENDPOINT and AZURE_AI_API_KEY; "
                "AI features will return fallback results."
            )
        else:
            logger.info(f"Chat completion client initialized for model {self.model_name}")

    @property
    def is_configured(self) -> bool:
        return bool(self.endpoint and self.api_key)

    @property
    def url(self) -> str:
        return f"{self.endpoint}/chat/completions"

    def _get_headers(self) -> Dict[str, str]:
        return {
            "api-key": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _build_payload(self, messages: List[Dict[str, Any]], max_tokens: int, temperature: float) -> Dict[str, Any]:
        return {
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "model": self.model_name,
            "stream": False,
        }

    def complete(self, messages: List[Dict[str, Any]], *, max_tokens: int = 2048,
                 temperature: float = 0.3) -> str:
        """
        Send a chat completion request and return the reply text.

        Args:
            messages: Chat messages (``content`` may be a string or a list of
                text / image_url parts for vision requests)
            max_tokens: Maximum output tokens
            temperature: Sampling temperature

        Returns:
            The content of the first choice.

        Raises:
            CompletionHTTPError: the endpoint answered with a non-2xx status.
            CompletionError: missing configuration, transport failure,
                or a reply without message content.
        """
        if not self.is_configured:
            raise CompletionError("Azure AI configuration missing", status_code=401)

        payload = self._build_payload(messages, max_tokens, temperature)
        logger.debug(f"Chat completion request to {self.url} (model={self.model_name}, max_tokens={max_tokens})")

        start_time = time.time()
        try:
            response = self.session.post(
                self.url,
                params={"api-version": self.api_version},
                headers=self._get_headers(),
                json=payload,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise CompletionError(f"Request timed out after {self.timeout}s: {e}", status_code=504) from e
        except requests.exceptions.RequestException as e:
            raise CompletionError(f"Network error: {e}", status_code=503) from e

        duration = time.time() - start_time

        if response.status_code != 200:
            raise CompletionHTTPError(
                f"Azure AI API error (status {response.status_code}): {self._error_message(response)}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise CompletionError(f"Non-JSON response: {response.text[:200]}", status_code=502) from e

        content = self._extract_content(data)
        if content is None:
            raise CompletionError("Malformed response: missing choices[0].message.content", status_code=502)

        usage = data.get('usage') or {}
        logger.info(
            f"Completion from {self.model_name} in {duration:.1f}s "
            f"({usage.get('prompt_tokens', 0)}->{usage.get('completion_tokens', 0)} tokens)"
        )
        return content

    @staticmethod
    def _extract_content(data: Any) -> Optional[str]:
        if not isinstance(data, dict):
            return None
        choices = data.get('choices')
        if not isinstance(choices, list) or not choices:
            return None
        message = choices[0].get('message') if isinstance(choices[0], dict) else None
        content = message.get('content') if isinstance(message, dict) else None
        return content if isinstance(content, str) else None

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text[:200] or 'Unknown error'
        error = body.get('error') if isinstance(body, dict) else None
        if isinstance(error, dict):
            return error.get('message') or json.dumps(error)[:200]
        if error:
            return str(error)
        return json.dumps(body)[:200]


def create_completion_client(config: Dict[str, Any]) -> AzureChatCompletionClient:
    """Build the completion client from a Flask config mapping."""
    return AzureChatCompletionClient(
        endpoint=config.get('AZURE_AI_ENDPOINT'),
        api_key=config.get('AZURE_AI_API_KEY'),
        model_name=config.get('AZURE_AI_MODEL_NAME') or DEFAULT_MODEL_NAME,
        timeout=int(config.get('AI_REQUEST_TIMEOUT', 120)),
    )
