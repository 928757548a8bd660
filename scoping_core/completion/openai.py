"""
'completion/openai.py': Chat-completion client for OpenAI-compatible endpoints.
"""
import logging
from typing import Dict, Any, Optional

import httpx
from pydantic import ValidationError

from .base import BaseCompletionClient
from ..entities import ChatCompletion
from ..exceptions import CompletionError


class OpenAICompletionClient(BaseCompletionClient):
    """Posts `{model, temperature, messages}` to the completion endpoint with a bearer API key."""

    def __init__(
            self,
            api_key: Optional[str],
            api_url: str = "https://api.openai.com/v1/chat/completions",
            model_id: str = "gpt-4",
            temperature: float = 1.0,
            timeout: float = 300,
            logger: Optional[logging.Logger] = None,
            transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            api_key (str): Bearer key for the completion endpoint.
            api_url (str): Full chat-completions URL.
            model_id (str): Model name sent with every request.
            temperature (float): Sampling temperature.
            timeout (float): Request timeout in seconds.
            logger (Logger): Logger for error/debug reporting.
            transport (AsyncBaseTransport): Optional httpx transport override.
        """
        self.api_key = api_key
        self.api_url = api_url
        self.model_id = model_id
        self.temperature = temperature
        self.timeout = timeout
        self.logger = logger or logging.getLogger("scoping.completion")
        self._transport = transport

    def build_payload(self, context: str, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model_id,
            "temperature": self.temperature,
            "messages": [
                {"role": "system", "content": context},
                {"role": "user", "content": prompt},
            ],
        }

    async def post_prompt(self, context: str, prompt: str) -> ChatCompletion:
        """Send the prompt and parse the chat completion."""
        if not self.api_key:
            raise CompletionError("No API key configured for the completion endpoint")

        self.logger.debug("[post_prompt] Posting prompt . . .")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = self.build_payload(context, prompt)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.api_url, headers=headers, json=payload)
                self.logger.debug(f"[post_prompt] Response body: {response.text}")
                response.raise_for_status()
                return ChatCompletion.model_validate(response.json())

        except httpx.HTTPStatusError as http_err:
            self.logger.error(f"[post_prompt] HTTP error: {http_err.response.status_code} {http_err.response.text}")
            raise CompletionError(f"Completion endpoint returned {http_err.response.status_code}", cause=http_err)

        except httpx.RequestError as req_err:
            self.logger.error(f"[post_prompt] Request error: {req_err}")
            raise CompletionError("Completion request failed", cause=req_err)

        except (ValueError, ValidationError) as parse_err:
            self.logger.error(f"[post_prompt] Failed to parse response body: {parse_err}")
            raise CompletionError("Invalid completion response", cause=parse_err)
