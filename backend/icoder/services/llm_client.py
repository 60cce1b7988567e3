# icoder/services/llm_client.py
from __future__ import annotations

import logging
from typing import Any, Dict, List

import requests as http_requests

from icoder.core.config import Settings
from icoder.core.schema import AGENT_RESPONSE_SCHEMA

logger = logging.getLogger(__name__)


class LLMClient:
    """Single-shot, non-streaming chat completion over plain HTTP.

    Two wire dialects are supported: Mistral's OpenAI-style
    ``/v1/chat/completions`` and Ollama's ``/api/chat``.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings.from_env()
        self.provider = self.settings.llm_provider
        self.base_url = self.settings.llm_base_url.rstrip("/")
        if self.provider == "ollama":
            self.url = f"{self.base_url}/api/chat"
        else:
            self.url = f"{self.base_url}/v1/chat/completions"

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.settings.llm_api_key:
            headers["Authorization"] = f"Bearer {self.settings.llm_api_key}"
        return headers

    def _payload(self, messages: List[Dict[str, str]]) -> Dict[str, Any]:
        if self.provider == "ollama":
            return {
                "model": self.settings.llm_model,
                "stream": False,
                "messages": messages,
                "format": AGENT_RESPONSE_SCHEMA,
                "options": {
                    "temperature": self.settings.llm_temperature,
                    "num_predict": self.settings.llm_max_tokens,
                },
            }
        return {
            "model": self.settings.llm_model,
            "messages": messages,
            "max_tokens": self.settings.llm_max_tokens,
            "temperature": self.settings.llm_temperature,
        }

    @staticmethod
    def _extract_content(data: Dict[str, Any]) -> Any:
        if "choices" in data:
            choices = data.get("choices") or [{}]
            return (choices[0].get("message") or {}).get("content")
        return (data.get("message") or {}).get("content")

    def complete(self, messages: List[Dict[str, str]]) -> str:
        logger.info(
            "Requesting completion from %s (model=%s, prompt_chars=%d)",
            self.provider,
            self.settings.llm_model,
            sum(len(m.get("content") or "") for m in messages),
        )
        resp = http_requests.post(
            self.url,
            json=self._payload(messages),
            headers=self._headers(),
            timeout=self.settings.llm_timeout,
        )
        resp.raise_for_status()
        content = self._extract_content(resp.json())

        # Mistral may return content as a list of typed chunks
        if isinstance(content, list):
            content = "".join(
                c.get("text") or "" for c in content if isinstance(c, dict)
            )
        if not isinstance(content, str) or not content:
            raise ValueError("No response from language model")
        return content
