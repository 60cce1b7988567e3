# icoder/services/gateway.py
from __future__ import annotations

import logging

from icoder.core.prompt import GATEWAY_ERROR_MESSAGE
from icoder.models.agent import AgentResponse
from icoder.services.llm_client import LLMClient
from icoder.services.prompt_builder import build_model_messages
from icoder.services.response_parser import parse_agent_response

logger = logging.getLogger(__name__)


class AgentGateway:
    """Turns one system+user prompt pair into an AgentResponse.

    Never raises for remote failures: any error reaching the model ends
    the turn with a fixed apology and no operations.
    """

    def __init__(self, client: LLMClient | None = None):
        self.client = client or LLMClient()

    def complete(self, system_prompt: str, user_prompt: str) -> AgentResponse:
        messages = build_model_messages(system_prompt, user_prompt)
        try:
            text = self.client.complete(messages)
        except Exception:
            logger.exception("Language model request failed")
            return AgentResponse.text_only(GATEWAY_ERROR_MESSAGE)
        return parse_agent_response(text)
