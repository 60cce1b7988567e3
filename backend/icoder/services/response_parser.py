# icoder/services/response_parser.py
"""Recover an AgentResponse from free-form model output.

Decoding runs in two stages. The strict stage pulls a JSON object out of
the text and types it. If that fails, the fallback stage salvages a
plain chat message and never returns any operations, so a malformed
response can't partially mutate the project.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Optional

from icoder.core.prompt import REPHRASE_MESSAGE
from icoder.models.agent import AgentResponse
from icoder.services.coerce import coerce_agent_response

logger = logging.getLogger(__name__)

FENCED_JSON_RE = re.compile(r"```(?:json)?\s*({[\s\S]*?})\s*```")
MESSAGE_FIELD_RE = re.compile(r'"message"\s*:\s*"([^"]*)"')

MAX_FALLBACK_CHARS = 500


def extract_json_candidate(text: str) -> str:
    """Pick the slice of *text* most likely to hold the JSON object.

    A response that is itself one object wins over a fenced block found
    inside it, since fences there usually belong to file content.
    """
    candidate = text
    match = FENCED_JSON_RE.search(text)
    if match:
        candidate = match.group(1)
    if text.startswith("{") and text.endswith("}"):
        candidate = text
    return candidate


def decode_strict(text: str) -> AgentResponse:
    candidate = extract_json_candidate(text)
    return coerce_agent_response(json.loads(candidate))


def decode_fallback(text: str) -> AgentResponse:
    message = text
    if '"message"' in message:
        match = MESSAGE_FIELD_RE.search(message)
        if match:
            message = match.group(1)
    if len(message) > MAX_FALLBACK_CHARS:
        message = REPHRASE_MESSAGE
    return AgentResponse.text_only(message)


def parse_agent_response(raw: Optional[str]) -> AgentResponse:
    text = (raw or "").strip()
    try:
        return decode_strict(text)
    except ValueError as ex:
        # json.JSONDecodeError is a ValueError too
        logger.warning("Model output is not valid agent JSON (%s): %.200r", ex, text)
        return decode_fallback(text)
