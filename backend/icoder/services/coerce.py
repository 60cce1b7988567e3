# icoder/services/coerce.py
from __future__ import annotations

import logging
from typing import Any, Dict, List

from icoder.models.agent import AgentResponse, CodeBlock, CommandOperation, FileOperation
from icoder.services.validation import VALIDATORS, validate_agent_object

logger = logging.getLogger(__name__)


def _valid_entries(obj: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    raw = obj.get(key)
    if raw is None:
        return []
    if not isinstance(raw, list):
        logger.warning("Ignoring %s: expected array, got %s", key, type(raw).__name__)
        return []

    validate = VALIDATORS[key]
    kept: List[Dict[str, Any]] = []
    for i, entry in enumerate(raw):
        try:
            validate(entry, i)
        except ValueError as ex:
            logger.warning("Dropping invalid operation: %s", ex)
            continue
        kept.append(entry)
    return kept


def coerce_to_fileops(obj_ops: List[Dict[str, Any]]) -> List[FileOperation]:
    return [
        FileOperation(
            type=o["type"],
            path=o["path"],
            content=o.get("content", None),
        )
        for o in obj_ops
    ]


def coerce_to_commands(obj_ops: List[Dict[str, Any]]) -> List[CommandOperation]:
    return [CommandOperation(command=o["command"]) for o in obj_ops]


def coerce_to_code_blocks(obj_blocks: List[Dict[str, Any]]) -> List[CodeBlock]:
    return [
        CodeBlock(
            language=str(b.get("language") or "plaintext"),
            code=b.get("code") or "",
            filename=b.get("filename") if isinstance(b.get("filename"), str) else None,
        )
        for b in obj_blocks
    ]


def coerce_agent_response(obj: Any) -> AgentResponse:
    """Type a decoded JSON object as an AgentResponse.

    Raises ValueError when the payload is not an object at all; individual
    malformed operations are dropped and their valid siblings kept.
    """
    validate_agent_object(obj)

    message = obj.get("message")
    if message is None:
        message = ""
    elif not isinstance(message, str):
        message = str(message)

    fields: Dict[str, Any] = {
        "message": message,
        "command_operations": coerce_to_commands(_valid_entries(obj, "commandOperations")),
        "code_blocks": coerce_to_code_blocks(_valid_entries(obj, "codeBlocks")),
    }
    # presence of the key, even as [], is what triggers a preview reset
    if "fileOperations" in obj:
        fields["file_operations"] = coerce_to_fileops(_valid_entries(obj, "fileOperations"))
    return AgentResponse(**fields)
