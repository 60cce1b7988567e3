# icoder/core/schema.py
from __future__ import annotations

from typing import Any, Dict

FILE_OPERATION_TYPES = ("read", "write", "create", "delete")
COMMAND_OPERATION_TYPES = ("execute",)

AGENT_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["message"],
    "properties": {
        "message": {"type": "string"},
        "fileOperations": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["type", "path"],
                "properties": {
                    "type": {"type": "string", "enum": list(FILE_OPERATION_TYPES)},
                    "path": {"type": "string"},
                    "content": {"type": "string"},
                },
            },
        },
        "commandOperations": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["type", "command"],
                "properties": {
                    "type": {"type": "string", "enum": list(COMMAND_OPERATION_TYPES)},
                    "command": {"type": "string"},
                },
            },
        },
        "codeBlocks": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["language", "code"],
                "properties": {
                    "language": {"type": "string"},
                    "code": {"type": "string"},
                    "filename": {"type": "string"},
                },
            },
        },
    },
}
