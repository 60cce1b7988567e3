# icoder/services/validation.py
from __future__ import annotations

from typing import Any, Dict

from icoder.core.schema import COMMAND_OPERATION_TYPES, FILE_OPERATION_TYPES


# paths are kept as the model wrote them; the materializer keeps writes
# inside its roots
def validate_path(p: Any, where: str) -> None:
    if not isinstance(p, str) or not p.strip():
        raise ValueError(f"{where}.path invalid")

    if "\x00" in p:
        raise ValueError(f"{where}.path must not contain NUL")


def validate_agent_object(obj: Any) -> None:
    if not isinstance(obj, dict):
        raise ValueError("Response must be a JSON object")


def validate_file_operation(op: Any, i: int) -> None:
    where = f"fileOperations[{i}]"
    if not isinstance(op, dict):
        raise ValueError(f"{where} must be object")

    if op.get("type") not in FILE_OPERATION_TYPES:
        raise ValueError(f"{where}.type invalid: {op.get('type')}")

    validate_path(op.get("path"), where)

    content = op.get("content")
    if content is not None and not isinstance(content, str):
        raise ValueError(f"{where}.content must be string")


def validate_command_operation(op: Any, i: int) -> None:
    where = f"commandOperations[{i}]"
    if not isinstance(op, dict):
        raise ValueError(f"{where} must be object")

    if op.get("type", "execute") not in COMMAND_OPERATION_TYPES:
        raise ValueError(f"{where}.type invalid: {op.get('type')}")

    command = op.get("command")
    if not isinstance(command, str) or not command.strip():
        raise ValueError(f"{where}.command invalid")

    if "\x00" in command:
        raise ValueError(f"{where}.command must not contain NUL")


def validate_code_block(block: Any, i: int) -> None:
    if not isinstance(block, dict):
        raise ValueError(f"codeBlocks[{i}] must be object")
    if not isinstance(block.get("code", ""), str):
        raise ValueError(f"codeBlocks[{i}].code must be string")


VALIDATORS: Dict[str, Any] = {
    "fileOperations": validate_file_operation,
    "commandOperations": validate_command_operation,
    "codeBlocks": validate_code_block,
}
