# icoder/models/agent.py
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

FileOperationType = Literal["read", "write", "create", "delete"]


class FileOperation(BaseModel):
    type: FileOperationType
    path: str
    content: Optional[str] = None


class CommandOperation(BaseModel):
    type: Literal["execute"] = "execute"
    command: str


class CodeBlock(BaseModel):
    language: str = "plaintext"
    code: str = ""
    filename: Optional[str] = None


class AgentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = ""
    file_operations: List[FileOperation] = Field(default_factory=list, alias="fileOperations")
    command_operations: List[CommandOperation] = Field(default_factory=list, alias="commandOperations")
    code_blocks: List[CodeBlock] = Field(default_factory=list, alias="codeBlocks")

    @classmethod
    def text_only(cls, message: str) -> "AgentResponse":
        return cls(message=message)
