# icoder/models/backend.py
from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from icoder.models.editor import ChatMessage, EditorState, FileItem


class ExecuteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    command: Any = None
    working_dir: Any = Field(None, alias="workingDir")


class ExecuteResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    output: str
    success: bool
    cwd: str
    server_url: Optional[str] = Field(None, alias="serverUrl")


# files is left untyped: entries without a name or with non-string
# content are skipped by the materializer instead of failing the request
class SavePreviewRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    files: Any = None
    clear_first: bool = Field(False, alias="clearFirst")


class SavePreviewResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    preview_url: Optional[str] = Field(None, alias="previewUrl")
    error: Optional[str] = None


class SyncFilesRequest(BaseModel):
    files: Any = None


class SyncFilesResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None


class AgentChatRequest(BaseModel):
    message: str = ""


class AgentTerminalRequest(BaseModel):
    command: str = ""


class AgentSaveRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    clear_first: bool = Field(False, alias="clearFirst")


class AgentReply(BaseModel):
    success: bool
    reply: Optional[str] = None
    error: Optional[str] = None
    files: List[FileItem] = Field(default_factory=list)


class AgentSessionView(BaseModel):
    state: EditorState
    messages: List[ChatMessage]
    busy: bool = False
