# icoder/models/editor.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


def _now() -> datetime:
    return datetime.now(timezone.utc)


class FileItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    content: str = ""
    language: str = "plaintext"
    is_directory: bool = Field(False, alias="isDirectory")
    parent_id: Optional[str] = Field(None, alias="parentId")


class Tab(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    is_dirty: bool = Field(False, alias="isDirty")


class ChatMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    content: str
    is_user: bool = Field(False, alias="isUser")
    timestamp: datetime = Field(default_factory=_now)


class EditorState(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    files: List[FileItem] = Field(default_factory=list)
    open_tabs: List[Tab] = Field(default_factory=list, alias="openTabs")
    active_tab_id: Optional[str] = Field(None, alias="activeTabId")
    selected_file_id: Optional[str] = Field(None, alias="selectedFileId")
    show_preview: bool = Field(False, alias="showPreview")
    show_chat: bool = Field(False, alias="showChat")
