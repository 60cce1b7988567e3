# icoder/services/editor_store.py
from __future__ import annotations

from typing import List, Optional

from icoder.models.agent import FileOperation
from icoder.models.editor import EditorState, FileItem, Tab
from icoder.services.file_ops import apply_file_operations


class EditorStore:
    """In-memory files, tabs and selection for one editor session.

    Tabs point at files by id and are not cleaned up when a file goes away;
    ``active_file`` returns None for such a dangling tab.
    """

    def __init__(self, state: EditorState | None = None):
        self.state = state or EditorState()

    @property
    def files(self) -> List[FileItem]:
        return self.state.files

    def file_names(self) -> List[str]:
        return [f.name for f in self.state.files]

    def find_by_name(self, name: str) -> Optional[FileItem]:
        return next((f for f in self.state.files if f.name == name and not f.is_directory), None)

    def find_by_id(self, file_id: str) -> Optional[FileItem]:
        return next((f for f in self.state.files if f.id == file_id), None)

    def replace_files(self, files: List[FileItem]) -> None:
        self.state.files = files

    def apply(self, ops: List[FileOperation]) -> List[str]:
        result = apply_file_operations(self.state.files, ops)
        self.replace_files(result.files)
        return result.lines

    def read_file(self, name: str) -> Optional[str]:
        f = self.find_by_name(name)
        return f.content if f else None

    def create_file(self, name: str, content: str = "") -> FileItem:
        self.apply([FileOperation(type="create", path=name, content=content)])
        return self.find_by_name(name)

    def delete_file(self, name: str) -> None:
        self.apply([FileOperation(type="delete", path=name)])

    def open_file(self, file_id: str) -> Optional[Tab]:
        f = self.find_by_id(file_id)
        if f is None:
            return None
        tab = next((t for t in self.state.open_tabs if t.id == file_id), None)
        if tab is None:
            tab = Tab(id=f.id, name=f.name)
            self.state.open_tabs.append(tab)
        self.state.active_tab_id = f.id
        self.state.selected_file_id = f.id
        return tab

    def activate_tab(self, tab_id: str) -> None:
        if any(t.id == tab_id for t in self.state.open_tabs):
            self.state.active_tab_id = tab_id
            self.state.selected_file_id = tab_id

    def active_file(self) -> Optional[FileItem]:
        if self.state.active_tab_id is None:
            return None
        return self.find_by_id(self.state.active_tab_id)

    def edit_active(self, content: str) -> bool:
        active = self.active_file()
        if active is None:
            return False
        self.state.files = [
            f.model_copy(update={"content": content}) if f.id == active.id else f
            for f in self.state.files
        ]
        for tab in self.state.open_tabs:
            if tab.id == active.id:
                tab.is_dirty = True
        return True

    def toggle_preview(self) -> bool:
        self.state.show_preview = not self.state.show_preview
        return self.state.show_preview

    def toggle_chat(self) -> bool:
        self.state.show_chat = not self.state.show_chat
        return self.state.show_chat
