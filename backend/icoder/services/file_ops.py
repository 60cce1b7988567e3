# icoder/services/file_ops.py
"""Pure fold of FileOperations over a file-set snapshot."""
from __future__ import annotations

import uuid
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

from icoder.models.agent import FileOperation
from icoder.models.editor import FileItem

LANGUAGE_BY_EXTENSION: Dict[str, str] = {
    "js": "javascript",
    "jsx": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "py": "python",
    "java": "java",
    "c": "c",
    "cpp": "cpp",
    "cs": "csharp",
    "php": "php",
    "rb": "ruby",
    "go": "go",
    "rs": "rust",
    "html": "html",
    "css": "css",
    "scss": "scss",
    "json": "json",
    "xml": "xml",
    "md": "markdown",
    "sql": "sql",
    "sh": "shell",
    "yml": "yaml",
    "yaml": "yaml",
}


class FoldResult(NamedTuple):
    files: List[FileItem]
    lines: List[str]


def language_for(name: str) -> str:
    extension = name.rsplit(".", 1)[-1].lower() if "." in name else ""
    return LANGUAGE_BY_EXTENSION.get(extension, "plaintext")


def generate_id() -> str:
    return uuid.uuid4().hex


def upsert_file(files: Sequence[FileItem], name: str, content: str) -> List[FileItem]:
    for i, f in enumerate(files):
        if not f.is_directory and f.name == name:
            updated = list(files)
            updated[i] = f.model_copy(update={"content": content})
            return updated
    created = FileItem(id=generate_id(), name=name, content=content, language=language_for(name))
    return [*files, created]


def remove_file(files: Sequence[FileItem], name: str) -> List[FileItem]:
    return [f for f in files if f.name != name]


def apply_file_operation(files: Sequence[FileItem], op: FileOperation) -> Tuple[List[FileItem], Optional[str]]:
    if op.type == "create":
        return upsert_file(files, op.path, op.content or ""), f"Created {op.path}"
    if op.type == "write":
        return upsert_file(files, op.path, op.content or ""), f"Updated {op.path}"
    if op.type == "delete":
        return remove_file(files, op.path), f"Deleted {op.path}"
    # read: the model already sees file names in the prompt
    return list(files), None


def apply_file_operations(files: Sequence[FileItem], ops: Sequence[FileOperation]) -> FoldResult:
    current = list(files)
    lines: List[str] = []
    for op in ops:
        current, line = apply_file_operation(current, op)
        if line:
            lines.append(line)
    return FoldResult(current, lines)
