# icoder/services/materializer.py
from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass
class MaterializeResult:
    success: bool
    written: int = 0
    preview_url: Optional[str] = None
    error: Optional[str] = None


def _fields(entry: Any) -> Tuple[Any, Any, bool]:
    if isinstance(entry, dict):
        return entry.get("name"), entry.get("content"), bool(entry.get("isDirectory"))
    return (
        getattr(entry, "name", None),
        getattr(entry, "content", None),
        bool(getattr(entry, "is_directory", False)),
    )


def iter_writable(files: Any) -> Iterator[Tuple[str, str]]:
    """Yield ``(name, content)`` for entries that can be written.

    Entries without a name, or whose content is not a string, are skipped,
    as are directory entries.
    """
    if not isinstance(files, (list, tuple)):
        return
    for entry in files:
        name, content, is_directory = _fields(entry)
        if is_directory or not name or not isinstance(name, str) or not isinstance(content, str):
            logger.debug("Skipping unwritable file entry: %.80r", entry)
            continue
        yield name, content


def resolve_under(root: Path, name: str) -> Optional[Path]:
    # leading slashes are dropped so absolute names land inside root
    target = (root / name.lstrip("/\\")).resolve()
    try:
        target.relative_to(root.resolve())
    except ValueError:
        return None
    if target == root.resolve():
        return None
    return target


def write_files(root: Path, files: Any) -> int:
    written = 0
    for name, content in iter_writable(files):
        target = resolve_under(root, name)
        if target is None:
            logger.warning("Skipping %r: path escapes %s", name, root)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        written += 1
    return written


class WorkspaceMaterializer:
    """Mirrors the in-memory file set onto the preview and workspace roots.

    The preview root may be wiped before a save; the workspace root is only
    ever overwritten, so build artefacts such as ``node_modules`` survive.
    """

    def __init__(self, preview_dir: str | Path, workspace_dir: str | Path, preview_url: Optional[str] = None):
        self.preview_root = Path(preview_dir)
        self.workspace_root = Path(workspace_dir)
        self.preview_url = preview_url

    def ensure_roots(self) -> None:
        self.preview_root.mkdir(parents=True, exist_ok=True)
        self.workspace_root.mkdir(parents=True, exist_ok=True)

    def save(self, files: Any, clear_first: bool = False) -> MaterializeResult:
        try:
            if clear_first and self.preview_root.exists():
                shutil.rmtree(self.preview_root)
            self.preview_root.mkdir(parents=True, exist_ok=True)
            written = write_files(self.preview_root, files)
        except (OSError, ValueError) as ex:
            logger.error("Saving preview files to %s failed: %s", self.preview_root, ex)
            return MaterializeResult(success=False, error=str(ex))

        logger.info("Saved %d file(s) to %s (clear_first=%s)", written, self.preview_root, clear_first)
        return MaterializeResult(success=True, written=written, preview_url=self.preview_url)

    def sync(self, files: Any) -> MaterializeResult:
        try:
            self.workspace_root.mkdir(parents=True, exist_ok=True)
            written = write_files(self.workspace_root, files)
        except (OSError, ValueError) as ex:
            logger.error("Syncing files to %s failed: %s", self.workspace_root, ex)
            return MaterializeResult(success=False, error=str(ex))

        logger.info("Synced %d file(s) to %s", written, self.workspace_root)
        return MaterializeResult(success=True, written=written)
