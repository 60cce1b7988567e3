# icoder/services/transport.py
"""How the agent loop reaches the save/sync/execute backend.

``LocalBackend`` calls the services in-process; ``RemoteBackend`` posts to
the HTTP surface of another icoder server. Both turn failures into text
or a False flag rather than raising.
"""
from __future__ import annotations

import logging
from typing import List, Optional

import requests as http_requests

from icoder.models.editor import FileItem
from icoder.services.executor import PLACEHOLDER_OUTPUT, CommandExecutor
from icoder.services.materializer import WorkspaceMaterializer

logger = logging.getLogger(__name__)


def _wire_files(files: List[FileItem]) -> List[dict]:
    return [f.model_dump(by_alias=True) for f in files]


class LocalBackend:
    def __init__(self, materializer: WorkspaceMaterializer, executor: CommandExecutor):
        self.materializer = materializer
        self.executor = executor

    def save_preview(self, files: List[FileItem], clear_first: bool = False) -> bool:
        return self.materializer.save(files, clear_first=clear_first).success

    def sync_files(self, files: List[FileItem]) -> bool:
        return self.materializer.sync(files).success

    def execute(self, command: str, working_dir: Optional[str] = None) -> str:
        return self.executor.run(command, working_dir).output


class RemoteBackend:
    def __init__(self, base_url: str, timeout: float = 60.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _post(self, path: str, body: dict) -> http_requests.Response:
        return http_requests.post(f"{self.base_url}{path}", json=body, timeout=self.timeout)

    def save_preview(self, files: List[FileItem], clear_first: bool = False) -> bool:
        try:
            resp = self._post("/api/save-preview", {"files": _wire_files(files), "clearFirst": clear_first})
            resp.raise_for_status()
            ok = bool(resp.json().get("success"))
        except (http_requests.RequestException, ValueError) as ex:
            logger.error("Save error: %s", ex)
            return False
        if not ok:
            logger.error("Save rejected by backend: %s", resp.text)
        return ok

    def sync_files(self, files: List[FileItem]) -> bool:
        try:
            resp = self._post("/api/sync-files", {"files": _wire_files(files)})
            resp.raise_for_status()
            return bool(resp.json().get("success"))
        except (http_requests.RequestException, ValueError) as ex:
            logger.error("File sync error: %s", ex)
            return False

    def execute(self, command: str, working_dir: Optional[str] = None) -> str:
        body = {"command": command}
        if working_dir:
            body["workingDir"] = working_dir
        try:
            resp = self._post("/api/execute", body)
        except http_requests.RequestException as ex:
            return f"Error: Cannot connect to command server. {ex}"

        if not resp.ok:
            return f"Error: Server returned {resp.status_code}"
        try:
            result = resp.json()
        except ValueError:
            return f"Server response: {resp.text}"
        if not isinstance(result, dict):
            return f"Server response: {resp.text}"
        return result.get("output") or result.get("error") or PLACEHOLDER_OUTPUT
