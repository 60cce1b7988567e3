# tests/conftest.py
"""Shared fixtures: temporary preview/workspace roots, a scripted gateway
and an app wired to both."""
from __future__ import annotations

from typing import List, Tuple

import pytest
from fastapi.testclient import TestClient

from icoder.core.config import Settings
from icoder.main import create_app
from icoder.models.agent import AgentResponse
from icoder.services.agent import AgentLoop, AgentSession
from icoder.services.executor import CommandExecutor
from icoder.services.materializer import WorkspaceMaterializer
from icoder.services.transport import LocalBackend


class ScriptedGateway:
    """Returns queued AgentResponses and remembers every prompt it saw."""

    def __init__(self, *responses: AgentResponse):
        self.responses: List[AgentResponse] = list(responses)
        self.calls: List[Tuple[str, str]] = []

    def complete(self, system_prompt: str, user_prompt: str) -> AgentResponse:
        self.calls.append((system_prompt, user_prompt))
        if not self.responses:
            return AgentResponse(message="ok")
        return self.responses.pop(0)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        preview_dir=str(tmp_path / "preview"),
        workspace_dir=str(tmp_path / "workspace"),
        command_timeout=5,
        public_base_url="http://testserver",
        log_level="DEBUG",
    )


@pytest.fixture
def materializer(settings) -> WorkspaceMaterializer:
    m = WorkspaceMaterializer(settings.preview_dir, settings.workspace_dir, settings.preview_url)
    m.ensure_roots()
    return m


@pytest.fixture
def executor(materializer, settings) -> CommandExecutor:
    return CommandExecutor(default_cwd=str(materializer.preview_root), timeout=settings.command_timeout)


@pytest.fixture
def local_backend(materializer, executor) -> LocalBackend:
    return LocalBackend(materializer, executor)


@pytest.fixture
def gateway() -> ScriptedGateway:
    return ScriptedGateway()


@pytest.fixture
def session() -> AgentSession:
    return AgentSession()


@pytest.fixture
def loop(gateway, local_backend) -> AgentLoop:
    return AgentLoop(gateway, local_backend)


@pytest.fixture
def client(settings, gateway):
    app = create_app(settings, gateway=gateway)
    with TestClient(app) as c:
        yield c
