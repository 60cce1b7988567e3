# icoder/main.py
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from icoder.core.config import Settings
from icoder.core.logging import configure_logging
from icoder.routes.agent import router as agent_router
from icoder.routes.backend import router as backend_router
from icoder.services.agent import AgentLoop, AgentSession, Gateway
from icoder.services.dev_server import detector_from_template
from icoder.services.executor import CommandExecutor
from icoder.services.gateway import AgentGateway
from icoder.services.llm_client import LLMClient
from icoder.services.materializer import WorkspaceMaterializer
from icoder.services.transport import LocalBackend, RemoteBackend


def create_app(settings: Settings | None = None, gateway: Gateway | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    materializer = WorkspaceMaterializer(settings.preview_dir, settings.workspace_dir, settings.preview_url)
    materializer.ensure_roots()
    executor = CommandExecutor(
        default_cwd=str(materializer.preview_root),
        timeout=settings.command_timeout,
        detector=detector_from_template(settings.dev_server_url_template),
    )

    if settings.backend_url:
        backend = RemoteBackend(settings.backend_url, timeout=settings.command_timeout + 30)
    else:
        backend = LocalBackend(materializer, executor)

    app = FastAPI(title="icoder")
    app.state.settings = settings
    app.state.materializer = materializer
    app.state.executor = executor
    app.state.agent = AgentLoop(
        gateway or AgentGateway(LLMClient(settings)),
        backend,
        working_dir=settings.agent_working_dir,
    )
    app.state.session = AgentSession()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        allow_credentials="*" not in settings.cors_origins,
    )
    app.include_router(backend_router)
    app.include_router(agent_router)
    app.mount("/preview", StaticFiles(directory=str(materializer.preview_root), check_dir=False), name="preview")
    return app


def run() -> None:
    import uvicorn

    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
