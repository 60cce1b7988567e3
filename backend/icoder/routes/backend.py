# icoder/routes/backend.py
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Request

from icoder.models.backend import (
    ExecuteRequest,
    SavePreviewRequest,
    SavePreviewResponse,
    SyncFilesRequest,
    SyncFilesResponse,
)

router = APIRouter()

ENDPOINTS = ["/api/execute", "/api/save-preview", "/api/sync-files"]


@router.get("/")
def index() -> Dict[str, Any]:
    return {"status": "Backend is running", "endpoints": ENDPOINTS}


@router.get("/health")
def health() -> Dict[str, str]:
    return {"status": "OK"}


@router.post("/api/execute")
def execute(request: Request, req: Optional[ExecuteRequest] = None) -> Dict[str, Any]:
    if req is None or not isinstance(req.command, str) or not req.command:
        return {"error": "No command provided"}
    working_dir = req.working_dir if isinstance(req.working_dir, str) else None
    result = request.app.state.executor.run(req.command, working_dir)
    return result.to_dict()


@router.post("/api/save-preview", response_model=SavePreviewResponse, response_model_exclude_none=True)
def save_preview(request: Request, req: Optional[SavePreviewRequest] = None):
    req = req or SavePreviewRequest()
    result = request.app.state.materializer.save(req.files, clear_first=req.clear_first)
    if not result.success:
        return SavePreviewResponse(success=False, error=result.error)
    return SavePreviewResponse(success=True, preview_url=result.preview_url)


@router.post("/api/sync-files", response_model=SyncFilesResponse, response_model_exclude_none=True)
def sync_files(request: Request, req: Optional[SyncFilesRequest] = None):
    req = req or SyncFilesRequest()
    result = request.app.state.materializer.sync(req.files)
    if not result.success:
        return SyncFilesResponse(success=False, error=result.error)
    return SyncFilesResponse(success=True, message="Files synced")
