# icoder/routes/agent.py
from __future__ import annotations

from typing import Dict, Optional

from fastapi import APIRouter, Request

from icoder.models.backend import (
    AgentChatRequest,
    AgentReply,
    AgentSaveRequest,
    AgentSessionView,
    AgentTerminalRequest,
)
from icoder.models.editor import ChatMessage
from icoder.services.agent import AgentBusyError, AgentSession

router = APIRouter(prefix="/api/agent")


def _reply(session: AgentSession, msg: Optional[ChatMessage], empty_error: str) -> AgentReply:
    if msg is None:
        return AgentReply(success=False, error=empty_error, files=session.store.files)
    return AgentReply(success=True, reply=msg.content, files=session.store.files)


@router.post("/chat", response_model=AgentReply, response_model_exclude_none=True)
def agent_chat(req: AgentChatRequest, request: Request):
    session: AgentSession = request.app.state.session
    try:
        msg = request.app.state.agent.handle_message(session, req.message)
    except AgentBusyError as ex:
        return AgentReply(success=False, error=str(ex), files=session.store.files)
    return _reply(session, msg, "No message provided")


@router.post("/terminal", response_model=AgentReply, response_model_exclude_none=True)
def agent_terminal(req: AgentTerminalRequest, request: Request):
    session: AgentSession = request.app.state.session
    try:
        msg = request.app.state.agent.run_terminal_command(session, req.command)
    except AgentBusyError as ex:
        return AgentReply(success=False, error=str(ex), files=session.store.files)
    return _reply(session, msg, "No command provided")


@router.post("/save")
def agent_save(request: Request, req: Optional[AgentSaveRequest] = None) -> Dict[str, bool]:
    req = req or AgentSaveRequest()
    ok = request.app.state.agent.save(request.app.state.session, clear_first=req.clear_first)
    return {"success": ok}


@router.get("/session", response_model=AgentSessionView)
def agent_session(request: Request):
    session: AgentSession = request.app.state.session
    return AgentSessionView(state=session.store.state, messages=session.transcript, busy=session.busy)


@router.post("/reset")
def agent_reset(request: Request) -> Dict[str, bool]:
    request.app.state.session = AgentSession()
    return {"success": True}
