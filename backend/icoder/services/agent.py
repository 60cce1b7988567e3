# icoder/services/agent.py
"""The agent turn: prompt, complete, apply file ops, run commands, reply.

A turn walks ``Idle -> Prompting -> AwaitingCompletion -> ApplyingFileOps
-> ExecutingCommands -> Settled`` and back to ``Idle``. Only one turn per
session may be in flight; a second submission raises AgentBusyError.
"""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from enum import Enum
from typing import Iterator, List, Optional, Protocol

from icoder.core.prompt import AGENT_ERROR_MESSAGE, SYSTEM_PROMPT, WELCOME_MESSAGE
from icoder.models.agent import AgentResponse, CommandOperation
from icoder.models.editor import ChatMessage, FileItem
from icoder.services.editor_store import EditorStore
from icoder.services.file_ops import generate_id
from icoder.services.prompt_builder import build_user_prompt

logger = logging.getLogger(__name__)


class TurnState(str, Enum):
    IDLE = "idle"
    PROMPTING = "prompting"
    AWAITING_COMPLETION = "awaiting_completion"
    APPLYING_FILE_OPS = "applying_file_ops"
    EXECUTING_COMMANDS = "executing_commands"
    SETTLED = "settled"


class AgentBusyError(RuntimeError):
    pass


class Gateway(Protocol):
    def complete(self, system_prompt: str, user_prompt: str) -> AgentResponse: ...


class Backend(Protocol):
    def save_preview(self, files: List[FileItem], clear_first: bool = False) -> bool: ...

    def sync_files(self, files: List[FileItem]) -> bool: ...

    def execute(self, command: str, working_dir: Optional[str] = None) -> str: ...


class AgentSession:
    """Everything one chat owns: editor state, transcript and the flattened
    history string that is replayed to the model on every turn."""

    def __init__(self, store: EditorStore | None = None, greeting: Optional[str] = WELCOME_MESSAGE):
        self.store = store or EditorStore()
        self.transcript: List[ChatMessage] = []
        self.chat_history = ""
        self.turn_state = TurnState.IDLE
        self._lock = threading.Lock()
        if greeting:
            self.transcript.append(ChatMessage(id=generate_id(), content=greeting, is_user=False))

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def set_state(self, state: TurnState) -> None:
        logger.debug("Turn state %s -> %s", self.turn_state.value, state.value)
        self.turn_state = state

    @contextmanager
    def turn(self) -> Iterator["AgentSession"]:
        if not self._lock.acquire(blocking=False):
            raise AgentBusyError("An agent turn is already in progress")
        try:
            yield self
        finally:
            self.turn_state = TurnState.IDLE
            self._lock.release()

    def record(self, content: str, is_user: bool, history: bool = True) -> ChatMessage:
        msg = ChatMessage(id=generate_id(), content=content, is_user=is_user)
        self.transcript.append(msg)
        if history:
            self.chat_history += f"\n{'User' if is_user else 'AI'}: {content}"
        return msg


class AgentLoop:
    def __init__(
        self,
        gateway: Gateway,
        backend: Backend,
        working_dir: Optional[str] = None,
        system_prompt: str = SYSTEM_PROMPT,
    ):
        self.gateway = gateway
        self.backend = backend
        self.working_dir = working_dir
        self.system_prompt = system_prompt

    def handle_message(self, session: AgentSession, text: str) -> Optional[ChatMessage]:
        """Run one user turn. Returns the agent's reply, or None for blank input."""
        text = (text or "").strip()
        if not text:
            return None

        with session.turn():
            session.record(text, is_user=True)

            session.set_state(TurnState.PROMPTING)
            prompt = build_user_prompt(session.store.file_names(), session.chat_history, text)

            session.set_state(TurnState.AWAITING_COMPLETION)
            try:
                response = self.gateway.complete(self.system_prompt, prompt)
            except Exception:
                logger.exception("Agent turn failed while waiting for the model")
                return session.record(AGENT_ERROR_MESSAGE, is_user=False, history=False)

            try:
                lines = self._apply_file_operations(session, response)
                lines += self._execute_commands(session, response.command_operations)
            except Exception:
                logger.exception("Agent turn failed while applying the model response")
                return session.record(AGENT_ERROR_MESSAGE, is_user=False, history=False)

            session.set_state(TurnState.SETTLED)
            content = response.message
            if lines:
                content += "\n\n" + "\n".join(lines)
            logger.info(
                "Agent turn settled: %d file op(s), %d command(s)",
                len(response.file_operations),
                len(response.command_operations),
            )
            return session.record(content, is_user=False)

    def run_terminal_command(self, session: AgentSession, command: str) -> Optional[ChatMessage]:
        """Run a shell command typed by the user, outside any model turn."""
        command = (command or "").strip()
        if not command:
            return None
        with session.turn():
            session.set_state(TurnState.EXECUTING_COMMANDS)
            output = self._run_command(session, command)
            return session.record(f"Executed: {command}\n{output}", is_user=False, history=False)

    def save(self, session: AgentSession, clear_first: bool = False) -> bool:
        return self.backend.save_preview(session.store.files, clear_first=clear_first)

    def _apply_file_operations(self, session: AgentSession, response: AgentResponse) -> List[str]:
        # an explicit "fileOperations": [] still resets the preview
        if "file_operations" not in response.model_fields_set:
            return []
        ops = response.file_operations
        session.set_state(TurnState.APPLYING_FILE_OPS)
        lines = session.store.apply(ops)
        if not self.backend.save_preview(session.store.files, clear_first=True):
            logger.warning("Preview refresh failed after applying %d file op(s)", len(ops))
            lines.append("Preview update failed")
        return lines

    def _execute_commands(self, session: AgentSession, ops: List[CommandOperation]) -> List[str]:
        lines: List[str] = []
        if ops:
            session.set_state(TurnState.EXECUTING_COMMANDS)
        for op in ops:
            output = self._run_command(session, op.command)
            lines.append(f"Executed: {op.command}\n{output}")
        return lines

    def _run_command(self, session: AgentSession, command: str) -> str:
        if not self.backend.sync_files(session.store.files):
            logger.warning("Workspace sync failed before %r", command)
        return self.backend.execute(command, self.working_dir)
