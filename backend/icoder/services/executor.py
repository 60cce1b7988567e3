# icoder/services/executor.py
from __future__ import annotations

import logging
import os
import signal
import subprocess
from dataclasses import dataclass
from typing import Any, Dict, Optional

from icoder.services.dev_server import DevServerDetector, NoDevServerDetector

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
PLACEHOLDER_OUTPUT = "Command executed"


@dataclass
class CommandResult:
    output: str
    success: bool
    cwd: str
    server_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"output": self.output, "success": self.success, "cwd": self.cwd}
        if self.server_url:
            data["serverUrl"] = self.server_url
        return data


def _kill_group(proc: subprocess.Popen) -> None:
    try:
        os.killpg(proc.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass


def pick_output(stdout: str, stderr: str, error: Optional[str]) -> str:
    return stdout or stderr or error or PLACEHOLDER_OUTPUT


class CommandExecutor:
    """Runs one shell string per call with a hard wall-clock limit.

    The shell gets its own process group so a timeout kills everything it
    spawned, not just ``/bin/sh``.
    """

    def __init__(
        self,
        default_cwd: str,
        timeout: float = DEFAULT_TIMEOUT,
        detector: DevServerDetector | None = None,
    ):
        self.default_cwd = default_cwd
        self.timeout = timeout
        self.detector = detector or NoDevServerDetector()

    def run(self, command: str, working_dir: Optional[str] = None) -> CommandResult:
        cwd = working_dir or self.default_cwd
        to_run = self.detector.prepare(command)
        logger.info("Executing %r in %s", to_run, cwd)

        try:
            proc = subprocess.Popen(
                to_run,
                shell=True,
                cwd=cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                stdin=subprocess.DEVNULL,
                text=True,
                errors="replace",
                start_new_session=True,
            )
        except (OSError, ValueError) as ex:
            logger.warning("Could not start %r: %s", to_run, ex)
            return CommandResult(output=pick_output("", "", str(ex)), success=False, cwd=cwd)

        error: Optional[str] = None
        try:
            stdout, stderr = proc.communicate(timeout=self.timeout)
        except subprocess.TimeoutExpired:
            _kill_group(proc)
            stdout, stderr = proc.communicate()
            error = f"Command timed out after {self.timeout:g} seconds: {command}"
            logger.warning(error)
        else:
            if proc.returncode != 0:
                error = f"Command failed with exit code {proc.returncode}: {command}"

        success = error is None
        output = pick_output(stdout, stderr, error)
        logger.info("Command %r finished (success=%s, exit=%s)", command, success, proc.returncode)
        return CommandResult(
            output=output,
            success=success,
            cwd=cwd,
            server_url=self.detector.discover(command, output, success),
        )
