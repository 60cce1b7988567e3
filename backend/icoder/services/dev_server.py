# icoder/services/dev_server.py
from __future__ import annotations

import re
from typing import Optional, Protocol


class DevServerDetector(Protocol):
    def prepare(self, command: str) -> str: ...

    def discover(self, command: str, output: str, success: bool) -> Optional[str]: ...


class NoDevServerDetector:
    def prepare(self, command: str) -> str:
        return command

    def discover(self, command: str, output: str, success: bool) -> Optional[str]:
        return None


class PortSniffingDetector:
    """Binds ``npm run dev`` to a public host and guesses its port from output.

    ``url_template`` is formatted with ``port``, e.g.
    ``https://my-workspace-{port}.example.dev``.
    """

    trigger = "npm run dev"
    port_patterns = (re.compile(r"localhost:(\d+)"), re.compile(r"port\s+(\d+)"))

    def __init__(self, url_template: str, default_port: int = 5174):
        self.url_template = url_template
        self.default_port = default_port

    def prepare(self, command: str) -> str:
        if self.trigger in command and "--host" not in command:
            return f"{command} -- --host 0.0.0.0 --port {self.default_port}"
        return command

    def discover(self, command: str, output: str, success: bool) -> Optional[str]:
        if self.trigger not in command or not success:
            return None
        port = str(self.default_port)
        for pattern in self.port_patterns:
            match = pattern.search(output)
            if match:
                port = match.group(1)
                break
        return self.url_template.format(port=port)


def detector_from_template(url_template: Optional[str]) -> DevServerDetector:
    if url_template:
        return PortSniffingDetector(url_template)
    return NoDevServerDetector()
