# icoder/core/config.py
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

_DEFAULT_BASE_URLS = {
    "mistral": "https://api.mistral.ai",
    "ollama": "http://localhost:11434",
}


def _env_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _env_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_optional(name: str) -> Optional[str]:
    value = (os.getenv(name) or "").strip()
    return value or None


@dataclass(frozen=True)
class Settings:
    llm_provider: str = "mistral"
    llm_base_url: str = _DEFAULT_BASE_URLS["mistral"]
    llm_model: str = "codestral-latest"
    llm_api_key: str = ""
    llm_timeout: float = 180.0
    llm_max_tokens: int = 2048
    llm_temperature: float = 0.7

    preview_dir: str = "preview"
    workspace_dir: str = "workspace"
    command_timeout: float = 30.0
    public_base_url: str = "http://localhost:3001"

    agent_working_dir: Optional[str] = None
    backend_url: Optional[str] = None
    dev_server_url_template: Optional[str] = None

    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3001

    @property
    def preview_url(self) -> str:
        return f"{self.public_base_url.rstrip('/')}/preview/index.html"

    @staticmethod
    def from_env() -> "Settings":
        provider = os.getenv("LLM_PROVIDER", "mistral").strip().lower()
        if provider not in _DEFAULT_BASE_URLS:
            raise ValueError(f"LLM_PROVIDER must be one of {sorted(_DEFAULT_BASE_URLS)}, got {provider!r}")
        base = os.getenv("LLM_BASE_URL", _DEFAULT_BASE_URLS[provider]).rstrip("/")
        api_key = os.getenv("LLM_API_KEY") or os.getenv("MISTRAL_API_KEY") or ""
        origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
        return Settings(
            llm_provider=provider,
            llm_base_url=base,
            llm_model=os.getenv("LLM_MODEL", "codestral-latest"),
            llm_api_key=api_key,
            llm_timeout=_env_float("LLM_TIMEOUT", "180"),
            llm_max_tokens=_env_int("LLM_MAX_TOKENS", "2048"),
            llm_temperature=_env_float("LLM_TEMPERATURE", "0.7"),
            preview_dir=os.getenv("PREVIEW_DIR", "preview"),
            workspace_dir=os.getenv("WORKSPACE_DIR", "workspace"),
            command_timeout=_env_float("COMMAND_TIMEOUT", "30"),
            public_base_url=os.getenv("PUBLIC_BASE_URL", "http://localhost:3001").rstrip("/"),
            agent_working_dir=_env_optional("AGENT_WORKING_DIR"),
            backend_url=_env_optional("BACKEND_URL"),
            dev_server_url_template=_env_optional("DEV_SERVER_URL_TEMPLATE"),
            cors_origins=origins or ["*"],
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            host=os.getenv("HOST", "0.0.0.0"),
            port=_env_int("PORT", "3001"),
        )
