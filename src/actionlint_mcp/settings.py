"""Shared settings loaded from environment / .env file."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration for the actionlint MCP server.

    Values are read from environment variables and from a ``.env`` file
    in the working directory.  See ``.env.example`` for all options.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Shared
    log_level: str = "INFO"

    # MCP transport
    mcp_transport: Literal["stdio", "http", "sse"] = "stdio"
    mcp_server_host: str = "localhost"
    mcp_server_port: int = 9000

    # Linting engine
    actionlint_command: str = "actionlint"
    shellcheck_command: str | None = None  # unset disables shellcheck findings
    pyflakes_command: str | None = None  # unset disables pyflakes findings
    actionlint_config_file: str = ".github/actionlint.yaml"
    lint_timeout_seconds: float | None = 60.0

    # Directory checks
    default_workflow_directory: str = ".github/workflows"
    check_timeout_seconds: float | None = None
    max_workers: int | None = None  # None = ThreadPoolExecutor default
