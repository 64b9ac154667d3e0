"""Typed configuration models for fault logging and HTTP conveyance."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "rpc-errors" / "rpc-errors.yaml"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings(BaseModel):
    """Structured logging configuration."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = "INFO"
    json_output: bool = True
    service: str = "rpc-errors"
    environment: str = "dev"


class HttpSettings(BaseModel):
    """How faults are rendered onto and logged from HTTP exchanges.

    ``include_unsafe_parameters`` controls whether unsafe argument values are
    written into server error bodies. Safe values are always written.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    include_unsafe_parameters: bool = True
    client_error_log_level: LogLevel = "INFO"
    server_error_log_level: LogLevel = "ERROR"


class RpcErrorsSettings(BaseModel):
    """Root settings resolved from CLI/env/yaml/default sources."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)
