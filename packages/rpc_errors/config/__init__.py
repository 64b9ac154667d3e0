"""Settings for fault logging and HTTP conveyance."""

from .loader import ENV_PREFIX, load_config, load_settings
from .models import (
    DEFAULT_CONFIG_PATH,
    HttpSettings,
    LoggingSettings,
    RpcErrorsSettings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ENV_PREFIX",
    "HttpSettings",
    "LoggingSettings",
    "RpcErrorsSettings",
    "load_config",
    "load_settings",
]
