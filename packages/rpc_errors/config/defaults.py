"""Built-in default configuration values.

These defaults are the final fallback in the configuration cascade:
CLI params > ENV vars > config file > built-in defaults.
"""

from __future__ import annotations

from typing import Any

BUILTIN_DEFAULTS: dict[str, Any] = {
    "logging": {
        "level": "INFO",
        "json_output": True,
        "service": "rpc-errors",
        "environment": "dev",
    },
    "http": {
        "include_unsafe_parameters": True,
        "client_error_log_level": "INFO",
        "server_error_log_level": "ERROR",
    },
}
