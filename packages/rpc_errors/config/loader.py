"""Settings loading with deterministic precedence.

The cascade is always:
1) CLI params
2) Environment variables
3) ``~/.config/rpc-errors/rpc-errors.yaml``
4) Built-in defaults

Environment variables use the ``RPC_ERRORS_`` prefix and ``__`` between nested
keys, e.g. ``RPC_ERRORS_HTTP__INCLUDE_UNSAFE_PARAMETERS=false`` sets
``http.include_unsafe_parameters``.
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from .defaults import BUILTIN_DEFAULTS
from .models import DEFAULT_CONFIG_PATH, RpcErrorsSettings

ENV_PREFIX = "RPC_ERRORS_"
_ENV_NESTING = "__"


def load_settings(
    *,
    cli_params: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
    config_path: str | Path | None = None,
) -> RpcErrorsSettings:
    """Resolve the cascade and validate it into ``RpcErrorsSettings``.

    Raises ``ValueError`` naming the offending key when a value is invalid.
    """
    merged = load_config(cli_params=cli_params, environ=environ, config_path=config_path)
    try:
        return RpcErrorsSettings.model_validate(merged)
    except ValidationError as exc:
        first_error = exc.errors()[0]
        location = ".".join(str(part) for part in first_error.get("loc", ()))
        raise ValueError(f"invalid setting {location}: {first_error.get('msg')}") from None


def load_config(
    *,
    cli_params: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
    config_path: str | Path | None = None,
) -> dict[str, Any]:
    """Return the merged raw configuration mapping."""
    merged = _plain(BUILTIN_DEFAULTS)
    for layer in (
        _load_file_config(config_path),
        _load_env_config(os.environ if environ is None else environ),
        _plain(cli_params or {}),
    ):
        merged = _merge(merged, layer)
    return merged


def _load_file_config(path: str | Path | None) -> dict[str, Any]:
    """Load YAML config from disk; an absent file contributes nothing."""
    resolved = DEFAULT_CONFIG_PATH if path is None else Path(path)
    if not resolved.exists():
        return {}
    with resolved.open("r", encoding="utf-8") as handle:
        parsed = yaml.safe_load(handle)
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Config file must contain a top-level mapping: {resolved}")
    return _plain(parsed)


def _load_env_config(environ: Mapping[str, str]) -> dict[str, Any]:
    """Map prefixed environment variables into a nested mapping."""
    output: dict[str, Any] = {}
    for key, raw_value in environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        path = [
            segment.strip().lower()
            for segment in key[len(ENV_PREFIX) :].split(_ENV_NESTING)
            if segment.strip()
        ]
        if not path:
            continue
        cursor = output
        for segment in path[:-1]:
            child = cursor.get(segment)
            if not isinstance(child, dict):
                child = cursor[segment] = {}
            cursor = child
        cursor[path[-1]] = _coerce_scalar(raw_value)
    return output


def _merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge mappings, with ``override`` taking precedence."""
    result = _plain(base)
    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            result[key] = _merge(current, value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _coerce_scalar(raw: str) -> Any:
    """Coerce env strings into bool/None/JSON/number when unambiguous."""
    value = raw.strip()
    lowered = value.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    if lowered in {"null", "none"}:
        return None
    if value[:1] in {"{", "["}:
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return raw
    for convert in (int, float):
        try:
            return convert(value)
        except ValueError:
            continue
    return raw


def _plain(value: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-copy a mapping into plain ``dict`` values with string keys."""
    return {
        str(key): _plain(item) if isinstance(item, Mapping) else copy.deepcopy(item)
        for key, item in value.items()
    }
