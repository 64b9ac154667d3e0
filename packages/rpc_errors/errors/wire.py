"""Wire representations of faults exchanged between processes.

``SerializableError`` is the JSON body a service returns for a failed call::

    {"errorCode": "...", "errorName": "...", "errorInstanceId": "...",
     "parameters": {"key": "value"}}

Older producers sent ``exceptionClass`` instead of ``errorCode`` and
``message`` instead of ``errorName``. Those fields are accepted on read and
never written.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic_core import PydanticCustomError

from .args import render_value
from .service import CheckedServiceException, Fault, ServiceException

_MISSING_FIELD_ERROR = "missing_field"

# (field name, wire alias, legacy alias) triples resolved before validation.
_LEGACY_ALIASES = (
    ("error_code", "errorCode", "exceptionClass"),
    ("error_name", "errorName", "message"),
)


class MissingFieldError(ValueError):
    """Wire error payload lacks both a field and its legacy alias."""


class SerializableErrorParseError(ValueError):
    """Wire error payload is not a valid ``SerializableError``."""


class SerializableError(BaseModel):
    """Serializable cross-process representation of a ``ServiceException``."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    error_code: str = Field(alias="errorCode")
    error_name: str = Field(alias="errorName")
    error_instance_id: str = Field(default="", alias="errorInstanceId")
    parameters: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _resolve_legacy_fields(cls, value: object) -> object:
        """Derive missing code/name from legacy fields and drop the legacy keys."""
        if not isinstance(value, Mapping):
            return value
        data = dict(value)
        for field_name, alias, legacy in _LEGACY_ALIASES:
            legacy_value = data.pop(legacy, None)
            if field_name in data or alias in data:
                continue
            if legacy_value is None:
                raise PydanticCustomError(
                    _MISSING_FIELD_ERROR,
                    "Expected either '{alias}' or '{legacy}' to be set",
                    {"alias": alias, "legacy": legacy},
                )
            data[alias] = legacy_value
        return data

    @field_validator("parameters", mode="before")
    @classmethod
    def _coerce_parameter_values(cls, value: object) -> object:
        """Coerce JSON scalar parameter values to strings."""
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            return value
        coerced: dict[str, str] = {}
        for key, item in value.items():
            if item is None:
                raise ValueError(f"parameters value for key: {key}")
            if isinstance(item, (Mapping, list, tuple)):
                raise ValueError(
                    f"parameters value for key: {key} must be a JSON scalar"
                )
            coerced[str(key)] = item if isinstance(item, str) else render_value(item)
        return coerced

    @classmethod
    def for_exception(
        cls, exception: Fault, *, include_unsafe: bool = True
    ) -> SerializableError:
        """Project a fault onto the wire; the last argument wins on name collisions.

        With ``include_unsafe=False`` only safe arguments become parameters.
        """
        arguments = exception.arguments if include_unsafe else exception.safe_arguments
        parameters: dict[str, str] = {}
        for arg in arguments:
            parameters[arg.name] = render_value(arg.value)
        return cls(
            error_code=exception.error_type.code.value,
            error_name=exception.error_type.name,
            error_instance_id=exception.error_instance_id,
            parameters=parameters,
        )

    @classmethod
    def parse(cls, data: str | bytes | Mapping[str, Any]) -> SerializableError:
        """Parse a JSON document or decoded mapping.

        Raises ``MissingFieldError`` when a required field and its legacy alias
        are both absent, and ``SerializableErrorParseError`` for anything else
        that does not describe a serializable error.
        """
        try:
            if isinstance(data, Mapping):
                return cls.model_validate(data)
            return cls.model_validate_json(data)
        except ValidationError as exc:
            raise _map_validation_error(exc) from None

    def to_json(self) -> str:
        """Serialize with the camelCase wire field names."""
        return self.model_dump_json(by_alias=True)

    def to_wire(self) -> dict[str, Any]:
        """Return the wire mapping with camelCase field names."""
        return self.model_dump(mode="json", by_alias=True)


class SerializableConjureErrorParameter(BaseModel):
    """One serialized parameter that keeps its safety classification."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str
    serialized_value: str = Field(alias="serializedValue")
    is_safe_for_logging: bool = Field(alias="isSafeForLogging")


class SerializableConjureDefinedError(BaseModel):
    """Wire form of an API-defined error with ordered, classified parameters."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    error_code: str = Field(alias="errorCode")
    error_name: str = Field(alias="errorName")
    error_instance_id: str = Field(default="", alias="errorInstanceId")
    parameters: tuple[SerializableConjureErrorParameter, ...] = ()

    @classmethod
    def for_exception(
        cls, exception: ServiceException | CheckedServiceException
    ) -> SerializableConjureDefinedError:
        """Project a fault keeping argument order, duplicates and safety."""
        return cls(
            error_code=exception.error_type.code.value,
            error_name=exception.error_type.name,
            error_instance_id=exception.error_instance_id,
            parameters=tuple(
                SerializableConjureErrorParameter(
                    name=arg.name,
                    serialized_value=render_value(arg.value),
                    is_safe_for_logging=arg.safe,
                )
                for arg in exception.arguments
            ),
        )

    def to_json(self) -> str:
        """Serialize with the camelCase wire field names."""
        return self.model_dump_json(by_alias=True)


class ConjureError(BaseModel):
    """Wire form of a checked fault whose parameters keep their raw values."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    error_code: str = Field(alias="errorCode")
    error_name: str = Field(alias="errorName")
    error_instance_id: str = Field(default="", alias="errorInstanceId")
    parameters: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def for_exception(cls, exception: CheckedServiceException) -> ConjureError:
        """Project a checked fault; the last argument wins on name collisions."""
        return cls(
            error_code=exception.error_type.code.value,
            error_name=exception.error_type.name,
            error_instance_id=exception.error_instance_id,
            parameters={arg.name: arg.value for arg in exception.arguments},
        )


def _map_validation_error(error: ValidationError) -> ValueError:
    """Map pydantic failures to the stable public wire error types."""
    first_error = error.errors()[0]
    message = str(first_error.get("msg", "invalid serializable error"))
    if first_error.get("type") == _MISSING_FIELD_ERROR:
        return MissingFieldError(message)
    location = ".".join(str(part) for part in first_error.get("loc", ()))
    if location:
        message = f"{location}: {message}"
    return SerializableErrorParseError(message)
