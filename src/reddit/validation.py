"""
Argument binding and validation for Reddit API endpoints.

All checks run before any network call. Signature mistakes (too many
positional arguments, unknown keywords) raise TypeError like a regular
Python call would; values outside their documented domain raise
ValidationError.
"""

from typing import Any, Dict, Sequence

from src.api.exceptions import ValidationError

from .endpoints import Endpoint, Param

_TYPE_NAMES = {str: "string", int: "integer", bool: "boolean", list: "list of strings"}


def _matches_kind(value: Any, kind: type) -> bool:
    if kind is bool:
        return isinstance(value, bool)
    if kind is int:
        return isinstance(value, int) and not isinstance(value, bool)
    if kind is list:
        return isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value)
    return isinstance(value, kind)


def validate_param(endpoint_name: str, param: Param, value: Any) -> None:
    """
    Validate one argument value against its parameter schema.

    Raises:
        ValidationError: If the value is missing, of the wrong type or out
                         of range
    """
    where = f"{param.name} parameter in {endpoint_name}"

    if value is None:
        if param.required:
            raise ValidationError(f"{where} is required", param=param.name)
        return

    if not _matches_kind(value, param.kind):
        type_name = _TYPE_NAMES.get(param.kind, param.kind.__name__)
        raise ValidationError(f"{where} must be of type {type_name}", param=param.name)

    if param.choices is not None and value not in param.choices:
        allowed = ", ".join(str(c) for c in param.choices if c != "")
        raise ValidationError(f"{where} must be one of {allowed}", param=param.name)

    if param.max_length is not None and len(value) > param.max_length:
        raise ValidationError(
            f"{where} must not be longer than {param.max_length} characters",
            param=param.name,
        )

    if param.min_value is not None and value < param.min_value:
        raise ValidationError(f"{where} must be at least {param.min_value}", param=param.name)

    if param.max_value is not None and value > param.max_value:
        raise ValidationError(f"{where} must be at most {param.max_value}", param=param.name)


def bind_arguments(
    endpoint: Endpoint, args: Sequence[Any], kwargs: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Bind call arguments to an endpoint's parameters and validate them.

    Args:
        endpoint: Endpoint being called
        args: Positional arguments, in parameter order
        kwargs: Keyword arguments

    Returns:
        Values keyed by parameter name (defaults filled in)

    Raises:
        TypeError: On too many positional or unknown keyword arguments
        ValidationError: If a value is invalid
    """
    params = endpoint.params
    if len(args) > len(params):
        raise TypeError(
            f"{endpoint.name}() takes at most {len(params)} positional arguments "
            f"({len(args)} given)"
        )

    values = {param.name: value for param, value in zip(params, args)}

    names = {param.name for param in params}
    for key, value in kwargs.items():
        if key not in names:
            raise TypeError(f"{endpoint.name}() got an unexpected keyword argument {key!r}")
        if key in values:
            raise TypeError(f"{endpoint.name}() got multiple values for argument {key!r}")
        values[key] = value

    for param in params:
        values.setdefault(param.name, param.default)
        validate_param(endpoint.name, param, values[param.name])

    if endpoint.check:
        endpoint.check(values)

    for name in endpoint.path_params(values):
        value = values.get(name)
        if value is None or value == "":
            raise ValidationError(
                f"{name} parameter in {endpoint.name} must not be empty", param=name
            )

    return values
