from __future__ import annotations

import copy
from typing import Any

import jsonschema
from jsonschema.exceptions import best_match

from .base import ToolSpec
from .errors import ValidationError


def check_spec(spec: ToolSpec) -> None:
    """Reject tool specs whose parameter schema is not a valid JSON Schema object."""
    try:
        jsonschema.Draft202012Validator.check_schema(spec.parameters)
    except jsonschema.SchemaError as e:
        raise ValueError(f"Invalid parameter schema for tool {spec.name}: {e.message}") from e
    if spec.parameters.get("type", "object") != "object":
        raise ValueError(f"Parameter schema for tool {spec.name} must have type 'object'")


def _describe(err: jsonschema.ValidationError) -> str:
    where = ".".join(str(p) for p in err.absolute_path)
    return f"{where}: {err.message}" if where else err.message


def normalize_arguments(spec: ToolSpec, args: Any) -> dict[str, Any]:
    """Validate args against spec.parameters and return the normalized set.

    Required/typed properties are enforced, declared defaults are filled in for
    absent optional properties, and properties the schema does not declare are
    dropped.
    """
    if args is None:
        args = {}
    if not isinstance(args, dict):
        raise ValidationError(f"Invalid arguments for tool {spec.name}: expected an object, got {type(args).__name__}")

    validator = jsonschema.Draft202012Validator(spec.parameters)
    err = best_match(validator.iter_errors(args))
    if err is not None:
        raise ValidationError(f"Invalid arguments for tool {spec.name}: {_describe(err)}")

    props = spec.parameters.get("properties")
    if not isinstance(props, dict):
        return dict(args)

    out: dict[str, Any] = {}
    for key, prop in props.items():
        if key in args:
            out[key] = args[key]
        elif isinstance(prop, dict) and "default" in prop:
            out[key] = copy.deepcopy(prop["default"])
    return out
