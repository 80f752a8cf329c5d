"""
Typed parameter structs, one pydantic model per operation.

Required parameters become required fields, everything else is optional.
Extra fields are allowed so that callers can pass query extensions the
endpoint table does not document.
"""

from typing import Any, Dict, Mapping, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, ValidationError, create_model

from .errors import InvalidParameterError, MissingParameterError
from .models import EndpointDescriptor

TYPE_MAP = {
    "string": str,
    "integer": int,
    "number": float,
    "boolean": bool,
}

ParameterBag = Union[Mapping[str, Any], BaseModel]


class OperationParams(BaseModel):
    """Base class of all generated parameter structs."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)


def model_name(endpoint: EndpointDescriptor) -> str:
    """Build a class name from a method id, e.g. tasks.tasks.delete -> TasksTasksDeleteParams."""
    parts = endpoint.id.split(".")
    return "".join(part[:1].upper() + part[1:] for part in parts) + "Params"


def params_model(endpoint: EndpointDescriptor) -> Type[OperationParams]:
    """Create the parameter struct for an endpoint.

    Args:
        endpoint: The endpoint descriptor

    Returns:
        A pydantic model class with one field per documented parameter
    """
    fields: Dict[str, Any] = {}
    for name in endpoint.required_params:
        fields[name] = (TYPE_MAP.get(endpoint.param_types.get(name), str), ...)
    for name in endpoint.optional_params:
        fields[name] = (Optional[TYPE_MAP.get(endpoint.param_types.get(name), str)], None)
    if endpoint.accepts_body:
        fields["resource"] = (Optional[Any], None)

    model = create_model(model_name(endpoint), __base__=OperationParams, **fields)
    model.__doc__ = endpoint.description
    return model


def parse_params(model: Type[OperationParams], values: Mapping[str, Any]) -> OperationParams:
    """Validate values against a parameter struct.

    Raises:
        MissingParameterError: If required fields are absent, naming all of them
        InvalidParameterError: If a value cannot be converted to its declared type
    """
    try:
        return model(**values)
    except ValidationError as e:
        missing = [
            str(error["loc"][0]) for error in e.errors() if error["type"] == "missing"
        ]
        if missing:
            raise MissingParameterError(missing) from e
        raise InvalidParameterError(str(e)) from e


def to_bag(params: Optional[ParameterBag]) -> Dict[str, Any]:
    """Turn a mapping or parameter struct into a fresh, caller-independent dict."""
    if params is None:
        return {}
    if isinstance(params, BaseModel):
        return params.model_dump(exclude_none=True)
    return dict(params)
