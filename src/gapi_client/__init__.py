"""Client for Google REST APIs described by discovery documents."""

from .apirequest import RequestHandle, build_request, check_required, create_api_request
from .apis import list_apis, load_api
from .converter import DiscoveryConverter
from .discovery import (
    Operation,
    Service,
    appstate,
    discover,
    doubleclicksearch,
    taskqueue,
    tasks,
)
from .errors import (
    DiscoveryError,
    GapiClientError,
    InvalidParameterError,
    MissingParameterError,
    TransportError,
    UnknownOperationError,
)
from .models import ApiDescription, ClientOptions, EndpointDescriptor, RequestDescriptor
from .transport import RequestsTransport, Transport

__version__ = "0.1.0"
__all__ = [
    "ApiDescription",
    "ClientOptions",
    "DiscoveryConverter",
    "DiscoveryError",
    "EndpointDescriptor",
    "GapiClientError",
    "InvalidParameterError",
    "MissingParameterError",
    "Operation",
    "RequestDescriptor",
    "RequestHandle",
    "RequestsTransport",
    "Service",
    "Transport",
    "TransportError",
    "UnknownOperationError",
    "appstate",
    "build_request",
    "check_required",
    "create_api_request",
    "discover",
    "doubleclicksearch",
    "list_apis",
    "load_api",
    "taskqueue",
    "tasks",
]
