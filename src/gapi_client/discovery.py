"""
Service objects that expose an API's endpoint table as callable operations.

    >>> service = discover("tasks", "v1", {"access_token": token})
    >>> handle = service.tasks.delete({"tasklist": "abc", "task": "123"})
    >>> handle.result()
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from functools import cached_property
from typing import Any, Dict, Iterator, Mapping, Optional, Type, Union

from .apirequest import Callback, RequestHandle, build_request, create_api_request
from .apis import load_api
from .errors import UnknownOperationError
from .models import ApiDescription, ClientOptions, EndpointDescriptor, RequestDescriptor
from .parameters import OperationParams, ParameterBag, params_model, parse_params
from .transport import RequestsTransport, Transport

logger = logging.getLogger(__name__)

OptionsLike = Union[ClientOptions, Mapping[str, Any], None]


class Operation:
    """One callable API method bound to a service."""

    def __init__(self, service: "Service", endpoint: EndpointDescriptor):
        self._service = service
        self.descriptor = endpoint

    @cached_property
    def params_model(self) -> Type[OperationParams]:
        """The typed parameter struct of this operation."""
        return params_model(self.descriptor)

    def parse(self, **values: Any) -> OperationParams:
        """Build a typed parameter struct, validating types and required fields."""
        return parse_params(self.params_model, values)

    def build(self, params: Optional[ParameterBag] = None) -> RequestDescriptor:
        """Build the request without sending it."""
        return build_request(self.descriptor, params, self._service.options)

    def __call__(
        self, params: Optional[ParameterBag] = None, callback: Optional[Callback] = None
    ) -> RequestHandle:
        return create_api_request(self._service, self.descriptor, params, callback)

    def __repr__(self) -> str:
        return f"<Operation {self.descriptor.id} {self.descriptor.http_method}>"


class Resource:
    """Namespace of operations and nested resources."""

    def __init__(self, name: str):
        self._name = name
        self._members: Dict[str, Union["Resource", Operation]] = {}

    def _add(self, name: str, member: Union["Resource", Operation]) -> None:
        self._members[name] = member

    def __getattr__(self, name: str) -> Union["Resource", Operation]:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._members[name]
        except KeyError:
            raise UnknownOperationError(f"{self._name} has no method or resource {name!r}")

    def __getitem__(self, name: str) -> Union["Resource", Operation]:
        return self.__getattr__(name)

    def __dir__(self):
        return list(self._members)

    def __repr__(self) -> str:
        return f"<Resource {self._name} {sorted(self._members)}>"


class Service(Resource):
    """Client for one API version.

    Owns the read-only client options, the transport and the thread pool
    that requests are dispatched on.
    """

    def __init__(
        self,
        api: ApiDescription,
        options: OptionsLike = None,
        transport: Optional[Transport] = None,
    ):
        super().__init__(api.name)
        if options is None:
            options = ClientOptions()
        elif not isinstance(options, ClientOptions):
            options = ClientOptions(**options)

        self.api = api
        self.options = options
        self.transport = transport or RequestsTransport()
        self.executor = ThreadPoolExecutor(
            max_workers=options.max_workers, thread_name_prefix=f"gapi-{api.name}"
        )

        for endpoint in api.endpoints.values():
            self._register(endpoint)

        logger.debug("Created %s %s service with %d operations", api.name, api.version, len(api.endpoints))

    def _register(self, endpoint: EndpointDescriptor) -> None:
        node: Resource = self
        for part in endpoint.resource.split("."):
            child = node._members.get(part)
            if child is None:
                child = Resource(f"{node._name}.{part}")
                node._add(part, child)
            node = child
        node._add(endpoint.name, Operation(self, endpoint))

    def operation(self, name: str) -> Operation:
        """Look up an operation by "resource.method" or by its full method id."""
        prefix = f"{self.api.name}."
        if name.startswith(prefix) and name in self.api.endpoints:
            name = name[len(prefix):]

        member: Union[Resource, Operation] = self
        for part in name.split("."):
            if not isinstance(member, Resource):
                raise UnknownOperationError(f"{self.api.name} has no operation {name!r}")
            member = getattr(member, part)
        if not isinstance(member, Operation):
            raise UnknownOperationError(f"{self.api.name}.{name} is a resource, not an operation")
        return member

    def operations(self) -> Iterator[Operation]:
        for endpoint in self.api.endpoints.values():
            yield self.operation(endpoint.id)

    def close(self) -> None:
        self.executor.shutdown(wait=True)
        self.transport.close()

    def __enter__(self) -> "Service":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<Service {self.api.name} {self.api.version}>"


def discover(
    name: str,
    version: Optional[str] = None,
    options: OptionsLike = None,
    transport: Optional[Transport] = None,
) -> Service:
    """Create a service for a bundled API.

    Args:
        name: API name, e.g. "taskqueue"
        version: API version. Defaults to the newest bundled version.
        options: Client options or a mapping of them
        transport: Transport to dispatch with. Defaults to RequestsTransport.
    """
    return Service(load_api(name, version), options, transport)


def appstate(version: str = "v1", options: OptionsLike = None, transport: Optional[Transport] = None) -> Service:
    return discover("appstate", version, options, transport)


def doubleclicksearch(version: str = "v2", options: OptionsLike = None, transport: Optional[Transport] = None) -> Service:
    return discover("doubleclicksearch", version, options, transport)


def taskqueue(version: str = "v1beta2", options: OptionsLike = None, transport: Optional[Transport] = None) -> Service:
    return discover("taskqueue", version, options, transport)


def tasks(version: str = "v1", options: OptionsLike = None, transport: Optional[Transport] = None) -> Service:
    return discover("tasks", version, options, transport)
