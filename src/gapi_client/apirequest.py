"""
Request construction and dispatch shared by every API operation.

An operation call is a single linear pass: validate the parameter bag,
substitute path parameters into the URL template, split off the request
body, then hand the resulting request descriptor to the transport.
"""

import logging
from concurrent.futures import Future
from typing import Any, Callable, Dict, Iterable, Optional
from urllib.parse import quote

from .converter import PLACEHOLDER, placeholders
from .errors import MissingParameterError, TransportError
from .models import ClientOptions, EndpointDescriptor, RequestDescriptor
from .parameters import ParameterBag, to_bag

logger = logging.getLogger(__name__)

Callback = Callable[[Optional[BaseException], Any], None]


def check_required(params: Dict[str, Any], required: Iterable[str]) -> None:
    """Check that every required parameter is present.

    Args:
        params: The parameter bag
        required: Names of the required parameters

    Raises:
        MissingParameterError: Naming every absent parameter, in declared order
    """
    missing = [name for name in required if params.get(name) is None]
    if missing:
        raise MissingParameterError(missing)


def _render(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return [_render(item) for item in value]
    return value


def _escape(value: Any, reserved: bool) -> str:
    # {+name} is a reserved expansion and keeps slashes
    return quote(str(_render(value)), safe="/" if reserved else "")


def build_request(
    endpoint: EndpointDescriptor,
    params: Optional[ParameterBag] = None,
    options: Optional[ClientOptions] = None,
) -> RequestDescriptor:
    """Turn an endpoint descriptor and a parameter bag into a request descriptor.

    The caller's parameters are copied, never modified.

    Args:
        endpoint: The endpoint to call
        params: Mapping or parameter struct. The "resource" key carries the body.
        options: Client options, used for the base URL override

    Returns:
        The fully resolved request descriptor

    Raises:
        MissingParameterError: If any required parameter is absent, or a path parameter is empty
    """
    bag = to_bag(params)

    template_params = [name for name, _ in placeholders(endpoint.url_template)]
    required = list(endpoint.required_params)
    required += [name for name in template_params if name not in required]
    check_required(bag, required)

    # an empty path segment would silently address a different resource
    empty = [name for name in template_params if str(bag[name]) == ""]
    if empty:
        raise MissingParameterError(empty)

    def substitute(match) -> str:
        return _escape(bag[match.group(2)], bool(match.group(1)))

    url = PLACEHOLDER.sub(substitute, endpoint.url_template)
    for name in template_params:
        bag.pop(name, None)

    body = None
    if endpoint.accepts_body:
        body = bag.pop("resource", None)
    elif "resource" in bag:
        bag.pop("resource")
        logger.warning("%s does not take a request body, ignoring 'resource'", endpoint.id)

    if options is not None and options.root_url and url.startswith(endpoint.root_url):
        url = options.root_url.rstrip("/") + "/" + url[len(endpoint.root_url):]

    query = {
        name: _render(value) for name, value in sorted(bag.items()) if value is not None
    }

    logger.debug("Built %s: %s %s", endpoint.id, endpoint.http_method, url)
    return RequestDescriptor(method=endpoint.http_method, url=url, query=query, body=body)


class RequestHandle:
    """A pending request. Resolves to the decoded response or raises TransportError."""

    def __init__(self, request: RequestDescriptor, future: Future):
        self.request = request
        self._future = future

    def result(self, timeout: Optional[float] = None) -> Any:
        return self._future.result(timeout)

    def exception(self, timeout: Optional[float] = None) -> Optional[BaseException]:
        return self._future.exception(timeout)

    def done(self) -> bool:
        return self._future.done()

    def cancel(self) -> bool:
        """Cancel the request if the transport has not picked it up yet."""
        return self._future.cancel()

    def __repr__(self) -> str:
        state = "done" if self.done() else "pending"
        return f"<RequestHandle {self.request.method} {self.request.url} {state}>"


def _completion(callback: Callback) -> Callable[[Future], None]:
    def complete(future: Future) -> None:
        if future.cancelled():
            callback(TransportError("Request was cancelled"), None)
            return
        error = future.exception()
        if error is not None:
            callback(error, None)
        else:
            callback(None, future.result())

    return complete


def create_api_request(
    context,
    endpoint: EndpointDescriptor,
    params: Optional[ParameterBag] = None,
    callback: Optional[Callback] = None,
) -> RequestHandle:
    """Build a request and dispatch it through the context's transport.

    Parameter validation happens here, synchronously, before anything is
    sent. Transport errors are delivered through the handle or callback
    exactly as the transport raised them.

    Args:
        context: Object with ``options``, ``transport`` and ``executor`` attributes
        endpoint: The endpoint to call
        params: Mapping or parameter struct
        callback: Optional completion handler called with (error, response)

    Returns:
        A handle for the pending request
    """
    request = build_request(endpoint, params, context.options)

    logger.debug("Dispatching %s", endpoint.id)
    try:
        future = context.executor.submit(context.transport.dispatch, request, context.options)
    except RuntimeError:
        # executor already shut down
        future = Future()
        future.set_exception(TransportError(f"Client is closed, cannot dispatch {endpoint.id}"))

    if callback is not None:
        future.add_done_callback(_completion(callback))
    return RequestHandle(request, future)

