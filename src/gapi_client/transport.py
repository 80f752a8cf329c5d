"""
HTTP transport collaborators.

A transport takes a resolved request descriptor and the client options and
returns the decoded response. It owns authentication headers and response
decoding. No retries are performed here.
"""

import logging
from typing import Any, Dict, Optional

import requests

from .errors import TransportError
from .models import ClientOptions, RequestDescriptor

logger = logging.getLogger(__name__)


class Transport:
    """Base class for transports."""

    def dispatch(self, request: RequestDescriptor, options: ClientOptions) -> Any:
        raise NotImplementedError

    def close(self) -> None:
        pass


class RequestsTransport(Transport):
    """Transport backed by a requests session."""

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()

    def _headers(self, options: ClientOptions) -> Dict[str, str]:
        headers = {"User-Agent": options.user_agent, "Accept": "application/json"}
        if options.access_token:
            headers["Authorization"] = f"Bearer {options.access_token}"
        headers.update(options.headers)
        return headers

    def dispatch(self, request: RequestDescriptor, options: ClientOptions) -> Any:
        """Send the request and decode the JSON response.

        Args:
            request: The resolved request
            options: Client options with credentials, headers and timeout

        Returns:
            The decoded JSON body, or None for an empty response

        Raises:
            TransportError: On network failure, non-2xx status or undecodable body
        """
        params = dict(request.query)
        if options.api_key:
            params["key"] = options.api_key

        kwargs: Dict[str, Any] = {
            "params": params,
            "headers": self._headers(options),
            "timeout": options.timeout,
        }
        if request.body is not None:
            kwargs["json"] = request.body

        try:
            response = self.session.request(request.method, request.url, **kwargs)
        except requests.RequestException as e:
            raise TransportError(f"Request error: {e!s}") from e

        logger.debug("%s %s -> %s", request.method, request.url, response.status_code)

        if not 200 <= response.status_code < 300:
            raise TransportError(
                f"HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
                content=response.text,
            )

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"Failed to decode response: {e}",
                status_code=response.status_code,
                content=response.text,
            ) from e

    def close(self) -> None:
        self.session.close()
