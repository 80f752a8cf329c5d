"""
Data models for API descriptions, requests and client configuration.
"""

from typing import Any, Dict, List, Literal, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]


class EndpointDescriptor(BaseModel):
    """Static metadata for one API operation."""

    model_config = ConfigDict(frozen=True)

    id: str
    resource: str
    name: str
    http_method: HttpMethod
    root_url: str
    url_template: str
    required_params: Tuple[str, ...] = ()
    optional_params: Tuple[str, ...] = ()
    path_params: Tuple[str, ...] = ()
    param_types: Dict[str, str] = Field(default_factory=dict)
    accepts_body: bool = False
    request_schema: Optional[str] = None
    response_schema: Optional[str] = None
    description: Optional[str] = None

    @property
    def all_params(self) -> Tuple[str, ...]:
        return self.required_params + self.optional_params


class ApiDescription(BaseModel):
    """One API version and the endpoints it exposes."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    title: Optional[str] = None
    description: Optional[str] = None
    root_url: str
    service_path: str
    endpoints: Dict[str, EndpointDescriptor] = Field(default_factory=dict)

    @property
    def base_url(self) -> str:
        return f"{self.root_url}{self.service_path}"

    def resources(self) -> Dict[str, List[EndpointDescriptor]]:
        """Group endpoints by the resource they belong to.

        Returns:
            Mapping of resource name to its endpoints, in declaration order
        """
        grouped: Dict[str, List[EndpointDescriptor]] = {}
        for endpoint in self.endpoints.values():
            grouped.setdefault(endpoint.resource, []).append(endpoint)
        return grouped


class RequestDescriptor(BaseModel):
    """A fully resolved request, ready for the transport."""

    model_config = ConfigDict(frozen=True)

    method: HttpMethod
    url: str
    query: Dict[str, Any] = Field(default_factory=dict)
    body: Optional[Any] = None


class ClientOptions(BaseModel):
    """Per-client configuration, passed through to the transport unchanged."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    access_token: Optional[str] = None
    api_key: Optional[str] = None
    root_url: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    timeout: Optional[float] = None
    user_agent: str = "gapi-client/0.1.0"
    max_workers: int = Field(default=4, ge=1)

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "ClientOptions":
        """Create client options from a YAML file.

        Args:
            yaml_path: Path to the YAML file

        Returns:
            An instance of ClientOptions
        """
        with open(yaml_path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)
