"""
Conversion of discovery documents into endpoint tables.
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from .errors import DiscoveryError
from .models import ApiDescription, EndpointDescriptor

PLACEHOLDER = re.compile(r"\{(\+?)([^}]+)\}")
HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")


def placeholders(template: str) -> List[Tuple[str, bool]]:
    """Return the placeholders of a URL template as (name, reserved) pairs."""
    return [(name, bool(plus)) for plus, name in PLACEHOLDER.findall(template)]


class DiscoveryConverter:
    def __init__(self, document: Union[str, dict, Path]):
        """
        Initialize with a discovery document as string, dict, or Path object.

        Args:
            document: Discovery document as string (JSON/YAML), dictionary, or Path object

        Raises:
            DiscoveryError: If the document is invalid
        """
        self.document = self._load_document(document)
        self.validate_document()
        self.common_parameters = self.document.get("parameters", {})

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "DiscoveryConverter":
        """Create a converter instance from a YAML or JSON file."""
        return cls(Path(yaml_path))

    def _load_document(self, document: Union[str, dict, Path]) -> dict:
        """
        Load and parse the discovery document.

        Raises:
            DiscoveryError: If the document cannot be parsed
        """
        if isinstance(document, dict):
            return document

        if isinstance(document, Path):
            try:
                content = document.read_text()
            except OSError as e:
                raise DiscoveryError(f"Failed to read discovery document: {e}")
        else:
            content = document

        try:
            # Try JSON first
            return json.loads(content)
        except json.JSONDecodeError:
            try:
                return yaml.safe_load(content)
            except yaml.YAMLError as e:
                raise DiscoveryError(f"Failed to parse discovery document: {e}")

    def validate_document(self) -> bool:
        """
        Validate the top-level shape of the discovery document.

        Raises:
            DiscoveryError: If the document is invalid
        """
        if not isinstance(self.document, dict):
            raise DiscoveryError("Discovery document must be a dictionary")

        for field in ["name", "version", "rootUrl", "servicePath", "resources"]:
            if field not in self.document:
                raise DiscoveryError(f"Missing required field: {field}")

        if not isinstance(self.document["resources"], dict):
            raise DiscoveryError("Field 'resources' must be a mapping")

        return True

    def _convert_method(
        self, resource: str, name: str, method: dict, root_url: str, base_url: str
    ) -> EndpointDescriptor:
        """Convert a single discovery method into an endpoint descriptor."""
        api_name = self.document["name"]
        method_id = method.get("id", f"{api_name}.{resource}.{name}")

        http_method = str(method.get("httpMethod", "")).upper()
        if http_method not in HTTP_METHODS:
            raise DiscoveryError(f"{method_id}: unsupported HTTP method {http_method!r}")
        if "path" not in method:
            raise DiscoveryError(f"{method_id}: missing path")

        parameters: Dict[str, Any] = method.get("parameters", {})
        path_params = tuple(n for n, p in parameters.items() if p.get("location") == "path")

        for placeholder, _ in placeholders(method["path"]):
            if placeholder not in path_params:
                raise DiscoveryError(
                    f"{method_id}: placeholder {{{placeholder}}} is not a path parameter"
                )

        # parameterOrder fixes the order in which missing parameters are reported
        required = [p for p in method.get("parameterOrder", []) if p in parameters]
        required += [
            n for n, p in parameters.items() if p.get("required") and n not in required
        ]
        required += [p for p in path_params if p not in required]

        optional = [n for n in parameters if n not in required]
        optional += [
            n for n in self.common_parameters if n not in parameters and n not in optional
        ]

        param_types = {
            n: p.get("type", "string") for n, p in self.common_parameters.items()
        }
        param_types.update({n: p.get("type", "string") for n, p in parameters.items()})

        request = method.get("request") or {}
        response = method.get("response") or {}

        return EndpointDescriptor(
            id=method_id,
            resource=resource,
            name=name,
            http_method=http_method,
            root_url=root_url,
            url_template=f"{base_url}{method['path']}",
            required_params=tuple(required),
            optional_params=tuple(optional),
            path_params=path_params,
            param_types=param_types,
            accepts_body="request" in method,
            request_schema=request.get("$ref"),
            response_schema=response.get("$ref"),
            description=method.get("description"),
        )

    def _convert_resources(
        self, resources: dict, root_url: str, base_url: str, prefix: str = ""
    ) -> List[EndpointDescriptor]:
        endpoints = []
        for resource_name, resource in resources.items():
            qualified = f"{prefix}{resource_name}"
            for method_name, method in resource.get("methods", {}).items():
                endpoints.append(
                    self._convert_method(qualified, method_name, method, root_url, base_url)
                )
            if "resources" in resource:
                endpoints.extend(
                    self._convert_resources(
                        resource["resources"], root_url, base_url, f"{qualified}."
                    )
                )
        return endpoints

    def convert(self) -> ApiDescription:
        """
        Convert the discovery document into an API description.

        Returns:
            ApiDescription: The API and all of its endpoint descriptors
        """
        root_url = self.document["rootUrl"]
        service_path = self.document["servicePath"]
        endpoints = self._convert_resources(
            self.document["resources"], root_url, f"{root_url}{service_path}"
        )

        seen = set()
        for endpoint in endpoints:
            if endpoint.id in seen:
                raise DiscoveryError(f"Duplicate method id: {endpoint.id}")
            seen.add(endpoint.id)

        return ApiDescription(
            name=self.document["name"],
            version=self.document["version"],
            title=self.document.get("title"),
            description=self.document.get("description"),
            root_url=root_url,
            service_path=service_path,
            endpoints={endpoint.id: endpoint for endpoint in endpoints},
        )

    def save_table(self, output_path: Union[str, Path]) -> None:
        """Save the converted endpoint table to a YAML file.

        Args:
            output_path: Path where to save the endpoint table
        """
        api = self.convert()
        table = api.model_dump(mode="json", exclude={"endpoints"})
        table["endpoints"] = [
            endpoint.model_dump(mode="json") for endpoint in api.endpoints.values()
        ]

        with open(output_path, "w") as f:
            yaml.safe_dump(table, f, sort_keys=False)


def load_description(document: Union[str, dict, Path], name: Optional[str] = None) -> ApiDescription:
    """Convert a discovery document, optionally checking the API name it declares."""
    api = DiscoveryConverter(document).convert()
    if name is not None and api.name != name:
        raise DiscoveryError(f"Expected API {name!r}, document describes {api.name!r}")
    return api
