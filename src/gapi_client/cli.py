"""
Command-line interface for the API client.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
import yaml

from .apis import list_apis, load_api
from .converter import DiscoveryConverter
from .discovery import Service
from .errors import GapiClientError
from .models import ClientOptions

app = typer.Typer(help="Call Google REST APIs from bundled discovery documents")


@app.callback()
def main_options(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_yaml(path: Path) -> Any:
    """Load a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        The loaded YAML content

    Raises:
        typer.Exit: If the file cannot be loaded
    """
    try:
        with open(path) as f:
            return yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        typer.echo(f"Error loading {path}: {str(e)}", err=True)
        raise typer.Exit(1)


def _parse_params(pairs: Optional[List[str]]) -> Dict[str, Any]:
    params: Dict[str, Any] = {}
    for pair in pairs or []:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            typer.echo(f"Invalid parameter {pair!r}, expected name=value", err=True)
            raise typer.Exit(1)
        params[name] = value
    return params


def _service(
    api: str,
    version: Optional[str],
    config: Optional[Path] = None,
    access_token: Optional[str] = None,
    api_key: Optional[str] = None,
    root_url: Optional[str] = None,
) -> Service:
    settings: Dict[str, Any] = {}
    if config is not None:
        settings.update(_load_yaml(config) or {})
    overrides = {"access_token": access_token, "api_key": api_key, "root_url": root_url}
    settings.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return Service(load_api(api, version), ClientOptions(**settings))
    except (GapiClientError, ValueError) as e:
        typer.echo(f"Error: {str(e)}", err=True)
        raise typer.Exit(1)


def _request_params(params: Optional[List[str]], resource: Optional[Path]) -> Dict[str, Any]:
    bag = _parse_params(params)
    if resource is not None:
        bag["resource"] = _load_yaml(resource)
    return bag


@app.command()
def apis() -> None:
    """List the bundled APIs and their versions."""
    for name, versions in list_apis().items():
        typer.echo(f"{name}: {', '.join(versions)}")


@app.command()
def operations(
    api: str = typer.Argument(..., help="API name, e.g. tasks"),
    version: Optional[str] = typer.Option(None, "--version", help="API version"),
) -> None:
    """List the operations of an API."""
    try:
        description = load_api(api, version)
    except GapiClientError as e:
        typer.echo(f"Error: {str(e)}", err=True)
        raise typer.Exit(1)

    for endpoint in description.endpoints.values():
        required = ", ".join(endpoint.required_params)
        typer.echo(f"{endpoint.id}\t{endpoint.http_method}\t{endpoint.url_template}\t[{required}]")


@app.command()
def build(
    api: str = typer.Argument(..., help="API name, e.g. tasks"),
    operation: str = typer.Argument(..., help="Operation, e.g. tasks.delete"),
    params: Optional[List[str]] = typer.Option(None, "--param", "-p", help="Parameter as name=value"),
    resource: Optional[Path] = typer.Option(None, "--resource", "-r", help="YAML or JSON file with the request body"),
    version: Optional[str] = typer.Option(None, "--version", help="API version"),
    root_url: Optional[str] = typer.Option(None, "--root-url", envvar="GAPI_ROOT_URL", help="Override the API host"),
) -> None:
    """Print the request an operation would send, without sending it."""
    bag = _request_params(params, resource)
    service = _service(api, version, root_url=root_url)
    try:
        request = service.operation(operation).build(bag)
    except GapiClientError as e:
        typer.echo(f"Error: {str(e)}", err=True)
        raise typer.Exit(1)
    finally:
        service.close()

    typer.echo(yaml.safe_dump(request.model_dump(mode="json"), sort_keys=False), nl=False)


@app.command()
def call(
    api: str = typer.Argument(..., help="API name, e.g. tasks"),
    operation: str = typer.Argument(..., help="Operation, e.g. tasks.delete"),
    params: Optional[List[str]] = typer.Option(None, "--param", "-p", help="Parameter as name=value"),
    resource: Optional[Path] = typer.Option(None, "--resource", "-r", help="YAML or JSON file with the request body"),
    version: Optional[str] = typer.Option(None, "--version", help="API version"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML file with client options"),
    access_token: Optional[str] = typer.Option(None, "--access-token", envvar="GAPI_ACCESS_TOKEN", help="OAuth 2.0 access token"),
    api_key: Optional[str] = typer.Option(None, "--api-key", envvar="GAPI_API_KEY", help="API key"),
    root_url: Optional[str] = typer.Option(None, "--root-url", envvar="GAPI_ROOT_URL", help="Override the API host"),
) -> None:
    """Call an operation and print the JSON response."""
    bag = _request_params(params, resource)
    service = _service(api, version, config, access_token, api_key, root_url)
    try:
        result = service.operation(operation)(bag).result()
    except GapiClientError as e:
        typer.echo(f"Error: {str(e)}", err=True)
        raise typer.Exit(1)
    finally:
        service.close()

    if result is not None:
        typer.echo(json.dumps(result, indent=2))


@app.command()
def convert(
    input_file: Path = typer.Argument(..., help="Path to a discovery document (YAML or JSON)"),
    output_file: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Path to save the endpoint table. If not provided, will use input filename with .endpoints.yaml suffix",
    ),
) -> None:
    """Convert a discovery document into an endpoint table."""
    if not input_file.exists():
        typer.echo(f"Input file not found: {input_file}", err=True)
        raise typer.Exit(1)

    if output_file is None:
        output_file = input_file.parent / f"{input_file.stem}.endpoints.yaml"

    try:
        converter = DiscoveryConverter.from_yaml(input_file)
        converter.save_table(output_file)
        typer.echo(f"Successfully converted {input_file} to {output_file}")
    except GapiClientError as e:
        typer.echo(f"Error: {str(e)}", err=True)
        raise typer.Exit(1)


def main():
    """Entry point for the CLI."""
    app()
