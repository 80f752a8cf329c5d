"""Bundled discovery documents, one directory per API and one file per version."""

from functools import lru_cache
from importlib import resources
from typing import Dict, List, Optional

from ..converter import load_description
from ..errors import DiscoveryError
from ..models import ApiDescription


def list_apis() -> Dict[str, List[str]]:
    """Return the bundled APIs and their versions, sorted by name."""
    root = resources.files(__name__)
    apis: Dict[str, List[str]] = {}
    for entry in sorted(root.iterdir(), key=lambda e: e.name):
        if not entry.is_dir() or entry.name.startswith("_"):
            continue
        versions = sorted(
            f.name[: -len(".yaml")] for f in entry.iterdir() if f.name.endswith(".yaml")
        )
        if versions:
            apis[entry.name] = versions
    return apis


def default_version(name: str) -> str:
    """Return the newest bundled version of an API."""
    versions = list_apis().get(name)
    if not versions:
        raise DiscoveryError(f"Unknown API: {name}")
    return versions[-1]


@lru_cache(maxsize=None)
def load_api(name: str, version: Optional[str] = None) -> ApiDescription:
    """Load the endpoint table of a bundled API.

    Args:
        name: API name, e.g. "tasks"
        version: API version, e.g. "v1". Defaults to the newest bundled version.

    Returns:
        The immutable API description

    Raises:
        DiscoveryError: If the API or version is not bundled
    """
    version = version or default_version(name)
    document = resources.files(__name__) / name / f"{version}.yaml"
    if not document.is_file():
        raise DiscoveryError(f"Unknown API version: {name} {version}")
    return load_description(document.read_text(), name=name)
