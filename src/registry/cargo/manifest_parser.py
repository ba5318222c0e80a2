"""Cargo.toml interpretation.

Extracts the declared dependency set, in declaration order, from a parsed
manifest. Decoding is delegated to tomllib (tomli before Python 3.11); this
module only interprets the resulting tree.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping

from common.errors import ManifestFormatError
from versioning.models import DependencySpec
from versioning.parser import strip_quotes

logger = logging.getLogger(__name__)


def read_toml(path: str) -> Dict[str, Any]:
    """Decode a TOML file into a dict.

    Raises:
        FileNotFoundError, OSError: the file can't be read.
        ValueError: the content is not valid TOML.
    """
    try:
        import tomllib as toml  # type: ignore
    except ImportError:
        import tomli as toml  # type: ignore

    with open(path, "rb") as f:
        return toml.load(f) or {}


def load_manifest(path: str) -> Dict[str, Any]:
    """Read and decode the project manifest.

    Raises:
        ManifestFormatError: the file is missing, unreadable or not valid TOML.
    """
    try:
        return read_toml(path)
    except FileNotFoundError as e:
        raise ManifestFormatError(f"{path} is not available") from e
    except OSError as e:
        raise ManifestFormatError(f"Can't read file {path}: {e}") from e
    except ValueError as e:
        raise ManifestFormatError(f"Failed to parse {path}: {e}") from e


def read_package_name(manifest: Mapping[str, Any]) -> str:
    """Return ``package.name`` from a parsed manifest."""
    package = manifest.get("package")
    name = package.get("name") if isinstance(package, Mapping) else None
    if not isinstance(name, str) or not name:
        raise ManifestFormatError("Failed to find package.name in Cargo.toml")
    return name


def _version_spec(name: str, value: Any) -> str:
    if isinstance(value, str):
        return strip_quotes(value)
    if isinstance(value, Mapping):
        version = value.get("version")
        if version is None:
            return ""
        if not isinstance(version, str):
            raise ManifestFormatError(
                f"Failed to format package-id for '{name}': version must be a string"
            )
        return strip_quotes(version)
    raise ManifestFormatError(
        f"Failed to format package-id for '{name}': unsupported entry of type {type(value).__name__}"
    )


def parse_dependencies(manifest: Mapping[str, Any]) -> List[DependencySpec]:
    """Return one (name, version_spec) pair per ``[dependencies]`` entry.

    A table entry without ``version`` (path or git dependency) yields an empty
    spec, which the resolver treats as unconstrained.

    Raises:
        ManifestFormatError: no ``dependencies`` table, or an entry of unknown shape.
    """
    dependencies = manifest.get("dependencies")
    if not isinstance(dependencies, Mapping):
        raise ManifestFormatError("Failed to find dependencies in Cargo.toml")

    specs = [(name, _version_spec(name, value)) for name, value in dependencies.items()]
    logger.debug("Found %d dependencies in manifest", len(specs))
    return specs
