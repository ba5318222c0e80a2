"""Cargo.lock interpretation.

Cargo.lock is a TOML file with [[package]] sections. Each package has
``name``, ``version`` and an optional ``dependencies`` array whose entries
are either ``"<name> <version>"`` (older lock formats append
`` (<source>)``) or a bare ``"<name>"`` when the name is unique in the graph.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from common.errors import DependencyFormatError, LockfileFormatError, PackageNotFoundError
from versioning.models import PackageIdentifier
from .manifest_parser import read_toml

logger = logging.getLogger(__name__)

LockGraph = Sequence[Mapping[str, Any]]


def load_lockfile(lockfile_path: str) -> List[Dict[str, Any]]:
    """Read Cargo.lock and return its ``package`` array.

    Raises:
        LockfileFormatError: the file is missing, not valid TOML, or has no package array.
    """
    try:
        data = read_toml(lockfile_path)
    except FileNotFoundError as e:
        raise LockfileFormatError(f"{lockfile_path} is not available") from e
    except OSError as e:
        raise LockfileFormatError(f"Failed to read {lockfile_path}: {e}") from e
    except ValueError as e:
        raise LockfileFormatError(f"Failed to parse {lockfile_path} (invalid format): {e}") from e

    packages = data.get("package")
    if not isinstance(packages, list):
        raise LockfileFormatError(f"No [[package]] entries found in {lockfile_path}")
    return [pkg for pkg in packages if isinstance(pkg, dict)]


def find_package(lock_graph: LockGraph, name: str) -> Optional[Mapping[str, Any]]:
    """Return the first lock entry named ``name``, or None."""
    for pkg in lock_graph:
        if pkg.get("name") == name:
            return pkg
    return None


def _locked_version(lock_graph: LockGraph, name: str) -> str:
    pkg = find_package(lock_graph, name)
    if pkg is None:
        raise PackageNotFoundError(name)
    version = pkg.get("version")
    if not isinstance(version, str) or not version:
        raise DependencyFormatError(f"Lock entry '{name}' has no version")
    return version


def parse_dependency_reference(reference: Any, lock_graph: LockGraph) -> PackageIdentifier:
    """Turn one ``dependencies`` entry into an exact identifier.

    Raises:
        DependencyFormatError: the reference can't be split into name and version.
        PackageNotFoundError: the referenced package has no entry in the graph.
    """
    if not isinstance(reference, str):
        raise DependencyFormatError(f"Invalid dependency reference: {reference!r}")

    if " " not in reference:
        if not reference:
            raise DependencyFormatError("Empty dependency reference")
        return PackageIdentifier(name=reference, version=_locked_version(lock_graph, reference))

    name, rest = reference.split(" ", 1)
    # drop an optional " (<source>)" suffix
    version = rest.split(" ", 1)[0]
    if not name or not version:
        raise DependencyFormatError(
            f"Couldn't split dependency reference '{reference}' into name and version"
        )
    if find_package(lock_graph, name) is None:
        raise PackageNotFoundError(name)
    return PackageIdentifier(name=name, version=version)


def parse_package_dependencies(lock_graph: LockGraph, package_name: str) -> List[PackageIdentifier]:
    """Return the identifiers of every dependency of ``package_name``, in lock order.

    Raises:
        PackageNotFoundError: ``package_name`` (or a bare reference) is not in the graph.
        DependencyFormatError: a reference is malformed.
    """
    pkg = find_package(lock_graph, package_name)
    if pkg is None:
        raise PackageNotFoundError(package_name)

    references = pkg.get("dependencies") or []
    if not isinstance(references, list):
        raise DependencyFormatError(f"Lock entry '{package_name}' has a malformed dependencies list")

    identifiers = [parse_dependency_reference(ref, lock_graph) for ref in references]
    logger.debug("Lock graph lists %d dependencies for %s", len(identifiers), package_name)
    return identifiers
