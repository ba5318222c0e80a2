"""Cargo registry package.

This package provides Cargo support:
- manifest_parser.py: Cargo.toml loading and [dependencies] interpretation
- lockfile_parser.py: Cargo.lock loading and per-package dependency lookup
- metadata.py: 'cargo update' and 'cargo metadata' queries
"""

from .manifest_parser import (  # noqa: F401
    load_manifest,
    parse_dependencies,
    read_package_name,
)
from .lockfile_parser import (  # noqa: F401
    find_package,
    load_lockfile,
    parse_package_dependencies,
)
from .metadata import fetch_metadata, parse_metadata, run_update  # noqa: F401

__all__ = [
    "load_manifest",
    "parse_dependencies",
    "read_package_name",
    "find_package",
    "load_lockfile",
    "parse_package_dependencies",
    "fetch_metadata",
    "parse_metadata",
    "run_update",
]
