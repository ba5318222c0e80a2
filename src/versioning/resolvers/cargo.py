"""Cargo version resolver backed by 'cargo metadata'.

Cargo.toml accepts non-semver dependency versions ("1.0", "0.4", or none at
all for path/git dependencies), but ``cargo build -p <name>:<version>`` only
accepts an exact semantic version. The resolver bridges the gap with the
exact versions reported by 'cargo metadata'.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, Tuple

import semantic_version

from common.errors import VersionResolutionError
from common.logging_utils import extra_context, is_debug_enabled
from ..models import MetadataPackage, PackageIdentifier
from ..parser import normalize_version_spec

logger = logging.getLogger(__name__)

MetadataLoader = Callable[[], Sequence[MetadataPackage]]


def is_exact_version(spec: str) -> bool:
    """Return True when ``spec`` parses as a full semantic version."""
    try:
        semantic_version.Version(spec)
    except ValueError:
        return False
    return True


def _version_sort_key(pkg: MetadataPackage) -> Tuple[int, object]:
    try:
        return 0, semantic_version.Version(pkg.version)
    except ValueError:
        return 1, 0  # unparsable versions keep their relative order after valid ones


class CargoVersionResolver:
    """Resolve (name, version_spec) pairs into exact package identifiers.

    The metadata snapshot is loaded at most once, and only when a spec is not
    already an exact version.
    """

    def __init__(self, metadata_loader: Optional[MetadataLoader] = None):
        self._loader = metadata_loader
        self._packages: Optional[List[MetadataPackage]] = None

    @property
    def metadata_loaded(self) -> bool:
        return self._packages is not None

    def _metadata(self) -> List[MetadataPackage]:
        if self._packages is None:
            self._packages = list(self._loader()) if self._loader is not None else []
        return self._packages

    def candidates(self, name: str, prefix: str) -> List[MetadataPackage]:
        """Metadata entries named ``name`` whose version starts with ``prefix``, lowest first."""
        matches = [
            pkg for pkg in self._metadata()
            if pkg.name == name and pkg.version.startswith(prefix)
        ]
        return sorted(matches, key=_version_sort_key)

    def resolve(self, name: str, version_spec: str) -> PackageIdentifier:
        """Return the exact identifier for ``name`` at ``version_spec``.

        When several same-named packages match the prefix, the lowest version
        wins; the resolver does not try to work out which one was meant.

        Raises:
            VersionResolutionError: no metadata entry matches name and prefix.
        """
        spec = normalize_version_spec(version_spec)
        if is_exact_version(spec):
            return PackageIdentifier(name=name, version=spec)

        logger.info("    Getting package '%s' semver from 'cargo metadata'", name)
        matches = self.candidates(name, spec)
        if is_debug_enabled(logger):
            logger.debug(
                "Metadata candidates",
                extra=extra_context(
                    event="decision",
                    component="resolver",
                    action="resolve",
                    target=name,
                    outcome="match" if matches else "no_match",
                    count=len(matches),
                ),
            )
        if not matches:
            raise VersionResolutionError(name, version_spec)
        return PackageIdentifier(name=name, version=matches[0].version)

    def resolve_all(self, specs: Sequence[Tuple[str, str]]) -> List[PackageIdentifier]:
        """Resolve every spec in order, stopping at the first failure."""
        return [self.resolve(name, spec) for name, spec in specs]
