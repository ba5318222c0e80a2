"""Data models for versioning and package resolution."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class PackageIdentifier:
    """Exact package selection, serialized as ``name:version`` for ``cargo build -p``."""
    name: str
    version: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Package identifier name must be non-empty")

    def __str__(self) -> str:
        return f"{self.name}:{self.version}"


@dataclass(frozen=True)
class MetadataPackage:
    """One resolved package as reported by 'cargo metadata'."""
    name: str
    version: str


# (name, version_spec) as declared in the manifest; "" means unconstrained.
DependencySpec = Tuple[str, str]
