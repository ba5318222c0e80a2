"""Error taxonomy for dependency resolution and build orchestration.

Every error is fatal to the run. Core modules raise these; only the CLI
layer translates them into an exit status.
"""

from __future__ import annotations

from typing import Optional


class DepBuildError(Exception):
    """Base class for all errors raised while resolving or building dependencies."""


class ManifestFormatError(DepBuildError):
    """Raised when the project manifest is missing, unreadable or malformed."""


class DependencyFormatError(DepBuildError):
    """Raised when a lock graph dependency reference cannot be split into name and version."""


class LockfileFormatError(DependencyFormatError):
    """Raised when the lock document is missing, unreadable or has no package array."""


class PackageNotFoundError(DepBuildError):
    """Raised when a package name has no entry in the lock graph."""

    def __init__(self, name: str, message: Optional[str] = None):
        self.name = name
        super().__init__(message or f"Couldn't find package '{name}' in the lock graph")


class VersionResolutionError(DepBuildError):
    """Raised when no metadata entry matches a package name and version prefix."""

    def __init__(self, name: str, spec: str, message: Optional[str] = None):
        self.name = name
        self.spec = spec
        super().__init__(
            message
            or f"Couldn't find package '{name}' matching version '{spec}' in 'cargo metadata' output"
        )


class MetadataFormatError(VersionResolutionError):
    """Raised when 'cargo metadata' output is not valid JSON or has an unexpected shape."""

    def __init__(self, message: str):
        super().__init__("", "", message)


class ProcessSpawnError(DepBuildError):
    """Raised when the external command could not be started at all."""

    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"Failed to execute process '{command}': {reason}")


class BuildFailedError(DepBuildError):
    """Raised when the external command exits with a non-zero status code."""

    def __init__(self, command: str, code: int):
        self.command = command
        self.code = code
        super().__init__(f"'{command}' exited with status code: {code}")


class ProcessTerminatedError(DepBuildError):
    """Raised when the external command was terminated by a signal."""

    def __init__(self, command: str, signal: Optional[int] = None):
        self.command = command
        self.signal = signal
        detail = f" {signal}" if signal is not None else ""
        super().__init__(f"'{command}' terminated by signal{detail}")
