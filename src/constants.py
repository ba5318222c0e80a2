"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    SPAWN_ERROR = 127
    SIGNAL_BASE = 128


class DependencySources(Enum):
    """Where the list of dependencies to build is read from.

    Args:
        Enum (string): Dependency sources supported by the program.
    """

    MANIFEST = "manifest"
    LOCK = "lock"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    SUBCOMMAND = "build-deps"
    CARGO_BINARY = "cargo"
    ENV_CARGO = "CARGO"
    ENV_LOG_LEVEL = "DEPBUILD_LOG_LEVEL"
    MANIFEST_FILE = "Cargo.toml"
    LOCK_FILE = "Cargo.lock"
    CONFIG_SECTION = "build_deps"
    SUPPORTED_SOURCES = [
        DependencySources.MANIFEST.value,
        DependencySources.LOCK.value,
    ]
    METADATA_FORMAT_VERSION = "1"
    NIGHTLY_TOOLCHAIN = "+nightly"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
