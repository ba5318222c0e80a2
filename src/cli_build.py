"""CLI entry point for the build-deps run.

Resolves the project's dependencies into exact ``name:version`` identifiers
and builds each one with cargo, strictly in sequence, stopping at the first
failure.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence

from build_commands import BuildFlags, build_command
from cli_config import BuildSettings, load_config, resolve_settings
from common.errors import (
    BuildFailedError,
    DepBuildError,
    ProcessSpawnError,
    ProcessTerminatedError,
)
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import Constants, DependencySources, ExitCodes
from executor import Environment, capture_command_output, execute_command, snapshot_environment
from registry.cargo.lockfile_parser import load_lockfile, parse_package_dependencies
from registry.cargo.manifest_parser import load_manifest, parse_dependencies, read_package_name
from registry.cargo.metadata import fetch_metadata, run_update
from versioning.models import PackageIdentifier
from versioning.resolvers.cargo import CargoVersionResolver

logger = logging.getLogger(__name__)

Executor = Callable[[Sequence[str], Environment], None]
CaptureExecutor = Callable[[Sequence[str], Environment], str]


class BuildState(Enum):
    """Lifecycle of one dependency build."""
    PENDING = "pending"
    BUILDING = "building"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class BuildStep:
    identifier: PackageIdentifier
    state: BuildState = BuildState.PENDING


class BuildOrchestrator:
    """Builds resolved identifiers one at a time; the first failure aborts the rest."""

    def __init__(
        self,
        flags: BuildFlags,
        env: Environment,
        cargo: str = Constants.CARGO_BINARY,
        executor: Executor = execute_command,
    ):
        self.flags = flags
        self.env = env
        self.cargo = cargo
        self._execute = executor
        self.steps: List[BuildStep] = []

    def build_all(self, identifiers: Sequence[PackageIdentifier]) -> List[BuildStep]:
        """Build every identifier in order.

        Raises:
            DepBuildError: the first build failure; later steps stay PENDING.
        """
        self.steps = [BuildStep(identifier) for identifier in identifiers]
        logger.info("    Start building packages")
        for step in self.steps:
            self._build_one(step)
        logger.info("    Finished")
        return self.steps

    def _build_one(self, step: BuildStep) -> None:
        step.state = BuildState.BUILDING
        logger.info("    Building package: %s", step.identifier)
        cmd = build_command(self.cargo, step.identifier, self.flags)
        if is_debug_enabled(logger):
            logger.debug(
                "Build invocation",
                extra=extra_context(
                    event="process_start",
                    component="orchestrator",
                    action="build",
                    target=" ".join(cmd),
                ),
            )
        try:
            self._execute(cmd, self.env)
        except DepBuildError:
            step.state = BuildState.FAILED
            logger.error("    Failed to build package: %s", step.identifier)
            raise
        step.state = BuildState.SUCCEEDED


def resolve_identifiers(
    settings: BuildSettings,
    env: Environment,
    capture: CaptureExecutor = capture_command_output,
) -> List[PackageIdentifier]:
    """Read the dependency list from the manifest (or lock graph) and pin exact versions."""
    resolver = CargoVersionResolver(lambda: fetch_metadata(settings.cargo, env, capture))
    manifest = load_manifest(settings.manifest_path)

    if settings.source == DependencySources.LOCK.value:
        package_name = read_package_name(manifest)
        lock_graph = load_lockfile(settings.lockfile_path)
        locked = parse_package_dependencies(lock_graph, package_name)
        specs = [(ident.name, ident.version) for ident in locked]
    else:
        specs = parse_dependencies(manifest)

    return resolver.resolve_all(specs)


def run_dependency_builds(
    settings: BuildSettings,
    env: Environment,
    executor: Executor = execute_command,
    capture: CaptureExecutor = capture_command_output,
) -> List[BuildStep]:
    """Update the lock file, resolve dependencies and build them, fail-fast."""
    if not settings.flags.skip_update:
        run_update(settings.cargo, env, executor)

    identifiers = resolve_identifiers(settings, env, capture)
    if not identifiers:
        logger.warning("No dependencies found in %s", settings.manifest_path)

    orchestrator = BuildOrchestrator(settings.flags, env, settings.cargo, executor)
    return orchestrator.build_all(identifiers)


def exit_code_for(error: DepBuildError) -> int:
    """Map an error to the process exit status."""
    if isinstance(error, BuildFailedError):
        return error.code
    if isinstance(error, ProcessTerminatedError):
        return ExitCodes.SIGNAL_BASE.value + (error.signal or 0)
    if isinstance(error, ProcessSpawnError):
        return ExitCodes.SPAWN_ERROR.value
    return ExitCodes.FILE_ERROR.value


def _setup_logging(args: Any) -> None:
    """Configure logging based on CLI arguments."""
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging(log_file=getattr(args, "LOG_FILE", None), quiet=bool(getattr(args, "QUIET", False)))


def run_build(args: Any, env: Optional[Environment] = None) -> None:
    """Entry point for the build-deps run.

    Args:
        args: Parsed CLI arguments namespace.
        env: Environment snapshot; taken from ``os.environ`` when omitted.
    """
    _setup_logging(args)
    env = snapshot_environment() if env is None else env

    config_path = getattr(args, "CONFIG", None)
    config = load_config(config_path)
    if config:
        logger.info("Loaded config from: %s", config_path)

    settings = resolve_settings(args, config, env)
    if is_debug_enabled(logger):
        logger.debug(
            "Settings resolved",
            extra=extra_context(
                event="decision",
                component="cli",
                action="resolve_settings",
                target=settings.manifest_path,
                outcome=settings.source,
            ),
        )

    try:
        run_dependency_builds(settings, env, execute_command, capture_command_output)
    except DepBuildError as e:
        logger.error("%s", e)
        sys.exit(exit_code_for(e))

    sys.exit(ExitCodes.SUCCESS.value)
