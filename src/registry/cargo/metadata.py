"""Queries against the cargo binary itself: 'cargo update' and 'cargo metadata'."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Sequence

from jsonschema import Draft7Validator

from common.errors import MetadataFormatError
from constants import Constants
from versioning.models import MetadataPackage

logger = logging.getLogger(__name__)

Runner = Callable[[Sequence[str], Any], Any]

METADATA_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["packages"],
    "properties": {
        "packages": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name", "version"],
                "properties": {
                    "name": {"type": "string"},
                    "version": {"type": "string"},
                },
            },
        },
    },
}


def update_command(cargo: str) -> List[str]:
    return [cargo, "update"]


def metadata_command(cargo: str) -> List[str]:
    return [cargo, "metadata", "--format-version", Constants.METADATA_FORMAT_VERSION]


def parse_metadata(output: str) -> List[MetadataPackage]:
    """Parse 'cargo metadata' JSON into the list of resolved packages.

    Package order is preserved as reported.

    Raises:
        MetadataFormatError: output is not JSON or lacks name/version strings.
    """
    try:
        data = json.loads(output)
    except ValueError as e:
        raise MetadataFormatError(f"Couldn't parse 'cargo metadata' output as JSON: {e}") from e

    errs = sorted(Draft7Validator(METADATA_SCHEMA).iter_errors(data), key=lambda e: list(e.path))
    if errs:
        first = errs[0]
        path = "/".join(str(p) for p in first.path)
        raise MetadataFormatError(f"Unexpected 'cargo metadata' output at '{path}': {first.message}")

    return [MetadataPackage(name=p["name"], version=p["version"]) for p in data["packages"]]


def fetch_metadata(cargo: str, env: Any, runner: Runner) -> List[MetadataPackage]:
    """Run 'cargo metadata' through ``runner`` (a capture-style executor) and parse it.

    Raises:
        MetadataFormatError: the output is not UTF-8, not JSON, or has an unexpected shape.
    """
    try:
        output = runner(metadata_command(cargo), env)
    except UnicodeDecodeError as e:
        raise MetadataFormatError("Couldn't get 'cargo metadata' output as utf8") from e
    packages = parse_metadata(output)
    logger.debug("'cargo metadata' reported %d packages", len(packages))
    return packages


def run_update(cargo: str, env: Any, runner: Runner) -> None:
    """Refresh Cargo.lock with 'cargo update'."""
    logger.info("    Updating lock file")
    runner(update_command(cargo), env)
