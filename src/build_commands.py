"""Build flag configuration and cargo command construction.

Each dependency is built with ``cargo build -p <name>:<version>`` followed by
the optional flags, always in the same order: toolchain channel, release
mode, target triple, feature selection.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from constants import Constants
from versioning.models import PackageIdentifier
from versioning.parser import format_identifier


def split_features(raw: Optional[Iterable[str]]) -> Tuple[str, ...]:
    """Flatten space- or comma-separated feature strings, dropping duplicates."""
    if raw is None:
        return ()
    if isinstance(raw, str):
        raw = [raw]
    features: List[str] = []
    for chunk in raw:
        for feature in re.split(r"[\s,]+", str(chunk)):
            if feature and feature not in features:
                features.append(feature)
    return tuple(features)


@dataclass(frozen=True)
class BuildFlags:
    """Options applied to every dependency build."""

    release: bool = False
    target: Optional[str] = None
    features: Tuple[str, ...] = ()
    all_features: bool = False
    nightly: bool = False
    skip_update: bool = False

    def feature_args(self) -> List[str]:
        """``--all-features`` wins over an explicit feature list."""
        if self.all_features:
            return ["--all-features"]
        if self.features:
            return ["--features", " ".join(self.features)]
        return []


def build_command(cargo: str, identifier: PackageIdentifier, flags: BuildFlags) -> List[str]:
    """Return the argv building exactly ``identifier``."""
    cmd = [cargo]
    # rustup only honours the toolchain selector right after the binary
    if flags.nightly:
        cmd.append(Constants.NIGHTLY_TOOLCHAIN)
    cmd.extend(["build", "-p", format_identifier(identifier.name, identifier.version)])
    if flags.release:
        cmd.append("--release")
    if flags.target:
        cmd.append(f"--target={flags.target}")
    cmd.extend(flags.feature_args())
    return cmd
