"""Argument parsing functionality for cargo build-deps."""

import argparse
from constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program.

    Cargo invokes external subcommands as ``cargo-build-deps build-deps ...``,
    so a leading ``build-deps`` positional is accepted and ignored.
    """
    parser = argparse.ArgumentParser(
        prog="cargo build-deps",
        description=(
            "Build the dependencies of a Cargo project independently of the project itself"
        ),
        add_help=True,
    )

    parser.add_argument("subcommand",
                        nargs="?",
                        choices=[Constants.SUBCOMMAND],
                        help=argparse.SUPPRESS)

    parser.add_argument("--release",
                        dest="RELEASE",
                        help="Build dependencies in release mode, with optimizations",
                        action="store_true",
                        default=None)
    parser.add_argument("--target",
                        dest="TARGET",
                        help="Build for the target triple",
                        action="store",
                        type=str)
    parser.add_argument("--features",
                        dest="FEATURES",
                        help="Space or comma separated list of features to activate",
                        action="append",
                        type=str)
    parser.add_argument("--all-features",
                        dest="ALL_FEATURES",
                        help="Activate all available features",
                        action="store_true",
                        default=None)
    parser.add_argument("--nightly",
                        dest="NIGHTLY",
                        help="Build with the nightly toolchain (cargo +nightly)",
                        action="store_true",
                        default=None)
    parser.add_argument("--skip-update",
                        dest="SKIP_UPDATE",
                        help="Don't run 'cargo update' before resolving dependencies",
                        action="store_true",
                        default=None)

    parser.add_argument("--source",
                        dest="SOURCE",
                        help="Read dependencies from the manifest or from the lock file (default: manifest)",
                        action="store",
                        type=str.lower,
                        choices=Constants.SUPPORTED_SOURCES)
    parser.add_argument("--manifest-path",
                        dest="MANIFEST_PATH",
                        help="Path to Cargo.toml",
                        action="store",
                        type=str)
    parser.add_argument("--lockfile-path",
                        dest="LOCKFILE_PATH",
                        help="Path to Cargo.lock (default: next to the manifest)",
                        action="store",
                        type=str)

    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML or YML)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LOG_LEVELS,
                        default="INFO")
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Only report errors.",
                        action="store_true")

    return parser.parse_args(argv)
