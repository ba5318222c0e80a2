"""Token formatting utilities for package identifiers."""

from .models import PackageIdentifier

_REQUIREMENT_OPERATORS = ("=", "^", "~")


def format_identifier(name: str, version: str) -> str:
    """Return the canonical ``name:version`` token.

    Only the name is validated; the build tool checks the rest.
    """
    return str(PackageIdentifier(name=name, version=version))


def strip_quotes(value: str) -> str:
    """Remove every double-quote character and surrounding whitespace."""
    return value.replace('"', '').strip()


def normalize_version_spec(spec: str) -> str:
    """Drop a single leading requirement operator (``=``, ``^``, ``~``).

    Cargo reads a bare ``1.0`` as ``^1.0``, so these share prefix semantics.
    """
    s = spec.strip()
    if s.startswith(_REQUIREMENT_OPERATORS):
        s = s[1:].strip()
    return s
