"""Version resolvers."""

from .cargo import CargoVersionResolver, is_exact_version

__all__ = [
    "CargoVersionResolver",
    "is_exact_version",
]
