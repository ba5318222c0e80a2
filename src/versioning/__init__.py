"""Package identifiers and version resolution."""
