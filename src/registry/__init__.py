"""Package manager specific manifest, lock file and metadata handling."""
