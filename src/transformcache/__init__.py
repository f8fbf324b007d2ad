"""transformcache - Incremental build-artifact cache driven by a per-file transform chain."""

__version__ = "0.1.0"
