"""Custom exceptions for the Manifest Store."""


class ManifestError(Exception):
    """Base exception for Manifest Store errors."""


class ManifestCorruptError(ManifestError):
    """Persisted manifest exists but cannot be parsed as a manifest."""
