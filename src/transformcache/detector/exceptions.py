"""Exceptions for the Change Detector module."""


class DetectorError(Exception):
    """Base exception for change detection errors."""


class SourceRootNotFoundError(DetectorError):
    """The source root does not exist or is not a directory."""
