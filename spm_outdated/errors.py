"""Exceptions raised by spm-outdated."""


class OutdatedError(Exception):
    """Base class for all spm-outdated errors."""


class ParseError(OutdatedError, ValueError):
    """A version string or pin could not be parsed."""


class LookupFailure(OutdatedError):
    """Listing the tags of a remote repository failed."""

    def __init__(self, location: str, reason: str):
        self.location = location
        self.reason = reason
        super().__init__(f"Tag lookup for {location} failed: {reason}")


class PackageResolvedNotFound(OutdatedError):
    """No Package.resolved file could be located."""

    def __init__(self, message: str = "No Package.resolved found in current working tree."):
        super().__init__(message)


class PackageResolvedNotReadable(OutdatedError):
    """A Package.resolved file was located but could not be read."""

    def __init__(self, message: str = "Package.resolved could not be read."):
        super().__init__(message)


class ManifestUnavailable(OutdatedError):
    """Direct dependencies could not be extracted from Package.swift."""
