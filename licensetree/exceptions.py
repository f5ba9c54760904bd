"""Custom exceptions for licensetree."""

from __future__ import annotations

from pathlib import Path


class LicenseTreeError(Exception):
    """Base exception for all report errors."""


class MissingResolutionError(LicenseTreeError):
    """Raised when a descriptor has no stored resolution in recursive mode."""

    def __init__(self, descriptor: str):
        self.descriptor = descriptor
        super().__init__(
            f"Assertion failed: expected a resolution for {descriptor}. "
            "Run an install before listing licenses recursively."
        )


class ReresolutionError(LicenseTreeError):
    """Raised when the production re-resolution of the graph fails."""


class ManifestReadError(LicenseTreeError):
    """Raised when a package manifest cannot be read or parsed."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read manifest {path}: {reason}")


class ProjectNotFoundError(LicenseTreeError):
    """Raised when no package.json is found above the working directory."""


class UnknownLinkerError(LicenseTreeError):
    """Raised when no linker is registered under the requested name."""
