"""Exceptions raised during version resolution."""


class VersionResolutionError(Exception):
    """Base class for resolution failures."""


class MissingPlaceholderError(VersionResolutionError):
    """No version is mapped for the requested placeholder."""

    def __init__(self, placeholder: str):
        self.placeholder = placeholder
        super().__init__(f"No version found for placeholder: {placeholder}")


class InvalidSemverError(VersionResolutionError, ValueError):
    """A version string is not a valid semantic version."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"Invalid semver version: {version}")
