"""
Custom exception classes for loading artifact configuration.

Validation problems found on a declaration are recorded on it, never raised;
these exceptions cover documents that cannot be loaded at all.
"""


class ArtifactConfigError(Exception):
    """Base exception class for artifact configuration errors."""
    pass


class ConfigLoadError(ArtifactConfigError):
    """Exception raised when a configuration document cannot be loaded."""
    pass


class ConfigFileNotFoundError(ConfigLoadError):
    """Exception raised when the configuration file is not found."""
    pass


class EmptyConfigError(ConfigLoadError):
    """Exception raised when the configuration file is empty."""
    pass


class UnknownArtifactTypeError(ConfigLoadError):
    """Exception raised when an artifact entry names an unsupported type."""
    pass


class LookupFailedError(ArtifactConfigError):
    """Exception raised when a requested job or artifact does not exist."""
    pass
