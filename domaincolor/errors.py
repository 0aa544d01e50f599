"""Exception types raised by the domain coloring pipeline."""


class DomainColoringError(Exception):
    """Base class for every error raised by :mod:`domaincolor`."""


class ConfigurationError(DomainColoringError, ValueError):
    """Raised for invalid render configuration, before any pixel is computed."""


class ImageWriteError(DomainColoringError, OSError):
    """Raised when the rendered image cannot be written to its destination."""
