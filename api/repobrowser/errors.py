class RepoBrowserError(Exception):
    """Base class for errors raised by the repository browser."""


class InvalidUsername(RepoBrowserError, ValueError):
    """Raised when a username cannot be used to build the list endpoint."""


class InvalidRepositoryPath(RepoBrowserError, ValueError):
    """Raised when an owner login or repository name is not a safe path segment."""


class TransportOrParseError(RepoBrowserError):
    """A repository page could not be fetched or decoded."""


class ReadmeUnavailable(RepoBrowserError):
    """The README could not be fetched or decoded."""
