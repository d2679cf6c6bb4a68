"""Exception types raised by trio_loader."""


class LoaderError(Exception):
    """Base class for every error raised by this package."""


class FetchError(LoaderError):
    """A fetch failed.

    Transport failures, non-2xx responses and undecodable payloads all end
    up here.  `status_code` is set only when a response was received.
    """

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class BadURLError(LoaderError):
    """Raised by the title manager when it has nothing to return."""

    def __init__(self, message="The URL is not valid."):
        super().__init__(message)


class WrongContextError(LoaderError):
    """A state holder owned by the main context was mutated from elsewhere."""
