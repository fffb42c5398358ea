"""Exception hierarchy for PixelRelay.

Every failure that can reach the end user is one of these. The message of
each exception is written to be displayed directly in the UI or returned as
the ``error`` field of a proxy response.
"""


class PixelRelayError(Exception):
    """Base class for all user-facing PixelRelay errors."""

    pass


class ValidationError(PixelRelayError):
    """User input failed validation. No request was issued."""

    pass


class RateLimitError(PixelRelayError):
    """The local submission rate limit was exceeded. No request was issued."""

    pass


class UpstreamError(PixelRelayError):
    """The generation API (or the proxy relaying it) returned a non-2xx status.

    Attributes:
        status_code: HTTP status returned by the remote side, if known.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class EmptyResultError(PixelRelayError):
    """A successful response contained no images."""

    pass


class TransportError(PixelRelayError):
    """A network failure, or a response body that could not be parsed."""

    pass


class ConfigurationError(PixelRelayError):
    """Required configuration (the upstream credential) is missing."""

    pass
