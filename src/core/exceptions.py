"""Exception hierarchy for xstro.

Separates failures of a single outgoing call (send/forward) from media
handling errors.
"""


class XstroError(Exception):
    """Base exception for all application-specific errors."""

    pass


class MessageError(XstroError):
    """Raised when building or sending an outgoing message fails."""

    pass


class MediaError(XstroError):
    """Raised when a message carries no usable media or it cannot be saved."""

    pass
