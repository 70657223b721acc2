"""
Error taxonomy for the upload path.

Every error the HTTP layer can surface derives from ImageHostError and
carries the status code and the message that ends up in the
X-Server-Message header.
"""


class ImageHostError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500

    def __init__(self, message: str = None, status_code: int = None):
        self.message = message or self.__class__.__name__
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class StagingError(ImageHostError):
    """The upload body could not be read or written to the staging area."""


class ConversionError(ImageHostError):
    """The staged file could not be decoded, normalized or stored."""


class DecodeError(Exception):
    """The staged bytes are not a decodable image.

    Raised by the content store only; the ingestion pipeline reports it as a
    ConversionError.
    """


class AuthError(ImageHostError):
    """The access gate refused the request (401 or 403)."""

    status_code = 403


class MethodError(ImageHostError):
    """The HTTP method is not supported on this path."""

    status_code = 405


class NotFoundError(ImageHostError):
    """A lower layer reported a missing path."""

    status_code = 404


class CacheConsistencyError(ImageHostError):
    """A cache update failed after the artifact was already durable."""
