"""
Error taxonomy for the race upload pipeline.

Each error carries the HTTP status it maps to and whether the failure is the
caller's fault, so the request adapter can build a response without parsing
the message text.
"""


class RaceUploadError(Exception):
    """Base class for every failure surfaced to the request adapter."""

    status_code: int = 500
    client_error: bool = False


class ClientInputError(RaceUploadError):
    """A required request field is missing, zero or of the wrong type."""

    status_code = 400
    client_error = True


class InfrastructureError(RaceUploadError):
    """A store client or session could not be established."""

    status_code = 500


class UploadError(RaceUploadError):
    """Failure inside the validate -> register -> write pipeline."""


class MalformedDocument(UploadError):
    """The race document is not well-formed XML."""

    status_code = 400
    client_error = True


class StoreError(UploadError):
    """The key-existence store is unavailable or failed unexpectedly."""

    status_code = 503


class ObjectWriteError(UploadError):
    """The document could not be written to the object store."""

    status_code = 502
