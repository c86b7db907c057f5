# tubely/domain/errors.py
from __future__ import annotations

from http import HTTPStatus


class TubelyError(Exception):
    """
    Base for every failure the ingestion core reports to a caller.
    Each subclass carries the HTTP status the API layer answers with.
    """
    status_code: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidIdentifier(TubelyError):
    status_code = HTTPStatus.BAD_REQUEST


class Unauthenticated(TubelyError):
    status_code = HTTPStatus.UNAUTHORIZED


class Forbidden(TubelyError):
    status_code = HTTPStatus.FORBIDDEN


class NotFound(TubelyError):
    status_code = HTTPStatus.NOT_FOUND


class PayloadTooLarge(TubelyError):
    status_code = HTTPStatus.REQUEST_ENTITY_TOO_LARGE


class UnsupportedMediaType(TubelyError):
    status_code = HTTPStatus.UNSUPPORTED_MEDIA_TYPE


class StorageIOFailure(TubelyError):
    """Local buffering (temp file create/write/seek) failed."""


class ProbeFailure(TubelyError):
    """Content inspection failed. The pipeline downgrades this to `other`."""
    status_code = HTTPStatus.BAD_GATEWAY

    def __init__(self, message: str, *, stderr: str | None = None, rc: int | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr
        self.rc = rc


class KeyDerivationFailure(TubelyError):
    pass


class ObjectStoreFailure(TubelyError):
    status_code = HTTPStatus.BAD_GATEWAY


class MetadataCommitFailure(TubelyError):
    """Record update failed; the object may already be stored."""
