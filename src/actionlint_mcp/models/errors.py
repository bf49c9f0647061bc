"""Request-level failures, carried as values rather than raised."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

MISSING_INPUT_MESSAGE = "either file_path or content must be provided"


class RequestErrorKind(StrEnum):
    MISSING_INPUT = "missing_input"
    FILE_UNREADABLE = "file_unreadable"
    ENGINE_FAILURE = "engine_failure"
    SERIALIZATION_FAILURE = "serialization_failure"


class RequestError(BaseModel):
    """Why a single-document validation produced no result.

    ``message`` is the user-facing text; ``cause`` keeps the underlying
    error text for diagnosability.
    """

    model_config = ConfigDict(frozen=True)

    kind: RequestErrorKind
    message: str
    path: str | None = None
    cause: str | None = None

    @classmethod
    def missing_input(cls) -> RequestError:
        return cls(kind=RequestErrorKind.MISSING_INPUT, message=MISSING_INPUT_MESSAGE)

    @classmethod
    def file_unreadable(cls, path: str, cause: str) -> RequestError:
        return cls(
            kind=RequestErrorKind.FILE_UNREADABLE,
            message=f"failed to read file: {cause}",
            path=path,
            cause=cause,
        )

    @classmethod
    def engine_failure(cls, cause: str, path: str | None = None) -> RequestError:
        return cls(
            kind=RequestErrorKind.ENGINE_FAILURE,
            message=f"linting failed: {cause}",
            path=path,
            cause=cause,
        )

    @classmethod
    def serialization_failure(cls, cause: str) -> RequestError:
        return cls(
            kind=RequestErrorKind.SERIALIZATION_FAILURE,
            message=f"failed to marshal result: {cause}",
            cause=cause,
        )
