# firehearts/services/images/dto.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Generic, TypeVar

from firehearts.services._shared.errors import ServiceError

T = TypeVar("T")


class PipelineStage(str, Enum):
    """Last stage an upload completed."""

    RECEIVED = "received"
    COMPRESSED = "compressed"
    PLACEHOLDER_DERIVED = "placeholder_derived"


@dataclass(frozen=True, slots=True)
class StageResult(Generic[T]):
    """
    Outcome of a single pipeline stage: either a value or an error.

    :param value: Stage output when successful.
    :param error: Failure raised by the pipeline when the stage failed.
    """

    value: T | None = None
    error: ServiceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> StageResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: ServiceError) -> StageResult[T]:
        return cls(error=error)


@dataclass(frozen=True, slots=True)
class UploadIn:
    """
    One file part of a multipart request.

    :param field: Form field name the part was sent under.
    :param filename: Client-side filename, used only for its extension.
    :param stream: Readable binary stream with the file content.
    """

    field: str
    filename: str | None
    stream: BinaryIO


@dataclass(frozen=True, slots=True)
class UploadResult:
    """
    Output DTO of a completed upload.

    :param filename: Generated name under the storage root.
    :param url: Public URL the image is served from.
    :param placeholder_hash: Blurhash of the stored image.
    """

    filename: str
    url: str
    placeholder_hash: str
