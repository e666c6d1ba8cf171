# firehearts/services/images/pipeline.py
from __future__ import annotations

import logging
import os
import uuid
from collections.abc import Callable, Sequence

import blurhash
from PIL import Image, ImageOps
from werkzeug.utils import secure_filename

from firehearts.infra.storage import LocalImageStore
from firehearts.services._shared.errors import (
    PayloadTooLargeError,
    ProcessingError,
    ValidationFailedError,
)
from firehearts.services.images.dto import PipelineStage, StageResult, UploadIn, UploadResult

log = logging.getLogger(__name__)

IMAGE_FIELD = "image"


class ImagePipeline:
    """
    Sequential upload pipeline: receive, compress, derive placeholder.

    Each stage returns a :class:`StageResult`; a stage only runs when the
    previous one succeeded. Once a file has been written, any later failure
    deletes it before the error propagates, so an aborted upload leaves
    nothing behind.

    Stages
    ------
    1. ``receive``: accept exactly one part under :data:`IMAGE_FIELD`,
       enforce the byte ceiling *before* writing, store under a random name.
    2. ``compress``: EXIF-orient, convert to RGB, shrink to ``max_width``
       and re-encode as JPEG in place.
    3. ``derive_placeholder``: blurhash of a small resample.
    """

    def __init__(
        self,
        store: LocalImageStore,
        *,
        url_for: Callable[[str], str],
        max_bytes: int = 3_000_000,
        max_width: int = 600,
        jpeg_quality: int = 80,
        components: int = 4,
        sample_size: int = 32,
    ) -> None:
        """
        :param store: Destination for stored files.
        :param url_for: Builds the public URL of a stored filename.
        :param max_bytes: Largest accepted upload, in bytes.
        :param max_width: Width ceiling of the stored JPEG.
        :param jpeg_quality: JPEG quality of the stored file.
        :param components: Blurhash components on each axis.
        :param sample_size: Bounding box of the blurhash resample.
        """
        self.store = store
        self.url_for = url_for
        self.max_bytes = max_bytes
        self.max_width = max_width
        self.jpeg_quality = jpeg_quality
        self.components = components
        self.sample_size = sample_size

    # ------------------------------------------------------------------ #
    # Orchestration
    # ------------------------------------------------------------------ #

    def run(self, files: Sequence[UploadIn]) -> UploadResult:
        """
        Run every stage and return the stored image's URL and placeholder.

        :raises ValidationFailedError: When the request does not carry
            exactly one ``image`` file.
        :raises PayloadTooLargeError: When the file exceeds ``max_bytes``.
        :raises ProcessingError: When compression or hashing fails.
        """
        received = self.receive(files)
        if not received.ok:
            raise received.error  # type: ignore[misc]
        filename: str = received.value  # type: ignore[assignment]

        compressed = self.compress(filename)
        if not compressed.ok:
            self._abort(filename, PipelineStage.RECEIVED, compressed)

        placeholder = self.derive_placeholder(filename)
        if not placeholder.ok:
            self._abort(filename, PipelineStage.COMPRESSED, placeholder)

        log.info(
            "upload.completed",
            extra={"image_file": filename, "stage": PipelineStage.PLACEHOLDER_DERIVED.value},
        )
        return UploadResult(
            filename=filename,
            url=self.url_for(filename),
            placeholder_hash=placeholder.value,  # type: ignore[arg-type]
        )

    # ------------------------------------------------------------------ #
    # Stages
    # ------------------------------------------------------------------ #

    def receive(self, files: Sequence[UploadIn]) -> StageResult[str]:
        """Validate the parts, enforce the size ceiling and store the bytes."""
        if not files:
            return StageResult.failure(ValidationFailedError("No file uploaded"))
        if len(files) > 1:
            return StageResult.failure(ValidationFailedError("Only one file is accepted"))
        part = files[0]
        if part.field != IMAGE_FIELD:
            return StageResult.failure(ValidationFailedError(f"Unexpected field: {part.field}"))

        data = part.stream.read(self.max_bytes + 1)
        if len(data) > self.max_bytes:
            log.warning("upload.rejected size>%s", self.max_bytes)
            return StageResult.failure(PayloadTooLargeError(self.max_bytes))
        if not data:
            return StageResult.failure(ValidationFailedError("Uploaded file is empty"))

        filename = self.generate_filename(part.filename)
        try:
            self.store.write_bytes(filename, data)
        except OSError as exc:
            log.warning("upload.write_failed: %s", exc, extra={"image_file": filename})
            self._discard(filename)
            return StageResult.failure(ProcessingError("Unable to store image"))
        log.info(
            "upload.received",
            extra={"image_file": filename, "stage": PipelineStage.RECEIVED.value},
        )
        return StageResult.success(filename)

    def compress(self, filename: str) -> StageResult[None]:
        """Re-encode the stored file as a width-capped JPEG, in place."""
        path = self.store.path_for(filename)
        try:
            with Image.open(path) as source:
                image = ImageOps.exif_transpose(source).convert("RGB")
            # Height bound never binds: only the width is capped
            image.thumbnail((self.max_width, max(image.height, 1)), Image.Resampling.LANCZOS)
            image.save(path, format="JPEG", quality=self.jpeg_quality, optimize=True)
        except (OSError, ValueError, Image.DecompressionBombError) as exc:
            log.warning("upload.compress_failed: %s", exc, extra={"image_file": filename})
            return StageResult.failure(ProcessingError("Unable to compress image"))
        log.debug("upload.compressed", extra={"image_file": filename, "stage": "compressed"})
        return StageResult.success(None)

    def derive_placeholder(self, filename: str) -> StageResult[str]:
        """Blurhash of the stored file, resampled to fit ``sample_size``."""
        path = self.store.path_for(filename)
        try:
            with Image.open(path) as source:
                sample = source.convert("RGB")
            sample.thumbnail((self.sample_size, self.sample_size), Image.Resampling.BILINEAR)
            px = sample.load()
            width, height = sample.size
            pixels = [[list(px[x, y]) for x in range(width)] for y in range(height)]
            placeholder = blurhash.encode(pixels, self.components, self.components)
        except (OSError, ValueError, ZeroDivisionError) as exc:
            log.warning("upload.blurhash_failed: %s", exc, extra={"image_file": filename})
            return StageResult.failure(ProcessingError("Unable to generate blurhash"))
        return StageResult.success(placeholder)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def generate_filename(original: str | None) -> str:
        """Random hex name keeping the (sanitized) original extension."""
        ext = os.path.splitext(secure_filename(original or ""))[1].lower()
        return f"{uuid.uuid4().hex}{ext}"

    def _abort(self, filename: str, stage: PipelineStage, result: StageResult) -> None:
        log.warning(
            "upload.aborted", extra={"image_file": filename, "stage": stage.value}
        )
        self._discard(filename)
        raise result.error  # type: ignore[misc]

    def _discard(self, filename: str) -> None:
        """Best-effort removal of a (possibly partial) stored file."""
        try:
            if self.store.exists(filename):
                self.store.delete(filename)
        except OSError:
            log.warning("upload.discard_failed", extra={"image_file": filename}, exc_info=True)
