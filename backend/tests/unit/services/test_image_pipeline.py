# tests/unit/services/test_image_pipeline.py
from __future__ import annotations

import io

import pytest
from PIL import Image

from firehearts.infra.storage import LocalImageStore
from firehearts.services._shared.errors import (
    PayloadTooLargeError,
    ProcessingError,
    ValidationFailedError,
)
from firehearts.services.images import ImagePipeline, PipelineStage, StageResult, UploadIn
from tests.helpers.images import image_bytes


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def store(tmp_path) -> LocalImageStore:
    return LocalImageStore(tmp_path / "uploads")


@pytest.fixture()
def pipeline(store) -> ImagePipeline:
    return ImagePipeline(store, url_for=lambda name: f"http://test/profile/image/{name}")


def _part(data: bytes, filename: str = "photo.png", field: str = "image") -> UploadIn:
    return UploadIn(field=field, filename=filename, stream=io.BytesIO(data))


# -------------------------------- Tests ----------------------------------- #
def test_run_stores_width_capped_jpeg_with_placeholder(pipeline, store):
    result = pipeline.run([_part(image_bytes(1200, 800))])

    assert result.url == f"http://test/profile/image/{result.filename}"
    assert result.filename.endswith(".png")
    assert len(result.placeholder_hash) == 36
    with Image.open(store.path_for(result.filename)) as stored:
        assert stored.format == "JPEG"
        assert stored.width == 600
        assert stored.height == 400


def test_small_images_are_not_upscaled(pipeline, store):
    result = pipeline.run([_part(image_bytes(200, 100))])
    with Image.open(store.path_for(result.filename)) as stored:
        assert stored.size == (200, 100)


def test_same_source_twice_yields_distinct_files(pipeline, store):
    data = image_bytes(300, 300)
    first = pipeline.run([_part(data)])
    second = pipeline.run([_part(data)])
    assert first.filename != second.filename
    assert sorted(store.list_filenames()) == sorted([first.filename, second.filename])


def test_oversized_upload_rejected_before_anything_is_written(store):
    pipeline = ImagePipeline(store, url_for=str, max_bytes=1000)
    with pytest.raises(PayloadTooLargeError):
        pipeline.run([_part(b"x" * 1001)])
    assert store.list_filenames() == []


def test_exactly_max_bytes_is_accepted_by_receive(store):
    pipeline = ImagePipeline(store, url_for=str, max_bytes=1000)
    result = pipeline.receive([_part(b"x" * 1000)])
    assert result.ok
    assert store.exists(result.value)


@pytest.mark.parametrize(
    "parts",
    [
        [],
        [("image", b"a"), ("image", b"b")],
        [("avatar", b"a")],
    ],
)
def test_receive_requires_exactly_one_image_field(pipeline, store, parts):
    with pytest.raises(ValidationFailedError):
        pipeline.run([_part(data, field=field) for field, data in parts])
    assert store.list_filenames() == []


def test_undecodable_file_is_removed_after_compress_failure(pipeline, store):
    with pytest.raises(ProcessingError, match="compress"):
        pipeline.run([_part(b"definitely not an image", filename="x.jpg")])
    assert store.list_filenames() == []


def test_placeholder_failure_removes_file(pipeline, store, monkeypatch):
    def fail(filename: str) -> StageResult[str]:
        return StageResult.failure(ProcessingError("Unable to generate blurhash"))

    monkeypatch.setattr(pipeline, "derive_placeholder", fail)
    with pytest.raises(ProcessingError, match="blurhash"):
        pipeline.run([_part(image_bytes(64, 64))])
    assert store.list_filenames() == []


def test_failed_write_leaves_no_partial_file(pipeline, store, monkeypatch):
    def write_half(filename: str, data: bytes):
        store.path_for(filename).write_bytes(data[: len(data) // 2])
        raise OSError("No space left on device")

    monkeypatch.setattr(store, "write_bytes", write_half)

    result = pipeline.receive([_part(image_bytes(64, 64))])

    assert not result.ok
    assert isinstance(result.error, ProcessingError)
    assert store.list_filenames() == []
    with pytest.raises(ProcessingError, match="store"):
        pipeline.run([_part(image_bytes(64, 64))])
    assert store.list_filenames() == []


def test_generate_filename_keeps_safe_extension():
    name = ImagePipeline.generate_filename("../../etc/Passwd.JPG")
    assert name.endswith(".jpg")
    assert "/" not in name
    assert len(name) == 32 + 4
    assert ImagePipeline.generate_filename(None).isalnum()


def test_stage_names_are_stable():
    assert [s.value for s in PipelineStage] == ["received", "compressed", "placeholder_derived"]
