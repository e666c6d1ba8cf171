"""Image upload and static retrieval."""

from __future__ import annotations

from flask import Blueprint, request, send_from_directory

from firehearts.api.deps import get_image_pipeline, get_image_store, json_response, timing
from firehearts.schemas import UploadResponseSchema
from firehearts.services.images import UploadIn

bp = Blueprint("images", __name__)

upload_schema = UploadResponseSchema()


@bp.post("/upload")
@timing
def upload_image():
    """Store, compress and hash a single ``image`` multipart file."""

    parts = [
        UploadIn(field=field, filename=storage.filename, stream=storage.stream)
        for field, storage in request.files.items(multi=True)
    ]
    result = get_image_pipeline().run(parts)
    return json_response(upload_schema.dump(result), status=201)


@bp.get("/profile/image/<path:filename>")
def serve_image(filename: str):
    """Serve a stored image file."""

    return send_from_directory(get_image_store().root, filename)
