from firehearts.services.images.dto import PipelineStage, StageResult, UploadIn, UploadResult
from firehearts.services.images.pipeline import IMAGE_FIELD, ImagePipeline

__all__ = [
    "IMAGE_FIELD",
    "ImagePipeline",
    "PipelineStage",
    "StageResult",
    "UploadIn",
    "UploadResult",
]
