from .camera_dto import (
    CreateCameraDto,
    UpdateCameraDto,
    parse_create_request,
    parse_update_request,
)

__all__ = [
    "CreateCameraDto",
    "UpdateCameraDto",
    "parse_create_request",
    "parse_update_request",
]
