from typing import Any, Dict, Mapping, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from ...domain.exceptions import ValidationError
from ...domain.models.camera import CameraStatus, CameraType


def _strip_name(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValueError("Camera name is required")
    return value


class CreateCameraDto(BaseModel):
    """DTO for camera creation request"""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str
    type: CameraType
    status: CameraStatus
    lat: float = Field(ge=-90, le=90, allow_inf_nan=False)
    lng: float = Field(ge=-180, le=180, allow_inf_nan=False)
    location: Optional[str] = None
    notes: Optional[str] = None
    station_id: Optional[str] = Field(default=None, alias="stationId")

    @field_validator("name", mode="before")
    @classmethod
    def name_not_blank(cls, value: Any) -> Any:
        return _strip_name(value)


class UpdateCameraDto(BaseModel):
    """
    DTO for a sparse camera patch.

    Only fields the caller actually set are applied; an unset field keeps the
    stored value. Explicit None clears location, notes or station_id and is
    rejected for the required fields.
    """
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: Optional[str] = None
    type: Optional[CameraType] = None
    status: Optional[CameraStatus] = None
    lat: Optional[float] = Field(default=None, ge=-90, le=90, allow_inf_nan=False)
    lng: Optional[float] = Field(default=None, ge=-180, le=180, allow_inf_nan=False)
    location: Optional[str] = None
    notes: Optional[str] = None
    station_id: Optional[str] = Field(default=None, alias="stationId")

    @field_validator("name", mode="before")
    @classmethod
    def name_not_blank(cls, value: Any) -> Any:
        return _strip_name(value)

    @model_validator(mode="after")
    def required_fields_not_cleared(self) -> "UpdateCameraDto":
        for field_name in ("name", "type", "status", "lat", "lng"):
            if field_name in self.model_fields_set and getattr(self, field_name) is None:
                raise ValueError(f"{field_name} cannot be cleared")
        return self

    def changes(self) -> Dict[str, Any]:
        """Python-named fields the caller set, ready for dataclasses.replace"""
        return {name: getattr(self, name) for name in self.model_fields_set}


def _describe(error: PydanticValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "camera"
        parts.append(f"{location}: {item.get('msg')}")
    return "; ".join(parts)


def parse_create_request(data: Union[CreateCameraDto, Mapping[str, Any]]) -> CreateCameraDto:
    """
    Coerce create input into a validated CreateCameraDto.

    Raises:
        ValidationError: If required fields are missing or invalid
    """
    if isinstance(data, CreateCameraDto):
        return data
    try:
        return CreateCameraDto.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(
            f"Invalid camera data: {_describe(e)}",
            user_message="Please check the camera details.",
            details={"errors": e.errors(include_url=False)},
        ) from e


def parse_update_request(data: Union[UpdateCameraDto, Mapping[str, Any]]) -> UpdateCameraDto:
    """
    Coerce patch input into a validated UpdateCameraDto.

    Raises:
        ValidationError: If a present field is invalid
    """
    if isinstance(data, UpdateCameraDto):
        return data
    try:
        return UpdateCameraDto.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(
            f"Invalid camera update: {_describe(e)}",
            user_message="Please check the camera details.",
            details={"errors": e.errors(include_url=False)},
        ) from e
