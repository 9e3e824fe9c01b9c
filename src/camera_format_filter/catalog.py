"""Loading device catalogs exported by the camera enumeration layer."""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import CatalogError
from .models import CameraPosition, Device, Format, FrameRateRange, LensType, StabilizationMode

logger = logging.getLogger(__name__)


class FrameRateRangeSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    min_frame_rate: float = Field(alias="minFrameRate", ge=0)
    max_frame_rate: float = Field(alias="maxFrameRate", ge=0)

    @model_validator(mode="after")
    def check_bounds(self) -> "FrameRateRangeSchema":
        if self.min_frame_rate > self.max_frame_rate:
            raise ValueError(f"minFrameRate {self.min_frame_rate} exceeds maxFrameRate {self.max_frame_rate}")
        return self

    def to_record(self) -> FrameRateRange:
        return FrameRateRange(min_frame_rate=self.min_frame_rate, max_frame_rate=self.max_frame_rate)


class FormatSchema(BaseModel):
    """Capture format entry, keyed the way the enumeration API reports it."""

    model_config = ConfigDict(populate_by_name=True)

    photo_width: int = Field(alias="photoWidth", gt=0)
    photo_height: int = Field(alias="photoHeight", gt=0)
    video_width: Optional[int] = Field(default=None, alias="videoWidth", gt=0)
    video_height: Optional[int] = Field(default=None, alias="videoHeight", gt=0)
    video_stabilization_modes: List[StabilizationMode] = Field(default_factory=list, alias="videoStabilizationModes")
    supports_photo_hdr: bool = Field(default=False, alias="supportsPhotoHDR")
    supports_video_hdr: bool = Field(default=False, alias="supportsVideoHDR")
    frame_rate_ranges: List[FrameRateRangeSchema] = Field(default_factory=list, alias="frameRateRanges")
    field_of_view: Optional[float] = Field(default=None, alias="fieldOfView")

    @model_validator(mode="after")
    def check_video_dimensions(self) -> "FormatSchema":
        if (self.video_width is None) != (self.video_height is None):
            raise ValueError("videoWidth and videoHeight must be given together")
        return self

    def to_record(self) -> Format:
        return Format(
            photo_width=self.photo_width,
            photo_height=self.photo_height,
            video_width=self.video_width,
            video_height=self.video_height,
            video_stabilization_modes=tuple(self.video_stabilization_modes),
            supports_photo_hdr=self.supports_photo_hdr,
            supports_video_hdr=self.supports_video_hdr,
            frame_rate_ranges=tuple(r.to_record() for r in self.frame_rate_ranges),
            field_of_view=self.field_of_view,
        )


class DeviceSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    position: CameraPosition = CameraPosition.BACK
    physical_devices: List[LensType] = Field(default_factory=list, alias="devices")
    formats: List[FormatSchema] = Field(default_factory=list)

    def to_record(self) -> Device:
        return Device(
            id=self.id,
            physical_devices=tuple(self.physical_devices),
            name=self.name,
            position=self.position,
            formats=tuple(f.to_record() for f in self.formats),
        )


def parse_devices(data: Any) -> List[Device]:
    """Convert decoded catalog JSON (a list of devices, or {"devices": [...]}) into records."""
    if isinstance(data, dict) and "devices" in data:
        data = data["devices"]
    if not isinstance(data, list):
        raise CatalogError(f"Expected a list of devices, got {type(data).__name__}")

    devices = []
    for index, entry in enumerate(data):
        try:
            devices.append(DeviceSchema.model_validate(entry).to_record())
        except ValidationError as e:
            raise CatalogError(f"Invalid device at index {index}: {e}") from e

    logger.info(f"Loaded {len(devices)} devices with {sum(len(d.formats) for d in devices)} formats")
    return devices


def load_devices(path: Union[str, Path]) -> List[Device]:
    """Read and parse a device catalog JSON file."""
    path = Path(path)
    try:
        with open(path) as f:
            data = json.load(f)
    except OSError as e:
        raise CatalogError(f"Could not read catalog {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalog {path} is not valid JSON: {e}") from e

    return parse_devices(data)
