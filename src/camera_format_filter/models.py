"""Immutable records describing camera devices and their capture formats."""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple


class LensType(Enum):
    """Physical lens types a logical camera device can be composed of."""

    WIDE_ANGLE = "wide-angle-camera"
    ULTRA_WIDE_ANGLE = "ultra-wide-angle-camera"
    TELEPHOTO = "telephoto-camera"

    def __str__(self) -> str:
        return self.value


class StabilizationMode(Enum):
    """Video stabilization modes a format may support."""

    OFF = "off"
    AUTO = "auto"
    STANDARD = "standard"
    CINEMATIC = "cinematic"
    CINEMATIC_EXTENDED = "cinematic-extended"

    def __str__(self) -> str:
        return self.value


class CameraPosition(Enum):
    FRONT = "front"
    BACK = "back"
    EXTERNAL = "external"


@dataclass(frozen=True)
class Size:
    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height

    def rotated(self) -> "Size":
        """Swap width and height (landscape <-> portrait)."""
        return Size(width=self.height, height=self.width)

    def __str__(self) -> str:
        return f"{self.width:g}x{self.height:g}"


@dataclass(frozen=True)
class FrameRateRange:
    """Inclusive frame rate bounds."""

    min_frame_rate: float
    max_frame_rate: float

    def __str__(self) -> str:
        return f"{self.min_frame_rate:g}-{self.max_frame_rate:g} fps"


@dataclass(frozen=True)
class Format:
    """
    A capture format supported by a camera device.

    Dimensions are in the sensor's native landscape orientation.

    Attributes:
        photo_width: Photo output width in pixels
        photo_height: Photo output height in pixels
        video_width: Video output width, None when the format has no video stream
        video_height: Video output height, None when the format has no video stream
        video_stabilization_modes: Stabilization modes usable with this format
        supports_photo_hdr: Whether photos can be captured in HDR
        supports_video_hdr: Whether video can be recorded in HDR
        frame_rate_ranges: Frame rate ranges the format can run at
        field_of_view: Horizontal field of view in degrees, if reported
    """

    photo_width: int
    photo_height: int
    video_width: Optional[int] = None
    video_height: Optional[int] = None
    video_stabilization_modes: Tuple[StabilizationMode, ...] = ()
    supports_photo_hdr: bool = False
    supports_video_hdr: bool = False
    frame_rate_ranges: Tuple[FrameRateRange, ...] = ()
    field_of_view: Optional[float] = None

    @property
    def photo_size(self) -> Size:
        return Size(width=self.photo_width, height=self.photo_height)

    @property
    def has_video_dimensions(self) -> bool:
        return self.video_width is not None and self.video_height is not None

    @property
    def video_size(self) -> Optional[Size]:
        if not self.has_video_dimensions:
            return None
        return Size(width=self.video_width, height=self.video_height)

    @property
    def photo_pixels(self) -> int:
        return self.photo_width * self.photo_height

    @property
    def video_pixels(self) -> Optional[int]:
        if not self.has_video_dimensions:
            return None
        return self.video_width * self.video_height

    def __str__(self) -> str:
        parts = [f"photo {self.photo_width}x{self.photo_height}"]
        if self.has_video_dimensions:
            parts.append(f"video {self.video_width}x{self.video_height}")
        if self.video_stabilization_modes:
            parts.append("stabilization [" + ", ".join(str(m) for m in self.video_stabilization_modes) + "]")
        hdr = [name for name, on in (("photo", self.supports_photo_hdr), ("video", self.supports_video_hdr)) if on]
        if hdr:
            parts.append(f"HDR [{', '.join(hdr)}]")
        return ", ".join(parts)


@dataclass(frozen=True)
class Device:
    """
    A logical camera device, possibly composed of several physical lenses.

    The length of ``physical_devices`` is the physical lens count; its
    distinct members are the device's lens types.
    """

    id: str
    physical_devices: Tuple[LensType, ...] = ()
    name: str = ""
    position: CameraPosition = CameraPosition.BACK
    formats: Tuple[Format, ...] = field(default=(), repr=False)

    @property
    def lens_types(self) -> FrozenSet[LensType]:
        return frozenset(self.physical_devices)

    @property
    def physical_device_count(self) -> int:
        return len(self.physical_devices)

    def has_lens(self, lens_type: LensType) -> bool:
        return lens_type in self.physical_devices

    def __str__(self) -> str:
        lenses = ", ".join(str(lens) for lens in self.physical_devices) or "no lenses"
        label = self.name or self.id
        return f"{label} ({self.position.value}) [{lenses}]"
