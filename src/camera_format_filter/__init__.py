"""Camera Format Filter - ranks camera devices and capture formats for a viewport."""

__version__ = "0.1.0"

from .config import AppConfig, SelectionConfig, ViewportConfig, get_config, get_config_manager
from .errors import CatalogError, FormatSelectionError, InvalidDimensionError, UnknownStabilizationModeError
from .geometry import GeometryCalculator, OverflowMeasurement, aspect_ratio_overflow, cover_overflow
from .models import CameraPosition, Device, Format, FrameRateRange, LensType, Size, StabilizationMode
from .selection import (
    FormatTrace,
    compare_devices,
    compare_formats,
    compare_formats_by_resolution,
    filter_formats_by_aspect_ratio,
    filter_formats_by_frame_rate,
    frame_rate_included,
    select_device,
    select_format,
    sort_devices,
    sort_formats,
)

__all__ = [
    "AppConfig",
    "SelectionConfig",
    "ViewportConfig",
    "get_config",
    "get_config_manager",
    "CatalogError",
    "FormatSelectionError",
    "InvalidDimensionError",
    "UnknownStabilizationModeError",
    "GeometryCalculator",
    "OverflowMeasurement",
    "aspect_ratio_overflow",
    "cover_overflow",
    "CameraPosition",
    "Device",
    "Format",
    "FrameRateRange",
    "LensType",
    "Size",
    "StabilizationMode",
    "FormatTrace",
    "compare_devices",
    "compare_formats",
    "compare_formats_by_resolution",
    "filter_formats_by_aspect_ratio",
    "filter_formats_by_frame_rate",
    "frame_rate_included",
    "select_device",
    "select_format",
    "sort_devices",
    "sort_formats",
]
