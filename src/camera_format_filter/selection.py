"""
Device and format ranking.

Comparators follow the three-way convention: a negative result means the
left-hand record is better, so sorting ascending with
``functools.cmp_to_key`` puts the best record first.
"""

import logging
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from .config import SelectionConfig
from .errors import UnknownStabilizationModeError
from .geometry import OverflowMeasurement, aspect_ratio_overflow, cover_overflow
from .models import Device, Format, FrameRateRange, LensType, StabilizationMode

logger = logging.getLogger(__name__)


class DeviceWeights:
    """Points awarded when ranking devices."""

    WIDE_ANGLE = 5
    ULTRA_WIDE_ANGLE_PENALTY = 5
    MORE_PHYSICAL_DEVICES = 3


class FormatWeights:
    """Points awarded to the strictly better side of each format criterion."""

    PHOTO_RESOLUTION = 5
    VIDEO_RESOLUTION = 3
    ASPECT_RATIO_OVERFLOW = 3
    VIDEO_STABILIZATION = 2
    VIDEO_HDR = 1
    PHOTO_HDR = 1


STABILIZATION_POINTS: Dict[StabilizationMode, int] = {
    StabilizationMode.CINEMATIC_EXTENDED: 3,
    StabilizationMode.CINEMATIC: 2,
    StabilizationMode.STANDARD: 1,
    StabilizationMode.AUTO: 1,
    StabilizationMode.OFF: 0,
}


@dataclass(frozen=True)
class FormatTrace:
    """Diagnostic record emitted for every format comparison."""

    left: Format
    right: Format
    measurement: OverflowMeasurement
    left_points: int
    right_points: int

    def __str__(self) -> str:
        m = self.measurement
        return (
            f"Viewport: {m.viewport}, Camera: {m.camera_size}, Scaled: {m.scaled_size}, "
            f"Overflow: {m.overflow:g} (points {self.left_points} vs {self.right_points})"
        )


FormatTraceHook = Callable[[FormatTrace], None]


def compare_devices(left: Device, right: Device, config: SelectionConfig) -> int:
    """
    Compare two devices by lens composition.

    * Devices with a wide-angle lens are better than devices without.
    * Devices with an ultra-wide-angle lens are worse, unless the config
      prefers ultra-wide when available.
    * Devices with more physical lenses are better.
    """
    left_points = 0
    right_points = 0

    if left.has_lens(LensType.WIDE_ANGLE):
        left_points += DeviceWeights.WIDE_ANGLE
    if right.has_lens(LensType.WIDE_ANGLE):
        right_points += DeviceWeights.WIDE_ANGLE

    if not config.use_ultrawide_if_available:
        if left.has_lens(LensType.ULTRA_WIDE_ANGLE):
            left_points -= DeviceWeights.ULTRA_WIDE_ANGLE_PENALTY
        if right.has_lens(LensType.ULTRA_WIDE_ANGLE):
            right_points -= DeviceWeights.ULTRA_WIDE_ANGLE_PENALTY

    if left.physical_device_count > right.physical_device_count:
        left_points += DeviceWeights.MORE_PHYSICAL_DEVICES
    if right.physical_device_count > left.physical_device_count:
        right_points += DeviceWeights.MORE_PHYSICAL_DEVICES

    return right_points - left_points


def sort_devices(devices: Iterable[Device], config: SelectionConfig) -> List[Device]:
    """Return devices best first; equally ranked devices keep their order."""
    return sorted(devices, key=cmp_to_key(lambda a, b: compare_devices(a, b, config)))


def select_device(devices: Sequence[Device], config: SelectionConfig) -> Optional[Device]:
    """Pick the best device, or None when there are none."""
    ranked = sort_devices(devices, config)
    if not ranked:
        logger.warning("No camera devices to choose from")
        return None
    logger.debug(f"Selected device {ranked[0].id} out of {len(ranked)}")
    return ranked[0]


def filter_formats_by_aspect_ratio(formats: Sequence[Format], config: SelectionConfig) -> List[Format]:
    """Keep only the formats that waste the fewest pixels when filling the viewport."""
    if not formats:
        return []

    viewport = config.viewport.size
    overflows = [aspect_ratio_overflow(f, viewport) for f in formats]
    min_overflow = min(overflows)
    return [f for f, overflow in zip(formats, overflows) if overflow == min_overflow]


def stabilization_score(modes: Iterable[StabilizationMode]) -> int:
    """Sum the table points of every supported stabilization mode."""
    total = 0
    for mode in modes:
        try:
            total += STABILIZATION_POINTS[mode]
        except KeyError:
            raise UnknownStabilizationModeError(mode) from None
    return total


def compare_formats(
    left: Format,
    right: Format,
    config: SelectionConfig,
    trace: Optional[FormatTraceHook] = None,
) -> int:
    """
    Compare two formats by a weighted score.

    Each criterion awards its weight to the strictly better side only:
    photo resolution, video resolution (when both have video), lower cover
    overflow, stabilization modes, video HDR and photo HDR. Formats with
    equal totals compare as 0; there is no further tie-break.
    """
    left_points = 0
    right_points = 0

    if left.photo_pixels > right.photo_pixels:
        left_points += FormatWeights.PHOTO_RESOLUTION
    elif right.photo_pixels > left.photo_pixels:
        right_points += FormatWeights.PHOTO_RESOLUTION

    if left.has_video_dimensions and right.has_video_dimensions:
        if left.video_pixels > right.video_pixels:
            left_points += FormatWeights.VIDEO_RESOLUTION
        elif right.video_pixels > left.video_pixels:
            right_points += FormatWeights.VIDEO_RESOLUTION

    viewport = config.viewport.size
    left_measurement = cover_overflow(left, viewport)
    right_measurement = cover_overflow(right, viewport)
    if left_measurement.overflow < right_measurement.overflow:
        left_points += FormatWeights.ASPECT_RATIO_OVERFLOW
    elif right_measurement.overflow < left_measurement.overflow:
        right_points += FormatWeights.ASPECT_RATIO_OVERFLOW

    left_stabilization = stabilization_score(left.video_stabilization_modes)
    right_stabilization = stabilization_score(right.video_stabilization_modes)
    if left_stabilization > right_stabilization:
        left_points += FormatWeights.VIDEO_STABILIZATION
    elif right_stabilization > left_stabilization:
        right_points += FormatWeights.VIDEO_STABILIZATION

    if left.supports_video_hdr and not right.supports_video_hdr:
        left_points += FormatWeights.VIDEO_HDR
    elif right.supports_video_hdr and not left.supports_video_hdr:
        right_points += FormatWeights.VIDEO_HDR

    if left.supports_photo_hdr and not right.supports_photo_hdr:
        left_points += FormatWeights.PHOTO_HDR
    elif right.supports_photo_hdr and not left.supports_photo_hdr:
        right_points += FormatWeights.PHOTO_HDR

    record = FormatTrace(
        left=left,
        right=right,
        measurement=left_measurement,
        left_points=left_points,
        right_points=right_points,
    )
    logger.log(logging.INFO if config.trace_format_comparisons else logging.DEBUG, str(record))
    if trace:
        trace(record)

    return right_points - left_points


def compare_formats_by_resolution(left: Format, right: Format) -> int:
    """Compare formats by photo pixels, plus video pixels when both have video."""
    left_points = left.photo_pixels
    right_points = right.photo_pixels

    if left.has_video_dimensions and right.has_video_dimensions:
        left_points += left.video_pixels
        right_points += right.video_pixels

    return right_points - left_points


def sort_formats(
    formats: Iterable[Format],
    config: SelectionConfig,
    trace: Optional[FormatTraceHook] = None,
) -> List[Format]:
    """Return formats best first according to compare_formats."""
    return sorted(formats, key=cmp_to_key(lambda a, b: compare_formats(a, b, config, trace)))


def frame_rate_included(frame_rate_range: FrameRateRange, fps: float) -> bool:
    """Check if fps lies within the range, bounds included."""
    return frame_rate_range.min_frame_rate <= fps <= frame_rate_range.max_frame_rate


def filter_formats_by_frame_rate(formats: Iterable[Format], fps: float) -> List[Format]:
    """Keep the formats with at least one frame rate range including fps."""
    return [f for f in formats if any(frame_rate_included(r, fps) for r in f.frame_rate_ranges)]


def select_format(
    formats: Sequence[Format],
    config: SelectionConfig,
    fps: Optional[float] = None,
    trace: Optional[FormatTraceHook] = None,
) -> Optional[Format]:
    """
    Pick the best format for the configured viewport.

    Formats are narrowed to those supporting the requested frame rate (the
    explicit fps, else config.target_fps), then to the best aspect ratio
    matches, and the remainder is ranked with compare_formats.
    """
    candidates = list(formats)
    target_fps = fps if fps is not None else config.target_fps

    if target_fps is not None:
        candidates = filter_formats_by_frame_rate(candidates, target_fps)
        logger.debug(f"{len(candidates)}/{len(formats)} formats support {target_fps:g} fps")

    candidates = filter_formats_by_aspect_ratio(candidates, config)
    if not candidates:
        logger.warning("No format matches the selection criteria")
        return None

    logger.debug(f"{len(candidates)} formats share the best aspect ratio")
    return sort_formats(candidates, config, trace)[0]
