"""Aspect ratio overflow calculations for fitting capture formats to a viewport."""

import math
from dataclasses import dataclass
from typing import Tuple

from .errors import InvalidDimensionError
from .models import Format, Size


@dataclass(frozen=True)
class OverflowMeasurement:
    """Intermediate values of a cover overflow calculation."""

    viewport: Size
    camera_size: Size
    scaled_size: Size
    overflow: float


class GeometryCalculator:
    """Pure functions for scaling sizes against each other."""

    @staticmethod
    def require_positive(size: Size, label: str) -> None:
        """Raise InvalidDimensionError unless both dimensions are positive and finite."""
        if not all(math.isfinite(d) and d > 0 for d in (size.width, size.height)):
            raise InvalidDimensionError(f"{label} must have positive finite dimensions, got {size.width}x{size.height}")

    @staticmethod
    def scale_factors(base: Size, mask: Size) -> Tuple[float, float]:
        """Return (width scale, height scale) mapping base onto mask."""
        GeometryCalculator.require_positive(base, "base size")
        GeometryCalculator.require_positive(mask, "mask size")
        w_scale, h_scale = mask.width / base.width, mask.height / base.height
        if not all(math.isfinite(s) and s > 0 for s in (w_scale, h_scale)):
            raise InvalidDimensionError(f"cannot scale {base} onto {mask}")
        return w_scale, h_scale

    @staticmethod
    def downscale_to_fit(base: Size, mask: Size) -> Size:
        """
        Scale mask uniformly so it matches base on one axis and covers it on the other.

        The result keeps the mask's aspect ratio. Its area minus the base area
        is the number of mask pixels that fall outside the base.
        """
        w_scale, h_scale = GeometryCalculator.scale_factors(base, mask)
        scale = h_scale if w_scale > h_scale else w_scale
        return Size(width=mask.width / scale, height=mask.height / scale)

    @staticmethod
    def upscale_to_cover(base: Size, mask: Size) -> Size:
        """
        Grow base along one axis so it approximately covers mask.

        Only one dimension is inflated, by a factor of (1 + scale) of the other
        axis. This is an approximation of cover scaling and the numbers are
        kept as-is because format ranking depends on them.
        """
        w_scale, h_scale = GeometryCalculator.scale_factors(base, mask)
        if w_scale < h_scale:
            return Size(width=base.width * (1 + h_scale), height=base.height)
        return Size(width=base.width, height=base.height * (1 + w_scale))

    @staticmethod
    def rotate_to_portrait(camera_format: Format) -> Size:
        """Camera sensors are landscape, so the photo size is rotated for portrait viewports."""
        return camera_format.photo_size.rotated()


def aspect_ratio_overflow(camera_format: Format, viewport: Size) -> float:
    """Pixels outside the viewport when the format is scaled to fill it."""
    fitted = GeometryCalculator.downscale_to_fit(viewport, GeometryCalculator.rotate_to_portrait(camera_format))
    return fitted.area - viewport.area


def cover_overflow(camera_format: Format, viewport: Size) -> OverflowMeasurement:
    """Extra pixels needed to grow the format until it covers the viewport."""
    camera_size = GeometryCalculator.rotate_to_portrait(camera_format)
    scaled_size = GeometryCalculator.upscale_to_cover(camera_size, viewport)
    return OverflowMeasurement(
        viewport=viewport,
        camera_size=camera_size,
        scaled_size=scaled_size,
        overflow=scaled_size.area - camera_size.area,
    )
