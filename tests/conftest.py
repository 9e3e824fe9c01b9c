"""
Pytest configuration for Camera Format Filter tests
"""

import logging

import pytest

from camera_format_filter.config import SelectionConfig, ViewportConfig
from camera_format_filter.models import Device, Format, FrameRateRange, LensType, StabilizationMode

# Configure logging for all tests
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


@pytest.fixture
def config():
    """Default selection config: 1080x2340 portrait viewport, ultra-wide penalized."""
    return SelectionConfig(viewport=ViewportConfig(width=1080, height=2340))


@pytest.fixture
def ultrawide_config():
    return SelectionConfig(viewport=ViewportConfig(width=1080, height=2340), use_ultrawide_if_available=True)


@pytest.fixture
def formats():
    """Formats of a typical phone back camera."""
    return {
        "4:3": Format(photo_width=4032, photo_height=3024, frame_rate_ranges=(FrameRateRange(1, 30),)),
        "16:9": Format(photo_width=1920, photo_height=1080, frame_rate_ranges=(FrameRateRange(1, 60),)),
        "screen": Format(photo_width=2340, photo_height=1080, frame_rate_ranges=(FrameRateRange(1, 60),)),
        "screen_2x": Format(
            photo_width=4680,
            photo_height=2160,
            video_stabilization_modes=(StabilizationMode.CINEMATIC,),
            frame_rate_ranges=(FrameRateRange(1, 30),),
        ),
    }


@pytest.fixture
def devices():
    return {
        "triple": Device(
            id="0",
            physical_devices=(LensType.WIDE_ANGLE, LensType.ULTRA_WIDE_ANGLE, LensType.TELEPHOTO),
        ),
        "wide": Device(id="1", physical_devices=(LensType.WIDE_ANGLE,)),
        "ultrawide": Device(id="2", physical_devices=(LensType.ULTRA_WIDE_ANGLE,)),
        "telephoto": Device(id="3", physical_devices=(LensType.TELEPHOTO,)),
        "dual_wide": Device(id="4", physical_devices=(LensType.WIDE_ANGLE, LensType.TELEPHOTO)),
        "empty": Device(id="5"),
    }


# Pytest markers for different test categories
def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line("markers", "cli: marks tests that run the command line entry point")
