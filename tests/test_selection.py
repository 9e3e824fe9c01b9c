"""
Tests for device and format ranking
"""

import itertools
import logging

import pytest

from camera_format_filter.errors import UnknownStabilizationModeError
from camera_format_filter.models import Format, FrameRateRange, Size, StabilizationMode
from camera_format_filter.selection import (
    STABILIZATION_POINTS,
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
    stabilization_score,
)


class TestCompareDevices:
    def test_wide_angle_is_preferred(self, devices, config):
        assert compare_devices(devices["wide"], devices["telephoto"], config) < 0
        assert compare_devices(devices["telephoto"], devices["wide"], config) > 0

    def test_ultrawide_penalized_when_not_preferred(self, devices, config):
        assert compare_devices(devices["ultrawide"], devices["telephoto"], config) > 0

    def test_ultrawide_neutral_when_preferred(self, devices, ultrawide_config):
        assert compare_devices(devices["ultrawide"], devices["telephoto"], ultrawide_config) == 0

    def test_more_physical_devices_is_preferred(self, devices, config):
        # 5 (wide) + 3 (more lenses) against 5 (wide)
        assert compare_devices(devices["dual_wide"], devices["wide"], config) == -3

    def test_ultrawide_penalty_can_outweigh_lens_count(self, devices, config, ultrawide_config):
        # 5 - 5 + 3 against 5
        assert compare_devices(devices["triple"], devices["wide"], config) == 2
        # 5 + 3 against 5
        assert compare_devices(devices["triple"], devices["wide"], ultrawide_config) == -3

    def test_devices_without_lenses(self, devices, config):
        assert compare_devices(devices["empty"], devices["empty"], config) == 0
        assert compare_devices(devices["empty"], devices["telephoto"], config) == 3

    def test_antisymmetry(self, devices, config, ultrawide_config):
        for cfg in (config, ultrawide_config):
            for a, b in itertools.product(devices.values(), repeat=2):
                assert compare_devices(a, b, cfg) == -compare_devices(b, a, cfg)

    def test_sort_puts_best_first_and_is_stable(self, devices, config):
        ranked = sort_devices(
            [devices["ultrawide"], devices["wide"], devices["telephoto"], devices["dual_wide"]], config
        )
        assert [d.id for d in ranked] == ["4", "1", "3", "2"]

    def test_select_device(self, devices, config, ultrawide_config):
        candidates = [devices["triple"], devices["wide"]]
        assert select_device(candidates, config) is devices["wide"]
        assert select_device(candidates, ultrawide_config) is devices["triple"]
        assert select_device([], config) is None


class TestFilterFormatsByAspectRatio:
    def test_keeps_only_best_aspect_ratio(self, formats, config):
        result = filter_formats_by_aspect_ratio([formats["4:3"], formats["16:9"], formats["screen"]], config)
        assert result == [formats["screen"]]

    def test_keeps_ties_in_input_order(self, formats, config):
        candidates = [formats["screen_2x"], formats["4:3"], formats["screen"]]
        assert filter_formats_by_aspect_ratio(candidates, config) == [formats["screen_2x"], formats["screen"]]

    def test_empty_input(self, config):
        assert filter_formats_by_aspect_ratio([], config) == []

    def test_does_not_mutate_input(self, formats, config):
        candidates = list(formats.values())
        snapshot = list(candidates)
        filter_formats_by_aspect_ratio(candidates, config)
        assert candidates == snapshot

    def test_idempotent_non_empty_subset(self, formats, config):
        for size in range(1, len(formats) + 1):
            for subset in itertools.combinations(formats.values(), size):
                result = filter_formats_by_aspect_ratio(list(subset), config)
                assert result
                assert all(f in subset for f in result)
                assert filter_formats_by_aspect_ratio(result, config) == result


class TestCompareFormats:
    def test_stabilization_and_hdr_win_on_equal_resolution(self, config):
        plain = Format(photo_width=4000, photo_height=3000)
        better = Format(
            photo_width=4000,
            photo_height=3000,
            video_stabilization_modes=(StabilizationMode.CINEMATIC,),
            supports_photo_hdr=True,
        )
        assert compare_formats(plain, better, config) == 3
        assert compare_formats(better, plain, config) == -3

    def test_higher_resolution_wins(self, config):
        high = Format(photo_width=4000, photo_height=3000)
        low = Format(photo_width=2000, photo_height=1500)
        # the smaller format overflows less, but resolution outweighs it
        assert compare_formats(high, low, config) == -2
        assert compare_formats(low, high, config) == 2

    def test_video_resolution_needs_both_sides(self, config):
        with_video = Format(photo_width=4000, photo_height=3000, video_width=3840, video_height=2160)
        without_video = Format(photo_width=4000, photo_height=3000)
        assert compare_formats(with_video, without_video, config) == 0

    def test_video_resolution(self, config):
        uhd = Format(photo_width=4000, photo_height=3000, video_width=3840, video_height=2160)
        fhd = Format(photo_width=4000, photo_height=3000, video_width=1920, video_height=1080)
        assert compare_formats(uhd, fhd, config) == -3

    def test_video_hdr(self, config):
        hdr = Format(photo_width=4000, photo_height=3000, supports_video_hdr=True)
        sdr = Format(photo_width=4000, photo_height=3000)
        assert compare_formats(hdr, sdr, config) == -1
        assert compare_formats(hdr, hdr, config) == 0

    def test_lower_overflow_wins(self, config):
        # same pixel count, rotated 1080x2340 overflows less than rotated 2340x1080
        portrait = Format(photo_width=2340, photo_height=1080)
        landscape = Format(photo_width=1080, photo_height=2340)
        assert compare_formats(portrait, landscape, config) == -3

    @pytest.mark.parametrize(
        "left_modes,right_modes",
        [
            ((StabilizationMode.STANDARD, StabilizationMode.AUTO), (StabilizationMode.CINEMATIC,)),
            ((StabilizationMode.CINEMATIC_EXTENDED,), (StabilizationMode.CINEMATIC, StabilizationMode.STANDARD)),
            ((StabilizationMode.OFF,), ()),
        ],
    )
    def test_equal_stabilization_scores_tie(self, config, left_modes, right_modes):
        left = Format(photo_width=4000, photo_height=3000, video_stabilization_modes=left_modes)
        right = Format(photo_width=4000, photo_height=3000, video_stabilization_modes=right_modes)
        assert compare_formats(left, right, config) == 0

    def test_unknown_stabilization_mode(self, config):
        odd = Format(photo_width=4000, photo_height=3000, video_stabilization_modes=("cinematic",))
        with pytest.raises(UnknownStabilizationModeError):
            compare_formats(odd, Format(photo_width=4000, photo_height=3000), config)

    def test_stabilization_table_is_total(self):
        assert set(STABILIZATION_POINTS) == set(StabilizationMode)
        assert stabilization_score(list(StabilizationMode)) == 7

    def test_trace_hook_receives_left_measurement(self, config):
        records = []
        plain = Format(photo_width=4000, photo_height=3000)
        better = Format(photo_width=4000, photo_height=3000, supports_photo_hdr=True)
        compare_formats(plain, better, config, trace=records.append)

        assert len(records) == 1
        record = records[0]
        assert record.left is plain
        assert record.measurement.viewport == Size(1080, 2340)
        assert record.measurement.camera_size == Size(3000, 4000)
        assert (record.left_points, record.right_points) == (0, 1)
        assert "Overflow:" in str(record)

    def test_comparisons_are_logged(self, config, caplog):
        plain = Format(photo_width=4000, photo_height=3000)
        with caplog.at_level(logging.DEBUG, logger="camera_format_filter.selection"):
            compare_formats(plain, plain, config)
        assert any("Viewport: 1080x2340" in r.getMessage() and r.levelno == logging.DEBUG for r in caplog.records)

    def test_trace_config_logs_at_info(self, config, caplog):
        traced = config.model_copy(update={"trace_format_comparisons": True})
        plain = Format(photo_width=4000, photo_height=3000)
        with caplog.at_level(logging.INFO, logger="camera_format_filter.selection"):
            compare_formats(plain, plain, traced)
        assert any("Camera: 3000x4000" in r.getMessage() and r.levelno == logging.INFO for r in caplog.records)

    def test_sort_formats(self, formats, config):
        ranked = sort_formats([formats["screen"], formats["screen_2x"]], config)
        assert ranked == [formats["screen_2x"], formats["screen"]]


class TestCompareFormatsByResolution:
    def test_photo_pixels(self):
        assert compare_formats_by_resolution(
            Format(photo_width=4000, photo_height=3000), Format(photo_width=2000, photo_height=1500)
        ) == 3_000_000 - 12_000_000

    def test_video_pixels_added_when_both_present(self):
        left = Format(photo_width=100, photo_height=100, video_width=10, video_height=10)
        right = Format(photo_width=100, photo_height=100, video_width=20, video_height=10)
        assert compare_formats_by_resolution(left, right) == 100
        assert compare_formats_by_resolution(left, Format(photo_width=100, photo_height=100)) == 0


class TestFrameRate:
    @pytest.mark.parametrize("fps,expected", [(24, True), (30, True), (27.5, True), (23.9, False), (30.1, False)])
    def test_inclusive_bounds(self, fps, expected):
        assert frame_rate_included(FrameRateRange(min_frame_rate=24, max_frame_rate=30), fps) is expected

    def test_filter_formats_by_frame_rate(self, formats):
        result = filter_formats_by_frame_rate(formats.values(), 60)
        assert result == [formats["16:9"], formats["screen"]]


class TestSelectFormat:
    def test_prefers_matching_aspect_ratio(self, formats, config):
        assert select_format(list(formats.values()), config) == formats["screen_2x"]

    def test_frame_rate_narrows_candidates(self, formats, config):
        assert select_format(list(formats.values()), config, fps=60) == formats["screen"]

    def test_target_fps_from_config(self, formats, config):
        assert select_format(list(formats.values()), config.model_copy(update={"target_fps": 60})) == formats["screen"]

    def test_no_candidates(self, formats, config):
        assert select_format([], config) is None
        assert select_format(list(formats.values()), config, fps=240) is None
