"""inch ↔ px 변환 및 인쇄 규격 테스트"""
import pytest

from postcard_logo.models.print_spec import PrintSpec
from postcard_logo.utils.units import inches_to_pixels, pixels_to_inches


def test_inches_to_pixels_at_300_dpi():
    """300 DPI 기준 inch → px 변환."""
    assert inches_to_pixels(1) == 300
    assert inches_to_pixels(0.5) == 150
    assert inches_to_pixels(6) == 1800


def test_inches_to_pixels_rounds_half_up():
    """.5 픽셀은 올림."""
    # 0.125" * 300 = 37.5, 5.875" * 300 = 1762.5
    assert inches_to_pixels(0.125) == 38
    assert inches_to_pixels(5.875) == 1763


def test_pixels_to_inches_does_not_round():
    """px → inch 변환은 반올림하지 않는다."""
    assert pixels_to_inches(150) == 0.5
    assert pixels_to_inches(37.5) == 0.125


@pytest.mark.parametrize("inches", [0, 0.001, 0.125, 1 / 3, 1.2345, 3.875, 5.99, 12.0])
def test_round_trip_within_one_pixel(inches):
    """inch → px → inch 왕복 오차는 1px 이내."""
    assert abs(pixels_to_inches(inches_to_pixels(inches)) - inches) <= 1 / 300


def test_custom_print_spec_is_threaded_through():
    """전달된 PrintSpec의 DPI를 사용."""
    spec = PrintSpec(dpi=150, width_in=7, height_in=5, bleed_in=0.25)
    assert inches_to_pixels(1, spec) == 150
    assert pixels_to_inches(300, spec) == 2.0
    zone = spec.safe_zone()
    assert (zone.min_x, zone.min_y, zone.max_x, zone.max_y) == (0.25, 0.25, 6.75, 4.75)


def test_default_safe_zone():
    """기본 세이프존은 bleed 0.125" 안쪽."""
    zone = PrintSpec().safe_zone()
    assert zone.min_x == 0.125
    assert zone.min_y == 0.125
    assert zone.max_x == 5.875
    assert zone.max_y == 3.875
