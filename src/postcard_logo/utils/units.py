from __future__ import annotations

from postcard_logo.models.print_spec import PrintSpec, default_print_spec


def inches_to_pixels(inches: float, spec: PrintSpec | None = None) -> int:
    """inch → 인쇄 DPI 기준 픽셀 (half-up 반올림)."""
    return (spec or default_print_spec()).to_pixels(inches)


def pixels_to_inches(pixels: float, spec: PrintSpec | None = None) -> float:
    """픽셀 → inch. 반올림하지 않습니다."""
    return (spec or default_print_spec()).to_inches(pixels)
