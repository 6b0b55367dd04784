"""크리에이티브 브리프 → 로고 배치 정보 파서

브리프는 AI가 작성한 자유 텍스트이므로 두 경로를 순서대로 시도합니다.
  1) ```logo-position 펜스 블록 안의 JSON (구조화 경로)
  2) "LOGO POSITION DATA:" 섹션의 문장형 표기 (레거시 경로, 정규식)
"""
from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from postcard_logo.config import get_settings
from postcard_logo.models.geometry import BackgroundRequirement, CamelModel, Point, Size
from postcard_logo.models.logo_position import LogoAnalysis, LogoPositionData
from postcard_logo.models.print_spec import PrintSpec, default_print_spec

logger = logging.getLogger(__name__)

_JSON_BLOCK_RE = re.compile(r"```logo-position[ \t]*\n(.*?)```", re.IGNORECASE | re.DOTALL)

# 헤더 다음부터 빈 줄, 번호 목록("\n3."), 텍스트 끝 중 먼저 오는 곳까지
_SECTION_RE = re.compile(
    r"LOGO\s*POSITION\s*DATA[^\n]*:(.*?)(?=\n[ \t]*\n|\n\s*\d+\.|\Z)",
    re.IGNORECASE | re.DOTALL,
)

_NUMBER = r"(\d+(?:\.\d+)?|\.\d+)"
_UNIT = r"(\"|″|”|in(?:ches)?\b|px\b|pixels\b)?"

_POSITION_RE = re.compile(
    rf"{_NUMBER}\s*{_UNIT}\s*from\s*left\s*,\s*{_NUMBER}\s*{_UNIT}\s*from\s*top",
    re.IGNORECASE,
)
_DIMENSIONS_RE = re.compile(
    rf"{_NUMBER}\s*{_UNIT}\s*[x×]\s*{_NUMBER}\s*{_UNIT}",
    re.IGNORECASE,
)
_BACKGROUND_RE = re.compile(
    r"\b(light|dark)\s*colou?red\s*area\s*required|Background\s*[:\-]?\s*(light|dark)\b",
    re.IGNORECASE,
)


class _LogoPositionBlock(CamelModel):
    """구조화 경로의 JSON 스키마."""

    position: Point
    dimensions: Size
    background_requirement: BackgroundRequirement = BackgroundRequirement.LIGHT


def _to_inches(value: str, unit: str | None, spec: PrintSpec) -> float:
    number = float(value)
    if unit and unit.lower().startswith(("px", "pixel")):
        return spec.to_inches(number)
    return number


def _parse_json_block(brief_text: str, spec: PrintSpec) -> LogoPositionData | None:
    match = _JSON_BLOCK_RE.search(brief_text)
    if not match:
        return None
    try:
        block = _LogoPositionBlock.model_validate(json.loads(match.group(1)))
    except (json.JSONDecodeError, ValidationError) as exc:
        logger.warning("Ignoring malformed logo-position block: %s", exc)
        return None
    return LogoPositionData(
        position=block.position,
        dimensions=block.dimensions,
        background_requirement=block.background_requirement,
        print_spec=spec,
    )


def _parse_legacy_section(brief_text: str, spec: PrintSpec) -> LogoPositionData | None:
    section = _SECTION_RE.search(brief_text)
    if not section:
        logger.info("No LOGO POSITION DATA section found in brief")
        return None

    body = section.group(1)
    position_match = _POSITION_RE.search(body)
    dimensions_match = _DIMENSIONS_RE.search(body)
    if not position_match or not dimensions_match:
        logger.error(
            "Error parsing logo position from brief: could not parse %s",
            "position" if not position_match else "dimensions",
        )
        return None

    background_match = _BACKGROUND_RE.search(body)
    if background_match:
        background = (background_match.group(1) or background_match.group(2)).lower()
    else:
        background = BackgroundRequirement.LIGHT.value

    x = _to_inches(position_match.group(1), position_match.group(2), spec)
    y = _to_inches(position_match.group(3), position_match.group(4), spec)
    width = _to_inches(dimensions_match.group(1), dimensions_match.group(2), spec)
    height = _to_inches(dimensions_match.group(3), dimensions_match.group(4), spec)

    return LogoPositionData(
        position=Point(x=x, y=y),
        dimensions=Size(width=width, height=height),
        background_requirement=BackgroundRequirement(background),
        print_spec=spec,
    )


def parse_logo_position_from_brief(
    brief_text: str,
    spec: PrintSpec | None = None,
) -> LogoPositionData | None:
    """크리에이티브 브리프 텍스트에서 로고 배치 정보를 추출합니다.

    - logo-position JSON 블록이 있으면 우선 사용 (깨져 있으면 경고 후 레거시 경로)
    - "LOGO POSITION DATA" 헤더가 없으면 None
    - 헤더는 있지만 위치/크기 항목이 없으면 에러 로그 후 None
    - 배경 톤 항목이 없으면 'light'

    Returns:
        LogoPositionData 또는 None (호출자가 기본 배치로 fallback)
    """
    spec = spec or default_print_spec()
    if not brief_text:
        return None

    parsed = _parse_json_block(brief_text, spec)
    if parsed is not None:
        return parsed
    return _parse_legacy_section(brief_text, spec)


def parse_logo_position_from_context(
    logo_analysis: LogoAnalysis | Mapping[str, Any],
    spec: PrintSpec | None = None,
) -> LogoPositionData:
    """이미 구조화된 로고 분석 결과를 LogoPositionData로 감쌉니다 (파싱 없음)."""
    spec = spec or default_print_spec()
    if not isinstance(logo_analysis, LogoAnalysis):
        logo_analysis = LogoAnalysis.model_validate(logo_analysis)
    return LogoPositionData(
        position=logo_analysis.position,
        dimensions=Size(width=logo_analysis.width, height=logo_analysis.height),
        background_requirement=logo_analysis.background_requirement,
        print_spec=spec,
    )


def default_logo_placement(
    logo_aspect_ratio: float | None = None,
    spec: PrintSpec | None = None,
) -> LogoPositionData:
    """브리프·컨텍스트가 모두 없을 때 쓰는 기본 배치 (좌측 상단 세이프존 안).

    가로로 긴 로고는 너비 기준, 세로로 긴 로고는 높이 기준으로 박스를 줄여
    로고 원본 비율을 유지합니다.
    """
    settings = get_settings()
    spec = spec or default_print_spec()
    width = settings.default_logo_max_width_in
    height = settings.default_logo_max_height_in

    if logo_aspect_ratio:
        if logo_aspect_ratio >= 1:
            height = width / logo_aspect_ratio
        else:
            width = height * logo_aspect_ratio

    return LogoPositionData(
        position=Point(x=settings.default_logo_x_in, y=settings.default_logo_y_in),
        dimensions=Size(width=width, height=height),
        background_requirement=BackgroundRequirement.LIGHT,
        print_spec=spec,
    )
