"""
로고 배치 → 합성 → 업로드 파이프라인

Stage 1 (배치 결정: 브리프 → 컨텍스트 → 기본값) → Stage 2 (저장된 사용자 조정값 적용)
→ Stage 3 (세이프존 검증) → Stage 4 (inch → px 변환 후 합성) → Stage 5 (업로드, 선택)
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from postcard_logo.compositor import composite_logo_on_image
from postcard_logo.config import get_settings
from postcard_logo.models.composite import CompositeOptions, ValidationResult
from postcard_logo.models.geometry import Point, Size
from postcard_logo.models.logo_position import LogoAnalysis, LogoOverrides, LogoPositionData
from postcard_logo.models.print_spec import PrintSpec, default_print_spec
from postcard_logo.placement.parser import (
    default_logo_placement,
    parse_logo_position_from_brief,
    parse_logo_position_from_context,
)
from postcard_logo.placement.validator import validate_logo_position
from postcard_logo.storage import upload_composited_image

logger = logging.getLogger(__name__)


@dataclass
class UploadTarget:
    user_id: str
    campaign_id: str
    design_id: str
    option_label: str


@dataclass
class PipelineResult:
    logo_position: LogoPositionData
    validation: ValidationResult
    data_url: str
    image_url: str | None = None
    used_default: bool = False


def resolve_logo_position(
    brief_text: str | None = None,
    logo_analysis: LogoAnalysis | Mapping[str, Any] | None = None,
    logo_aspect_ratio: float | None = None,
    spec: PrintSpec | None = None,
) -> tuple[LogoPositionData, bool]:
    """브리프 → 컨텍스트 → 기본 배치 순으로 로고 배치를 결정합니다.

    Returns:
        (LogoPositionData, 기본 배치 사용 여부)
    """
    if brief_text:
        parsed = parse_logo_position_from_brief(brief_text, spec)
        if parsed is not None:
            return parsed, False
        logger.warning("Brief has no usable logo position; falling back")

    if logo_analysis is not None:
        return parse_logo_position_from_context(logo_analysis, spec), False

    logger.info("Using default logo placement (aspect ratio=%s)", logo_aspect_ratio)
    return default_logo_placement(logo_aspect_ratio, spec), True


async def run_pipeline(
    background_image_url: str,
    logo_image_url: str,
    *,
    brief_text: str | None = None,
    logo_analysis: LogoAnalysis | Mapping[str, Any] | None = None,
    logo_aspect_ratio: float | None = None,
    overrides: LogoOverrides | None = None,
    upload: UploadTarget | None = None,
    spec: PrintSpec | None = None,
) -> PipelineResult:
    """
    최종 로고 배치를 결정하고 배경 이미지에 합성합니다.

    Args:
        background_image_url: 인쇄 해상도(예: 1800x1200) 배경 이미지 URL/경로
        logo_image_url: 로고 이미지 URL/경로
        brief_text: LOGO POSITION DATA 블록이 포함된 크리에이티브 브리프
        logo_analysis: { width, height, position{x,y}, backgroundRequirement } (inch)
        logo_aspect_ratio: 기본 배치 계산용 로고 원본 비율 (width / height)
        overrides: 사용자가 저장한 위치·크기 조정값 (inch)
        upload: 지정 시 합성 결과를 업로드

    Returns:
        PipelineResult (배치 정보, 검증 결과, data URL, 업로드 URL)
    """
    spec = spec or default_print_spec()
    settings = get_settings()

    # ── Stage 1: 배치 결정 ──────────────────────────────────────────────────
    logger.info("Stage 1: resolving logo position...")
    logo_position, used_default = resolve_logo_position(
        brief_text, logo_analysis, logo_aspect_ratio, spec
    )

    # ── Stage 2: 사용자 조정값 ──────────────────────────────────────────────
    if overrides is not None:
        logger.info("Stage 2: applying saved overrides %s", overrides.model_dump())
        logo_position = overrides.apply(logo_position)

    # ── Stage 3: 세이프존 검증 (경고만, 합성은 계속) ───────────────────────
    validation = validate_logo_position(logo_position.position, logo_position.dimensions, spec)
    if not validation.is_valid:
        logger.warning("Logo outside safe zone: %s", validation.errors)

    # ── Stage 4: 합성 ───────────────────────────────────────────────────────
    logger.info("Stage 4: compositing logo...")
    pixels = logo_position.pixels
    options = CompositeOptions(
        logo_position=Point(x=pixels.position.x, y=pixels.position.y),
        logo_dimensions=Size(width=pixels.dimensions.width, height=pixels.dimensions.height),
        quality=settings.composite_quality,
        format=settings.composite_format,
    )
    data_url = await composite_logo_on_image(background_image_url, logo_image_url, options)

    # ── Stage 5: 업로드 ─────────────────────────────────────────────────────
    image_url = None
    if upload is not None:
        logger.info("Stage 5: uploading composited image...")
        image_url = await upload_composited_image(
            data_url,
            user_id=upload.user_id,
            campaign_id=upload.campaign_id,
            design_id=upload.design_id,
            option_label=upload.option_label,
        )

    return PipelineResult(
        logo_position=logo_position,
        validation=validation,
        data_url=data_url,
        image_url=image_url,
        used_default=used_default,
    )
