from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from postcard_logo.models.geometry import Point, Size
from postcard_logo.models.logo_position import LogoAnalysis, LogoOverrides, LogoPositionData
from postcard_logo.models.print_spec import PrintSpec
from postcard_logo.placement.parser import (
    parse_logo_position_from_brief,
    parse_logo_position_from_context,
)

logger = logging.getLogger(__name__)


class LogoPositionState:
    """디자인 옵션 하나의 로고 배치 상태 (파싱 결과 + 사용자 변경 이력)."""

    def __init__(
        self,
        on_position_change: Callable[[Point], None] | None = None,
        on_size_change: Callable[[Size], None] | None = None,
        spec: PrintSpec | None = None,
    ):
        self.on_position_change = on_position_change
        self.on_size_change = on_size_change
        self.spec = spec
        self.logo_position: LogoPositionData | None = None
        self.is_visible = True
        self.has_changes = False
        self._original: LogoPositionData | None = None

    def load(
        self,
        brief_text: str | None = None,
        logo_analysis: LogoAnalysis | Mapping[str, Any] | None = None,
    ) -> LogoPositionData | None:
        """브리프를 우선 파싱하고, 없으면 로고 분석 컨텍스트를 사용합니다.

        둘 다 실패하면 기존 상태를 그대로 유지합니다.
        """
        parsed: LogoPositionData | None = None
        if brief_text:
            parsed = parse_logo_position_from_brief(brief_text, self.spec)
        if parsed is None and logo_analysis is not None:
            parsed = parse_logo_position_from_context(logo_analysis, self.spec)

        if parsed is not None:
            self.logo_position = parsed
            self._original = parsed
            self.has_changes = False
        else:
            logger.info("Logo position unchanged: nothing parsed from brief or context")
        return self.logo_position

    def update_position(self, position: Point) -> None:
        if self.logo_position is None:
            return
        self.logo_position = self.logo_position.with_position(position)
        self.has_changes = True
        if self.on_position_change:
            self.on_position_change(position)

    def update_size(self, dimensions: Size) -> None:
        if self.logo_position is None:
            return
        self.logo_position = self.logo_position.with_dimensions(dimensions)
        self.has_changes = True
        if self.on_size_change:
            self.on_size_change(dimensions)

    def reset_to_default(self) -> None:
        if self._original is not None:
            self.logo_position = self._original
            self.has_changes = False

    def set_visible(self, visible: bool) -> None:
        self.is_visible = visible

    def overrides(self) -> LogoOverrides | None:
        """저장할 사용자 조정값. 변경이 없으면 None."""
        if self.logo_position is None or not self.has_changes:
            return None
        return LogoOverrides.from_position(self.logo_position)
