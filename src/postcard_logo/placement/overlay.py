"""인터랙티브 로고 오버레이 상태 머신

렌더러(웹 캔버스, 데스크톱 미리보기 등)가 포인터·키보드 이벤트를 전달하면
로고 위치·크기를 세이프존 안으로 클램핑하여 반영하고, 변경 사항을 inch 단위
콜백으로 알립니다.

상태:
  idle → dragging → idle
  idle → resizing → idle
  keyboard_focused 는 idle 과 공존하는 별도 플래그
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from postcard_logo.models.geometry import Point, SafeZone, Size
from postcard_logo.models.logo_position import LogoPositionData
from postcard_logo.placement.validator import validate_logo_position

logger = logging.getLogger(__name__)

MIN_LOGO_SIZE_PX = 50      # 리사이즈 최소 너비 (인쇄 px)
KEYBOARD_STEP_PX = 1       # 방향키 1회 이동량
KEYBOARD_FAST_STEP_PX = 10  # Shift + 방향키

_ARROW_KEYS: dict[str, tuple[int, int]] = {
    "ArrowLeft": (-1, 0),
    "ArrowRight": (1, 0),
    "ArrowUp": (0, -1),
    "ArrowDown": (0, 1),
}


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


class OverlayMode(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    RESIZING = "resizing"


class ResizeHandle(str, Enum):
    NW = "nw"
    NE = "ne"
    SW = "sw"
    SE = "se"


@dataclass
class _DragState:
    start_x: float
    start_y: float
    start_logo_x: float
    start_logo_y: float


@dataclass
class _ResizeState:
    handle: ResizeHandle
    start_x: float
    start_y: float
    start_logo_x: float
    start_logo_y: float
    start_width: float
    start_height: float


class LogoOverlay:
    """엽서 미리보기 위에 놓인 로고 하나의 편집 상태.

    내부 상태는 인쇄 해상도 기준 px(반올림하지 않은 float)로 유지하고,
    콜백에는 항상 inch 값을 전달합니다.
    """

    def __init__(
        self,
        logo_position: LogoPositionData,
        container_width: float,
        container_height: float,
        *,
        draggable: bool = True,
        resizable: bool = True,
        visible: bool = True,
        on_position_change: Callable[[Point], None] | None = None,
        on_size_change: Callable[[Size], None] | None = None,
        on_visibility_toggle: Callable[[bool], None] | None = None,
    ):
        self._record = logo_position
        self._spec = logo_position.print_spec
        self._aspect_ratio = logo_position.aspect_ratio

        self.draggable = draggable
        self.resizable = resizable
        self.visible = visible
        self.on_position_change = on_position_change
        self.on_size_change = on_size_change
        self.on_visibility_toggle = on_visibility_toggle

        dpi = self._spec.dpi
        zone = logo_position.safe_zone
        self.safe_zone = SafeZone(
            min_x=zone.min_x * dpi,
            min_y=zone.min_y * dpi,
            max_x=zone.max_x * dpi,
            max_y=zone.max_y * dpi,
        )
        self.position = Point(x=logo_position.position.x * dpi, y=logo_position.position.y * dpi)
        self.size = Size(
            width=logo_position.dimensions.width * dpi,
            height=logo_position.dimensions.height * dpi,
        )

        self.mode = OverlayMode.IDLE
        self.keyboard_focused = False
        self.validation_errors: list[str] = []
        self._drag: _DragState | None = None
        self._resize: _ResizeState | None = None

        self.resize_container(container_width, container_height)
        self._revalidate()

    # ── 좌표 변환 ─────────────────────────────────────────────────────────────

    def resize_container(self, container_width: float, container_height: float) -> None:
        """미리보기 컨테이너 크기가 바뀌면 화면 ↔ 인쇄 px 배율을 다시 계산합니다."""
        self.scale = min(
            container_width / self._spec.width_px,
            container_height / self._spec.height_px,
        )

    @property
    def display_position(self) -> Point:
        return Point(x=self.position.x * self.scale, y=self.position.y * self.scale)

    @property
    def display_size(self) -> Size:
        return Size(width=self.size.width * self.scale, height=self.size.height * self.scale)

    @property
    def display_safe_zone(self) -> SafeZone:
        zone = self.safe_zone
        return SafeZone(
            min_x=zone.min_x * self.scale,
            min_y=zone.min_y * self.scale,
            max_x=zone.max_x * self.scale,
            max_y=zone.max_y * self.scale,
        )

    @property
    def position_inches(self) -> Point:
        return Point(
            x=self._spec.to_inches(self.position.x),
            y=self._spec.to_inches(self.position.y),
        )

    @property
    def size_inches(self) -> Size:
        return Size(
            width=self._spec.to_inches(self.size.width),
            height=self._spec.to_inches(self.size.height),
        )

    def to_logo_position(self) -> LogoPositionData:
        """현재 편집 상태를 LogoPositionData로 반환합니다."""
        return self._record.with_position(self.position_inches).with_dimensions(self.size_inches)

    # ── 드래그 ───────────────────────────────────────────────────────────────

    def pointer_down(self, client_x: float, client_y: float) -> bool:
        """로고 본체에서 포인터를 누르면 드래그를 시작합니다."""
        if not (self.visible and self.draggable) or self.mode is not OverlayMode.IDLE:
            return False
        self._drag = _DragState(
            start_x=client_x,
            start_y=client_y,
            start_logo_x=self.position.x,
            start_logo_y=self.position.y,
        )
        self.mode = OverlayMode.DRAGGING
        return True

    def pointer_down_on_handle(self, handle: ResizeHandle | str, client_x: float, client_y: float) -> bool:
        """모서리 핸들에서 포인터를 누르면 리사이즈를 시작합니다."""
        if not (self.visible and self.resizable) or self.mode is not OverlayMode.IDLE:
            return False
        self._resize = _ResizeState(
            handle=ResizeHandle(handle),
            start_x=client_x,
            start_y=client_y,
            start_logo_x=self.position.x,
            start_logo_y=self.position.y,
            start_width=self.size.width,
            start_height=self.size.height,
        )
        self.mode = OverlayMode.RESIZING
        return True

    def pointer_move(self, client_x: float, client_y: float) -> None:
        if self.mode is OverlayMode.DRAGGING and self._drag is not None:
            drag = self._drag
            new_x = drag.start_logo_x + (client_x - drag.start_x) / self.scale
            new_y = drag.start_logo_y + (client_y - drag.start_y) / self.scale
            self._commit(position=self._clamp_position(new_x, new_y, self.size))
        elif self.mode is OverlayMode.RESIZING and self._resize is not None:
            position, size = self._resized_geometry(client_x)
            self._commit(position=position, size=size)

    def pointer_up(self) -> None:
        if self.mode is OverlayMode.DRAGGING:
            self._drag = None
            self.mode = OverlayMode.IDLE
            self._notify_position()
        elif self.mode is OverlayMode.RESIZING:
            resize = self._resize
            self._resize = None
            self.mode = OverlayMode.IDLE
            self._notify_size()
            if resize is not None and (
                resize.start_logo_x != self.position.x or resize.start_logo_y != self.position.y
            ):
                self._notify_position()

    # ── 키보드 ───────────────────────────────────────────────────────────────

    def focus(self) -> bool:
        """로고 클릭 시 키보드 포커스를 얻습니다 (드래그 가능한 경우만)."""
        if not (self.visible and self.draggable):
            return False
        self.keyboard_focused = True
        return True

    def blur(self) -> None:
        self.keyboard_focused = False

    def key_down(self, key: str, shift: bool = False) -> bool:
        """방향키로 1px(Shift: 10px)씩 이동, Escape로 포커스 해제.

        Returns:
            키를 처리했으면 True
        """
        if not self.keyboard_focused or not self.draggable:
            return False
        if key == "Escape":
            self.blur()
            return True
        if key not in _ARROW_KEYS:
            return False

        step = KEYBOARD_FAST_STEP_PX if shift else KEYBOARD_STEP_PX
        dx, dy = _ARROW_KEYS[key]
        self._commit(
            position=self._clamp_position(
                self.position.x + dx * step,
                self.position.y + dy * step,
                self.size,
            )
        )
        self._notify_position()
        return True

    # ── 표시 여부 ────────────────────────────────────────────────────────────

    def toggle_visibility(self) -> bool:
        self.visible = not self.visible
        if not self.visible:
            self.keyboard_focused = False
            self._drag = None
            self._resize = None
            self.mode = OverlayMode.IDLE
        if self.on_visibility_toggle:
            self.on_visibility_toggle(self.visible)
        return self.visible

    # ── 내부 ─────────────────────────────────────────────────────────────────

    def _clamp_position(self, x: float, y: float, size: Size) -> Point:
        zone = self.safe_zone
        return Point(
            x=max(zone.min_x, min(x, zone.max_x - size.width)),
            y=max(zone.min_y, min(y, zone.max_y - size.height)),
        )

    def _resized_geometry(self, client_x: float) -> tuple[Point, Size]:
        """활성 모서리 기준으로 새 위치·크기를 계산합니다.

        - 너비만 포인터 이동량으로 정하고 높이는 항상 원본 비율로 재계산
        - 반대편 모서리는 고정 (nw/ne/sw 는 위치도 함께 이동)
        - 두 축 모두 세이프존을 넘지 않도록 너비 상한을 적용
        - 고정 모서리가 세이프존 밖이면 최소 크기가 들어가도록 존 안으로 당김
        """
        resize = self._resize
        zone = self.safe_zone
        ratio = self._aspect_ratio
        delta_x = (client_x - resize.start_x) / self.scale
        min_width = MIN_LOGO_SIZE_PX
        min_height = min_width / ratio

        grows_left = resize.handle in (ResizeHandle.NW, ResizeHandle.SW)
        grows_up = resize.handle in (ResizeHandle.NW, ResizeHandle.NE)
        left = _clamp(resize.start_logo_x, zone.min_x, zone.max_x - min_width)
        top = _clamp(resize.start_logo_y, zone.min_y, zone.max_y - min_height)
        right = _clamp(resize.start_logo_x + resize.start_width, zone.min_x + min_width, zone.max_x)
        bottom = _clamp(resize.start_logo_y + resize.start_height, zone.min_y + min_height, zone.max_y)

        width = resize.start_width - delta_x if grows_left else resize.start_width + delta_x

        max_width = right - zone.min_x if grows_left else zone.max_x - left
        max_height = bottom - zone.min_y if grows_up else zone.max_y - top
        max_width = min(max_width, max_height * ratio)

        width = min(max(width, min_width), max_width)
        height = width / ratio

        x = right - width if grows_left else left
        y = bottom - height if grows_up else top
        return Point(x=x, y=y), Size(width=width, height=height)

    def _commit(self, position: Point | None = None, size: Size | None = None) -> None:
        if position is not None:
            self.position = position
        if size is not None:
            self.size = size
        self._revalidate()

    def _revalidate(self) -> None:
        result = validate_logo_position(self.position_inches, self.size_inches, self._spec)
        if result.errors != self.validation_errors and result.errors:
            logger.debug("Logo outside safe zone: %s", result.errors)
        self.validation_errors = result.errors

    def _notify_position(self) -> None:
        if self.on_position_change:
            self.on_position_change(self.position_inches)

    def _notify_size(self) -> None:
        if self.on_size_change:
            self.on_size_change(self.size_inches)
