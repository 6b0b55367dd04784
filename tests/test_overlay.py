"""인터랙티브 오버레이 상태 머신 테스트 (드래그 / 리사이즈 / 키보드)"""
import pytest

from postcard_logo.models.geometry import Point, Size
from postcard_logo.models.logo_position import LogoPositionData
from postcard_logo.placement.overlay import LogoOverlay, OverlayMode, ResizeHandle


def _make_position(x=1.0, y=1.0, width=1.5, height=0.75):
    return LogoPositionData(
        position=Point(x=x, y=y),
        dimensions=Size(width=width, height=height),
    )


def _make_overlay(**kwargs):
    # 컨테이너 900x600 → 배율 0.5 (화면 1px = 인쇄 2px)
    positions, sizes = [], []
    overlay = LogoOverlay(
        kwargs.pop("logo_position", _make_position()),
        900,
        600,
        on_position_change=positions.append,
        on_size_change=sizes.append,
        **kwargs,
    )
    return overlay, positions, sizes


def test_scale_is_derived_from_container():
    """컨테이너 크기로 화면 배율과 표시 좌표를 계산."""
    overlay, _, _ = _make_overlay()
    assert overlay.scale == 0.5
    assert overlay.display_position == Point(x=150, y=150)
    assert overlay.display_size == Size(width=225, height=112.5)


def test_drag_moves_logo_and_reports_inches_on_release():
    """드래그 이동은 놓을 때 inch 단위로 한 번만 통지."""
    overlay, positions, _ = _make_overlay()

    assert overlay.pointer_down(100, 100) is True
    assert overlay.mode is OverlayMode.DRAGGING
    overlay.pointer_move(175, 100)  # 75 screen px → 150 print px → 0.5"

    assert positions == []  # 이동 중에는 콜백 없음
    overlay.pointer_up()

    assert overlay.mode is OverlayMode.IDLE
    assert positions == [Point(x=1.5, y=1.0)]


def test_drag_beyond_left_edge_clamps_to_safe_zone():
    """왼쪽 밖으로 끌면 세이프존 최소 x(0.125")에 고정."""
    overlay, positions, _ = _make_overlay()

    overlay.pointer_down(500, 300)
    # 화면 -450px → 인쇄 -900px → x = 300 - 900 = -600px (-2")
    overlay.pointer_move(50, 300)
    overlay.pointer_up()

    assert overlay.position_inches.x == 0.125
    assert positions[-1].x == 0.125
    assert overlay.validation_errors == []


def test_drag_beyond_bottom_right_clamps_to_safe_zone():
    """오른쪽 아래 밖으로 끌면 세이프존 안쪽 끝에 고정."""
    overlay, _, _ = _make_overlay()

    overlay.pointer_down(0, 0)
    overlay.pointer_move(5000, 5000)

    inches = overlay.position_inches
    assert inches.x == pytest.approx(5.875 - 1.5)
    assert inches.y == pytest.approx(3.875 - 0.75)
    assert overlay.validation_errors == []


def test_drag_ignored_when_not_draggable():
    """draggable=False면 드래그가 시작되지 않는다."""
    overlay, _, _ = _make_overlay(draggable=False)

    assert overlay.pointer_down(0, 0) is False
    overlay.pointer_move(100, 100)
    assert overlay.position_inches == Point(x=1.0, y=1.0)


@pytest.mark.parametrize("handle", list(ResizeHandle))
@pytest.mark.parametrize("delta", [-300, -40, 25, 80, 600])
def test_resize_preserves_aspect_ratio(handle, delta):
    """어느 핸들·이동량이든 원본 비율과 세이프존을 유지."""
    overlay, _, _ = _make_overlay(logo_position=_make_position(x=2, y=1.5, width=1.5, height=0.75))

    overlay.pointer_down_on_handle(handle, 400, 300)
    for step in (delta / 3, delta / 2, delta):
        overlay.pointer_move(400 + step, 300 + step)
        assert overlay.size.width / overlay.size.height == pytest.approx(2.0)
        assert overlay.validation_errors == []


def test_resize_se_keeps_top_left_fixed():
    """SE 리사이즈는 왼쪽 위 모서리를 고정."""
    overlay, positions, sizes = _make_overlay()

    overlay.pointer_down_on_handle(ResizeHandle.SE, 0, 0)
    overlay.pointer_move(75, 0)  # +150 print px width
    overlay.pointer_up()

    assert overlay.position_inches == Point(x=1.0, y=1.0)
    assert sizes == [Size(width=2.0, height=1.0)]
    assert positions == []


def test_resize_nw_keeps_bottom_right_fixed():
    """NW 리사이즈는 오른쪽 아래 모서리를 고정."""
    overlay, positions, sizes = _make_overlay()

    overlay.pointer_down_on_handle("nw", 0, 0)
    overlay.pointer_move(-75, 0)
    overlay.pointer_up()

    size = sizes[-1]
    moved = positions[-1]
    assert size.width == pytest.approx(2.0)
    assert size.height == pytest.approx(1.0)
    assert moved.x + size.width == pytest.approx(2.5)
    assert moved.y + size.height == pytest.approx(1.75)


def test_resize_is_capped_by_safe_zone():
    """크게 늘려도 세이프존을 넘지 않는다."""
    overlay, _, _ = _make_overlay()

    overlay.pointer_down_on_handle(ResizeHandle.SE, 0, 0)
    overlay.pointer_move(10_000, 0)

    inches_size = overlay.size_inches
    inches_pos = overlay.position_inches
    assert inches_pos.x + inches_size.width <= 5.875 + 1e-9
    assert inches_pos.y + inches_size.height <= 3.875 + 1e-9
    assert overlay.validation_errors == []


def test_resize_has_minimum_width():
    """최소 너비 50px 아래로 줄어들지 않는다."""
    overlay, _, _ = _make_overlay()

    overlay.pointer_down_on_handle(ResizeHandle.SE, 0, 0)
    overlay.pointer_move(-10_000, 0)

    assert overlay.size.width == 50
    assert overlay.size.height == 25


def test_drag_and_resize_are_mutually_exclusive():
    """드래그 중에는 리사이즈를 시작할 수 없다."""
    overlay, _, _ = _make_overlay()

    overlay.pointer_down(0, 0)
    assert overlay.pointer_down_on_handle(ResizeHandle.SE, 0, 0) is False
    assert overlay.mode is OverlayMode.DRAGGING


def test_keyboard_requires_focus():
    """포커스 없이는 방향키를 처리하지 않는다."""
    overlay, positions, _ = _make_overlay()

    assert overlay.key_down("ArrowRight") is False
    assert positions == []


def test_keyboard_moves_one_or_ten_pixels():
    """방향키 1px, Shift+방향키 10px 이동."""
    overlay, positions, _ = _make_overlay()
    overlay.focus()

    overlay.key_down("ArrowRight")
    overlay.key_down("ArrowDown", shift=True)

    assert overlay.position == Point(x=301, y=310)
    assert positions[-1].x == pytest.approx(301 / 300)
    assert positions[-1].y == pytest.approx(310 / 300)


def test_keyboard_movement_is_clamped():
    """방향키 이동도 세이프존으로 클램핑."""
    overlay, positions, _ = _make_overlay(logo_position=_make_position(x=0.125, y=0.125))
    overlay.focus()

    overlay.key_down("ArrowLeft", shift=True)
    overlay.key_down("ArrowUp")

    assert overlay.position_inches == Point(x=0.125, y=0.125)
    assert len(positions) == 2


def test_escape_clears_keyboard_focus():
    """Escape는 키보드 포커스를 해제."""
    overlay, _, _ = _make_overlay()
    overlay.focus()

    assert overlay.key_down("Escape") is True
    assert overlay.keyboard_focused is False
    assert overlay.key_down("ArrowLeft") is False


def test_toggle_visibility_notifies_and_blocks_input():
    """숨김 상태에서는 콜백 통지 후 입력을 막는다."""
    toggles = []
    overlay = LogoOverlay(_make_position(), 900, 600, on_visibility_toggle=toggles.append)

    assert overlay.toggle_visibility() is False
    assert toggles == [False]
    assert overlay.pointer_down(0, 0) is False
    assert overlay.focus() is False


def test_out_of_zone_record_reports_validation_errors():
    """세이프존 밖 레코드는 검증 오류를 노출."""
    overlay, _, _ = _make_overlay(logo_position=_make_position(x=5.5, y=1, width=1, height=1))
    assert len(overlay.validation_errors) == 1


def test_to_logo_position_reflects_edits():
    """편집 결과가 LogoPositionData와 픽셀 값에 반영."""
    overlay, _, _ = _make_overlay()
    overlay.pointer_down(0, 0)
    overlay.pointer_move(150, 0)
    overlay.pointer_up()

    record = overlay.to_logo_position()
    assert record.position.x == pytest.approx(2.0)
    assert record.pixels.position.x == 600


def test_resize_from_out_of_zone_record_pulls_anchor_into_zone():
    """세이프존 밖에서 시작한 리사이즈도 양수 크기로 존 안에 들어온다."""
    overlay, positions, sizes = _make_overlay(logo_position=_make_position(x=5.95, y=1, width=1, height=0.5))

    overlay.pointer_down_on_handle(ResizeHandle.SE, 0, 0)
    overlay.pointer_move(10, 0)
    overlay.pointer_up()

    assert overlay.size.width == 50
    assert overlay.size.height == 25
    assert sizes[-1].width > 0 and sizes[-1].height > 0
    assert positions[-1].x + sizes[-1].width == pytest.approx(5.875)
    assert overlay.validation_errors == []
