"""로고 배치 상태 (파싱 결과 + 사용자 변경) 테스트"""
from postcard_logo.models.geometry import Point, Size
from postcard_logo.models.logo_position import LogoOverrides
from postcard_logo.placement.state import LogoPositionState

BRIEF = (
    "LOGO POSITION DATA:\n"
    "- Position: 0.5\" from left, 0.5\" from top\n"
    "- Dimensions: 2\" × 1\"\n"
    "- Light colored area required\n"
)

ANALYSIS = {"width": 1, "height": 1, "position": {"x": 3, "y": 2}, "backgroundRequirement": "dark"}


def test_load_prefers_brief_over_context():
    """브리프와 컨텍스트가 모두 있으면 브리프 우선."""
    state = LogoPositionState()
    record = state.load(brief_text=BRIEF, logo_analysis=ANALYSIS)

    assert record.position == Point(x=0.5, y=0.5)
    assert state.has_changes is False


def test_load_uses_context_without_brief():
    """브리프가 없으면 컨텍스트 사용."""
    state = LogoPositionState()
    record = state.load(logo_analysis=ANALYSIS)

    assert record.position == Point(x=3, y=2)


def test_load_falls_back_to_context_when_brief_unparseable():
    """브리프 파싱에 실패하면 컨텍스트로 fallback."""
    state = LogoPositionState()
    record = state.load(brief_text="brief without logo data", logo_analysis=ANALYSIS)

    assert record is not None
    assert record.position == Point(x=3, y=2)
    assert state.logo_position is record


def test_load_keeps_previous_record_when_brief_unparseable():
    """아무것도 파싱되지 않으면 기존 레코드를 유지."""
    state = LogoPositionState()
    state.load(logo_analysis=ANALYSIS)
    state.load(brief_text="no logo data here")

    assert state.logo_position.position == Point(x=3, y=2)


def test_updates_mark_changes_and_fire_callbacks():
    """위치·크기 변경은 has_changes를 켜고 콜백을 호출."""
    positions, sizes = [], []
    state = LogoPositionState(on_position_change=positions.append, on_size_change=sizes.append)
    state.load(brief_text=BRIEF)

    state.update_position(Point(x=1, y=1))
    state.update_size(Size(width=1, height=0.5))

    assert state.has_changes is True
    assert state.logo_position.pixels.position.x == 300
    assert state.logo_position.pixels.dimensions.height == 150
    assert positions == [Point(x=1, y=1)]
    assert sizes == [Size(width=1, height=0.5)]
    assert state.overrides() == LogoOverrides(x=1, y=1, width=1, height=0.5)


def test_reset_to_default_restores_parsed_record():
    """초기화하면 파싱된 원본 배치로 돌아간다."""
    state = LogoPositionState()
    state.load(brief_text=BRIEF)
    state.update_position(Point(x=2, y=2))

    state.reset_to_default()

    assert state.logo_position.position == Point(x=0.5, y=0.5)
    assert state.has_changes is False
    assert state.overrides() is None


def test_updates_without_record_are_ignored():
    """레코드가 없으면 변경을 무시."""
    calls = []
    state = LogoPositionState(on_position_change=calls.append)
    state.update_position(Point(x=1, y=1))

    assert state.logo_position is None
    assert calls == []


def test_visibility_flag():
    """표시 여부 플래그 설정."""
    state = LogoPositionState()
    state.set_visible(False)
    assert state.is_visible is False
