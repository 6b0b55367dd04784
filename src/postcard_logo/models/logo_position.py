from __future__ import annotations

from pydantic import Field, computed_field

from postcard_logo.models.geometry import BackgroundRequirement, CamelModel, Point, SafeZone, Size
from postcard_logo.models.print_spec import PrintSpec, default_print_spec


class PixelGeometry(CamelModel):
    """inch 좌표를 인쇄 DPI 기준 픽셀로 환산한 값 (렌더링용)."""

    position: Point
    dimensions: Size
    safe_zone: SafeZone


class LogoPositionData(CamelModel):
    """디자인 옵션(A/B) 하나의 로고 배치 정보.

    inch 필드만 저장하고 safe_zone / pixels 는 매번 PrintSpec 에서 계산합니다.
    따라서 두 표현(inch, px)이 서로 어긋날 수 없습니다.
    """

    position: Point = Field(description="엽서 좌측 상단 기준 로고 위치 (inch)")
    dimensions: Size = Field(description="로고 크기 (inch)")
    background_requirement: BackgroundRequirement = Field(
        default=BackgroundRequirement.LIGHT,
        description="로고 대비를 위해 필요한 배경 톤 (light|dark)",
    )
    print_spec: PrintSpec = Field(default_factory=default_print_spec, exclude=True)

    @computed_field(alias="safeZone")
    @property
    def safe_zone(self) -> SafeZone:
        return self.print_spec.safe_zone()

    @computed_field
    @property
    def pixels(self) -> PixelGeometry:
        spec = self.print_spec
        zone = self.safe_zone
        return PixelGeometry(
            position=Point(x=spec.to_pixels(self.position.x), y=spec.to_pixels(self.position.y)),
            dimensions=Size(
                width=spec.to_pixels(self.dimensions.width),
                height=spec.to_pixels(self.dimensions.height),
            ),
            safe_zone=SafeZone(
                min_x=spec.to_pixels(zone.min_x),
                min_y=spec.to_pixels(zone.min_y),
                max_x=spec.to_pixels(zone.max_x),
                max_y=spec.to_pixels(zone.max_y),
            ),
        )

    @property
    def aspect_ratio(self) -> float:
        return self.dimensions.width / self.dimensions.height

    def with_position(self, position: Point) -> LogoPositionData:
        return self.model_copy(update={"position": Point(x=position.x, y=position.y)})

    def with_dimensions(self, dimensions: Size) -> LogoPositionData:
        return self.model_copy(
            update={"dimensions": Size(width=dimensions.width, height=dimensions.height)}
        )


class LogoAnalysis(CamelModel):
    """외부 로고 공간 계산 단계가 넘겨주는 컨텍스트 (inch 단위)."""

    width: float
    height: float
    position: Point
    background_requirement: BackgroundRequirement = BackgroundRequirement.LIGHT


class LogoOverrides(CamelModel):
    """캠페인 디자인과 함께 영구 저장되는 사용자 조정값 (inch)."""

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_position(cls, data: LogoPositionData) -> LogoOverrides:
        return cls(
            x=data.position.x,
            y=data.position.y,
            width=data.dimensions.width,
            height=data.dimensions.height,
        )

    def apply(self, data: LogoPositionData) -> LogoPositionData:
        return data.with_position(Point(x=self.x, y=self.y)).with_dimensions(
            Size(width=self.width, height=self.height)
        )
