from enum import Enum

from pydantic import BaseModel, Field

from postcard_logo.models.geometry import CamelModel, Point, Size


class OutputFormat(str, Enum):
    JPEG = "image/jpeg"
    PNG = "image/png"


class CompositeStatus(str, Enum):
    ABORTED = "aborted"


class CompositeOptions(CamelModel):
    """합성 요청 옵션. 위치·크기는 배경 이미지와 같은 픽셀 좌표계여야 합니다."""

    logo_position: Point = Field(description="로고 좌측 상단 (px)")
    logo_dimensions: Size = Field(description="로고 크기 (px)")
    quality: float = Field(default=0.95, ge=0, le=1, description="JPEG 품질 (0~1)")
    format: OutputFormat = OutputFormat.JPEG


class ValidationResult(BaseModel):
    is_valid: bool
    errors: list[str] = Field(default_factory=list)
