from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """웹 클라이언트와 같은 camelCase JSON 키로 직렬화되는 기반 모델."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BackgroundRequirement(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class Point(CamelModel):
    x: float = Field(description="좌측에서의 거리")
    y: float = Field(description="상단에서의 거리")


class Size(CamelModel):
    width: float = Field(description="너비")
    height: float = Field(description="높이")


class SafeZone(CamelModel):
    min_x: float
    min_y: float
    max_x: float
    max_y: float
