from __future__ import annotations

from collections.abc import Mapping

from postcard_logo.models.composite import ValidationResult
from postcard_logo.models.geometry import Point, Size
from postcard_logo.models.print_spec import PrintSpec, default_print_spec

# px ↔ inch 왕복 변환에서 생기는 부동소수점 오차 허용치
_EPSILON = 1e-9


def validate_logo_position(
    position: Point | Mapping[str, float],
    dimensions: Size | Mapping[str, float],
    spec: PrintSpec | None = None,
) -> ValidationResult:
    """로고가 세이프존 안에 있는지 검사합니다 (inch).

    네 가지 경계를 모두 검사하고 위반마다 메시지를 하나씩 남깁니다.
    위반은 예외가 아니라 결과 데이터로 반환하며, 값을 보정하지 않습니다.
    """
    spec = spec or default_print_spec()
    if not isinstance(position, Point):
        position = Point.model_validate(position)
    if not isinstance(dimensions, Size):
        dimensions = Size.model_validate(dimensions)
    zone = spec.safe_zone()

    errors: list[str] = []
    if position.x < zone.min_x - _EPSILON:
        errors.append(f'Logo too close to left edge (minimum {zone.min_x:g}")')
    if position.y < zone.min_y - _EPSILON:
        errors.append(f'Logo too close to top edge (minimum {zone.min_y:g}")')
    if position.x + dimensions.width > zone.max_x + _EPSILON:
        errors.append(f'Logo extends beyond right safe zone (maximum {zone.max_x:g}")')
    if position.y + dimensions.height > zone.max_y + _EPSILON:
        errors.append(f'Logo extends beyond bottom safe zone (maximum {zone.max_y:g}")')

    return ValidationResult(is_valid=not errors, errors=errors)
