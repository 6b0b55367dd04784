from .overlay import LogoOverlay, OverlayMode, ResizeHandle
from .parser import (
    default_logo_placement,
    parse_logo_position_from_brief,
    parse_logo_position_from_context,
)
from .state import LogoPositionState
from .validator import validate_logo_position

__all__ = [
    "parse_logo_position_from_brief",
    "parse_logo_position_from_context",
    "default_logo_placement",
    "validate_logo_position",
    "LogoOverlay",
    "OverlayMode",
    "ResizeHandle",
    "LogoPositionState",
]
