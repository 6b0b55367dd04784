from .composite import CompositeOptions, CompositeStatus, OutputFormat, ValidationResult
from .geometry import BackgroundRequirement, Point, SafeZone, Size
from .logo_position import LogoAnalysis, LogoOverrides, LogoPositionData, PixelGeometry
from .print_spec import PrintSpec, default_print_spec

__all__ = [
    "Point",
    "Size",
    "SafeZone",
    "BackgroundRequirement",
    "PrintSpec",
    "default_print_spec",
    "PixelGeometry",
    "LogoPositionData",
    "LogoAnalysis",
    "LogoOverrides",
    "OutputFormat",
    "CompositeStatus",
    "CompositeOptions",
    "ValidationResult",
]
