"""로고 합성·업로드 단계에서 발생하는 예외 클래스

파싱 실패와 세이프존 위반은 예외가 아니라 데이터(None / ValidationResult)로
표현됩니다. 여기 정의된 예외는 호출자까지 전파되어야 하는 실패만 다룹니다.
"""
from typing import Any


class LogoPlacementError(Exception):
    """패키지 공통 기반 예외."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: dict[str, Any] | None = None):
        super().__init__(message)
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": str(self),
            "details": self.details,
        }


class ImageLoadError(LogoPlacementError):
    """배경 또는 로고 이미지를 불러오지 못했을 때 (네트워크, 잘못된 URL, 디코딩 실패)."""

    def __init__(self, source: str, reason: str = ""):
        message = f"Failed to load image: {source}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, code="IMAGE_LOAD_ERROR", details={"source": source})


class CompositeError(LogoPlacementError):
    """이미지 로드는 성공했지만 캔버스에 그리거나 인코딩하지 못했을 때."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code="COMPOSITE_ERROR", details=details)


class UploadError(LogoPlacementError):
    """합성 이미지 업로드 실패."""

    def __init__(self, message: str, status_code: int | None = None):
        details = {"status_code": status_code} if status_code is not None else None
        super().__init__(message, code="UPLOAD_ERROR", details=details)
