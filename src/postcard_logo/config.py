from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Print dimensions
    # 6" x 4" 가로형 엽서, 0.125" 블리드, 300 DPI 인쇄 기준
    print_dpi: int = 300
    postcard_width_in: float = 6.0
    postcard_height_in: float = 4.0
    bleed_in: float = 0.125

    # Compositing
    composite_format: str = "image/jpeg"
    composite_quality: float = 0.95
    preview_max_width: int = 800
    preview_max_height: int = 600
    # 업로드된 로고가 불투명 배경일 때 rembg로 배경 제거 (첫 실행 시 모델 다운로드)
    remove_logo_background: bool = False

    # Default Logo Placement (브리프/컨텍스트 모두 없을 때)
    default_logo_x_in: float = 0.25
    default_logo_y_in: float = 0.25
    default_logo_max_width_in: float = 1.5
    default_logo_max_height_in: float = 1.0

    # Upload
    upload_endpoint: str = "http://localhost:3000/api/v2/upload-composited-image"

    # HTTP / SSL Configuration
    http_timeout: float = 30.0
    # 기업 프록시 환경에서 SSL 검증 오류 발생 시 false로 설정
    ssl_verify: bool = True
    # 커스텀 CA 인증서 경로 (비워두면 certifi 기본값 사용)
    ca_bundle_path: str = ""


@lru_cache
def get_settings() -> Settings:
    return Settings()
