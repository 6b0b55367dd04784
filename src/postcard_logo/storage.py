"""합성 이미지 업로드

합성 결과(data URL)를 업로드 엔드포인트에 multipart로 전송하고
저장된 이미지 URL을 돌려받습니다.
"""
from __future__ import annotations

import io
import logging
import time

import httpx
from PIL import Image

from postcard_logo.config import get_settings
from postcard_logo.errors import UploadError
from postcard_logo.utils.http_client import create_http_client
from postcard_logo.utils.image_utils import data_url_to_bytes, image_to_bytes

logger = logging.getLogger(__name__)

OPTION_LABELS = ("A", "B")
UPLOAD_JPEG_QUALITY = 95


def build_composited_storage_path(
    user_id: str,
    campaign_id: str,
    design_id: str,
    option_label: str,
    timestamp_ms: int | None = None,
) -> str:
    """스토리지 내 합성 이미지 경로를 만듭니다."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    file_name = f"{design_id}-{option_label}-composited-{timestamp_ms}.jpg"
    return f"v2/{user_id}/campaigns/{campaign_id}/composited/{file_name}"


def _to_jpeg_bytes(data_url: str) -> bytes:
    """data URL을 업로드용 JPEG bytes로 변환합니다 (JPEG이 아니면 재인코딩)."""
    image_bytes = data_url_to_bytes(data_url)
    if data_url.startswith("data:image/jpeg"):
        return image_bytes
    with Image.open(io.BytesIO(image_bytes)) as image:
        return image_to_bytes(image, "JPEG", UPLOAD_JPEG_QUALITY)


async def upload_composited_image(
    data_url: str,
    user_id: str,
    campaign_id: str,
    design_id: str,
    option_label: str,
    *,
    client: httpx.AsyncClient | None = None,
) -> str:
    """합성 이미지를 업로드하고 다운로드 URL을 반환합니다.

    Raises:
        UploadError: 잘못된 옵션 라벨, HTTP 오류, 응답에 imageUrl 없음
    """
    if option_label not in OPTION_LABELS:
        raise UploadError(f"Invalid option label: {option_label!r}")

    try:
        image_bytes = _to_jpeg_bytes(data_url)
    except (OSError, ValueError) as exc:
        raise UploadError(f"Invalid composited image: {exc}") from exc

    settings = get_settings()
    storage_path = build_composited_storage_path(user_id, campaign_id, design_id, option_label)
    files = {"image": (storage_path.rsplit("/", 1)[-1], image_bytes, "image/jpeg")}
    data = {
        "userId": user_id,
        "campaignId": campaign_id,
        "designId": design_id,
        "optionLabel": option_label,
    }

    owns_client = client is None
    client = client or create_http_client()
    try:
        response = await client.post(settings.upload_endpoint, data=data, files=files)
    except httpx.HTTPError as exc:
        logger.error("Error uploading composited image: %s", exc)
        raise UploadError(f"Upload failed: {exc}") from exc
    finally:
        if owns_client:
            await client.aclose()

    if response.is_error:
        logger.error(
            "Upload endpoint returned %d for design %s/%s",
            response.status_code,
            design_id,
            option_label,
        )
        raise UploadError(f"Upload failed: {response.reason_phrase}", status_code=response.status_code)

    try:
        image_url = response.json().get("imageUrl")
    except ValueError as exc:
        raise UploadError("Upload response is not JSON", status_code=response.status_code) from exc
    if not image_url:
        raise UploadError("Upload response missing imageUrl", status_code=response.status_code)

    logger.info("Uploaded composited image for design %s/%s to %s", design_id, option_label, storage_path)
    return image_url
