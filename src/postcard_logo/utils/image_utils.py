from __future__ import annotations

import base64
import binascii
import io
import re
from pathlib import Path

from PIL import Image

from postcard_logo.utils.http_client import create_http_client

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w/+.-]+)?(?P<b64>;base64)?,(?P<data>.*)$", re.DOTALL)

_PIL_FORMATS = {
    "image/jpeg": "JPEG",
    "image/png": "PNG",
}


async def download_image(url: str) -> Image.Image:
    """URL에서 이미지를 다운로드하여 PIL Image로 반환합니다."""
    async with create_http_client() as client:
        response = await client.get(url)
        response.raise_for_status()
    return Image.open(io.BytesIO(response.content)).convert("RGBA")


async def load_image(path_or_url: str) -> Image.Image:
    """로컬 파일 경로, data URL 또는 HTTP(S) URL에서 PIL Image를 로드합니다.

    - HTTPS/HTTP URL → httpx로 다운로드
    - data: URL → base64 디코딩
    - 로컬 파일 경로 → PIL로 직접 열기
    """
    if path_or_url.startswith(("http://", "https://")):
        return await download_image(path_or_url)
    if path_or_url.startswith("data:"):
        return Image.open(io.BytesIO(data_url_to_bytes(path_or_url))).convert("RGBA")
    return Image.open(Path(path_or_url)).convert("RGBA")


def data_url_to_bytes(data_url: str) -> bytes:
    """data URL의 페이로드를 bytes로 디코딩합니다."""
    match = _DATA_URL_RE.match(data_url)
    if not match:
        raise ValueError("Not a data URL")
    payload = match.group("data")
    if match.group("b64"):
        try:
            return base64.b64decode(payload, validate=True)
        except binascii.Error as exc:
            raise ValueError(f"Invalid base64 payload: {exc}") from exc
    return payload.encode("utf-8")


def image_to_bytes(image: Image.Image, format: str = "JPEG", quality: int = 95) -> bytes:
    """PIL Image를 bytes로 변환합니다. JPEG은 알파 채널을 버립니다."""
    buffer = io.BytesIO()
    if format == "JPEG":
        image.convert("RGB").save(buffer, format=format, quality=quality)
    else:
        image.save(buffer, format=format)
    return buffer.getvalue()


def image_to_data_url(image: Image.Image, mime: str = "image/jpeg", quality: float = 0.95) -> str:
    """PIL Image를 base64 data URL로 변환합니다 (quality는 0~1, JPEG에만 적용)."""
    pil_format = _PIL_FORMATS.get(mime)
    if pil_format is None:
        raise ValueError(f"Unsupported output format: {mime}")
    image_bytes = image_to_bytes(image, format=pil_format, quality=round(quality * 100))
    b64 = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime};base64,{b64}"


def fit_within(width: int, height: int, max_width: int, max_height: int) -> tuple[float, float]:
    """원본 비율을 유지하면서 max_width × max_height 안에 들어가는 크기를 계산합니다.

    원본보다 크게 확대하지 않습니다.
    """
    aspect_ratio = width / height
    display_width = min(width, max_width)
    display_height = display_width / aspect_ratio
    if display_height > max_height:
        display_height = max_height
        display_width = display_height * aspect_ratio
    return display_width, display_height


def overlay_logo(
    image: Image.Image,
    logo: Image.Image,
    x: int,
    y: int,
    width: int,
    height: int,
) -> Image.Image:
    """이미지에 로고를 합성합니다. RGBA 투명도를 지원합니다."""
    img = image.copy().convert("RGBA")
    logo_resized = logo.convert("RGBA").resize((width, height), Image.LANCZOS)
    img.paste(logo_resized, (x, y), mask=logo_resized.split()[3])
    return img


_rembg_session = None


def remove_background(image: Image.Image) -> Image.Image:
    """로고 이미지의 배경을 제거하여 투명 PNG로 반환합니다.

    u2net 모델을 사용하며, 첫 호출 시 세션을 만들고 모델을 다운로드합니다 (~170MB).
    """
    global _rembg_session
    from rembg import new_session, remove as rembg_remove

    # rembg 세션은 프로세스 당 한 번만 생성 (모델 재로드 방지)
    if _rembg_session is None:
        _rembg_session = new_session("u2net")
    return rembg_remove(image, session=_rembg_session)
