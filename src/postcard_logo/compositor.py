"""배경 이미지 + 로고 합성

두 이미지를 동시에 로드하고, 둘 다 로드가 끝난 뒤에만 그립니다.
cancel 이벤트가 먼저 설정되면 진행 중인 로드를 취소하고 ABORTED를 반환합니다.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import httpx
from PIL import Image, UnidentifiedImageError

from postcard_logo.config import get_settings
from postcard_logo.errors import CompositeError, ImageLoadError
from postcard_logo.models.composite import CompositeOptions, CompositeStatus
from postcard_logo.utils.image_utils import (
    data_url_to_bytes,
    fit_within,
    image_to_data_url,
    load_image,
    overlay_logo,
    remove_background,
)

logger = logging.getLogger(__name__)


async def _load(source: str) -> Image.Image:
    try:
        return await load_image(source)
    except httpx.HTTPStatusError as exc:
        raise ImageLoadError(source, f"HTTP {exc.response.status_code}") from exc
    except httpx.HTTPError as exc:
        raise ImageLoadError(source, type(exc).__name__) from exc
    except (OSError, UnidentifiedImageError, ValueError) as exc:
        raise ImageLoadError(source, str(exc)) from exc


async def _load_both(
    background_url: str,
    logo_url: str,
    cancel: asyncio.Event | None,
) -> tuple[Image.Image, Image.Image] | None:
    """배경·로고를 병렬 로드합니다. 취소되면 None.

    한쪽 로드가 실패하면 나머지 로드를 취소한 뒤 ImageLoadError를 그대로 올립니다.
    """
    loads = [asyncio.ensure_future(_load(background_url)), asyncio.ensure_future(_load(logo_url))]
    waiter = asyncio.ensure_future(cancel.wait()) if cancel is not None else None
    tasks = [*loads, waiter] if waiter is not None else loads
    pending = set(loads)
    try:
        while pending:
            watched = pending | {waiter} if waiter is not None else pending
            done, _ = await asyncio.wait(watched, return_when=asyncio.FIRST_COMPLETED)
            if waiter is not None and waiter in done:
                return None
            for task in done:
                pending.discard(task)
                task.result()
        background, logo = (task.result() for task in loads)
        return background, logo
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)


async def _prepare_logo(logo: Image.Image) -> Image.Image:
    if get_settings().remove_logo_background:
        return await asyncio.to_thread(remove_background, logo)
    return logo


async def composite_logo_on_image(
    background_url: str,
    logo_url: str,
    options: CompositeOptions,
    *,
    cancel: asyncio.Event | None = None,
) -> str | CompositeStatus:
    """배경 이미지 위에 로고를 합성하여 data URL로 반환합니다.

    - 캔버스 크기 = 배경 이미지 원본 크기
    - 로고는 options.logo_dimensions 로 리사이즈되어 options.logo_position 에 배치
      (위치·크기는 배경과 같은 픽셀 좌표계여야 하며 별도 스케일 보정 없음)

    Raises:
        ImageLoadError: 두 이미지 중 하나라도 로드 실패
        CompositeError: 그리기/인코딩 실패
    """
    images = await _load_both(background_url, logo_url, cancel)
    if images is None:
        logger.info("Composite aborted before images loaded")
        return CompositeStatus.ABORTED
    background, logo = images

    try:
        composed = overlay_logo(
            background,
            await _prepare_logo(logo),
            x=round(options.logo_position.x),
            y=round(options.logo_position.y),
            width=round(options.logo_dimensions.width),
            height=round(options.logo_dimensions.height),
        )
        data_url = image_to_data_url(composed, options.format.value, options.quality)
    except (OSError, ValueError) as exc:
        raise CompositeError(
            f"Failed to composite logo: {exc}",
            details={"background": background_url, "logo": logo_url},
        ) from exc

    logger.info(
        "Composited logo at (%d, %d) size %dx%d onto %dx%d background",
        round(options.logo_position.x),
        round(options.logo_position.y),
        round(options.logo_dimensions.width),
        round(options.logo_dimensions.height),
        background.width,
        background.height,
    )
    return data_url


async def create_preview_canvas(
    background_url: str,
    logo_url: str,
    options: CompositeOptions,
    max_width: int | None = None,
    max_height: int | None = None,
    *,
    cancel: asyncio.Event | None = None,
) -> Image.Image | CompositeStatus:
    """화면 미리보기용 축소 합성 이미지를 만듭니다.

    배경을 max_width × max_height 안에 비율 유지로 맞추고,
    로고 위치·크기도 같은 배율로 축소합니다.
    """
    settings = get_settings()
    max_width = max_width or settings.preview_max_width
    max_height = max_height or settings.preview_max_height

    images = await _load_both(background_url, logo_url, cancel)
    if images is None:
        logger.info("Preview aborted before images loaded")
        return CompositeStatus.ABORTED
    background, logo = images

    try:
        display_width, display_height = fit_within(
            background.width, background.height, max_width, max_height
        )
        canvas_size = (max(1, round(display_width)), max(1, round(display_height)))
        scale_x = display_width / background.width
        scale_y = display_height / background.height

        canvas = background.resize(canvas_size, Image.LANCZOS)
        return overlay_logo(
            canvas,
            await _prepare_logo(logo),
            x=round(options.logo_position.x * scale_x),
            y=round(options.logo_position.y * scale_y),
            width=max(1, round(options.logo_dimensions.width * scale_x)),
            height=max(1, round(options.logo_dimensions.height * scale_y)),
        )
    except (OSError, ValueError, ZeroDivisionError) as exc:
        raise CompositeError(f"Failed to render preview: {exc}") from exc


def save_data_url(data_url: str, path: str | Path) -> Path:
    """합성 결과(data URL)를 파일로 저장합니다."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data_url_to_bytes(data_url))
    return path
