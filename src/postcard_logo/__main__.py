"""
사용법:
  python -m postcard_logo --background ./example/img/postcard.jpg --logo ./example/img/logo.png
  python -m postcard_logo --background ... --logo ... --brief ./example/brief.txt

예시 브리프로 로고 배치를 결정하고 합성 결과를 output/ 에 저장하는 CLI 진입점.
"""
import argparse
import asyncio
import logging
from datetime import datetime
from pathlib import Path

from postcard_logo.compositor import save_data_url
from postcard_logo.pipeline import run_pipeline

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

# ── 예시 브리프 (--brief 미지정 시 사용) ──────────────────────────
example_brief = """CREATIVE BRIEF — Option A

1. Headline: Fresh coffee, delivered daily

LOGO POSITION DATA:
- Position: 0.25" from left, 0.25" from top
- Dimensions: 1.5" × 0.75"
- Background: Light colored area required

2. Call to action: Scan for 20% off your first order
"""


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="postcard_logo", description="엽서 배경 이미지에 로고를 합성합니다.")
    parser.add_argument("--background", required=True, help="배경 이미지 경로 또는 URL")
    parser.add_argument("--logo", required=True, help="로고 이미지 경로 또는 URL")
    parser.add_argument("--brief", help="크리에이티브 브리프 텍스트 파일")
    parser.add_argument("--output", default="output", help="결과 저장 디렉토리")
    return parser.parse_args()


async def main() -> None:
    args = _parse_args()
    brief_text = Path(args.brief).read_text(encoding="utf-8") if args.brief else example_brief

    result = await run_pipeline(
        background_image_url=args.background,
        logo_image_url=args.logo,
        brief_text=brief_text,
    )

    position = result.logo_position
    print(
        f"\n✓ 완료: 위치 ({position.position.x:g}\", {position.position.y:g}\"), "
        f"크기 {position.dimensions.width:g}\" × {position.dimensions.height:g}\""
    )
    if result.used_default:
        print("  브리프에서 배치를 찾지 못해 기본 배치를 사용했습니다.")
    if not result.validation.is_valid:
        print("  세이프존 경고:")
        for error in result.validation.errors:
            print(f"    - {error}")

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    extension = "png" if result.data_url.startswith("data:image/png") else "jpg"
    output_path = save_data_url(result.data_url, Path(args.output) / f"postcard_{timestamp}.{extension}")
    print(f"\n💾 합성 이미지가 저장되었습니다: {output_path}")


def cli() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    cli()
