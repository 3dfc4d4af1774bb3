#!/usr/bin/env python3
"""Proposal maker script.

Usage:
    python -m proposal_maker.scripts.pro_maker --input notes.txt
    python -m proposal_maker.scripts.pro_maker --input notes.txt --output-dir out/

메모 파일로 제안서를 생성하고 단독 HTML과 JSON을 저장합니다.
"""

import asyncio
import argparse
import sys
import time
from datetime import datetime
from pathlib import Path

import aiofiles

from proposal_maker.config import get_settings
from proposal_maker.exceptions import ProposalMakerError
from proposal_maker.export import DocumentExporter
from proposal_maker.models import ProgressEvent
from proposal_maker.services import ProposalOrchestrator


def print_progress(event: ProgressEvent) -> None:
    print(f'  [{event.progress_percent:3d}%] {event.message}')


async def write_text(path: Path, content: str) -> None:
    async with aiofiles.open(path, 'w', encoding='utf-8') as f:
        await f.write(content)


async def main() -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="AI 제안서 생성")
    parser.add_argument("--input", type=str, required=True, help="프로젝트 메모 파일 (텍스트)")
    parser.add_argument(
        "--output-dir",
        type=str,
        default=settings.output_dir,
        help="출력 디렉토리",
    )
    args = parser.parse_args()

    input_path = Path(args.input)
    if not input_path.exists():
        print(f'입력 파일을 찾을 수 없습니다: {input_path}')
        return 1

    async with aiofiles.open(input_path, 'r', encoding='utf-8') as f:
        notes = await f.read()

    print('\n' + '=' * 70)
    print('제안서 생성 시작')
    print(f'시작 시간: {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}')
    print(f'입력 메모: {input_path} ({len(notes)}자)')
    print('=' * 70)

    total_start = time.time()

    try:
        document = await ProposalOrchestrator().generate(notes, on_progress=print_progress)
        exported = await DocumentExporter(settings).export(document)
    except ProposalMakerError as e:
        print(f'\n[{e.error_code}] {e.message}')
        return 1

    total_time = time.time() - total_start

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime('%Y%m%d-%H%M%S')
    html_path = output_dir / f'PROP-{timestamp}-{exported.filename}'
    json_path = html_path.with_suffix('.json')
    await write_text(html_path, exported.html)
    await write_text(json_path, document.to_json())

    mockups = document.image_targets()
    print('\n' + '=' * 70)
    print('제안서 생성 완료')
    print('=' * 70)
    print(f'\n  제목: {document.title}')
    print(f'  고객사: {document.client.company_name}')
    print(f'  테마: {document.theme.value}')
    print(f'  페이지: {document.page_count}')
    print(f'  목업 이미지: {sum(1 for _, s in mockups if s.mockup_image_url)}/{len(mockups)}')
    print(f'  총 소요시간: {total_time:.1f}초')
    print(f'\nHTML 저장: {html_path}')
    print(f'JSON 저장: {json_path}')

    return 0


def run_pro_maker():
    """CLI 진입점."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run_pro_maker()
