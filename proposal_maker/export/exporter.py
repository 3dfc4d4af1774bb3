"""
제안서를 단독 실행 가능한 HTML 파일로 내보냅니다.

처리 순서:
1. 문서를 깊은 복사 (세션의 원본 문서는 변경하지 않음)
2. data: URL이 아닌 이미지(목업 이미지, 본문의 <img src>)를 내려받아
   base64 data URL로 변환 (병렬)
3. standalone 모드로 렌더링
4. 제목으로 파일명 생성

이미지 변환 실패는 해당 이미지에만 격리되며 원래 URL을 그대로 둡니다.
"""

import asyncio
import base64
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from html import unescape
from typing import Optional

import httpx

from proposal_maker.config import Settings, get_settings
from proposal_maker.exceptions import ExportError
from proposal_maker.models import MockupSection, ProposalDocument
from proposal_maker.rendering import render_document

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "proposal.html"
DEFAULT_IMAGE_MIME_TYPE = "image/png"

# 파일명에 쓸 수 없는 문자 (Windows 포함)
_UNSAFE_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')

# 본문 HTML 안의 이미지 참조 (속성 앞부분, 따옴표, URL)
_IMG_SRC = re.compile(r"(<img\b[^>]*?\bsrc\s*=\s*)([\"'])(.*?)\2", re.IGNORECASE | re.DOTALL)


@dataclass(frozen=True)
class ExportedDocument:
    """내보내기 결과."""
    filename: str
    html: str
    embedded_images: int = 0
    failed_images: int = 0


def sanitize_filename(title: Optional[str]) -> str:
    """
    제목으로 다운로드 파일명을 만듭니다.

    공백은 밑줄로 바꾸고 파일명에 쓸 수 없는 문자는 제거합니다.
    남는 것이 없으면 proposal.html.
    """
    if not title:
        return DEFAULT_FILENAME
    name = _UNSAFE_FILENAME_CHARS.sub("", title.strip())
    name = name.replace(" ", "_").strip("._")
    if not name:
        return DEFAULT_FILENAME
    return f"{name}.html"


def _is_remote(url: Optional[str]) -> bool:
    return bool(url) and not url.startswith("data:")


def _collect_remote_images(document: ProposalDocument) -> list[str]:
    """
    내보낼 원격 이미지 URL 목록 (문서 순서, 중복 제거).
    목업 이미지와 본문 HTML 안의 <img src>를 모두 포함합니다.
    """
    urls: dict[str, None] = {}
    for section in document.sections:
        if isinstance(section, MockupSection) and _is_remote(section.mockup_image_url):
            urls[section.mockup_image_url] = None
        for match in _IMG_SRC.finditer(getattr(section, "content", None) or ""):
            if _is_remote(match.group(3)):
                urls[match.group(3)] = None
    return list(urls)


def _apply_embedded_images(document: ProposalDocument, embedded: dict[str, str]) -> ProposalDocument:
    """변환에 성공한 URL만 data URL로 바꾼 새 문서를 반환합니다."""

    def replace_src(match: re.Match) -> str:
        url = embedded.get(match.group(3))
        if url is None:
            return match.group(0)
        return f"{match.group(1)}{match.group(2)}{url}{match.group(2)}"

    sections = []
    for section in document.sections:
        update = {}
        if isinstance(section, MockupSection) and section.mockup_image_url in embedded:
            update["mockup_image_url"] = embedded[section.mockup_image_url]
        content = getattr(section, "content", None)
        if content:
            update["content"] = _IMG_SRC.sub(replace_src, content)
        sections.append(section.model_copy(update=update) if update else section)
    return document.model_copy(update={"sections": sections})


class DocumentExporter:
    """
    단독 HTML 내보내기 서비스.

    Attributes:
        settings: 원격 이미지 다운로드 제한 시간 등
        http_client: 이미지 다운로드용 클라이언트 (없으면 호출마다 생성)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or get_settings()
        self.http_client = http_client

    async def export(self, document: ProposalDocument) -> ExportedDocument:
        """문서를 이미지가 포함된 단독 HTML로 변환합니다."""
        start = datetime.now()
        snapshot = document.model_copy(deep=True)

        urls = _collect_remote_images(snapshot)

        embedded: dict[str, str] = {}
        if urls:
            embedded = await self._embed_images(urls)
            snapshot = _apply_embedded_images(snapshot, embedded)

        html = render_document(snapshot, standalone=True, settings=self.settings)
        filename = sanitize_filename(snapshot.title)

        elapsed = (datetime.now() - start).total_seconds()
        logger.info(
            f"[Exporter] {filename} 생성 완료 "
            f"(이미지 {len(embedded)}/{len(urls)}개 포함, {elapsed:.1f}초)"
        )
        return ExportedDocument(
            filename=filename,
            html=html,
            embedded_images=len(embedded),
            failed_images=len(urls) - len(embedded),
        )

    async def _embed_images(self, urls: list[str]) -> dict[str, str]:
        """원격 이미지를 병렬로 내려받아 원래 URL별 data URL을 반환합니다."""
        if self.http_client is not None:
            return await self._fetch_all(self.http_client, urls)

        async with httpx.AsyncClient(
            timeout=self.settings.export_fetch_timeout,
            follow_redirects=True,
        ) as client:
            return await self._fetch_all(client, urls)

    async def _fetch_all(
        self,
        client: httpx.AsyncClient,
        urls: list[str],
    ) -> dict[str, str]:
        results = await asyncio.gather(
            *[self._to_data_url(client, unescape(url)) for url in urls],
            return_exceptions=True,
        )

        embedded: dict[str, str] = {}
        for url, result in zip(urls, results):
            if isinstance(result, BaseException):
                logger.error(
                    f"[Exporter] 이미지 변환 실패 ({url[:80]}): "
                    f"{type(result).__name__}: {result}"
                )
                continue
            embedded[url] = result
        return embedded

    async def _to_data_url(self, client: httpx.AsyncClient, url: str) -> str:
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ExportError(
                f"이미지 다운로드 실패: {e}",
                details={"url": url},
            ) from e

        if not response.content:
            raise ExportError("이미지 응답이 비어있습니다", details={"url": url})

        mime_type = response.headers.get("content-type", "").split(";")[0].strip()
        if not mime_type.startswith("image/"):
            mime_type = DEFAULT_IMAGE_MIME_TYPE
        encoded = base64.b64encode(response.content).decode("ascii")
        return f"data:{mime_type};base64,{encoded}"


# 싱글톤 인스턴스
_exporter: Optional[DocumentExporter] = None


def get_exporter() -> DocumentExporter:
    """내보내기 서비스 인스턴스를 가져오거나 생성하는 함수"""
    global _exporter
    if _exporter is None:
        _exporter = DocumentExporter()
    return _exporter
