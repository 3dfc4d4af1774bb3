"""
제안서 전체 페이지 레이아웃 렌더러.

구성:
- 표지 1페이지 (사이드바: 로고/날짜/태그라인, 본문: 제목/고객사/담당자)
- 섹션당 A4 1페이지 (제목, 섹션 블록, 하단 태그라인과 "Page N of M")

테마 CSS 변수와 페이지 스타일은 결과 HTML 안에 포함됩니다.
"""

import logging
from typing import Optional

from proposal_maker.config import Settings, get_settings
from proposal_maker.models import ProposalDocument
from proposal_maker.rendering.environment import jinja_env
from proposal_maker.rendering.section_renderer import render_section
from proposal_maker.rendering.themes import resolve_theme

logger = logging.getLogger(__name__)


def page_count(document: ProposalDocument) -> int:
    """표지 + 섹션 수."""
    return document.page_count


def render_document(
    document: ProposalDocument,
    standalone: bool = False,
    settings: Optional[Settings] = None,
) -> str:
    """
    문서를 페이지 단위 HTML로 렌더링합니다.

    Args:
        document: 렌더링할 제안서
        standalone: True면 <html> 전체 문서로 감싸고 외부 글꼴 링크를 포함
        settings: 글꼴 스타일시트 URL 등 (기본값: 전역 설정)

    Returns:
        HTML 문자열
    """
    settings = settings or get_settings()
    total_pages = page_count(document)

    pages = [
        {
            "heading": section.heading,
            "body": render_section(section),
            "number": index + 2,  # 1페이지는 표지
        }
        for index, section in enumerate(document.sections)
    ]

    template_name = "standalone.html" if standalone else "proposal.html"
    html = jinja_env.get_template(template_name).render(
        document=document,
        pages=pages,
        total_pages=total_pages,
        theme_declarations=resolve_theme(document.theme).css_declarations(),
        font_stylesheet_url=settings.font_stylesheet_url,
    )

    logger.debug(f"[Renderer] {total_pages}페이지 렌더링 (standalone={standalone})")
    return html
