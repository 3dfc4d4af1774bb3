"""
테마별 스타일 값입니다.

각 테마는 렌더링 시 CSS 사용자 정의 속성(custom properties)으로 변환되어
브랜드 색상, 글꼴, 표지 사이드바 색상을 결정합니다.
"""

from dataclasses import dataclass
from typing import Any

from proposal_maker.models import ProposalTheme, coerce_theme

HEADING_FONT = "'Poppins', sans-serif"
BODY_FONT = "'Lora', serif"


@dataclass(frozen=True)
class ThemeStyle:
    """한 테마의 스타일 값."""

    brand_color: str
    cover_sidebar_bg: str
    cover_sidebar_text: str
    heading_font: str = HEADING_FONT
    body_font: str = BODY_FONT

    def css_variables(self) -> dict[str, str]:
        """CSS 변수 이름 → 값."""
        return {
            "--brand-color": self.brand_color,
            "--heading-font": self.heading_font,
            "--body-font": self.body_font,
            "--cover-sidebar-bg": self.cover_sidebar_bg,
            "--cover-sidebar-text": self.cover_sidebar_text,
        }

    def css_declarations(self) -> str:
        """`:root` 블록에 넣을 선언 문자열."""
        return " ".join(f"{name}: {value};" for name, value in self.css_variables().items())


THEMES: dict[ProposalTheme, ThemeStyle] = {
    ProposalTheme.CORPORATE_FORMAL: ThemeStyle(
        brand_color="#1e40af",        # blue-700
        cover_sidebar_bg="#1e293b",   # slate-800
        cover_sidebar_text="#f1f5f9", # slate-100
    ),
    ProposalTheme.TECH_MODERN: ThemeStyle(
        brand_color="#0d9488",        # teal-600
        cover_sidebar_bg="#18181b",   # zinc-900
        cover_sidebar_text="#f4f4f5", # zinc-100
    ),
    ProposalTheme.CREATIVE_VIBRANT: ThemeStyle(
        brand_color="#be185d",        # pink-700
        cover_sidebar_bg="#581c87",   # purple-900
        cover_sidebar_text="#ffffff",
    ),
    ProposalTheme.ACADEMIC_CLASSIC: ThemeStyle(
        brand_color="#881337",        # rose-900
        cover_sidebar_bg="#fdf2f8",   # rose-50
        cover_sidebar_text="#881337", # rose-900
    ),
}


def resolve_theme(value: Any) -> ThemeStyle:
    """테마 값(enum 또는 문자열)에 해당하는 스타일. 알 수 없는 값은 기본 테마."""
    return THEMES[coerce_theme(value)]
