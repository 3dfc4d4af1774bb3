"""
섹션 하나를 HTML 블록으로 렌더링합니다.

섹션 종류(`kind`)마다 templates/sections/ 아래 템플릿이 하나씩 있으며,
종류 판별은 모델 경계에서 이미 끝났으므로 여기서는 `kind`만 봅니다.
"""

from markupsafe import Markup

from proposal_maker.models import Section
from proposal_maker.rendering.environment import jinja_env

SECTION_TEMPLATES = {
    "text": "sections/text.html",
    "executive_summary": "sections/executive_summary.html",
    "investment": "sections/investment.html",
    "timeline": "sections/timeline.html",
    "mockup": "sections/mockup.html",
}


def render_section(section: Section) -> Markup:
    """
    섹션 종류에 맞는 HTML 블록을 반환합니다.

    - executive_summary: 본문 + 인용구
    - investment: 항목/설명/비용 표
    - timeline: 세로 마일스톤 목록
    - mockup: 본문(선택) + 기기 프레임 이미지 (이미지가 없으면 자리표시)
    - text: 본문
    """
    template = jinja_env.get_template(SECTION_TEMPLATES[section.kind])
    return Markup(template.render(section=section))
