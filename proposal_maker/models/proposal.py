"""
제안서 문서 데이터 모델입니다.

생성 모델이 반환하는 JSON(camelCase)을 그대로 받아들이고, 섹션은
명시적인 `kind` 태그를 가진 판별 유니온(discriminated union)으로 변환합니다.
섹션 종류 판별은 모델 경계에서 한 번만 수행되며, 렌더러는 `kind`만 봅니다.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from proposal_maker.config import get_settings


# 예약된 섹션 제목 (모델 출력에서 섹션 종류를 판별하는 기준)
EXECUTIVE_SUMMARY_HEADING = "Executive Summary"
INVESTMENT_HEADING = "Investment"
TIMELINE_HEADING = "Project Timeline & Milestones"


class ProposalTheme(str, Enum):
    """
    제안서 전체에 적용되는 시각 테마입니다.

    분류:
    - CORPORATE_FORMAL: 법률, 금융, 공공, 전통 기업
    - TECH_MODERN: 소프트웨어, AI, IT 서비스, 스타트업
    - CREATIVE_VIBRANT: 디자인, 마케팅, 미디어
    - ACADEMIC_CLASSIC: 교육, 연구, 비영리
    """
    CORPORATE_FORMAL = "CORPORATE_FORMAL"
    TECH_MODERN = "TECH_MODERN"
    CREATIVE_VIBRANT = "CREATIVE_VIBRANT"
    ACADEMIC_CLASSIC = "ACADEMIC_CLASSIC"


def default_theme() -> ProposalTheme:
    """설정에 지정된 기본 테마. 설정값이 잘못되었으면 TECH_MODERN."""
    try:
        return ProposalTheme(get_settings().default_theme)
    except ValueError:
        return ProposalTheme.TECH_MODERN


def coerce_theme(value: Any) -> ProposalTheme:
    """알 수 없거나 비어있는 테마 값을 기본 테마로 대체합니다."""
    if isinstance(value, ProposalTheme):
        return value
    if isinstance(value, str):
        try:
            return ProposalTheme(value.strip().upper())
        except ValueError:
            pass
    return default_theme()


class ProposalModel(BaseModel):
    """camelCase 별칭을 쓰는 불변 모델의 공통 설정."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        coerce_numbers_to_str=True,
    )


class ClientInfo(ProposalModel):
    """고객사 정보."""
    company_name: str = Field("", description="고객사명")
    prepared_for: Optional[str] = Field(None, description="담당자 (메모에 언급된 경우)")


class Branding(ProposalModel):
    """표지에 사용되는 브랜딩 요소."""
    company_logo_text: str = Field("", description="로고 자리에 표시할 짧은 고객사명")
    project_tagline: str = Field("", description="프로젝트 한 줄 소개")


def _none_to_empty(value: Any) -> Any:
    """모델 출력의 null 문자열 필드를 빈 문자열로 바꿉니다."""
    return "" if value is None else value


def _none_to_list(value: Any) -> Any:
    """null 항목 배열은 빈 배열로, 객체가 아닌 항목은 제외합니다."""
    if value is None:
        return []
    if isinstance(value, list):
        return [item for item in value if isinstance(item, dict)]
    return value


class InvestmentLineItem(ProposalModel):
    """견적 항목."""
    item: str = Field("", description="항목명")
    description: str = Field("", description="항목 설명")
    cost: str = Field("", description="비용 (표시용 문자열)")

    @field_validator("item", "description", "cost", mode="before")
    @classmethod
    def _blank_nulls(cls, value: Any) -> Any:
        return _none_to_empty(value)


class TimelineMilestone(ProposalModel):
    """일정 단계."""
    phase: str = Field("", description="단계명")
    description: str = Field("", description="단계 설명")
    duration: str = Field("", description="기간")

    @field_validator("phase", "description", "duration", mode="before")
    @classmethod
    def _blank_nulls(cls, value: Any) -> Any:
        return _none_to_empty(value)


class TextSection(ProposalModel):
    """일반 본문 섹션 (HTML 문단)."""
    kind: Literal["text"] = "text"
    heading: str = ""
    content: str = ""

    @field_validator("heading", "content", mode="before")
    @classmethod
    def _blank_nulls(cls, value: Any) -> Any:
        return _none_to_empty(value)


class ExecutiveSummarySection(ProposalModel):
    """인용구(pull quote)를 가진 경영진 요약 섹션."""
    kind: Literal["executive_summary"] = "executive_summary"
    heading: str = EXECUTIVE_SUMMARY_HEADING
    content: str = ""
    pull_quote: str = ""

    @field_validator("heading", "content", "pull_quote", mode="before")
    @classmethod
    def _blank_nulls(cls, value: Any) -> Any:
        return _none_to_empty(value)


class InvestmentSection(ProposalModel):
    """견적 표 섹션."""
    kind: Literal["investment"] = "investment"
    heading: str = INVESTMENT_HEADING
    items: list[InvestmentLineItem] = Field(default_factory=list)

    @field_validator("heading", mode="before")
    @classmethod
    def _blank_nulls(cls, value: Any) -> Any:
        return _none_to_empty(value)

    @field_validator("items", mode="before")
    @classmethod
    def _empty_items(cls, value: Any) -> Any:
        return _none_to_list(value)


class TimelineSection(ProposalModel):
    """일정/마일스톤 섹션."""
    kind: Literal["timeline"] = "timeline"
    heading: str = TIMELINE_HEADING
    items: list[TimelineMilestone] = Field(default_factory=list)

    @field_validator("heading", mode="before")
    @classmethod
    def _blank_nulls(cls, value: Any) -> Any:
        return _none_to_empty(value)

    @field_validator("items", mode="before")
    @classmethod
    def _empty_items(cls, value: Any) -> Any:
        return _none_to_list(value)


class MockupSection(ProposalModel):
    """AI 생성 목업 이미지를 포함하는 섹션."""
    kind: Literal["mockup"] = "mockup"
    heading: str = ""
    content: Optional[str] = None
    mockup_image_prompt: str = ""
    mockup_image_url: Optional[str] = None  # 이미지 생성 단계 이후 채워짐

    @field_validator("heading", "mockup_image_prompt", mode="before")
    @classmethod
    def _blank_nulls(cls, value: Any) -> Any:
        return _none_to_empty(value)

    @property
    def needs_image(self) -> bool:
        return bool(self.mockup_image_prompt and self.mockup_image_prompt.strip())


Section = Annotated[
    Union[
        TextSection,
        ExecutiveSummarySection,
        InvestmentSection,
        TimelineSection,
        MockupSection,
    ],
    Field(discriminator="kind"),
]

SECTION_KINDS = ("text", "executive_summary", "investment", "timeline", "mockup")


def _has_key(raw: dict, *names: str) -> bool:
    return any(name in raw for name in names)


def _items_shape(items: Any) -> Optional[str]:
    """모든 항목이 견적 또는 일정 모양일 때만 해당 종류를 반환합니다."""
    if not isinstance(items, list) or not items:
        return None
    if not all(isinstance(item, dict) for item in items):
        return None
    if all("item" in item and "cost" in item for item in items):
        return "investment"
    if all("phase" in item for item in items):
        return "timeline"
    return None


def classify_section(raw: dict) -> str:
    """
    태그가 없는 모델 출력 섹션의 종류를 판별합니다.

    판별 순서 (먼저 일치하는 규칙 적용):
    1. 제목이 "Executive Summary"이고 pullQuote가 있음 → executive_summary
    2. 제목이 "Investment" → investment
    3. 제목이 "Project Timeline & Milestones" → timeline
    4. mockupImagePrompt 키가 있음 → mockup
    5. 그 외 → text

    5번에 해당하지만 content 없이 items 배열만 있는 섹션은, 모든 항목이
    {item, cost} 또는 {phase} 모양일 때만 견적표/일정으로 판별합니다.
    이미 알려진 `kind`가 붙어 있으면 그대로 쓰고, 모르는 값은 무시합니다.
    """
    if raw.get("kind") in SECTION_KINDS:
        return raw["kind"]

    heading = raw.get("heading")

    if heading == EXECUTIVE_SUMMARY_HEADING and _has_key(raw, "pullQuote", "pull_quote"):
        return "executive_summary"
    if heading == INVESTMENT_HEADING:
        return "investment"
    if heading == TIMELINE_HEADING:
        return "timeline"
    if _has_key(raw, "mockupImagePrompt", "mockup_image_prompt"):
        return "mockup"

    if not raw.get("content"):
        shape = _items_shape(raw.get("items"))
        if shape:
            return shape

    return "text"


def tag_section(raw: dict) -> dict:
    """원본 딕셔너리에 판별된 `kind`를 붙인 사본을 반환합니다."""
    return {**raw, "kind": classify_section(raw)}


class ProposalDocument(ProposalModel):
    """생성된 제안서 문서."""

    title: str = Field(..., description="제안서 제목")
    client: ClientInfo = Field(default_factory=ClientInfo)
    date: str = Field("", description="작성일 (자유 형식)")
    branding: Branding = Field(default_factory=Branding)
    theme: ProposalTheme = Field(default_factory=default_theme)
    sections: list[Section] = Field(default_factory=list)

    @field_validator("theme", mode="before")
    @classmethod
    def _coerce_theme(cls, value: Any) -> ProposalTheme:
        return coerce_theme(value)

    @field_validator("sections", mode="before")
    @classmethod
    def _tag_sections(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        return [tag_section(s) if isinstance(s, dict) else s for s in value]

    @property
    def page_count(self) -> int:
        """표지 1페이지 + 섹션당 1페이지."""
        return len(self.sections) + 1

    def image_targets(self) -> list[tuple[int, MockupSection]]:
        """이미지 생성이 필요한 (섹션 위치, 목업 섹션) 목록."""
        return [
            (index, section)
            for index, section in enumerate(self.sections)
            if isinstance(section, MockupSection) and section.needs_image
        ]

    def with_image_urls(self, image_urls: dict[int, str]) -> "ProposalDocument":
        """
        섹션 위치(index)별 이미지 URL을 반영한 새 문서를 반환합니다.
        위치 기반으로만 매칭하며 섹션 순서는 바꾸지 않습니다.
        """
        sections = list(self.sections)
        for index, url in image_urls.items():
            sections[index] = sections[index].model_copy(update={"mockup_image_url": url})
        return self.model_copy(update={"sections": sections})

    def to_wire(self) -> dict:
        """API 응답용 camelCase 딕셔너리."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        """JSON 형식으로 변환."""
        return self.model_dump_json(by_alias=True, indent=2)
