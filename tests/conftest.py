"""공유 pytest fixture 모음."""

import copy

import pytest
from unittest.mock import AsyncMock

from proposal_maker.models import ProposalDocument

SAMPLE_IMAGE_URL = "data:image/jpeg;base64,/9j/4AAQSkZJRg=="


SAMPLE_PROPOSAL = {
    "title": "Retail Analytics Platform",
    "client": {
        "companyName": "Northwind Traders",
        "preparedFor": "Jane Doe",
    },
    "date": "October 18, 2026",
    "branding": {
        "companyLogoText": "NORTHWIND",
        "projectTagline": "Insight at every shelf",
    },
    "theme": "TECH_MODERN",
    "sections": [
        {
            "heading": "Executive Summary",
            "pullQuote": "A single view of inventory across every store.",
            "content": "<p>Northwind Traders operates 40 stores.</p><p>The platform unifies sales data.</p>",
        },
        {
            "heading": "Scope of Work",
            "content": "<p>The engagement covers data ingestion and reporting.</p>",
        },
        {
            "heading": "Dashboard Mockup",
            "content": "<p>The main dashboard shows store performance.</p>",
            "mockupImagePrompt": "A dark-mode retail analytics dashboard with sales charts",
        },
        {
            "heading": "Investment",
            "items": [
                {"item": "Discovery", "description": "Stakeholder interviews", "cost": "$7,500"},
                {"item": "Implementation", "description": "Pipeline and dashboards", "cost": "$25,000"},
            ],
        },
        {
            "heading": "Project Timeline & Milestones",
            "items": [
                {"phase": "Discovery", "description": "Requirements workshops", "duration": "2 Weeks"},
                {"phase": "Build", "description": "Data pipeline and UI", "duration": "8 Weeks"},
                {"phase": "Launch", "description": "Rollout to all stores", "duration": "2 Weeks"},
            ],
        },
        {
            "heading": "Mobile Interface",
            "mockupImagePrompt": "A mobile view of the dark-mode retail analytics dashboard",
        },
    ],
}


@pytest.fixture
def raw_proposal():
    """모델 응답 형태(camelCase, kind 없음)의 제안서 딕셔너리."""
    return copy.deepcopy(SAMPLE_PROPOSAL)


@pytest.fixture
def plain_proposal():
    """TECH_MODERN, 일반 섹션 3개 (목업 없음)."""
    return {
        "title": "Cloud Migration",
        "client": {"companyName": "Contoso"},
        "date": "October 18, 2026",
        "branding": {"companyLogoText": "CONTOSO", "projectTagline": "Move with confidence"},
        "theme": "TECH_MODERN",
        "sections": [
            {"heading": "Introduction", "content": "<p>Intro.</p>"},
            {"heading": "Proposed Solution", "content": "<p>Solution.</p>"},
            {"heading": "Methodology", "content": "<p>Method.</p>"},
        ],
    }


@pytest.fixture
def sample_document(raw_proposal):
    """ProposalDocument fixture (이미지 없음)."""
    return ProposalDocument.model_validate(raw_proposal)


@pytest.fixture
def mock_gemini_client(raw_proposal):
    """GeminiClient mock fixture."""
    client = AsyncMock()
    client.complete_json = AsyncMock(return_value=raw_proposal)
    client.generate_image = AsyncMock(return_value=SAMPLE_IMAGE_URL)
    return client


@pytest.fixture(autouse=True)
def reset_singletons():
    """테스트마다 세션/오케스트레이터/내보내기 싱글톤 초기화."""
    import proposal_maker.services.session as session_module
    import proposal_maker.services.orchestrator as orchestrator_module
    import proposal_maker.export.exporter as exporter_module

    session_module._proposal_session = None
    orchestrator_module._orchestrator = None
    exporter_module._exporter = None
    yield
    session_module._proposal_session = None
    orchestrator_module._orchestrator = None
    exporter_module._exporter = None

