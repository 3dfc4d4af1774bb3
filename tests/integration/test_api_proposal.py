"""
제안서 API 통합 테스트.
생성 → 조회 → 미리보기 → 내보내기 → 초기화 흐름과 에러 응답을 확인합니다.
모델 호출은 AsyncMock 클라이언트로 대체합니다.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient, ASGITransport

import proposal_maker.services.orchestrator as orchestrator_module
from proposal_maker.api.endpoints.proposal import GenerateProposalRequest, generate_proposal
from proposal_maker.exceptions import ModelClientError
from proposal_maker.main import app
from proposal_maker.models import GenerationStatus
from proposal_maker.services import ProposalOrchestrator, get_proposal_session


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture(autouse=True)
def mocked_orchestrator(reset_singletons, mock_gemini_client):
    """오케스트레이터 싱글톤을 mock 클라이언트로 교체."""
    orchestrator_module._orchestrator = ProposalOrchestrator(client=mock_gemini_client)
    return orchestrator_module._orchestrator


async def _generate(client: AsyncClient, notes: str = "Northwind needs a retail analytics dashboard."):
    return await client.post("/api/v1/proposal/generate", json={"notes": notes})


class TestGenerate:
    async def test_generate_returns_proposal(self, client, mock_gemini_client):
        """정상 생성 시 제안서 JSON과 페이지/이미지 수를 반환해야 한다."""
        response = await _generate(client)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["page_count"] == 7
        assert data["mockup_count"] == 2
        assert data["image_count"] == 2
        assert data["proposal"]["title"] == "Retail Analytics Platform"
        assert data["proposal"]["client"]["companyName"] == "Northwind Traders"
        mock_gemini_client.complete_json.assert_awaited_once()

    async def test_empty_notes_rejected_without_calls(self, client, mock_gemini_client):
        """빈 메모는 400이며 모델을 호출하지 않아야 한다."""
        response = await _generate(client, "   ")

        assert response.status_code == 400
        assert response.json()["error_code"] == "ERR_INPUT_001"
        mock_gemini_client.complete_json.assert_not_called()
        assert get_proposal_session().status.value == "idle"

    async def test_empty_notes_keep_previous_proposal(self, client):
        """빈 메모 요청은 기존 제안서를 지우지 않아야 한다."""
        await _generate(client)

        await _generate(client, "")

        assert (await client.get("/api/v1/proposal")).status_code == 200

    async def test_text_failure_returns_502(self, client, mock_gemini_client):
        """텍스트 생성 실패 시 502와 단일 에러 메시지, 세션 상태 failed."""
        mock_gemini_client.complete_json.side_effect = ModelClientError("invalid json")

        response = await _generate(client)

        assert response.status_code == 502
        body = response.json()
        assert body["error_code"] == "ERR_GEN_001"
        assert body["message"]
        assert "timestamp" in body

        status = (await client.get("/api/v1/proposal/status")).json()
        assert status["status"] == "failed"
        assert status["error_message"] == body["message"]
        assert (await client.get("/api/v1/proposal")).status_code == 404

    async def test_image_failure_is_isolated(self, client, mock_gemini_client):
        """목업 하나가 실패해도 생성은 성공하고 나머지 이미지는 유지되어야 한다."""
        mock_gemini_client.generate_image.side_effect = [
            "data:image/jpeg;base64,OK",
            RuntimeError("quota"),
        ]

        response = await _generate(client)

        assert response.status_code == 200
        data = response.json()
        assert data["image_count"] == 1
        sections = data["proposal"]["sections"]
        assert len(sections) == 6
        images = [s.get("mockupImageUrl") for s in sections if s["kind"] == "mockup"]
        assert images.count(None) == 1

        preview = await client.get("/api/v1/proposal/preview")
        assert "Generating mockup image..." in preview.text

    async def test_generate_rejected_while_generating(self, client, mock_gemini_client):
        """생성 중에는 새 생성 요청이 409로 거부되어야 한다."""
        get_proposal_session().begin_generation()

        response = await _generate(client)

        assert response.status_code == 409
        assert response.json()["error_code"] == "ERR_BUSY_001"
        mock_gemini_client.complete_json.assert_not_called()

    async def test_cancelled_generation_releases_session(self, client, mocked_orchestrator, monkeypatch):
        """생성 도중 요청이 취소되면 세션은 failed가 되고 다시 초기화/생성할 수 있어야 한다."""
        monkeypatch.setattr(mocked_orchestrator, "generate", AsyncMock(side_effect=asyncio.CancelledError()))

        with pytest.raises(asyncio.CancelledError):
            await generate_proposal(GenerateProposalRequest(notes="Northwind dashboard"))

        session = get_proposal_session()
        assert session.status == GenerationStatus.FAILED
        assert session.error_message
        assert (await client.delete("/api/v1/proposal")).status_code == 200

        monkeypatch.undo()
        assert (await _generate(client)).status_code == 200

    async def test_missing_notes_field(self, client):
        """notes 필드가 없으면 422 (요청 검증 실패)."""
        response = await client.post("/api/v1/proposal/generate", json={})

        assert response.status_code == 422


class TestRead:
    async def test_get_without_proposal_returns_404(self, client):
        response = await client.get("/api/v1/proposal")

        assert response.status_code == 404
        assert response.json()["error_code"] == "ERR_NOT_FOUND_001"

    async def test_get_after_generate(self, client):
        await _generate(client)

        response = await client.get("/api/v1/proposal")

        assert response.status_code == 200
        assert response.json()["branding"]["companyLogoText"] == "NORTHWIND"

    async def test_status_after_generate(self, client):
        await _generate(client)

        status = (await client.get("/api/v1/proposal/status")).json()

        assert status["status"] == "ready"
        assert status["stage"] == "done"
        assert status["progress_percent"] == 100
        assert status["has_document"] is True

    async def test_preview_is_html(self, client):
        await _generate(client)

        response = await client.get("/api/v1/proposal/preview")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "Page 7 of 7" in response.text
        assert "--brand-color: #0d9488;" in response.text

    async def test_preview_without_proposal_returns_404(self, client):
        response = await client.get("/api/v1/proposal/preview")

        assert response.status_code == 404


class TestExport:
    async def test_export_is_attachment(self, client):
        await _generate(client)

        response = await client.get("/api/v1/proposal/export")

        assert response.status_code == 200
        disposition = response.headers["content-disposition"]
        assert disposition.startswith("attachment;")
        assert 'filename="Retail_Analytics_Platform.html"' in disposition
        assert response.text.startswith("<!DOCTYPE html>")
        assert response.text.count('class="a4-page content-page"') == 6

    async def test_export_without_proposal_returns_404(self, client):
        response = await client.get("/api/v1/proposal/export")

        assert response.status_code == 404


class TestReset:
    async def test_delete_clears_proposal(self, client):
        await _generate(client)

        response = await client.delete("/api/v1/proposal")

        assert response.status_code == 200
        assert response.json()["status"] == "idle"
        assert (await client.get("/api/v1/proposal")).status_code == 404

    async def test_delete_rejected_while_generating(self, client):
        get_proposal_session().begin_generation()

        response = await client.delete("/api/v1/proposal")

        assert response.status_code == 409
