"""DocumentExporter unit tests.

Remote image fetches go through httpx.MockTransport.
"""

import base64

import httpx
import pytest

from proposal_maker.config import Settings
from proposal_maker.export import DocumentExporter, sanitize_filename

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"


def _handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/ok.png":
        return httpx.Response(200, content=PNG_BYTES, headers={"content-type": "image/png"})
    if request.url.path == "/untyped":
        return httpx.Response(200, content=PNG_BYTES, headers={"content-type": "application/octet-stream"})
    if request.url.path == "/empty.png":
        return httpx.Response(200, content=b"", headers={"content-type": "image/png"})
    return httpx.Response(404)


@pytest.fixture
async def http_client():
    async with httpx.AsyncClient(transport=httpx.MockTransport(_handler)) as client:
        yield client


@pytest.fixture
def exporter(http_client):
    return DocumentExporter(Settings(), http_client=http_client)


class TestSanitizeFilename:
    def test_spaces_become_underscores(self):
        assert sanitize_filename("Retail Analytics Platform") == "Retail_Analytics_Platform.html"

    def test_unsafe_characters_are_removed(self):
        assert sanitize_filename('Q3/Q4: "Plan" <v2>?') == "Q3Q4_Plan_v2.html"

    def test_unicode_is_kept(self):
        assert sanitize_filename("스마트 물류 플랫폼") == "스마트_물류_플랫폼.html"

    @pytest.mark.parametrize("title", ["", None, "   ", "///", "..."])
    def test_fallback_name(self, title):
        assert sanitize_filename(title) == "proposal.html"


class TestExport:
    async def test_remote_image_is_embedded(self, exporter, sample_document):
        document = sample_document.with_image_urls({2: "https://img.example.com/ok.png"})

        exported = await exporter.export(document)

        encoded = base64.b64encode(PNG_BYTES).decode("ascii")
        assert f"data:image/png;base64,{encoded}" in exported.html
        assert "https://img.example.com/ok.png" not in exported.html
        assert exported.embedded_images == 1
        assert exported.failed_images == 0

    async def test_non_image_content_type_falls_back_to_png(self, exporter, sample_document):
        document = sample_document.with_image_urls({2: "https://img.example.com/untyped"})

        exported = await exporter.export(document)

        assert "data:image/png;base64," in exported.html

    async def test_failed_fetch_keeps_original_reference(self, exporter, sample_document):
        document = sample_document.with_image_urls({
            2: "https://img.example.com/ok.png",
            5: "https://img.example.com/missing.png",
        })

        exported = await exporter.export(document)

        assert "https://img.example.com/missing.png" in exported.html
        assert exported.embedded_images == 1
        assert exported.failed_images == 1

    async def test_empty_body_counts_as_failure(self, exporter, sample_document):
        document = sample_document.with_image_urls({2: "https://img.example.com/empty.png"})

        exported = await exporter.export(document)

        assert exported.failed_images == 1
        assert "https://img.example.com/empty.png" in exported.html

    async def test_data_urls_are_not_fetched(self, sample_document):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(500)

        document = sample_document.with_image_urls({2: "data:image/jpeg;base64,AAAA"})
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            exported = await DocumentExporter(Settings(), http_client=client).export(document)

        assert requests == []
        assert "data:image/jpeg;base64,AAAA" in exported.html

    async def test_live_document_is_not_mutated(self, exporter, sample_document):
        document = sample_document.with_image_urls({2: "https://img.example.com/ok.png"})

        await exporter.export(document)

        assert document.sections[2].mockup_image_url == "https://img.example.com/ok.png"

    async def test_standalone_output_keeps_all_pages(self, exporter, sample_document):
        exported = await exporter.export(sample_document)

        assert exported.html.startswith("<!DOCTYPE html>")
        assert exported.html.count('class="a4-page content-page"') == 6
        assert "Page 7 of 7" in exported.html
        assert exported.filename == "Retail_Analytics_Platform.html"

    async def test_missing_image_shows_placeholder(self, exporter, sample_document):
        document = sample_document.with_image_urls({2: "data:image/jpeg;base64,AAAA"})

        exported = await exporter.export(document)

        assert exported.html.count("Generating mockup image...") == 1

    async def test_content_images_are_embedded(self, exporter, sample_document):
        scope = sample_document.sections[1].model_copy(update={
            "content": '<p>Current layout:</p><img src="https://img.example.com/ok.png" alt="layout">'
        })
        sections = list(sample_document.sections)
        sections[1] = scope
        document = sample_document.model_copy(update={"sections": sections})

        exported = await exporter.export(document)

        encoded = base64.b64encode(PNG_BYTES).decode("ascii")
        assert f'<img src="data:image/png;base64,{encoded}" alt="layout">' in exported.html
        assert "https://img.example.com/ok.png" not in exported.html
        assert exported.embedded_images == 1
        assert document.sections[1].content.count("https://img.example.com/ok.png") == 1

    async def test_failed_content_image_keeps_original_src(self, exporter, sample_document):
        sections = list(sample_document.sections)
        sections[1] = sections[1].model_copy(update={
            "content": "<img src='https://img.example.com/missing.png'>"
        })
        document = sample_document.model_copy(update={"sections": sections})

        exported = await exporter.export(document)

        assert "<img src='https://img.example.com/missing.png'>" in exported.html
        assert exported.failed_images == 1

    async def test_shared_url_is_fetched_once(self, sample_document):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, content=PNG_BYTES, headers={"content-type": "image/png"})

        sections = list(sample_document.sections)
        sections[1] = sections[1].model_copy(update={
            "content": '<img src="https://img.example.com/ok.png">'
        })
        document = sample_document.model_copy(update={"sections": sections})
        document = document.with_image_urls({2: "https://img.example.com/ok.png"})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            exported = await DocumentExporter(Settings(), http_client=client).export(document)

        assert len(requests) == 1
        assert "https://img.example.com/ok.png" not in exported.html
