"""Gemini client service for proposal generation.

이 모듈은 google-genai SDK를 래핑하여 비동기 AI 호출을 제공합니다.

주요 기능:
- complete_json(): JSON 응답 요청 (자동 파싱)
- generate_image(): 목업 이미지 생성 (data URL 반환)

재시도 전략:
- 기본값은 재시도 없음 (model_max_attempts=1)
- 설정으로 시도 횟수를 늘리면 지수 백오프 (2초, 4초, 8초)
"""

import asyncio
import base64
import json
import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, Optional, TypeVar

from google import genai
from google.genai import types

from proposal_maker.config import Settings, get_settings
from proposal_maker.exceptions import (
    ImageGenerationError,
    ModelClientError,
    ProposalMakerError,
)

# 로깅 설정
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

T = TypeVar("T")


class GeminiClient:
    """
    Gemini API 래퍼 클래스.

    텍스트(제안서 JSON)와 이미지(목업) 생성을 하나의 클라이언트로 처리합니다.
    SDK 클라이언트는 첫 호출 시점에 생성하므로 API 키 없이도 인스턴스화할 수 있습니다.

    Attributes:
        _settings: 모델 이름, 재시도 설정 등
        _max_attempts: 최대 시도 횟수 (기본값: 1)
        _retry_delay: 초기 재시도 대기 시간(초)
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()
        self._max_attempts = max(1, self._settings.model_max_attempts)
        self._retry_delay = self._settings.retry_delay
        self._client: Optional[genai.Client] = None

        logger.info(
            f"[Gemini] 클라이언트 초기화 완료 "
            f"(text={self._settings.text_model}, image={self._settings.image_model})"
        )

    @property
    def client(self) -> genai.Client:
        """SDK 클라이언트 (지연 생성)."""
        if self._client is None:
            if not self._settings.gemini_api_key:
                raise ModelClientError("GEMINI_API_KEY가 설정되지 않았습니다")
            self._client = genai.Client(api_key=self._settings.gemini_api_key)
        return self._client

    async def complete_json(self, prompt: str, temperature: Optional[float] = None) -> Any:
        """
        Send a completion request expecting a JSON response.

        Args:
            prompt: Full prompt text (should describe the JSON structure)
            temperature: Sampling temperature

        Returns:
            Parsed JSON (dict or list)
        """
        config = types.GenerateContentConfig(
            temperature=self._resolve_temperature(temperature),
            response_mime_type="application/json",
        )
        response = await self._generate_text(prompt, config)
        return self._parse_json_response(response)

    async def generate_image(self, prompt: str) -> str:
        """
        목업 이미지를 생성하고 data URL로 반환합니다.

        Args:
            prompt: 이미지 설명 프롬프트

        Returns:
            "data:image/jpeg;base64,..." 형식의 이미지 참조

        Raises:
            ImageGenerationError: 이미지가 반환되지 않은 경우
        """
        mime_type = self._settings.image_mime_type

        async def _call() -> str:
            response = await self.client.aio.models.generate_images(
                model=self._settings.image_model,
                prompt=prompt,
                config=types.GenerateImagesConfig(
                    number_of_images=1,
                    output_mime_type=mime_type,
                    aspect_ratio=self._settings.image_aspect_ratio,
                ),
            )
            if not response.generated_images or response.generated_images[0].image is None:
                raise ImageGenerationError(
                    "이미지 생성 결과가 비어있습니다",
                    details={"prompt": prompt[:100]},
                )
            image_bytes = response.generated_images[0].image.image_bytes
            encoded = base64.b64encode(image_bytes).decode("ascii")
            return f"data:{mime_type};base64,{encoded}"

        return await self._with_retries("image", _call)

    def _resolve_temperature(self, temperature: Optional[float]) -> float:
        return self._settings.text_temperature if temperature is None else temperature

    async def _generate_text(self, prompt: str, config: types.GenerateContentConfig) -> str:
        logger.info(f"[Gemini] 프롬프트 길이: {len(prompt)} chars")

        async def _call() -> str:
            response = await self.client.aio.models.generate_content(
                model=self._settings.text_model,
                contents=prompt,
                config=config,
            )
            text = response.text or ""
            logger.info(f"[Gemini] 응답 길이: {len(text)} chars")
            return text

        return await self._with_retries("text", _call)

    async def _with_retries(self, label: str, operation: Callable[[], Awaitable[T]]) -> T:
        """
        모델 호출을 실행하고 실패 시 설정된 횟수만큼 재시도합니다.

        지수 백오프(Exponential Backoff) 적용:
        - wait_time = _retry_delay * (2 ** attempt)

        Args:
            label: 로깅용 호출 종류 ("text", "image")
            operation: 인자 없는 비동기 호출 함수

        Returns:
            operation의 반환값

        Raises:
            ModelClientError: 모든 시도가 실패한 경우
        """
        last_error: Optional[Exception] = None

        for attempt in range(self._max_attempts):
            start_time = datetime.now()
            try:
                result = await operation()
                elapsed = (datetime.now() - start_time).total_seconds()
                logger.info(f"[Gemini:{label}] 시도 {attempt + 1} 성공: {elapsed:.1f}초")
                return result

            except Exception as e:
                last_error = e
                logger.error(
                    f"[Gemini:{label}] 시도 {attempt + 1}/{self._max_attempts} 실패: "
                    f"{type(e).__name__}: {e}"
                )

                # 마지막 시도가 아니면 지수 백오프 대기
                if attempt < self._max_attempts - 1:
                    wait_time = self._retry_delay * (2 ** attempt)
                    logger.info(f"[Gemini:{label}] {wait_time}초 후 재시도...")
                    await asyncio.sleep(wait_time)

        if isinstance(last_error, ProposalMakerError):
            raise last_error
        raise ModelClientError(
            f"Gemini {label} 호출 실패: {last_error}",
            details={"error_type": type(last_error).__name__},
        ) from last_error

    def _parse_json_response(self, response: Optional[str]) -> Any:
        """
        모델 응답에서 JSON 파싱 (포맷팅 문제 처리 포함).

        파싱 전략:
        1. 직접: 마크다운 코드 블록(```json, ```) 제거 후 json.loads()
        2. 추출: 첫 번째 { 또는 [ 부터 완전한 JSON 값 하나만 디코딩
        3. 실패: ModelClientError 발생

        Args:
            response: 모델의 원시 응답 텍스트

        Returns:
            파싱된 JSON 딕셔너리 또는 리스트

        Raises:
            ModelClientError: JSON 파싱 실패 시
        """
        if response is None or not response.strip():
            raise ModelClientError("모델 응답이 비어있습니다")

        # ========== 1단계: 마크다운 코드 블록 제거 ==========
        cleaned = response.strip()
        if cleaned.startswith("```json"):
            cleaned = cleaned[7:]
        elif cleaned.startswith("```"):
            cleaned = cleaned[3:]
        if cleaned.endswith("```"):
            cleaned = cleaned[:-3]
        cleaned = cleaned.strip()

        try:
            return json.loads(cleaned)
        except json.JSONDecodeError as e:
            logger.warning(f"[JSON] 직접 파싱 실패: {e}")
            first_error = e

        # ========== 2단계: JSON 구조 추출 파싱 ==========
        starts = [i for i in (cleaned.find("{"), cleaned.find("[")) if i != -1]
        if starts:
            decoder = json.JSONDecoder()
            try:
                result, _ = decoder.raw_decode(cleaned[min(starts):])
                logger.debug("[JSON] 추출 파싱 성공")
                return result
            except json.JSONDecodeError as e:
                logger.error(f"[JSON] 추출 파싱 실패: {e}")

        # ========== 3단계: 최종 실패 ==========
        logger.error("[JSON] 최종 파싱 실패")
        raise ModelClientError(
            f"JSON 응답 파싱 실패: {first_error}",
            details={"response_preview": cleaned[:200]},
        )


# Singleton instance for dependency injection
_gemini_client: Optional[GeminiClient] = None


def get_gemini_client() -> GeminiClient:
    """Get or create Gemini client singleton."""
    global _gemini_client
    if _gemini_client is None:
        _gemini_client = GeminiClient()
    return _gemini_client
