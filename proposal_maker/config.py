from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    애플리케이션의 설정을 관리하는 클래스입니다.
    환경 변수(.env 파일)에서 설정값을 읽어옵니다.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # API 설정: 텍스트/이미지 생성 모델 사용을 위한 키와 모델 이름
    gemini_api_key: str = ""
    text_model: str = "gemini-2.5-flash"  # 제안서 JSON 생성 모델
    image_model: str = "imagen-4.0-generate-001"  # 목업 이미지 생성 모델
    image_aspect_ratio: str = "16:9"
    image_mime_type: str = "image/jpeg"

    # 생성 로직 설정
    text_temperature: float = 0.7
    model_max_attempts: int = 1  # 1이면 재시도 없음
    retry_delay: float = 2.0  # seconds

    # 렌더링 설정: 알 수 없는 테마 값이 오면 이 테마로 대체
    default_theme: str = "TECH_MODERN"
    font_stylesheet_url: str = (
        "https://fonts.googleapis.com/css2?family=Lora:wght@400;500;700"
        "&family=Poppins:wght@400;500;600;700&display=swap"
    )

    # 내보내기 설정
    export_fetch_timeout: Optional[float] = 30.0  # 원격 이미지 다운로드 제한 시간
    output_dir: str = "workspace/outputs/proposals"

    # 서버 설정: 서버가 실행될 주소와 포트 번호
    host: str = "0.0.0.0"  # 모든 외부 접속 허용
    port: int = 8000
    allowed_origins: list[str] = ["*"]


@lru_cache()
def get_settings() -> Settings:
    """
    설정을 가져오는 함수입니다.
    @lru_cache를 사용하여 한 번 읽은 설정은 메모리에 저장해두고 재사용합니다.
    """
    return Settings()
