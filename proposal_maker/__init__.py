"""AI 제안서 생성 서비스."""

__version__ = "1.0.0"
