# 설정 모듈
# - .env 값들을 한 곳에서 관리
# - 기본값을 제공하여 로컬 실행 편의성 확보

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# 프로젝트 루트 디렉토리 경로 찾기
# 주니어 개발자님께: 이 파일은 backend/storefinder/core/config.py에 있으므로,
# 3단계 상위로 올라가면 프로젝트 루트가 됩니다.
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
ENV_FILE_PATH = PROJECT_ROOT / ".env"
PACKAGE_ROOT = Path(__file__).parent.parent


class Settings(BaseSettings):
    APP_NAME: str = "storefinder"
    ENV: str = "dev"
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    MONGODB_URI: str = "mongodb://localhost:27017/storefinder"

    CORS_ALLOW_ORIGINS: str = "http://localhost:8000"

    # 세션 쿠키에는 랜덤 세션 ID만 담기고, 실제 데이터는 MongoDB sessions 컬렉션에 저장됩니다.
    SESSION_COOKIE_NAME: str = "storefinder_sid"
    SESSION_MAX_AGE_SECONDS: int = 60 * 60 * 24 * 14
    SESSION_COOKIE_SECURE: bool = False

    SMTP_HOST: str = "localhost"
    SMTP_PORT: int = 2525
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_TLS: bool = False
    MAIL_FROM: str = "Storefinder <noreply@storefinder.local>"

    # 업로드된 사진이 저장되는 경로. /uploads 로 정적 서빙됩니다.
    UPLOAD_DIR: str = Field(default=str(PACKAGE_ROOT / "static" / "uploads"), description="사진 업로드 디렉토리")

    # Google Maps JavaScript/Static API 키 (브라우저에서만 사용)
    MAP_KEY: Optional[str] = Field(None, description="Google Maps API 키")

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE_PATH) if ENV_FILE_PATH.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


settings = Settings()
