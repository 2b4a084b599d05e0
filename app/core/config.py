# app/core/config.py
import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from app.constants.number import ViewIncrementBatch

class Settings(BaseSettings):

    # 環境設定
    ENV: str = "local"
    DEBUG: bool = False
    SERVICE_NAME: str = "Media Share API"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*"

    # AWS設定（未指定の場合はboto3のデフォルト認証チェーン）
    AWS_REGION: str = "us-east-1"
    AWS_ACCESS_KEY_ID: str | None = None
    AWS_SECRET_ACCESS_KEY: str | None = None

    # S3
    AWS_S3_BUCKET: str = "media-share-uploads"
    S3_PUBLIC_BASE_URL: str | None = None

    # DynamoDB
    DYNAMODB_ENDPOINT_URL: str | None = None
    USERS_TABLE: str = "youtube-demos"
    PROFILE_TABLE: str = "profile"
    STORAGE_TABLE: str = "storage"
    STREAK_TABLE: str = "streaks"
    USERNAME_INDEX: str = "username-index"
    EMAIL_INDEX: str = "email-index"

    # 再生数・ストリーク
    VIEW_INCREMENT_BATCH_SIZE: int = ViewIncrementBatch.DEFAULT_SIZE
    STREAK_WRITE_ATTEMPTS: int = 5
    USER_ID_ATTEMPTS: int = 3

    model_config = SettingsConfigDict(
        env_file=[".env", f".env.{os.getenv('ENV', 'development')}", ".env.local"],
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def PUBLIC_BASE_URL(self) -> str:
        if self.S3_PUBLIC_BASE_URL:
            return self.S3_PUBLIC_BASE_URL.rstrip("/")
        return f"https://{self.AWS_S3_BUCKET}.s3.{self.AWS_REGION}.amazonaws.com"

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

settings = Settings()
