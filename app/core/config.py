from typing import List, Optional
from urllib.parse import urlparse

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Link Registry"
    PORT: int = 3333
    LOG_LEVEL: str = "INFO"

    # Infrastructure Configs (Env Vars - Required to start app)
    DATABASE_URL: str
    PUBLIC_BASE_URL: str

    # S3-compatible object storage used by the CSV export (Cloudflare R2 by default)
    STORAGE_ENDPOINT_URL: Optional[str] = None
    STORAGE_ACCOUNT_ID: Optional[str] = None
    STORAGE_ACCESS_KEY_ID: str
    STORAGE_SECRET_ACCESS_KEY: str
    STORAGE_BUCKET: str
    STORAGE_REGION: str = "auto"

    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"

    @property
    def base_url(self) -> str:
        return self.PUBLIC_BASE_URL.rstrip("/")

    @property
    def base_host(self) -> str:
        return urlparse(self.base_url).netloc

    @property
    def storage_endpoint(self) -> Optional[str]:
        if self.STORAGE_ENDPOINT_URL:
            return self.STORAGE_ENDPOINT_URL
        if self.STORAGE_ACCOUNT_ID:
            return f"https://{self.STORAGE_ACCOUNT_ID}.r2.cloudflarestorage.com"
        return None

settings = Settings()
