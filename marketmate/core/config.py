"""Storefront Configuration"""

from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "MarketMate"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # Bag persistence
    storage_backend: str = "memory"  # "memory" or "file"
    storage_dir: str = ".marketmate/storage"
    storage_quota_bytes: Optional[int] = 5 * 1024 * 1024
    bag_storage_key: str = "marketmateBag"
    max_bags: int = 1000  # open bag stores kept in memory

    # Mocked account sessions
    session_storage_key: str = "marketmateSession"
    max_sessions: int = 1000

    # Notifications
    notification_history: int = 50

    # Listing creation (no real auth: every listing belongs to this seller)
    mock_seller_email: str = "seller1@marketmate.com"

    # AI tag suggestion service
    tag_service_url: Optional[str] = None
    tag_service_timeout: float = 30.0

    @property
    def tagging_configured(self) -> bool:
        """Check if the tag suggestion service is configured"""
        return bool(self.tag_service_url)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
