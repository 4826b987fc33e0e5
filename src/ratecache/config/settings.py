# src/ratecache/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Values are read from environment variables (and an optional .env file)
and validated once at import time.

Files that USE this module:
- ratecache.adapters.network.http (timeout, proxy and user agent for feed downloads)
- ratecache.adapters.feeds.* (default feed URLs)
- ratecache.adapters.cache.file_store (default cache directory)
- ratecache.application.converter (refresh interval and expiry tolerance)

Files that this module USES:
- ratecache.shared.validators (validation functions for settings)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from pathlib import Path  # Object-oriented filesystem paths
from typing import Dict, Optional  # Type hints for optional values

from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from ratecache.shared.validators import (
    validate_feed_url,  # Validate feed URL scheme and location
    validate_proxy_url,  # Validate proxy URL format
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # --- Feed Providers ---
    ecb_url: str = Field(
        default="https://www.ecb.europa.eu/stats/eurofxref/eurofxref-daily.xml",
        alias="ECB_URL",
    )
    yahoo_url: str = Field(
        default="http://finance.yahoo.com/webservice/v1/symbols/allcurrencies/quote?format=xml",
        alias="YAHOO_URL",
    )
    
    # --- HTTP Settings ---
    http_timeout_seconds: int = Field(default=10, alias="HTTP_TIMEOUT_SECONDS", ge=1, le=120)
    http_proxy: Optional[str] = Field(default=None, alias="RATECACHE_PROXY")
    http_user_agent: str = Field(default="ratecache/1.0", alias="HTTP_USER_AGENT")
    
    # --- Cache ---
    cache_dir: Path = Field(default=Path("./data/cache"), alias="CACHE_DIR")
    
    # --- Refresh policy ---
    # Server is not contacted again within this delay, even if data looks expired
    min_refresh_interval_seconds: int = Field(default=60, alias="MIN_REFRESH_INTERVAL_SECONDS", ge=0)
    expiry_tolerance_hours: int = Field(default=12, alias="EXPIRY_TOLERANCE_HOURS", ge=0, le=72)
    
    # --- Logging ---
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="RATECACHE_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")
    
    @property
    def proxies(self) -> Optional[Dict[str, str]]:
        """requests-style proxy mapping, or None when no proxy is configured."""
        if not self.http_proxy:
            return None
        return {"http": self.http_proxy, "https": self.http_proxy}
    
    @field_validator("ecb_url", "yahoo_url")
    @classmethod
    def validate_feed_url(cls, v: str) -> str:
        """Validate feed URL format."""
        if not validate_feed_url(v):
            raise ValueError("Feed URL must be an http(s) or file URL")
        return v
    
    @field_validator("http_proxy")
    @classmethod
    def validate_proxy(cls, v: Optional[str]) -> Optional[str]:
        """Validate proxy URL format; an empty value disables the proxy."""
        if not v:
            return None
        if not validate_proxy_url(v):
            raise ValueError("Invalid RATECACHE_PROXY format")
        return v


# Global settings instance
settings = Settings()
