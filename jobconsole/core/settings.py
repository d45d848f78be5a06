from __future__ import annotations

import os
from dataclasses import dataclass, field
from urllib.parse import urlparse

DEFAULT_API_URL = "http://localhost:5003"
DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]

DEBOUNCE_SECONDS = 0.3
NOTIFICATION_TTL_SECONDS = 4.5
DEFAULT_SOURCE_LABEL = "csv-upload"
PREVIEW_ROWS = 5
JOBS_PAGE_LIMIT = 20
LOGS_PAGE_LIMIT = 10


@dataclass
class ConsoleSettings:
    api_url: str = DEFAULT_API_URL
    timeout: float = 30.0
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    log_level: str = "INFO"
    debounce_seconds: float = DEBOUNCE_SECONDS
    notification_ttl: float = NOTIFICATION_TTL_SECONDS

    def __post_init__(self) -> None:
        self.api_url = self.api_url.rstrip("/")
        parsed = urlparse(self.api_url)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError("api_url must include scheme and host")

    @classmethod
    def from_env(cls) -> "ConsoleSettings":
        origins_env = os.getenv("API_CORS_ORIGINS", "")
        origins = [origin.strip() for origin in origins_env.split(",") if origin.strip()]
        timeout_env = os.getenv("JOB_CONSOLE_TIMEOUT")
        return cls(
            api_url=os.getenv("JOB_CONSOLE_API_URL") or DEFAULT_API_URL,
            timeout=float(timeout_env) if timeout_env else 30.0,
            cors_origins=origins or list(DEFAULT_CORS_ORIGINS),
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        )
