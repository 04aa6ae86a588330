# app/config.py — Pydantic settings (env vars) and backend endpoint table

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Backend (Django) API
    api_base_url: str = "http://localhost:8000"
    api_timeout_ms: int = 10000

    # Client session
    token_ttl_seconds: int = 3600
    client_storage_path: str | None = None

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        cleaned = value.strip().rstrip("/")
        if not cleaned:
            raise ValueError("API_BASE_URL must be non-empty")
        return cleaned

    @property
    def api_timeout_seconds(self) -> float:
        return self.api_timeout_ms / 1000


@lru_cache
def get_settings() -> Settings:
    return Settings()


class Endpoints:
    # Auth (no trailing slashes on the backend)
    LOGIN = "/auth/login"
    LOGOUT = "/auth/logout"
    REGISTER = "/auth/register"
    PROFILE = "/auth/profile"

    # Registros
    REGISTROS = "/api/registros"
    REGISTROS_STATS = "/api/registros/stats"
    REGISTROS_ASESORES = "/api/registros/asesores"
    REGISTROS_CUENTAS = "/api/registros/cuentas"
    REGISTROS_BULK_DELETE = "/api/registros/bulk-delete"
    REGISTROS_EXPORT = "/api/registros/export"

    @staticmethod
    def registro_detail(registro_id: str) -> str:
        return f"{Endpoints.REGISTROS}/{registro_id}"


class StorageKeys:
    TOKEN = "auth_token"
    REFRESH_TOKEN = "refresh_token"
    TOKEN_EXPIRY = "token_expiry"
    USER_DATA = "user_data"
    THEME = "theme"


LOGIN_PATH = "/auth/login"
