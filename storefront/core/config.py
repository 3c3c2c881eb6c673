"""Application configuration."""

from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "Amma Food Center API"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    log_level: str = getenv("LOG_LEVEL", "INFO")

    store_name: str = getenv("STORE_NAME", "Amma Food Center")
    currency: str = getenv("CURRENCY", "₹")
    whatsapp_number: str = getenv("WHATSAPP_NUMBER", "919876543210")

    local_cache_url: str = getenv("LOCAL_CACHE_URL", "sqlite:///./storefront_cache.db")
    local_cache_max_bytes: int = int(getenv("LOCAL_CACHE_MAX_BYTES", str(5 * 1024 * 1024)))
    local_poll_interval: float = float(getenv("LOCAL_POLL_INTERVAL", "1.0"))
    orders_poll_interval: float = float(getenv("ORDERS_POLL_INTERVAL", "2.0"))
    auth_poll_interval: float = float(getenv("AUTH_POLL_INTERVAL", "2.0"))

    firebase_project_id: str = getenv("FIREBASE_PROJECT_ID", "")
    firebase_credentials_path: str = getenv("FIREBASE_CREDENTIALS_PATH", "")
    firebase_api_key: str = getenv("FIREBASE_API_KEY", "")
    firebase_auth_url: str = getenv(
        "FIREBASE_AUTH_URL",
        "https://identitytoolkit.googleapis.com/v1/accounts:signInWithPassword",
    )

    demo_admin_email: str = getenv("DEMO_ADMIN_EMAIL", "admin@ammafood.com")
    demo_admin_password: str = getenv("DEMO_ADMIN_PASSWORD", "admin")
    admin_session_hours: int = int(getenv("ADMIN_SESSION_HOURS", "24"))

    jwt_secret_key: str = getenv("JWT_SECRET_KEY", "dev-only-change-me-to-a-long-random-secret")
    jwt_algorithm: str = getenv("JWT_ALGORITHM", "HS256")
    jwt_expire_minutes: int = int(getenv("JWT_EXPIRE_MINUTES", "60"))
    session_secret: str = getenv("SESSION_SECRET", "dev-session-secret-change-me")

    sheets_api_base: str = getenv("SHEETS_API_BASE", "https://sheets.googleapis.com/v4/spreadsheets")
    sheets_timeout_seconds: float = float(getenv("SHEETS_TIMEOUT_SECONDS", "10"))

    @property
    def firebase_enabled(self) -> bool:
        return bool(self.firebase_project_id)

    @property
    def remote_auth_enabled(self) -> bool:
        return self.firebase_enabled and bool(self.firebase_api_key)


settings: Settings = Settings()
