from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DEBUG: bool = False
    APP_NAME: str = "Spin8 Studio Tenant API"
    APP_DOMAIN: str = "example.com"
    APP_VERSION: str = "0.1.0"

    # Main backend
    MAIN_BACKEND_URL: str = "http://localhost:3000"
    MAIN_BACKEND_API_KEY: str = ""
    MAIN_BACKEND_TIMEOUT: float = 30.0
    TENANT_ORGANIZATION_ID: str = "00000000-0000-0000-0000-000000000001"

    # Identity provider tokens
    SUPABASE_JWT_SECRET: str = "spin8-local-development-jwt-secret-change-me"
    SUPABASE_JWT_AUDIENCE: str = "authenticated"

    # Packages
    STUDIO_TIMEZONE: str = "Europe/Istanbul"
    DEFAULT_CURRENCY: str = "TL"
    ALL_ACCESS_DAYS: int = 30
    FRIEND_PASS_DAYS: int = 30

    # SMTP
    SMTP_HOST: str = ""
    SMTP_PORT: int = 587
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_FROM_EMAIL: str = "noreply@example.com"
    SMTP_FROM_NAME: str = "Spin8 Studio"
    SMTP_USE_TLS: bool = True

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    @property
    def version(self) -> str:
        return self.APP_VERSION


settings = Settings()
