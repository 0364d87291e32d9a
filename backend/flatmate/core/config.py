from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Ignore unknown env vars so the backend can share a .env with the web client.
    model_config = SettingsConfigDict(env_file=(".env", "../.env"), case_sensitive=True, extra="ignore")

    PROJECT_NAME: str = "FlatmateFinder"
    APP_DISPLAY_NAME: str = "Flatmate Finder"
    ENVIRONMENT: str = "development"
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    SECRET_KEY: str = "change_me"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    JWT_ALGORITHM: str = "HS512"
    JWT_ISSUER: str = "flatmate-finder"
    JWT_AUDIENCE: str = "flatmate-finder-api"

    DATABASE_URL: str = ""
    POSTGRES_SERVER: str = "db"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "flatmate_finder"

    REDIS_URL: str = "redis://redis:6379/0"
    CELERY_BROKER_URL: str = "redis://redis:6379/1"
    CELERY_RESULT_BACKEND: str = "redis://redis:6379/2"

    BACKEND_CORS_ORIGINS: list[str] = Field(default_factory=lambda: ["http://localhost:5173", "capacitor://localhost"])
    ALLOWED_HOSTS: list[str] = Field(default_factory=lambda: ["localhost", "127.0.0.1", "*.onrender.com"])

    ENABLE_API_DOCS: bool = False

    RATE_LIMIT_ENABLED: bool = True
    CONTACT_RATE_LIMIT: str = "20/minute"

    LISTINGS_DEFAULT_LIMIT: int = 10
    LISTINGS_MAX_LIMIT: int = 100
    LISTING_STALE_AFTER_DAYS: int = 60

    # Rendered with str.format(title=..., app_name=...).
    CONTACT_MESSAGE_TEMPLATE: str = (
        'Hi! I\'m interested in your listing "{title}". I found it on {app_name}. Can we discuss the details?'
    )
    WHATSAPP_BASE_URL: str = "https://wa.me"

    BOOTSTRAP_SAMPLE_USER_ID: str = ""

    @model_validator(mode="after")
    def _prod_guards(self):
        if self.ENVIRONMENT.lower() == "production":
            if self.ENABLE_API_DOCS:
                raise ValueError("ENABLE_API_DOCS must be false in production")
            if not self.SECRET_KEY or len(self.SECRET_KEY) < 32:
                raise ValueError("SECRET_KEY must be 32+ chars in production")
            if any(h == "*" for h in self.ALLOWED_HOSTS):
                raise ValueError('ALLOWED_HOSTS must not contain "*" in production')
        elif not self.ALLOWED_HOSTS:
            self.ALLOWED_HOSTS = ["*"]
        return self

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
