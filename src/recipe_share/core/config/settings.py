"""Typed service settings.

Values come from, in increasing priority: code defaults, ``config/base``,
``config/environments/<APP_ENV>``, ``.env`` and the process environment.
Passwords and signing keys are only ever read from the last two.
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


# Environments that may expose API docs and diagnostic error details
NON_PRODUCTION_ENVS = frozenset({"local", "development", "test"})


class AuthMode(StrEnum):
    """How the caller of a protected route is identified."""

    LOCAL_JWT = "local_jwt"  # HS256 bearer token signed with JWT_SECRET_KEY
    HEADER = "header"  # X-User-* headers from a trusted gateway
    DISABLED = "disabled"  # everyone is an anonymous ``user``


# -----------------------------------------------------------------------------
# Sections (one YAML top-level key each)
# -----------------------------------------------------------------------------


class AppSettings(BaseModel):
    name: str = "Recipe Share Service"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Bind address for ``recipe-share`` / ``python -m recipe_share.main``."""

    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)


class ApiSettings(BaseModel):
    v1_prefix: str = "/api/v1"
    cors_origins: list[str] = Field(default_factory=list)


class JwtSettings(BaseModel):
    """Claims checked on bearer tokens; ``None`` skips the check."""

    algorithm: str = "HS256"
    issuer: str | None = None
    audience: str | None = None


class AuthHeaderSettings(BaseModel):
    """Header names set by the gateway in ``header`` mode."""

    user_id: str = "X-User-ID"
    roles: str = "X-User-Roles"
    permissions: str = "X-User-Permissions"


class AuthSettings(BaseModel):
    mode: AuthMode = AuthMode.HEADER
    jwt: JwtSettings = Field(default_factory=JwtSettings)
    headers: AuthHeaderSettings = Field(default_factory=AuthHeaderSettings)

    @field_validator("mode", mode="before")
    @classmethod
    def _parse_mode(cls, value: Any) -> AuthMode:
        try:
            return AuthMode(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(m.value for m in AuthMode)
            msg = f"Invalid auth mode: {value}. Must be one of: {allowed}"
            raise ValueError(msg) from None


class DatabaseSettings(BaseModel):
    """Relational store.

    ``url`` short-circuits everything else and is how tests select SQLite.
    """

    url: str | None = None
    host: str = "localhost"
    port: int = 5432
    name: str = "recipe_share"
    user: str | None = None
    pool_size: int = Field(default=5, ge=1)
    max_overflow: int = Field(default=10, ge=0)
    command_timeout: float = 30.0  # seconds, asyncpg only
    echo: bool = False
    create_schema: bool = False


class RateLimitingSettings(BaseModel):
    """slowapi limits, in ``limits`` notation (``10/minute``)."""

    enabled: bool = True
    storage_uri: str = "memory://"
    default: str = "100/minute"  # per client address, every route
    submissions: str = "10/minute"  # per user, POST /recipes
    moderation: str = "60/minute"  # per user, POST /admin/moderate-recipe


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: Literal["json", "text"] = "json"
    file: str | None = None


class TracingSettings(BaseModel):
    enabled: bool = False
    otlp_endpoint: str | None = None


class MetricsSettings(BaseModel):
    enabled: bool = True


class ObservabilitySettings(BaseModel):
    tracing: TracingSettings = Field(default_factory=TracingSettings)
    metrics: MetricsSettings = Field(default_factory=MetricsSettings)


class ModerationSettings(BaseModel):
    # Refuse decisions on recipes that are no longer pending
    strict_transitions: bool = False


class RecipesSettings(BaseModel):
    public_page_size: int = Field(default=50, ge=1)


class AdminSettings(BaseModel):
    """Windows and bounds for the dashboard aggregation."""

    active_user_days: int = Field(default=30, ge=1)
    recent_activity_days: int = Field(default=7, ge=1)
    recent_activity_limit: int = Field(default=10, ge=1)


class NotificationSettings(BaseModel):
    """Where approved-recipe notifications are POSTed; ``url: null`` disables."""

    url: str | None = None
    timeout: float = 5.0


# -----------------------------------------------------------------------------
# Root
# -----------------------------------------------------------------------------


class Settings(BaseSettings):
    """All service settings.

    Nested values can be overridden from the environment with ``__``, e.g.
    ``MODERATION__STRICT_TRANSITIONS=true``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
    )

    APP_ENV: str = "development"

    app: AppSettings = Field(default_factory=AppSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    rate_limiting: RateLimitingSettings = Field(default_factory=RateLimitingSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    observability: ObservabilitySettings = Field(
        default_factory=ObservabilitySettings
    )
    moderation: ModerationSettings = Field(default_factory=ModerationSettings)
    recipes: RecipesSettings = Field(default_factory=RecipesSettings)
    admin: AdminSettings = Field(default_factory=AdminSettings)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)

    # Environment only
    JWT_SECRET_KEY: str = ""
    DATABASE_PASSWORD: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """YAML sits below ``.env`` and above secret files."""
        yaml_settings = MultiYamlConfigSettingsSource(settings_cls)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            yaml_settings,
            file_secret_settings,
        )

    @property
    def database_url(self) -> str:
        """SQLAlchemy async URL; ``database.url`` wins when set."""
        db = self.database
        if db.url:
            return db.url
        url = URL.create(
            "postgresql+asyncpg",
            username=db.user,
            password=self.DATABASE_PASSWORD or None,
            host=db.host,
            port=db.port,
            database=db.name,
        )
        return url.render_as_string(hide_password=False)

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"

    @property
    def is_development(self) -> bool:
        return self.APP_ENV == "development"

    @property
    def is_testing(self) -> bool:
        return self.APP_ENV == "test"

    @property
    def is_non_production(self) -> bool:
        """Docs and error diagnostics are exposed."""
        return self.APP_ENV in NON_PRODUCTION_ENVS


@lru_cache
def get_settings() -> Settings:
    return Settings()
