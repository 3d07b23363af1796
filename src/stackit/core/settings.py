"""Application settings and configuration.

This module defines all configuration options for the StackIt API.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="StackIt API", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./stackit.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # JWT authentication settings
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )
    bcrypt_rounds: int = Field(default=12, ge=4, le=31, alias="BCRYPT_ROUNDS")

    # Reputation weights applied as signed deltas
    reputation_upvote: int = Field(default=10, alias="REPUTATION_UPVOTE")
    reputation_downvote: int = Field(default=-2, alias="REPUTATION_DOWNVOTE")
    reputation_accept: int = Field(default=15, alias="REPUTATION_ACCEPT")

    # Pagination
    questions_page_size: int = Field(default=10, alias="QUESTIONS_PAGE_SIZE")
    questions_page_max: int = Field(default=50, alias="QUESTIONS_PAGE_MAX")
    notifications_page_size: int = Field(default=20, alias="NOTIFICATIONS_PAGE_SIZE")
    admin_page_size: int = Field(default=20, alias="ADMIN_PAGE_SIZE")
    admin_page_max: int = Field(default=100, alias="ADMIN_PAGE_MAX")

    # Default avatar assigned at signup
    default_avatar_url: str = Field(
        default=(
            "https://images.pexels.com/photos/220453/pexels-photo-220453.jpeg"
            "?auto=compress&cs=tinysrgb&w=100&h=100&dpr=2"
        ),
        alias="DEFAULT_AVATAR_URL",
    )

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["http://localhost:5173"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides.

        Returns:
            The active database URL (test database if in testing mode, otherwise production)
        """
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url


settings = Settings()  # type: ignore[call-arg]
