from functools import lru_cache

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)


class Settings(BaseSettings):
    """
    Application settings.

    Sources, highest priority first: constructor arguments, environment
    variables, ``.env``, then ``config/default.yaml`` (optional).  YAML
    keys use the same upper-case names as the environment variables.
    """

    APP_ENV: str = "development"
    HTTP_HOST: str = "0.0.0.0"
    HTTP_PORT: int = 8080

    # Database
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_NAME: str = "articles"
    # Full SQLAlchemy URL; takes precedence over the DB_* fields when set.
    DATABASE_URL: str | None = None
    DB_ECHO: bool = False
    DB_COMMAND_TIMEOUT: float | None = None

    # Startup
    DB_CONNECT_RETRIES: int = Field(5, ge=1)
    DB_CONNECT_RETRY_DELAY: float = Field(2.0, ge=0)
    DB_AUTO_CREATE: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_LEVEL_SQL: str = "WARNING"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        yaml_file="config/default.yaml",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @property
    def sqlalchemy_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
