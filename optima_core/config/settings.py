from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    git_commit: str = Field(default="", alias="GIT_COMMIT")
    git_branch: str = Field(default="", alias="GIT_BRANCH")
    app_version: str = Field(default="", alias="APP_VERSION")
    build_date: str = Field(default="", alias="BUILD_DATE")
    deployment_id: str = Field(default="", alias="DEPLOYMENT_ID")
    environment: str = Field(
        default="",
        validation_alias=AliasChoices("ENVIRONMENT", "APP_ENV", "NODE_ENV"),
    )

    log_format: str = Field(default="json", alias="LOG_FORMAT")
    log_level: str = Field(default="info", alias="LOG_LEVEL")

    debug_key: str = Field(default="", alias="DEBUG_KEY")
    debug: str = Field(default="", alias="DEBUG")
    infisical_client_id: str = Field(default="", alias="INFISICAL_CLIENT_ID")

    @property
    def debug_mode(self) -> bool:
        return self.debug.strip().lower() == "true"

    @property
    def environment_name(self) -> str:
        return self.environment or "development"

    @property
    def infisical_enabled(self) -> bool:
        return bool(self.infisical_client_id)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
