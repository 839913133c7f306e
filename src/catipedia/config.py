"""Tooling configuration contract."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from catipedia.errors import ConfigError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = Field(alias="APP_ENV", default="dev")
    log_level: str = Field(alias="LOG_LEVEL", default="INFO")
    node_env: str = Field(alias="NODE_ENV", default="")

    project_root: str = Field(alias="CATIPEDIA_ROOT", default="")
    dist_dir: str = Field(alias="CATIPEDIA_DIST_DIR", default="dist")
    pages_project: str = Field(alias="CATIPEDIA_PAGES_PROJECT", default="catipedia")

    node_bin: str = Field(alias="NODE_BIN", default="node")
    npm_bin: str = Field(alias="NPM_BIN", default="npm")
    npx_bin: str = Field(alias="NPX_BIN", default="npx")
    git_bin: str = Field(alias="GIT_BIN", default="git")
    node_min_major: int = Field(alias="NODE_MIN_MAJOR", default=16)
    command_timeout_seconds: int = Field(alias="COMMAND_TIMEOUT_SECONDS", default=900)

    def root_path(self) -> Path:
        return Path(self.project_root or ".").resolve()

    @property
    def json_logs(self) -> bool:
        return self.app_env.strip().lower() == "prod"

    @property
    def production_node_env(self) -> bool:
        return self.node_env.strip().lower() == "production"


def validate_settings_for_env(settings: Settings) -> None:
    problems: list[str] = []

    if settings.node_min_major < 1:
        problems.append("NODE_MIN_MAJOR(must be >= 1)")
    if settings.command_timeout_seconds < 1:
        problems.append("COMMAND_TIMEOUT_SECONDS(must be >= 1)")
    if not settings.pages_project.strip():
        problems.append("CATIPEDIA_PAGES_PROJECT")

    dist = settings.dist_dir.strip()
    if not dist:
        problems.append("CATIPEDIA_DIST_DIR")
    else:
        # Wiped on every build; must resolve strictly inside the root.
        root = settings.root_path()
        resolved = (root / dist).resolve()
        if resolved == root or root not in resolved.parents:
            problems.append("CATIPEDIA_DIST_DIR(must be inside the project root)")

    if problems:
        keys = ", ".join(sorted(set(problems)))
        raise ConfigError(f"invalid configuration: {keys}")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
