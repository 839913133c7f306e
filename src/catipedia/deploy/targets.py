"""Per-environment deployment targets."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from catipedia.errors import ConfigError


class DeployEnvironment(StrEnum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


DEFAULT_ENVIRONMENT = DeployEnvironment.DEVELOPMENT


@dataclass(frozen=True, slots=True)
class DeployTarget:
    environment: DeployEnvironment
    host: str
    branch: str
    build_dir: str = "dist"

    @property
    def is_production(self) -> bool:
        return self.environment is DeployEnvironment.PRODUCTION

    def pages_project(self, base: str) -> str:
        """Cloudflare Pages project name: bare in production, suffixed elsewhere."""
        if self.is_production:
            return base
        return f"{base}-{self.environment.value}"

    @classmethod
    def for_environment(cls, name: str | None, *, build_dir: str = "dist") -> DeployTarget:
        key = DEFAULT_ENVIRONMENT.value if name is None else name
        try:
            environment = DeployEnvironment(key)
        except ValueError:
            choices = ", ".join(env.value for env in DeployEnvironment)
            raise ConfigError(
                f"invalid environment: {name!r} (expected one of {choices})"
            ) from None
        host, branch = _TARGETS[environment]
        return cls(environment=environment, host=host, branch=branch, build_dir=build_dir)


_TARGETS: dict[DeployEnvironment, tuple[str, str]] = {
    DeployEnvironment.DEVELOPMENT: ("dev.catipedia.com", "develop"),
    DeployEnvironment.STAGING: ("staging.catipedia.com", "staging"),
    DeployEnvironment.PRODUCTION: ("catipedia.com", "main"),
}
