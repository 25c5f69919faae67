"""Deployment mode detection: cloud (SaaS) or self-hosted.

The mode is resolved once per process from ``DEPLOYMENT_MODE`` and then
cached. Production restarts the process on configuration change, so the
cache is never invalidated at runtime. ``reset_cache`` exists for tests only.
"""

import logging
from enum import StrEnum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class DeploymentMode(StrEnum):
    """Supported deployment modes."""

    CLOUD = "cloud"
    SELF_HOSTED = "self-hosted"


class DeploymentEnvironment(BaseSettings):
    """Raw deployment variables, read straight from the process environment."""

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    deployment_mode: str = Field(default="", description="cloud | self-hosted")
    smtp_host: str = Field(default="", description="SMTP server host")


class DeploymentConfig:
    """Lazily resolved deployment mode.

    Lifecycle: unresolved until the first ``get_mode`` call, then cached for
    the lifetime of the instance. Use ``get_deployment_config`` for the
    process-wide instance.
    """

    def __init__(self) -> None:
        self._mode: DeploymentMode | None = None

    def get_mode(self) -> DeploymentMode:
        if self._mode is None:
            self._mode = self._resolve()
        return self._mode

    def is_cloud(self) -> bool:
        return self.get_mode() == DeploymentMode.CLOUD

    def is_self_hosted(self) -> bool:
        return self.get_mode() == DeploymentMode.SELF_HOSTED

    def is_email_configured(self) -> bool:
        """True when SMTP_HOST is set. Not cached."""
        return bool(DeploymentEnvironment().smtp_host)

    def reset_cache(self) -> None:
        """Forget the resolved mode. Test-only."""
        self._mode = None

    @staticmethod
    def _resolve() -> DeploymentMode:
        explicit = DeploymentEnvironment().deployment_mode
        if explicit in (DeploymentMode.CLOUD.value, DeploymentMode.SELF_HOSTED.value):
            mode = DeploymentMode(explicit)
        else:
            if explicit:
                logger.warning(
                    "Ignoring unrecognized DEPLOYMENT_MODE=%r, defaulting to %s",
                    explicit,
                    DeploymentMode.SELF_HOSTED.value,
                )
            mode = DeploymentMode.SELF_HOSTED
        logger.info("Deployment mode resolved: %s", mode.value)
        return mode


@lru_cache
def get_deployment_config() -> DeploymentConfig:
    """Get the process-wide deployment config."""
    return DeploymentConfig()
