"""
Environment configuration.

Values come from the process environment, optionally seeded from a
``.env`` file. ``DATABASE_URL`` (or ``PRISMA_DATABASE_URL``) is required.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

from .constants import POSTS_PER_PAGE, PROJECTS_PER_PAGE
from .exceptions import ConfigurationError
from .utils import parse_int

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class Settings:
    database_url: str
    environment: str = "development"
    log_level: str = "INFO"
    posts_per_page: int = POSTS_PER_PAGE
    projects_per_page: int = PROJECTS_PER_PAGE

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        dotenv_path: str | None = None,
    ) -> Settings:
        """
        Build settings from *environ* (defaults to ``os.environ``).

        When reading the real environment a ``.env`` file is loaded first;
        variables already set in the process take precedence.

        Raises:
            ConfigurationError: If no database URL is configured.
        """
        if environ is None:
            load_dotenv(dotenv_path, override=False)
            environ = os.environ

        database_url = environ.get("DATABASE_URL") or environ.get("PRISMA_DATABASE_URL")
        if not database_url:
            raise ConfigurationError(
                "DATABASE_URL or PRISMA_DATABASE_URL must be set in environment variables"
            )

        environment = environ.get("APP_ENV") or environ.get("ENVIRONMENT") or "development"
        return cls(
            database_url=database_url,
            environment=environment.lower(),
            log_level=(environ.get("LOG_LEVEL") or "INFO").upper(),
            posts_per_page=parse_int(environ.get("POSTS_PER_PAGE")) or POSTS_PER_PAGE,
            projects_per_page=parse_int(environ.get("PROJECTS_PER_PAGE"))
            or PROJECTS_PER_PAGE,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, read once."""
    return Settings.from_env()


def configure_logging(settings: Settings) -> None:
    """Set the root log level and format; DEBUG in development."""
    level = logging.DEBUG if settings.is_development else getattr(
        logging, settings.log_level, logging.INFO
    )
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger(__name__).info(
        "Log level set to %s (%s)", logging.getLevelName(level), settings.environment
    )
