"""
virtualmodel configuration

Selects the default persistence backend and how the package logger is set up.
Read from VIRTUALMODEL_* environment variables unless set_config() is called.
"""

from typing import Dict, Any, Optional
from dataclasses import dataclass, field
from enum import Enum
from logging.handlers import RotatingFileHandler
import logging
import os


class Environment(Enum):
    """Deployment environments with their own log level preset"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


_LOG_LEVELS = {
    Environment.DEVELOPMENT: "DEBUG",
    Environment.TESTING: "WARNING",
    Environment.PRODUCTION: "INFO",
}


@dataclass
class PersistenceConfig:
    """Name under which get_backend() finds the default backend"""
    default_backend: str = "memory"


@dataclass
class LoggingConfig:
    """Settings consumed by configure_logging()"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024
    backup_count: int = 5


@dataclass
class ApplicationConfig:
    environment: Environment = Environment.DEVELOPMENT
    persistence: PersistenceConfig = field(default_factory=PersistenceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def for_environment(cls, environment: Environment) -> 'ApplicationConfig':
        return cls(environment=environment, logging=LoggingConfig(level=_LOG_LEVELS[environment]))

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'ApplicationConfig':
        """
        Build a configuration from nested sections.

        Example:
            {"environment": "testing", "persistence": {"default_backend": "memory"}}

        Unknown section keys are ignored.
        """
        environment = Environment(config_dict.get("environment", Environment.DEVELOPMENT.value))
        config = cls.for_environment(environment)

        for section in ("persistence", "logging"):
            target = getattr(config, section)
            for key, value in config_dict.get(section, {}).items():
                if hasattr(target, key):
                    setattr(target, key, value)

        return config

    @classmethod
    def from_environment(cls) -> 'ApplicationConfig':
        """VIRTUALMODEL_ENV, VIRTUALMODEL_LOG_LEVEL and VIRTUALMODEL_BACKEND"""
        config = cls.for_environment(Environment(os.getenv("VIRTUALMODEL_ENV", "development")))

        level = os.getenv("VIRTUALMODEL_LOG_LEVEL")
        if level:
            config.logging.level = level.upper()

        backend = os.getenv("VIRTUALMODEL_BACKEND")
        if backend:
            config.persistence.default_backend = backend

        return config


def configure_logging(config: Optional[ApplicationConfig] = None) -> logging.Logger:
    """Attach a handler to the package logger according to the logging config."""
    settings = (config or get_config()).logging
    package_logger = logging.getLogger("virtualmodel")

    if settings.file_path:
        handler: logging.Handler = RotatingFileHandler(
            settings.file_path,
            maxBytes=settings.max_file_size,
            backupCount=settings.backup_count,
        )
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(settings.format))

    for existing in list(package_logger.handlers):
        package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(settings.level)
    return package_logger


_current_config: Optional[ApplicationConfig] = None


def set_config(config: Optional[ApplicationConfig]):
    """Replace the active configuration; None falls back to the environment"""
    global _current_config
    _current_config = config


def get_config() -> ApplicationConfig:
    global _current_config
    if _current_config is None:
        _current_config = ApplicationConfig.from_environment()
    return _current_config


__all__ = [
    "ApplicationConfig", "Environment", "PersistenceConfig", "LoggingConfig",
    "configure_logging", "set_config", "get_config",
]
