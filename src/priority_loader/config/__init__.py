"""Configuration models and loaders."""

from priority_loader.config.loader import YamlConfigLoader
from priority_loader.config.models import AppConfig, ConfigLoadRequest, LoaderSettings, LoggingSettings

__all__ = ["AppConfig", "ConfigLoadRequest", "LoaderSettings", "LoggingSettings", "YamlConfigLoader"]
