from __future__ import annotations

from typing import Protocol

from priority_loader.config.models import AppConfig, ConfigLoadRequest


class ConfigLoader(Protocol):
    """
    Loads effective runtime configuration.

    Precedence, lowest first: model defaults, the YAML file, then `APP__SECTION__KEY`
    environment variables (optionally seeded from a .env file). Environment overrides
    may only replace string values.
    """

    async def load(self, request: ConfigLoadRequest = ConfigLoadRequest()) -> AppConfig:
        ...
