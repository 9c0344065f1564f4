from __future__ import annotations

import asyncio
import logging

from priority_loader.config import YamlConfigLoader
from priority_loader.config.models import ConfigLoadRequest
from priority_loader.loader import PriorityResourceLoader
from priority_loader.logging import init_logging


async def main() -> None:
    config = await YamlConfigLoader().load(ConfigLoadRequest(yaml_path="examples/config.yaml"))
    init_logging(config.logging)

    logger = logging.getLogger("smoke")
    loader = PriorityResourceLoader(settings=config.loader)
    result = await loader.load_result("en_US")
    logger.info("Loaded translations source=%s keys=%s", result.source.value, result.key_count)


if __name__ == "__main__":
    asyncio.run(main())
