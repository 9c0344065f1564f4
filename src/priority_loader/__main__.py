from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from priority_loader.config import YamlConfigLoader
from priority_loader.config.interfaces import ConfigLoader
from priority_loader.config.models import AppConfig, ConfigLoadRequest
from priority_loader.core.errors import LoaderError
from priority_loader.core.models import PriorityMode
from priority_loader.loader import PriorityResourceLoader
from priority_loader.logging import init_logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="priority-loader", description="Prioritized translation loader")
    parser.add_argument(
        "--config",
        default="data/config/config.yaml",
        help="Path to config.yaml (default: data/config/config.yaml)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    # Command: load
    load_parser = subparsers.add_parser("load", help="Resolve translations for a locale and print them as JSON")
    load_parser.add_argument("key", help="Locale identifier, e.g. en_US")
    load_parser.add_argument(
        "--mode",
        choices=[mode.value for mode in PriorityMode],
        default=None,
        help="Entry point into the fallback chain (default: loader.priority_load_type)",
    )

    # Command: check
    check_parser = subparsers.add_parser("check", help="Show the cache status for a locale")
    check_parser.add_argument("key", help="Locale identifier, e.g. en_US")

    return parser


async def _load_config(args: argparse.Namespace) -> AppConfig:
    loader: ConfigLoader = YamlConfigLoader()
    request = ConfigLoadRequest(
        yaml_path=args.config,
    )
    return await loader.load(request)


async def _load(args: argparse.Namespace, loader: PriorityResourceLoader) -> int:
    mode = PriorityMode(args.mode) if args.mode else None
    result = await loader.load_result(args.key, mode)
    logger.info("Resolved translations. key=%s source=%s keys=%s", result.key, result.source.value, result.key_count)
    json.dump(result.data, sys.stdout, ensure_ascii=False, indent=2, sort_keys=True)
    sys.stdout.write("\n")
    return 0


async def _check(args: argparse.Namespace, loader: PriorityResourceLoader) -> int:
    cache = loader.cache
    file_date = await cache.file_date(args.key)
    status = {
        "key": args.key,
        "path": str(cache.path_for(args.key)),
        "file_date": file_date.isoformat() if file_date else None,
        "fresh": await cache.exists(args.key),
        "usable_ignoring_freshness": await cache.exists(args.key, ignore_freshness=True),
        "bundled": loader.supports(args.key),
    }
    json.dump(status, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


async def _main_async(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    config = await _load_config(args)
    init_logging(config.logging)
    loader = PriorityResourceLoader(settings=config.loader)

    try:
        if args.command == "load":
            return await _load(args, loader)
        if args.command == "check":
            return await _check(args, loader)
    except LoaderError as exc:
        logger.error("Failed to load translations. key=%s error=%s", args.key, exc)
        return 1
    return 2


def main() -> None:
    try:
        sys.exit(asyncio.run(_main_async()))
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")


if __name__ == "__main__":
    main()
