# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import asyncio
from typing import Any

from billing_client.container import Container
from billing_client.shared.config import AppConfig, load_config
from billing_client.shared.logging import logger, setup_logging


def create_app(config: AppConfig | None = None, **overrides: Any) -> Container:
    """Configure logging, build the container and restore the persisted session."""

    config = config or load_config()
    setup_logging("DEBUG" if config.debug_logging else None)

    app = Container(config, **overrides)
    session = app.startup()
    logger.info(f"{config.app_title} initialized session={session.status.value}")
    return app


async def _main() -> None:
    app = create_app()
    try:
        name = await app.shop.public_name(app.config.shop_name)
        logger.info(f"shop: {name}")
    finally:
        await app.shutdown()


if __name__ == "__main__":
    asyncio.run(_main())
