from __future__ import annotations

import logging

import uvicorn

from .client import HypixelClient
from .config import load_config
from .server import create_app
from .service import BankerService
from .store import LedgerStore


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    config = load_config()
    service = BankerService(
        client=HypixelClient(config.hypixel_api_key),
        store=LedgerStore(config.db_file),
        profile_uuid=config.profile_uuid,
    )
    service.start(config.refresh_seconds)
    try:
        uvicorn.run(create_app(service), host=config.host, port=config.port)
    finally:
        service.stop()


if __name__ == "__main__":
    main()
