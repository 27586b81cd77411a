"""Run the blog API with uvicorn: ``python -m myblog``"""
import logging

import uvicorn

from myblog.core.config import get_settings


def main():
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(name)s %(message)s",
    )
    logging.getLogger("fastapi").info("starting server and listening: %s", settings.server_address)
    uvicorn.run(
        "myblog.main:app",
        host=settings.host,
        port=settings.port,
        timeout_keep_alive=settings.read_timeout,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
