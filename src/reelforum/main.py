"""Run the forum API under uvicorn."""

import uvicorn

from reelforum.app import App
from reelforum.config import Config
from reelforum.logging import setup_logging
from reelforum.web.server import create_fastapi_app


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    fastapi_app = create_fastapi_app(App(config), config)
    # log_config=None leaves uvicorn's loggers on the structlog handler from setup_logging
    uvicorn.run(fastapi_app, host=config.host, port=config.port, log_config=None, access_log=config.debug)


if __name__ == "__main__":
    main()
