"""Process entry point: python -m slack_bff"""

import logging

import uvicorn

from slack_bff.adapters.web.server import create_app
from slack_bff.config import AppConfig
from slack_bff.logging_config import setup_logging

logger = logging.getLogger("slack_bff")


def main() -> None:
    config = AppConfig.from_env()
    setup_logging(config.log_level)
    app = create_app(config)
    logger.info("Slack API Backend running on port %s", config.port)
    logger.info("Health check: http://localhost:%s/health", config.port)
    uvicorn.run(app, host="0.0.0.0", port=config.port, log_level=config.log_level)


if __name__ == "__main__":
    main()
