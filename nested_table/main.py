"""
main.py - Main entry point for the Nested Table service
"""
import logging

import uvicorn

from nested_table.config import config_manager
from nested_table.rest_api import create_api


def main():
    """
    Start the Nested Table server.
    """
    config = config_manager.load_config('env')

    logging.basicConfig(level=config.log_level.upper())
    logger = logging.getLogger(__name__)

    api = create_api()
    app = api.get_app()

    logger.info("Starting Nested Table API on %s:%d", config.host, config.port)
    logger.info("Source: %s (%s)", config.source_type,
                config.api_url if config.source_type == "http" else config.backend_uri)

    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    main()
