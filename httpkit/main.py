import logging

import uvicorn

from httpkit.app import create_app
from httpkit.core.config import Config, env_port_or, split_port

logger = logging.getLogger(__name__)


def main() -> None:
    """Serve the example app on the port chosen by ``PORT`` or ``DEFAULT_PORT``."""
    Config.validate()

    # Configure logging
    logging.basicConfig(
        level=Config.log_level(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(),
        ]
    )

    address, from_env = env_port_or(Config.DEFAULT_PORT)
    if from_env:
        logger.info(f"Using port from PORT environment variable: {address}")
    uvicorn.run(create_app(), host=Config.HOST, port=split_port(address))


if __name__ == "__main__":
    main()
