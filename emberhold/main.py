"""
Emberhold account service entry point.

Run with `emberhold` (console script) or `uvicorn emberhold.main:app`.
"""

import uvicorn

from .app.factory import create_app
from .config import get_config
from .structured_logging.enhanced_logging_config import get_logger, setup_enhanced_logging

config = get_config()
setup_enhanced_logging(config.to_logging_dict())

logger = get_logger(__name__)

app = create_app()


def main() -> None:
    """Serve the application with uvicorn."""
    logger.info("Starting uvicorn", host=config.server.host, port=config.server.port)
    uvicorn.run(app, host=config.server.host, port=config.server.port, log_config=None)


if __name__ == "__main__":
    main()
