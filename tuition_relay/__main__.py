"""Run the API with uvicorn: `python -m tuition_relay`"""

import logging
import uvicorn

from tuition_relay.core.config import settings

logger = logging.getLogger(__name__)


def main() -> None:
    logger.info(f"Backend server running on port {settings.PORT}")
    logger.info(f"CORS enabled for origins: {', '.join(settings.CORS_ORIGINS)}")
    uvicorn.run("tuition_relay:app", host="0.0.0.0", port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
