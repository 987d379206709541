import logging

from movie_catalog.core.logging_config import quiet_http_loggers
from movie_catalog.main import app

# Basic logging so request failures show up in the serverless logs
quiet_http_loggers()
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

logger.info("Movie catalog api/index.py initialized")

# Serverless entry point: exports the FastAPI app instance
__all__ = ["app"]
