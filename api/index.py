import logging

from app.core.config import get_settings
from app.main import app

# Setup basic logging to capture request rejections and catalog changes
logging.basicConfig(level=get_settings().log_level.upper())
logger = logging.getLogger(__name__)

logger.info("Serverless api/index.py initialized for %s", app.title)

# This is the entry point for serverless deployments
# It exports the FastAPI app instance
