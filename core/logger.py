"""
Configure the logger
"""

import logging
from core.config import get_settings

logging.basicConfig(
    level=get_settings().LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
# botocore is chatty at DEBUG
logging.getLogger("botocore").setLevel(logging.WARNING)
logger = logging.getLogger("portfolio")
