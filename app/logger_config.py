import logging
import os

# Logger name
LOG_NAME = os.getenv("APP_LOGGER_NAME", "shop_inventory")

# Create logger
logger = logging.getLogger(LOG_NAME)
# create_app applies Settings.LOG_LEVEL once settings are loaded
logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

# Log format with ISO-like timestamp including milliseconds
LOG_FORMAT = "%(asctime)s.%(msecs)03d - %(filename)s - %(funcName)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Formatter
formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

# Console handler
if not logger.handlers:
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

# Avoid duplicate logs when imported in multiple modules
logger.propagate = False
