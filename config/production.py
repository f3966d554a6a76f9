import os

from .config import (  # noqa: F401
    PROVISIONING_API_TIMEOUT,
    PROVISIONING_API_URL,
    REFERENCE_LOAD_WORKERS,
    db_config_from_env,
)

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config_from_env()

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
