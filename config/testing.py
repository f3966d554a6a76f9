import os

from .config import REFERENCE_LOAD_WORKERS, db_config_from_env  # noqa: F401

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env(default_password="talent_hub")

# Tests inject fake collaborators; never call a real provisioning API.
PROVISIONING_API_URL = None
PROVISIONING_API_TIMEOUT = 1.0

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
