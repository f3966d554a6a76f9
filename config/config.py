"""Settings shared by every environment module."""

import os


def db_config_from_env(*, default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "talent_hub"),
    }


# When set, accounts are provisioned through the backend REST API instead of
# being written straight into the database.
PROVISIONING_API_URL = os.getenv("PROVISIONING_API_URL") or None
PROVISIONING_API_TIMEOUT = float(os.getenv("PROVISIONING_API_TIMEOUT", "10"))

REFERENCE_LOAD_WORKERS = int(os.getenv("REFERENCE_LOAD_WORKERS", "4"))
