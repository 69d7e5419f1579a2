import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[1]

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

DATA_DIR = os.getenv("DATA_DIR", str(BASE_DIR / "data"))

STORAGE_BACKEND = "memory"
PROFILE_DIR = ""
PROFILE_NAME = "test"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "governance_test"),
}

MAX_ATTACHMENT_BYTES = 2 * 1024 * 1024

LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
