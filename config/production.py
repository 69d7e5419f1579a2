import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[1]

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False

DATA_DIR = os.getenv("DATA_DIR", str(BASE_DIR / "data"))

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "file")
PROFILE_DIR = os.getenv("PROFILE_DIR", str(BASE_DIR / "runtime" / "profile"))
PROFILE_NAME = os.getenv("PROFILE_NAME", "default")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "governance_db"),
}

MAX_ATTACHMENT_BYTES = int(os.getenv("MAX_ATTACHMENT_BYTES", str(2 * 1024 * 1024)))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
