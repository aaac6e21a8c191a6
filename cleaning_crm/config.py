import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Record store (defaults to a local SQLite file for development)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./cleaning_crm.db")

# Pool settings - ignored for SQLite
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))
DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "10"))
DB_POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", "30"))
DB_POOL_RECYCLE = int(os.getenv("DB_POOL_RECYCLE", "300"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Recurring job generation defaults
DEFAULT_WEEKS_TO_GENERATE = int(os.getenv("DEFAULT_WEEKS_TO_GENERATE", "8"))
MAX_WEEKS_TO_GENERATE = int(os.getenv("MAX_WEEKS_TO_GENERATE", "52"))
DEFAULT_START_TIME = os.getenv("DEFAULT_START_TIME", "9:00 AM")
DEFAULT_END_TIME = os.getenv("DEFAULT_END_TIME", "12:00 PM")
DEFAULT_DURATION_HOURS = float(os.getenv("DEFAULT_DURATION_HOURS", "3"))
DEFAULT_SERVICE_TYPE = os.getenv("DEFAULT_SERVICE_TYPE", "General Clean")
