import os
from dotenv import load_dotenv

load_dotenv()

FEST_NAME = os.getenv("FEST_NAME", "Cache 2025")

# "mongo" (hosted collection) or "sql" (any SQLAlchemy URL)
STORE_BACKEND = os.getenv("STORE_BACKEND", "mongo").lower()

MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017/cachefest")
DB_NAME = os.getenv("DB_NAME", "cachefest")
MONGO_COLLECTION = os.getenv("MONGO_COLLECTION", "registrations")

SQL_DATABASE_URL = os.getenv("SQL_DATABASE_URL", "sqlite:///./cachefest.db")

# Shared organizer password. The admin gate is only as strong as this value
# and SECRET_KEY, which signs the session cookie.
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "change-me")
SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
