import os
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy.engine import URL, make_url

load_dotenv()

SECRET_KEY = os.environ.get("JWT_SECRET")
ALGORITHM = os.environ.get("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = float(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24))

# A full URL (e.g. sqlite for dev/tests) takes precedence over the DB_* parts
DATABASE_URL = os.environ.get("DATABASE_URL")

DB_HOST = os.environ.get("DB_HOST")
DB_PORT = int(os.environ.get("DB_PORT", 3306))
DB_USER = os.environ.get("DB_USER")
DB_PASSWORD = os.environ.get("DB_PASSWORD")
DB_NAME = os.environ.get("DB_NAME")
DB_SSL_CA = os.environ.get("DB_SSL_CA")

PORT = int(os.environ.get("PORT", 5000))
CORS_ORIGINS = [o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


def database_url():
    """Return the SQLAlchemy URL for the task store.

    DATABASE_URL is used verbatim; otherwise a URL object is built from the
    DB_* parts so credentials need no escaping. The TLS CA is required in that
    case. Raises RuntimeError listing whatever is missing.
    """
    if DATABASE_URL:
        return DATABASE_URL
    missing = [name for name, value in (
        ("DB_HOST", DB_HOST),
        ("DB_USER", DB_USER),
        ("DB_PASSWORD", DB_PASSWORD),
        ("DB_NAME", DB_NAME),
        ("DB_SSL_CA", DB_SSL_CA),
    ) if not value]
    if missing:
        raise RuntimeError(f"database is not configured, missing: {', '.join(missing)}")
    return URL.create(
        "mysql+pymysql",
        username=DB_USER,
        password=DB_PASSWORD,
        host=DB_HOST,
        port=DB_PORT,
        database=DB_NAME,
    )


def database_connect_args(url) -> dict:
    if make_url(url).get_backend_name() == "sqlite":
        return {"check_same_thread": False}
    if DB_SSL_CA:
        ca = Path(DB_SSL_CA)
        if not ca.is_file():
            raise RuntimeError(f"DB_SSL_CA certificate not found: {ca}")
        return {"ssl": {"ca": str(ca)}}
    return {}


def missing_settings() -> list:
    missing = []
    if not SECRET_KEY:
        missing.append("JWT_SECRET")
    return missing
