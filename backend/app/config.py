import os

from sqlalchemy.engine import URL


def build_database_url(
    host: str,
    name: str,
    user: str,
    password: str,
    port: int = 5432,
) -> str:
    """Assemble a PostgreSQL (asyncpg) URL from its parts."""
    url = URL.create(
        "postgresql+asyncpg",
        username=user or None,
        password=password or None,
        host=host or None,
        port=port,
        database=name or None,
    )
    return url.render_as_string(hide_password=False)


class Config:
    # Database
    DB_HOST = os.getenv("DB_HOST", "localhost")
    DB_PORT = int(os.getenv("DB_PORT", "5432"))
    DB_NAME = os.getenv("DB_NAME", "")
    DB_USER = os.getenv("DB_USER", "")
    DB_PASS = os.getenv("DB_PASS", "")
    DATABASE_URL = os.getenv("DATABASE_URL") or build_database_url(
        DB_HOST, DB_NAME, DB_USER, DB_PASS, DB_PORT
    )
    # "require" encrypts without verifying the server certificate
    DB_SSL = os.getenv("DB_SSL", "require")
    DB_ECHO = os.getenv("DB_ECHO", "false").lower() == "true"

    # Server
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "3000"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Pagination
    DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
    MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "100"))
