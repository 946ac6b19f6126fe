"""Application settings and validation."""

import os
from pathlib import Path
from urllib.parse import quote_plus

from dotenv import find_dotenv, load_dotenv
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

# .env is looked up from the working directory, not from this file
load_dotenv(find_dotenv(usecwd=True), override=False)

BASE = Path(__file__).resolve().parent.parent


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() == "true"


def _normalize_prefix(prefix: str) -> str:
    prefix = prefix.strip().strip("/")
    return f"/{prefix}" if prefix else ""


def mask_url(url: str) -> str:
    """Hide the password part of a database URL for logging.

    Credentials end at the last `@`, so an unescaped `@` inside the
    password is masked along with the rest of it.
    """
    scheme, sep, rest = url.partition("://")
    if not sep:
        return url
    creds, at, tail = rest.rpartition("@")
    if at and ":" in creds:
        user = creds.split(":", 1)[0]
        url = f"{scheme}://{user}:***@{tail}"
    try:
        return make_url(url).render_as_string(hide_password=True)
    except ArgumentError:
        return url


class Settings:
    ENV: str
    LOG_LEVEL: str
    API_PREFIX: str
    ALLOW_DEV_CORS: bool
    DATABASE_URL: str
    POSTGRES_HOST: str
    POSTGRES_PORT: int
    POSTGRES_USER: str
    POSTGRES_PASSWORD: str
    POSTGRES_DB: str
    DB_SYNCHRONIZE: bool
    DB_ECHO: bool

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.API_PREFIX = _normalize_prefix(os.getenv("API_PREFIX", ""))
        self.ALLOW_DEV_CORS = _flag("ALLOW_DEV_CORS", "true")
        self.DATABASE_URL = os.getenv("DATABASE_URL", "").strip()
        self.POSTGRES_HOST = os.getenv("POSTGRES_HOST", "").strip()
        port = os.getenv("POSTGRES_PORT", "5432").strip()
        try:
            self.POSTGRES_PORT = int(port)
        except ValueError as exc:
            raise RuntimeError(f"POSTGRES_PORT must be an integer, got {port!r}") from exc
        self.POSTGRES_USER = os.getenv("POSTGRES_USER", "").strip()
        self.POSTGRES_PASSWORD = os.getenv("POSTGRES_PASSWORD", "")
        self.POSTGRES_DB = os.getenv("POSTGRES_DB", "").strip()
        self.DB_SYNCHRONIZE = _flag("DB_SYNCHRONIZE", "true")
        self.DB_ECHO = _flag("DB_ECHO", "false")
        self.database_url = self._build_database_url()

    def _build_database_url(self) -> str:
        """Resolve the SQLAlchemy URL.

        `DATABASE_URL` wins when set. Otherwise the `POSTGRES_*` variables
        are assembled into a psycopg2 URL, and without `POSTGRES_HOST` a
        local SQLite file is used for development.
        """
        url = self.DATABASE_URL
        if url:
            for legacy in ("postgres://", "postgresql://"):
                if url.startswith(legacy):
                    url = url.replace(legacy, "postgresql+psycopg2://", 1)
                    break
        elif self.POSTGRES_HOST:
            if not (self.POSTGRES_DB and self.POSTGRES_USER):
                raise RuntimeError("POSTGRES_HOST is set but POSTGRES_DB or POSTGRES_USER is missing")
            pwd = quote_plus(self.POSTGRES_PASSWORD)
            url = (
                f"postgresql+psycopg2://{self.POSTGRES_USER}:{pwd}"
                f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
            )
        else:
            url = f"sqlite:///{BASE / 'app.db'}"

        try:
            make_url(url)
        except Exception as exc:
            raise RuntimeError(f"Invalid database URL: {mask_url(url)!r} ({exc})") from exc
        return url

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


settings = Settings()
