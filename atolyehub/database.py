"""Database connection setup."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote_plus

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from atolyehub.config import get_env, load_config

logger = logging.getLogger(__name__)

DEFAULT_USER = "root"
DEFAULT_PASSWORD = "password"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = "3306"
DEFAULT_NAME = "piri"

_DB_SETTINGS = (
    ("DB_USER", DEFAULT_USER),
    ("DB_PASSWORD", DEFAULT_PASSWORD),
    ("DB_HOST", DEFAULT_HOST),
    ("DB_PORT", DEFAULT_PORT),
    ("DB_NAME", DEFAULT_NAME),
)


def database_url() -> str:
    """Build the MySQL connection URL from the DB_* environment variables."""
    user, credential, host, port, name = (
        get_env(env_key, fallback) for env_key, fallback in _DB_SETTINGS
    )
    return (
        f"mysql+pymysql://{quote_plus(user)}:{quote_plus(credential)}"
        f"@{host}:{port}/{name}?charset=utf8mb4"
    )


def connect_db(url: Optional[str] = None) -> sessionmaker[Session]:
    """Open the database and return a session factory bound to it.

    Without a URL the configuration is loaded and :func:`database_url` is
    used. Raises ConnectionError when the database cannot be reached.
    """
    if url is None:
        load_config()
        url = database_url()
    try:
        engine = create_engine(url, pool_pre_ping=True)
        with engine.connect():
            pass
    except SQLAlchemyError as exc:
        logger.error("Veritabanına bağlanılamadı: %s", exc)
        raise ConnectionError(f"Veritabanına bağlanılamadı: {exc}") from exc
    logger.info("Veritabanı bağlantısı başarılı!")
    return sessionmaker(bind=engine, expire_on_commit=False)