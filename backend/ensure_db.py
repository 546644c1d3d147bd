"""Create the Courier Track PostgreSQL database if it does not exist yet.

Connects to the ``postgres`` maintenance database with the credentials from
app.config and issues CREATE DATABASE for the configured name.
"""

from __future__ import annotations

import logging
import sys

import psycopg2
from psycopg2 import sql
from psycopg2.extensions import ISOLATION_LEVEL_AUTOCOMMIT
from sqlalchemy.engine import make_url

from app.config import Settings, settings

logger = logging.getLogger("ensure_db")


def target_database(cfg: Settings) -> tuple[str, dict]:
    """Return (database name, connection params for the maintenance database)."""
    if cfg.database_url:
        url = make_url(cfg.database_url)
        return url.database or cfg.db_name, {
            "host": url.host or "localhost",
            "port": url.port or 5432,
            "user": url.username or "postgres",
            "password": url.password or "postgres",
        }
    return cfg.db_name, {
        "host": cfg.db_host,
        "port": cfg.db_port,
        "user": cfg.db_username,
        "password": cfg.db_password,
    }


def ensure_database(cfg: Settings = settings, connect=psycopg2.connect) -> int:
    db_name, conn_params = target_database(cfg)
    try:
        conn = connect(database="postgres", **conn_params)
    except psycopg2.Error as e:
        logger.warning("cannot connect to PostgreSQL: %s", e)
        return 0  # non-fatal so the app can still start

    conn.set_isolation_level(ISOLATION_LEVEL_AUTOCOMMIT)
    cur = conn.cursor()
    try:
        cur.execute("SELECT 1 FROM pg_database WHERE datname = %s", (db_name,))
        if cur.fetchone():
            logger.info("database '%s' already exists", db_name)
            return 0
        cur.execute(sql.SQL("CREATE DATABASE {}").format(sql.Identifier(db_name)))
        logger.info("created database '%s'", db_name)
    except psycopg2.Error as e:
        logger.error("failed to create database '%s': %s", db_name, e)
        return 1
    finally:
        cur.close()
        conn.close()
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="ensure_db: %(message)s")
    sys.exit(ensure_database())
