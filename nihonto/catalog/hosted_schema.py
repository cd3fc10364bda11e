"""Apply schema.sql to the hosted Postgres database behind Supabase."""

import logging
from pathlib import Path

import psycopg

from ..config import Settings
from .models import CatalogError


DEFAULT_SCHEMA_PATH = Path("schema.sql")
DATABASE_NAME = "postgres"

logger = logging.getLogger(__name__)


def connection_params(settings: Settings) -> dict:
    """Connection keywords for the Supabase pooler.

    Raises ConfigError when the password or a project URL is missing.
    """
    settings.require_database()
    return {
        "host": settings.supabase_db_host,
        "port": settings.supabase_db_port,
        "dbname": DATABASE_NAME,
        "user": f"postgres.{settings.supabase_project_ref}",
        "password": settings.supabase_db_password,
        "sslmode": "require",
    }


def apply_schema(settings: Settings, schema_path: Path = DEFAULT_SCHEMA_PATH, connect=None) -> None:
    """Execute the schema file in one transaction.

    Raises:
        ConfigError: If the database settings are incomplete.
        CatalogError: If the file cannot be read or the database rejects it.
    """
    connect = connect or psycopg.connect
    params = connection_params(settings)

    try:
        schema = Path(schema_path).read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogError(f"Cannot read schema file {schema_path}: {e}") from e

    logger.info(f"Connecting to {params['host']}:{params['port']} as {params['user']}")
    try:
        with connect(**params) as conn:
            conn.execute(schema)
    except psycopg.Error as e:
        raise CatalogError(f"Schema setup failed: {e}") from e

    logger.info(f"Applied {schema_path}")
