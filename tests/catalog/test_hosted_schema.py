"""Tests for applying schema.sql to the hosted database with a mocked connection."""

from unittest.mock import MagicMock

import psycopg
import pytest

from nihonto.catalog.hosted_schema import apply_schema, connection_params
from nihonto.catalog.models import CatalogError
from nihonto.config import ConfigError, Settings


SCHEMA = "CREATE TABLE IF NOT EXISTS nihonto_items (id BIGSERIAL PRIMARY KEY);\n"


@pytest.fixture
def settings():
    return Settings(supabase_url="https://abcdefgh.supabase.co", supabase_db_password="secret")


@pytest.fixture
def schema_file(tmp_dir):
    path = tmp_dir / "schema.sql"
    path.write_text(SCHEMA, encoding="utf-8")
    return path


def mock_connect():
    connect = MagicMock()
    conn = MagicMock()
    connect.return_value.__enter__.return_value = conn
    return connect, conn


def test_connection_params_use_project_ref(settings):
    params = connection_params(settings)

    assert params["user"] == "postgres.abcdefgh"
    assert params["host"] == "aws-0-us-east-1.pooler.supabase.com"
    assert params["port"] == 6543
    assert params["dbname"] == "postgres"
    assert params["password"] == "secret"
    assert params["sslmode"] == "require"


def test_apply_schema_executes_file(settings, schema_file):
    connect, conn = mock_connect()

    apply_schema(settings, schema_file, connect=connect)

    assert connect.call_args.kwargs["user"] == "postgres.abcdefgh"
    conn.execute.assert_called_once_with(SCHEMA)


def test_missing_password(schema_file):
    connect, _ = mock_connect()

    with pytest.raises(ConfigError, match="SUPABASE_DB_PASSWORD"):
        apply_schema(Settings(supabase_url="https://abcdefgh.supabase.co"), schema_file, connect=connect)

    connect.assert_not_called()


def test_url_without_project_ref(schema_file):
    settings = Settings(supabase_url="https://db.example.com", supabase_db_password="secret")

    with pytest.raises(ConfigError, match="project ref"):
        apply_schema(settings, schema_file, connect=MagicMock())


def test_connection_failure(settings, schema_file):
    connect = MagicMock(side_effect=psycopg.OperationalError("password authentication failed"))

    with pytest.raises(CatalogError, match="password authentication failed"):
        apply_schema(settings, schema_file, connect=connect)


def test_missing_schema_file(settings, tmp_dir):
    with pytest.raises(CatalogError, match="Cannot read schema file"):
        apply_schema(settings, tmp_dir / "missing.sql", connect=MagicMock())
