"""Catalog inspection CLI commands."""

from pathlib import Path

from nihonto.backends import open_backend
from nihonto.catalog.db import CatalogDB
from nihonto.catalog.hosted_schema import DEFAULT_SCHEMA_PATH, apply_schema
from nihonto.catalog.models import CatalogError
from nihonto.config import ConfigError

from .common import settings_from_args


WIDE_RULE = "=" * 80


def cmd_show(args):
    """Print translations (or the pending work list) in catalog order."""
    settings = settings_from_args(args)
    if settings is None:
        return 1

    try:
        backend = open_backend(settings)
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    try:
        if args.untranslated:
            items = backend.catalog.select_untranslated()
        else:
            items = backend.catalog.select_all()
    except CatalogError as e:
        print(f"Database error: {e}")
        return 1
    finally:
        backend.close()

    if args.untranslated:
        print(f"{len(items)} items awaiting translation:")
        for item in items:
            print(f"  - {item.label} (pages {item.pdf_page_oshigata}/{item.pdf_page_setsumei})")
        return 0

    for item in items:
        print(f"\n{WIDE_RULE}")
        print(f"VOLUME {item.volume} - ITEM {item.item_number}")
        print(f"{WIDE_RULE}\n")
        print(item.setsumei_english if item.is_translated else "(not yet translated)")
        print()

    return 0


def cmd_init_db(args):
    """Create the catalog schema: SQLite locally, schema.sql on the hosted database."""
    settings = settings_from_args(args)
    if settings is None:
        return 1

    if settings.backend == "supabase":
        print("Connecting to Supabase PostgreSQL database...")
        try:
            apply_schema(settings, Path(args.schema))
        except ConfigError as e:
            print(f"Error: {e}")
            return 1
        except CatalogError as e:
            print(f"✗ {e}")
            return 1

        print(f"✓ Database schema created from {args.schema}")
        return 0

    db = CatalogDB(settings.sqlite_path)
    db.close()
    print(f"Catalog ready: {settings.sqlite_path}")
    return 0


def setup_catalog_commands(subparsers):
    """Setup catalog subcommands."""
    show_parser = subparsers.add_parser("show", help="Show translated catalog entries")
    show_parser.add_argument("--untranslated", action="store_true", help="List items still awaiting translation")
    show_parser.set_defaults(func=cmd_show)

    init_db_parser = subparsers.add_parser("init-db", help="Create the catalog schema")
    init_db_parser.add_argument(
        "--schema", default=str(DEFAULT_SCHEMA_PATH), help="SQL file applied to the hosted database (default: schema.sql)"
    )
    init_db_parser.set_defaults(func=cmd_init_db)
