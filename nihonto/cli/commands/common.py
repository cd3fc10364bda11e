"""Helpers shared by CLI commands."""

from nihonto.config import ConfigError, Settings, load_settings


RULE = "=" * 60


def banner(title: str) -> None:
    print(f"\n{RULE}")
    print(title)
    print(f"{RULE}\n")


def settings_from_args(args) -> Settings | None:
    """Load settings, printing the problem and returning None when they are invalid."""
    try:
        return load_settings(getattr(args, "env_file", None))
    except ConfigError as e:
        print(f"Error: {e}")
        return None
