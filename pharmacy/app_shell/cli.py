import argparse
import logging
import sqlite3
import sys

from argon2.exceptions import HashingError

from pharmacy.adapters.sqlite.migrator import SQLiteMigrator
from pharmacy.app_shell.config import Settings, get_settings
from pharmacy.app_shell.context import AppContext
from pharmacy.services.bootstrap import bootstrap_system, check_default_password

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")


def get_context(settings: Settings) -> AppContext:
    if not settings.rules_path.exists():
        logger.error(f"Rules file {settings.rules_path} not found.")
        sys.exit(1)
    return AppContext.from_settings(settings)


def handle_migrate(settings: Settings, args: argparse.Namespace) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    applied = SQLiteMigrator(settings.db_path, settings.migrations_dir).run_migrations()
    print(f"Applied {len(applied)} migration(s).")


def handle_seed_admin(settings: Settings, args: argparse.Namespace) -> None:
    ctx = get_context(settings)
    result = bootstrap_system(ctx)
    if result.created:
        print(f"Created user '{result.user.username}' with role {result.user.role}.")
    else:
        print(f"Skipped: {result.skipped_reason}")


def handle_check_admin(settings: Settings, args: argparse.Namespace) -> None:
    ctx = get_context(settings)
    username = ctx.rules.ops.bootstrap_admin.username
    if ctx.user_repo.get_by_username(username) is None:
        print(f"User '{username}' does not exist.")
        sys.exit(1)
    if check_default_password(ctx):
        print(f"User '{username}' still uses the default password.")
        sys.exit(2)
    print(f"User '{username}' has a non-default password.")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Pharmacy admin bootstrap CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("migrate", help="Apply pending database migrations")
    subparsers.add_parser("seed-admin", help="Create the default admin user if missing")
    subparsers.add_parser(
        "check-admin", help="Report whether the admin user still has the default password"
    )

    args = parser.parse_args(argv)
    settings = get_settings()

    handlers = {
        "migrate": handle_migrate,
        "seed-admin": handle_seed_admin,
        "check-admin": handle_check_admin,
    }
    try:
        handlers[args.command](settings, args)
    except (FileNotFoundError, ValueError, RuntimeError, sqlite3.Error, HashingError) as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
