from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pharmacy.adapters.auth.crypto import Argon2PasswordHasher
from pharmacy.adapters.clock import SystemClock
from pharmacy.adapters.sqlite.migrator import SQLiteMigrator
from pharmacy.adapters.sqlite.repos import SQLiteUserRepo
from pharmacy.app_shell.config import validate_ops_rules
from pharmacy.rules.loader import load_rules

if TYPE_CHECKING:
    from pharmacy.app_shell.config import Settings
    from pharmacy.ports.auth import PasswordHasherPort
    from pharmacy.ports.clock import ClockPort
    from pharmacy.ports.repo import UserRepoPort
    from pharmacy.rules.models import Rules

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    user_repo: UserRepoPort
    hasher: PasswordHasherPort
    clock: ClockPort
    rules: Rules

    @classmethod
    def create(cls, db_path: str, rules: Rules) -> AppContext:
        return cls(
            user_repo=SQLiteUserRepo(db_path),
            hasher=Argon2PasswordHasher(),
            clock=SystemClock(),
            rules=rules,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> AppContext:
        """Load rules, validate ops requirements and migrate before wiring adapters."""
        rules = load_rules(settings.rules_path)
        validate_ops_rules(rules, settings.data_dir)
        logger.info("Rules loaded from %s", settings.rules_path)

        SQLiteMigrator(settings.db_path, settings.migrations_dir).run_migrations()
        return cls.create(settings.db_path, rules)
