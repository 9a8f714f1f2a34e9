"""Bootstrap component implementation.

Creates the default ADMIN account if the user store does not contain it.
Safe to run on every process start.
"""

from __future__ import annotations

import logging

from pharmacy.domain.entities import User
from pharmacy.ports.repo import UsernameTakenError

from .models import BootstrapInput, BootstrapOutput
from .ports import PasswordHasherPort, TimePort, UserRepoPort

logger = logging.getLogger(__name__)


def run_bootstrap(
    bootstrap_input: BootstrapInput,
    user_repo: UserRepoPort,
    hasher: PasswordHasherPort,
    time: TimePort,
) -> BootstrapOutput:
    """Execute the bootstrap process.

    Repository and hashing errors are not caught. The only tolerated failure
    is UsernameTakenError from save(), which means another instance created
    the same account between our check and our insert.

    Args:
        bootstrap_input: Username, password and role for the seeded account.
        user_repo: Repository for user operations.
        hasher: Adapter for password hashing.
        time: Time provider for deterministic timestamps.

    Returns:
        BootstrapOutput with the result of the operation.
    """
    username = bootstrap_input.username

    # 1. Skip if already exists
    if user_repo.exists_by_username(username):
        logger.debug("Bootstrap user %r already exists, nothing to do", username)
        return BootstrapOutput.skipped(f"User '{username}' already exists")

    # 2. Build the account with a hashed password
    password_hash = hasher.hash_password(bootstrap_input.password)
    now = time.now_utc()

    user = User(
        username=username,
        password_hash=password_hash,
        role=bootstrap_input.role,
        active=True,
        created_at=now,
        updated_at=now,
    )

    # 3. Persist
    try:
        saved = user_repo.save(user)
    except UsernameTakenError:
        logger.debug("Bootstrap user %r was created concurrently", username)
        return BootstrapOutput.skipped(f"User '{username}' already exists")

    logger.info("Default %s user created successfully.", bootstrap_input.role)
    return BootstrapOutput.created_user(saved if saved is not None else user)


def run(
    bootstrap_input: BootstrapInput,
    user_repo: UserRepoPort,
    hasher: PasswordHasherPort,
    time: TimePort,
) -> BootstrapOutput:
    """Main entry point for the bootstrap component."""
    return run_bootstrap(bootstrap_input, user_repo, hasher, time)
