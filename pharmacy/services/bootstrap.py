import logging
import os
from collections.abc import Mapping

from pharmacy.app_shell.context import AppContext
from pharmacy.components.bootstrap import BootstrapInput, BootstrapOutput, run
from pharmacy.rules.models import AdminBootstrapRules

logger = logging.getLogger(__name__)


def bootstrap_input_from_rules(
    config: AdminBootstrapRules, environ: Mapping[str, str] | None = None
) -> BootstrapInput:
    """Build seeder input; a non-empty password env var overrides the default password."""
    env = os.environ if environ is None else environ
    password = env.get(config.password_env) or config.default_password
    return BootstrapInput(username=config.username, password=password, role=config.role)


def bootstrap_system(ctx: AppContext) -> BootstrapOutput:
    """
    Ensure the default admin account exists. Called once at process start.
    Repository and hashing errors propagate to the caller.
    """
    config = ctx.rules.ops.bootstrap_admin

    if not config.enabled:
        logger.info("Admin bootstrap disabled in rules, skipping.")
        return BootstrapOutput.skipped("Bootstrap is not enabled in rules")

    return run(bootstrap_input_from_rules(config), ctx.user_repo, ctx.hasher, ctx.clock)


def check_default_password(ctx: AppContext) -> bool:
    """True if the bootstrap user exists and its password is still the default."""
    config = ctx.rules.ops.bootstrap_admin
    user = ctx.user_repo.get_by_username(config.username)
    if user is None:
        return False
    return ctx.hasher.verify_password(config.default_password, user.password_hash)
