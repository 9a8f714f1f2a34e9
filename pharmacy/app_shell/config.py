import logging
import os
from functools import lru_cache
from pathlib import Path

from pharmacy.adapters.sqlite.migrator import MIGRATIONS_DIR
from pharmacy.rules.models import DEFAULT_RULES_PATH, Rules

logger = logging.getLogger(__name__)


def _default_rules_path() -> Path:
    # A rules.yaml in the working directory wins over the packaged one
    local = Path.cwd() / "rules.yaml"
    return local if local.exists() else DEFAULT_RULES_PATH


class Settings:
    def __init__(self) -> None:
        self.data_dir = Path(os.environ.get("PHARMACY_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "pharmacy.db")
        self.rules_path = Path(os.environ.get("PHARMACY_RULES_PATH", _default_rules_path()))
        self.migrations_dir = str(MIGRATIONS_DIR)


@lru_cache
def get_settings() -> Settings:
    return Settings()


def validate_ops_rules(rules: Rules, data_dir: Path) -> None:
    """
    Validate operational requirements before startup.
    Raises RuntimeError listing whatever is missing.
    """
    ops = rules.ops

    # 1. Data dir
    if ops.data_dir_required:
        data_dir.mkdir(parents=True, exist_ok=True)
        if not os.access(data_dir, os.W_OK):
            raise RuntimeError(f"Data directory is not writable: {data_dir}")

    # 2. Required env
    missing = [env_var for env_var in ops.required_env if env_var not in os.environ]
    if missing:
        raise RuntimeError(f"Missing required environment variables: {', '.join(missing)}")

    logger.info("Configuration validated.")
