from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from pharmacy.domain.entities import RoleType

DEFAULT_RULES_PATH = Path(__file__).with_name("rules.yaml")


class AdminBootstrapRules(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    username: str = Field(default="admin", min_length=1)
    role: RoleType = "ADMIN"
    default_password: str = Field(default="admin123", min_length=1)
    password_env: str = "PHARMACY_BOOTSTRAP_PASSWORD"

class OpsRules(BaseModel):
    data_dir_required: bool = True
    required_env: list[str] = Field(default_factory=list)
    bootstrap_admin: AdminBootstrapRules = Field(default_factory=AdminBootstrapRules)

class Rules(BaseModel):
    ops: OpsRules = Field(default_factory=OpsRules)
