from datetime import UTC, datetime
from typing import Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

# --- Enums / Literals ---
RoleType = Literal["ADMIN", "CASHIER"]

# --- User ---

class User(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    username: str
    password_hash: str
    role: RoleType = "CASHIER"
    active: bool = True
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
