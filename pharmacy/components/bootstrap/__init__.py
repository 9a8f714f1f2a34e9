"""Bootstrap component for first-start system initialization.

Seeds the default ADMIN account when the user store does not have one yet.
"""

from .component import run, run_bootstrap
from .models import BootstrapInput, BootstrapOutput
from .ports import PasswordHasherPort, TimePort, UserRepoPort

__all__ = [
    # Entry points
    "run",
    "run_bootstrap",
    # Models
    "BootstrapInput",
    "BootstrapOutput",
    # Ports
    "PasswordHasherPort",
    "TimePort",
    "UserRepoPort",
]
