"""Core configuration and shared errors."""

from dotenv import load_dotenv

from .config import Settings, get_settings
from .errors import (
    InvalidTransition,
    LoadCorruption,
    NotFound,
    PersistenceFailure,
    PlantPilotError,
    ValidationFailure,
)

load_dotenv()

__all__ = [
    "InvalidTransition",
    "LoadCorruption",
    "NotFound",
    "PersistenceFailure",
    "PlantPilotError",
    "Settings",
    "ValidationFailure",
    "get_settings",
]
