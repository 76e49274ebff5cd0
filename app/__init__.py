"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and foundational application code.
"""

from app.config import settings
from app.exceptions import (
    MacroLogError,
    UnauthenticatedError,
    InvalidInputError,
    MissingCredentialError,
    UpstreamUnavailableError,
    MalformedEstimateError,
    PersistenceError,
)

__all__ = [
    "settings",
    "MacroLogError",
    "UnauthenticatedError",
    "InvalidInputError",
    "MissingCredentialError",
    "UpstreamUnavailableError",
    "MalformedEstimateError",
    "PersistenceError",
]
