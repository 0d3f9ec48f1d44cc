"""
Credential resolution for MusicKit developer tokens.
"""

from .resolver import (
    AppleCredentialSettings,
    Credential,
    CredentialResolver,
    KEY_ID_FIELD,
    KEY_MATERIAL_FIELD,
    TEAM_ID_FIELD,
)

__all__ = [
    "AppleCredentialSettings",
    "Credential",
    "CredentialResolver",
    "KEY_ID_FIELD",
    "KEY_MATERIAL_FIELD",
    "TEAM_ID_FIELD",
]
