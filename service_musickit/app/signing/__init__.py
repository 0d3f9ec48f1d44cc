"""
Developer token signing.
"""

from .issuer import (
    DEVELOPER_TOKEN_LIFETIME,
    MAX_KEY_FILE_BYTES,
    PLACEHOLDER_TOKEN,
    SIGNING_ALGORITHM,
    DeveloperTokenClaims,
    TokenIssuer,
    parse_private_key,
    placeholder_token,
    read_key_material,
)

__all__ = [
    "DEVELOPER_TOKEN_LIFETIME",
    "MAX_KEY_FILE_BYTES",
    "PLACEHOLDER_TOKEN",
    "SIGNING_ALGORITHM",
    "DeveloperTokenClaims",
    "TokenIssuer",
    "parse_private_key",
    "placeholder_token",
    "read_key_material",
]
