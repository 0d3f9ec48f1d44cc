"""
ES256 developer token signing for Apple MusicKit.

Apple accepts developer tokens valid for at most 180 days. Tokens carry the
key id in the JOSE header and the team id as issuer::

    header  {"alg": "ES256", "kid": <key id>}
    payload {"iss": <team id>, "iat": <now>, "exp": <now + 180 days>}
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict

import jwt
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from shared.errors import EncodingFailedError, InvalidKeyError, KeyUnreadableError
from shared.logging import get_logger
from ..credentials import Credential


SIGNING_ALGORITHM = "ES256"
DEVELOPER_TOKEN_LIFETIME = timedelta(days=180)
MAX_KEY_FILE_BYTES = 64 * 1024
PLACEHOLDER_TOKEN = "DEMO_TOKEN_REPLACE_WITH_REAL_TOKEN"


def placeholder_token() -> str:
    """Stand-in token that lets the UI load with playback disabled."""
    return PLACEHOLDER_TOKEN


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DeveloperTokenClaims:
    """Registered claims of a developer token."""

    iss: str
    iat: int
    exp: int

    @classmethod
    def issued_at(cls, team_id: str, now: datetime, lifetime: timedelta = DEVELOPER_TOKEN_LIFETIME) -> "DeveloperTokenClaims":
        iat = int(now.timestamp())
        return cls(iss=team_id, iat=iat, exp=iat + int(lifetime.total_seconds()))

    def to_payload(self) -> Dict[str, Any]:
        return {"iss": self.iss, "iat": self.iat, "exp": self.exp}


def read_key_material(credential: Credential, max_bytes: int = MAX_KEY_FILE_BYTES) -> bytes:
    """Return the PEM bytes for ``credential``, reading the key file if needed."""
    if credential.private_key_content is not None:
        try:
            return credential.private_key_content.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise InvalidKeyError(f"private key is not valid UTF-8 text: {exc.reason}") from exc

    if credential.private_key_path is None:
        raise KeyUnreadableError("no private key source configured")

    path = credential.private_key_path.expanduser()
    try:
        with path.open("rb") as handle:
            data = handle.read(max_bytes + 1)
    except OSError as exc:
        raise KeyUnreadableError(str(exc), details={"path": str(path)}) from exc

    if len(data) > max_bytes:
        raise KeyUnreadableError(
            f"{path} is larger than {max_bytes} bytes",
            details={"path": str(path)},
        )
    return data


def parse_private_key(pem: bytes) -> ec.EllipticCurvePrivateKey:
    """Load a PEM private key and insist on an unencrypted P-256 EC key."""
    try:
        key = serialization.load_pem_private_key(pem, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise InvalidKeyError(str(exc)) from exc

    if not isinstance(key, ec.EllipticCurvePrivateKey):
        raise InvalidKeyError(f"expected an EC private key, got {type(key).__name__}")
    if not isinstance(key.curve, ec.SECP256R1):
        raise InvalidKeyError(f"expected a P-256 key, got curve {key.curve.name}")
    return key


class TokenIssuer:
    """Signs MusicKit developer tokens."""

    def __init__(
        self,
        clock: Callable[[], datetime] = _utcnow,
        lifetime: timedelta = DEVELOPER_TOKEN_LIFETIME,
        max_key_bytes: int = MAX_KEY_FILE_BYTES,
    ):
        if lifetime <= timedelta(0) or lifetime > DEVELOPER_TOKEN_LIFETIME:
            raise ValueError(f"lifetime must be within (0, {DEVELOPER_TOKEN_LIFETIME.days} days]")
        self.clock = clock
        self.lifetime = lifetime
        self.max_key_bytes = max_key_bytes
        self.logger = get_logger("musickit.issuer")

    def build_claims(self, credential: Credential) -> DeveloperTokenClaims:
        return DeveloperTokenClaims.issued_at(credential.team_id, self.clock(), self.lifetime)

    def sign(self, credential: Credential) -> str:
        """Return a compact ES256 JWS for ``credential``.

        Raises:
            KeyUnreadableError: the key file could not be read.
            InvalidKeyError: the key is not a P-256 private key.
            EncodingFailedError: PyJWT refused to encode the token.
        """
        key = parse_private_key(read_key_material(credential, self.max_key_bytes))
        claims = self.build_claims(credential)

        try:
            token = jwt.encode(
                claims.to_payload(),
                key,
                algorithm=SIGNING_ALGORITHM,
                headers={"kid": credential.key_id, "typ": None},
            )
        except (jwt.PyJWTError, ValueError, TypeError) as exc:
            raise EncodingFailedError(str(exc)) from exc

        self.logger.info(
            "Generated MusicKit developer token",
            kid=credential.key_id,
            iat=claims.iat,
            exp=claims.exp,
        )
        return token

    @staticmethod
    def placeholder() -> str:
        return placeholder_token()
