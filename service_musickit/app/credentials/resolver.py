"""
Resolve Apple MusicKit signing credentials from the process environment.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.errors import ConfigMissingError
from shared.logging import get_logger


TEAM_ID_FIELD = "APPLE_TEAM_ID"
KEY_ID_FIELD = "APPLE_KEY_ID"
KEY_MATERIAL_FIELD = "APPLE_PRIVATE_KEY_PATH or APPLE_PRIVATE_KEY"


class AppleCredentialSettings(BaseSettings):
    """Raw credential fields as found in the environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    apple_team_id: Optional[str] = Field(default=None)
    apple_key_id: Optional[str] = Field(default=None)
    apple_private_key_path: Optional[str] = Field(default=None)
    apple_private_key: Optional[str] = Field(default=None)


@dataclass(frozen=True)
class Credential:
    """Everything needed to sign a developer token.

    ``private_key_content`` wins over ``private_key_path`` when both are set.
    """

    team_id: str
    key_id: str
    private_key_content: Optional[str] = field(default=None, repr=False)
    private_key_path: Optional[Path] = None

    @property
    def key_source(self) -> str:
        return "inline" if self.private_key_content is not None else "file"


def _non_blank(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value


class CredentialResolver:
    """Builds a fresh :class:`Credential` from configuration on every call.

    The key file itself is never opened here, so a successful resolve does not
    mean the key is readable or valid.
    """

    def __init__(
        self,
        env_file: Optional[str] = ".env",
        settings_factory: Optional[Callable[[], AppleCredentialSettings]] = None,
    ):
        self.env_file = env_file
        self.settings_factory = settings_factory
        self.logger = get_logger("musickit.credentials")

    def load_settings(self) -> AppleCredentialSettings:
        if self.settings_factory is not None:
            return self.settings_factory()
        return AppleCredentialSettings(_env_file=self.env_file)

    def resolve(self) -> Credential:
        """Return the configured credential or raise :class:`ConfigMissingError`."""
        settings = self.load_settings()

        team_id = _non_blank(settings.apple_team_id)
        if team_id is None:
            raise ConfigMissingError(TEAM_ID_FIELD)

        key_id = _non_blank(settings.apple_key_id)
        if key_id is None:
            raise ConfigMissingError(KEY_ID_FIELD)

        key_content = _non_blank(settings.apple_private_key)
        key_path = _non_blank(settings.apple_private_key_path)
        if key_content is None and key_path is None:
            raise ConfigMissingError(KEY_MATERIAL_FIELD)

        credential = Credential(
            team_id=team_id.strip(),
            key_id=key_id.strip(),
            private_key_content=key_content,
            private_key_path=Path(key_path.strip()) if key_path is not None else None,
        )
        self.logger.debug(
            "Resolved MusicKit credential",
            team_id=credential.team_id,
            kid=credential.key_id,
            key_source=credential.key_source,
        )
        return credential
