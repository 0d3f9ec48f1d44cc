"""
End-to-end developer token flow: key file on disk, HTTP service, verifier.
"""

import jwt
import pytest
from fastapi.testclient import TestClient

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from service_musickit.app.cache import TokenCache
from service_musickit.app.credentials import CredentialResolver
from service_musickit.app.main import create_app
from service_musickit.app.signing import PLACEHOLDER_TOKEN
from shared.test_helpers import KeyFactory, TestEnvironment


@pytest.fixture
def key_pair():
    return KeyFactory.p256()


@pytest.fixture
def client():
    cache = TokenCache(resolver=CredentialResolver(env_file=None))
    return TestClient(create_app(token_cache=cache))


class TestDeveloperTokenFlow:
    """Walk the desktop startup and manual retry paths."""

    def test_startup_without_credentials_then_configure_and_retry(self, client, monkeypatch, tmp_path, key_pair):
        TestEnvironment.clear_apple_env(monkeypatch)

        # UI boots with no credentials and still gets something to load with
        startup = client.get("/musickit/token").json()
        assert startup == {"token": PLACEHOLDER_TOKEN, "placeholder": True}
        assert client.get("/musickit/configured").json() == {"configured": False}

        # Operator drops the .p8 file in place and sets the environment
        key_file = tmp_path / "AuthKey_KEY1.p8"
        key_file.write_text(key_pair.private_pem)
        TestEnvironment.apply(monkeypatch, {
            "APPLE_TEAM_ID": "ABC123",
            "APPLE_KEY_ID": "KEY1",
            "APPLE_PRIVATE_KEY_PATH": str(key_file),
        })

        # The cached placeholder sticks until an explicit retry
        assert client.get("/musickit/token").json()["token"] == PLACEHOLDER_TOKEN

        refreshed = client.post("/musickit/token/refresh")
        assert refreshed.status_code == 200
        token = refreshed.json()["token"]

        claims = jwt.decode(token, key_pair.public_pem, algorithms=["ES256"])
        assert claims["iss"] == "ABC123"
        assert claims["exp"] - claims["iat"] == 15552000
        assert jwt.get_unverified_header(token) == {"alg": "ES256", "kid": "KEY1"}

        after = client.get("/musickit/token").json()
        assert after == {"token": token, "placeholder": False}

    def test_key_removed_after_startup(self, client, monkeypatch, tmp_path, key_pair):
        key_file = tmp_path / "AuthKey_KEY1.p8"
        key_file.write_text(key_pair.private_pem)
        TestEnvironment.apply(monkeypatch, {
            "APPLE_TEAM_ID": "ABC123",
            "APPLE_KEY_ID": "KEY1",
            "APPLE_PRIVATE_KEY_PATH": str(key_file),
        })
        token = client.get("/musickit/token").json()["token"]

        key_file.unlink()
        response = client.post("/musickit/token/refresh")

        assert response.status_code == 500
        assert response.json()["code"] == "KEY_UNREADABLE"
        assert client.get("/musickit/token").json()["token"] == token
