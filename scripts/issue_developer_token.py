#!/usr/bin/env python3
"""
Mint a MusicKit developer token from the current environment.

Reads APPLE_TEAM_ID, APPLE_KEY_ID and APPLE_PRIVATE_KEY or
APPLE_PRIVATE_KEY_PATH exactly as the service does, then prints the signed
token. Useful for checking a new .p8 key before restarting the desktop app.
"""

import argparse
import json
import sys
import os
from typing import Optional, Sequence

import jwt

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from service_musickit.app.cache import TokenCache  # noqa: E402
from service_musickit.app.commands import (  # noqa: E402
    describe_error,
    is_musickit_configured,
    refresh_developer_token,
)
from service_musickit.app.credentials import CredentialResolver  # noqa: E402
from shared.errors import MusicKitException  # noqa: E402
from shared.logging import configure_logging  # noqa: E402


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sign a MusicKit developer token from environment credentials.")
    parser.add_argument("--check", action="store_true", help="Only report whether credentials are configured")
    parser.add_argument("--show-claims", action="store_true", help="Print the decoded header and claims instead of the token")
    parser.add_argument("--env-file", default=".env", help="dotenv file to read besides the environment (use '' to disable)")
    parser.add_argument("--log-level", default="warning", help="Log level for diagnostics written to stderr")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    configure_logging("musickit", args.log_level, stream=sys.stderr)
    cache = TokenCache(resolver=CredentialResolver(env_file=args.env_file or None))

    if args.check:
        configured = is_musickit_configured(cache)
        print("configured" if configured else "not configured")
        return 0 if configured else 1

    try:
        token = refresh_developer_token(cache)
    except MusicKitException as exc:
        print(describe_error(exc), file=sys.stderr)
        return 1

    if args.show_claims:
        summary = {
            "header": jwt.get_unverified_header(token),
            "claims": jwt.decode(token, options={"verify_signature": False}),
        }
        print(json.dumps(summary, indent=2))
    else:
        print(token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
