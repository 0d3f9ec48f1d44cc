"""
MusicKit developer token service package.

This package signs the ES256 developer token the desktop client needs to
initialize MusicKit JS:

- app.credentials: Reads team id, key id and key material from the environment.
- app.signing: Parses the P-256 key and signs the token with PyJWT.
- app.cache: Single-slot, thread-safe token cache with placeholder fallback.
- app.commands: The operations exposed to the host UI layer.
- app.main: FastAPI application wiring the commands to HTTP routes.

Design notes:
- Module import performs no IO; the environment and key file are read only
  when a token is requested.
- The cache is owned by whoever creates it. Nothing here keeps a process-wide
  token.
- Key material is never logged.
"""
