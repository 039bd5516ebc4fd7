"""
Root conftest for all tests.

Keeps the process environment from leaking signer configuration into tests:
settings are always built explicitly by fixtures.
"""

import pytest

_SIGNER_ENV_VARS = (
    "PRIVATE_KEY",
    "SIGNER_TOKEN",
    "CLOB_HOST",
    "CHAIN_ID",
    "WORKER_URL",
    "WORKER_TOKEN",
    "RELAY_TIMEOUT_SECONDS",
    "MAX_BODY_BYTES",
    "LOG_LEVEL",
    "HOST",
    "PORT",
)


@pytest.fixture(autouse=True)
def _isolate_signer_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove signer env vars so only explicit test values apply."""
    for name in _SIGNER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
