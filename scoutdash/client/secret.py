"""Secret backends for reading the Scout APM API key.

Resolution is via secret manager CLIs only (1Password, Bitwarden, KeePassXC).
Plain-text API keys from environment variables or arguments are not accepted.

Configuration:
- 1Password: ``SCOUT_OP_ENTRY_PATH`` (``op://Vault/Item``) or ``SCOUT_OP_VAULT``
  + ``SCOUT_OP_ITEM``; optional ``SCOUT_OP_FIELD`` (default ``API_KEY``).
- Bitwarden: ``SCOUT_BW_ITEM_ID``; optional ``SCOUT_BW_SESSION``.
- KeePassXC: ``SCOUT_KPXC_DB`` + ``SCOUT_KPXC_ENTRY``; optional
  ``SCOUT_KPXC_ATTRIBUTE`` (default ``Password``).
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping
from enum import Enum

from scoutdash.client.errors import ScoutError
from scoutdash.constants.defaults import KPXC_ATTRIBUTE_DEFAULT, OP_FIELD_DEFAULT
from scoutdash.constants.timeouts import SECRET_COMMAND_TIMEOUT

logger = logging.getLogger(__name__)


class ApiKeySource(Enum):
    """Secret backend the API key was read from."""

    ONE_PASSWORD = "1password"
    BITWARDEN = "bitwarden"
    KEEPASSXC = "keepassxc"


def _env(name: str) -> str | None:
    value = os.environ.get(name, "").strip()
    return value or None


def _run_command(args: list[str], extra_env: Mapping[str, str] | None = None) -> str | None:
    """Run a secret manager CLI and return its trimmed stdout, or None on failure.

    stderr is discarded so prompts and diagnostics never leak into output.
    """
    env = None
    if extra_env:
        env = {**os.environ, **extra_env}
    try:
        completed = subprocess.run(
            args,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            env=env,
            timeout=SECRET_COMMAND_TIMEOUT,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("Secret command %s unavailable: %s", args[0], e)
        return None
    if completed.returncode != 0:
        logger.debug("Secret command %s exited with %d", args[0], completed.returncode)
        return None
    output = completed.stdout.decode("utf-8", errors="replace").strip()
    return output or None


def one_password() -> str | None:
    """Read the key with ``op read``."""
    field = os.environ.get("SCOUT_OP_FIELD", OP_FIELD_DEFAULT).strip()
    if not field:
        return None

    if "SCOUT_OP_ENTRY_PATH" in os.environ:
        path = _env("SCOUT_OP_ENTRY_PATH")
        if path is None:
            return None
        return _run_command(["op", "read", f"{path.rstrip('/')}/{field}"])

    vault = _env("SCOUT_OP_VAULT")
    item = _env("SCOUT_OP_ITEM")
    if vault is None or item is None:
        return None
    return _run_command(["op", "read", f"op://{vault}/{item}/{field}"])


def bitwarden() -> str | None:
    """Read the key with ``bw get password``."""
    item_id = _env("SCOUT_BW_ITEM_ID")
    if item_id is None:
        return None
    session = _env("SCOUT_BW_SESSION")
    extra_env = {"BW_SESSION": session} if session else None
    return _run_command(["bw", "get", "password", item_id], extra_env)


def keepassxc() -> str | None:
    """Read the key with ``keepassxc-cli show``."""
    database = _env("SCOUT_KPXC_DB")
    entry = _env("SCOUT_KPXC_ENTRY")
    if database is None or entry is None:
        return None
    attribute = os.environ.get("SCOUT_KPXC_ATTRIBUTE", KPXC_ATTRIBUTE_DEFAULT).strip()
    if not attribute:
        return None
    return _run_command(["keepassxc-cli", "show", "-a", attribute, database, entry])


_BACKENDS = (
    (ApiKeySource.ONE_PASSWORD, one_password),
    (ApiKeySource.BITWARDEN, bitwarden),
    (ApiKeySource.KEEPASSXC, keepassxc),
)


def get_api_key() -> tuple[str, ApiKeySource]:
    """Return the API key and the backend it came from.

    Raises:
        ScoutError: If no backend is configured or none returned a key.
    """
    for source, reader in _BACKENDS:
        key = reader()
        if key:
            logger.info("API key read from %s", source.value)
            return key, source
    raise ScoutError(
        "API key not found. Configure a secret backend: SCOUT_OP_ENTRY_PATH (1Password), "
        "SCOUT_BW_ITEM_ID (Bitwarden), or SCOUT_KPXC_DB+SCOUT_KPXC_ENTRY (KeePassXC). "
        "Plain-text keys are not supported."
    )


__all__ = [
    "ApiKeySource",
    "bitwarden",
    "get_api_key",
    "keepassxc",
    "one_password",
]
