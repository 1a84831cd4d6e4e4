"""Configuration loading and validation from environment variables."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass

_DEFAULT_KEYVAULT_DNS_SUFFIX = "vault.azure.net"
_DEFAULT_ORPHAN_POLICY = "warn"
_ORPHAN_POLICIES = ("warn", "delete")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class AppConfig:
    """Application configuration loaded from environment variables."""

    subscription_id: str
    scratch_dir: str
    orphaned_certificate_policy: str = _DEFAULT_ORPHAN_POLICY
    keyvault_dns_suffix: str = _DEFAULT_KEYVAULT_DNS_SUFFIX
    log_level: str = "INFO"

    def vault_url(self, vault_name: str) -> str:
        """Build the data-plane URL for a vault name."""
        return f"https://{vault_name}.{self.keyvault_dns_suffix}"


def _require_env(name: str) -> str:
    value = os.environ.get(name)
    if not value:
        raise ValueError(f"Required environment variable {name} is not set")
    return value


def load_config() -> AppConfig:
    """Load and validate application configuration from environment variables."""
    subscription_id = _require_env("AZURE_SUBSCRIPTION_ID")

    scratch_dir = os.environ.get("SCRATCH_DIR") or tempfile.gettempdir()
    if not os.path.isdir(scratch_dir):
        raise ValueError(f"SCRATCH_DIR must be an existing directory, got: {scratch_dir!r}")

    policy = os.environ.get("ORPHANED_CERTIFICATE_POLICY", _DEFAULT_ORPHAN_POLICY).lower()
    if policy not in _ORPHAN_POLICIES:
        raise ValueError(f"ORPHANED_CERTIFICATE_POLICY must be one of {', '.join(_ORPHAN_POLICIES)}, got: {policy!r}")

    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    if log_level not in _LOG_LEVELS:
        raise ValueError(f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got: {log_level!r}")

    return AppConfig(
        subscription_id=subscription_id,
        scratch_dir=scratch_dir,
        orphaned_certificate_policy=policy,
        keyvault_dns_suffix=os.environ.get("KEYVAULT_DNS_SUFFIX", _DEFAULT_KEYVAULT_DNS_SUFFIX),
        log_level=log_level,
    )
