"""Shared Azure credential for management and data-plane clients."""

from __future__ import annotations

from azure.identity import DefaultAzureCredential

_credential: DefaultAzureCredential | None = None


def get_credential() -> DefaultAzureCredential:
    """Return the process-wide DefaultAzureCredential, creating it on first use.

    Every client in a binding run (Resource Manager, Key Vault management,
    Key Vault data plane, App Service) authenticates with this instance so
    tokens are fetched once per audience.
    """
    global _credential
    if _credential is None:
        _credential = DefaultAzureCredential()
    return _credential
