"""Destination vault discovery through Key Vault access policies."""

from __future__ import annotations

import logging

from azure.mgmt.keyvault import KeyVaultManagementClient
from azure.mgmt.keyvault.models import Vault

from ssl_binder.auth import get_credential as _get_credential
from ssl_binder.config import AppConfig
from ssl_binder.models import DestinationVault, GroupResource, VaultAccessPolicy

logger = logging.getLogger(__name__)

KEY_VAULT_TYPE = "Microsoft.KeyVault/vaults"


def fetch_vaults(config: AppConfig, resource_group: str, resources: list[GroupResource]) -> list[Vault]:
    """Fetch full vault descriptors for every vault resource, preserving enumeration order."""
    client = KeyVaultManagementClient(_get_credential(), config.subscription_id)
    candidates = [r for r in resources if r.type.lower() == KEY_VAULT_TYPE.lower()]
    logger.info("Resource group '%s' holds %d vault(s)", resource_group, len(candidates))
    return [client.vaults.get(resource_group, r.name) for r in candidates]


def flatten_access_policies(vaults: list[Vault]) -> list[VaultAccessPolicy]:
    """Flatten the access policies of all vaults, vault by vault.

    Vaults using RBAC authorization ignore access policies and contribute none.
    """
    policies: list[VaultAccessPolicy] = []
    for vault in vaults:
        props = vault.properties
        if props.enable_rbac_authorization:
            logger.debug("Vault '%s' uses RBAC authorization — skipping", vault.name)
            continue
        policies.extend(
            VaultAccessPolicy(vault_name=vault.name, object_id=p.object_id)
            for p in props.access_policies or []
        )
    return policies


def find_accessible_vault(
    config: AppConfig,
    resource_group: str,
    resources: list[GroupResource],
    principal_id: str,
) -> DestinationVault | None:
    """Return the first vault whose access policies include ``principal_id``.

    Vaults are considered in resource enumeration order, so several matching
    policies on one vault still select that vault. The match is returned as
    the vault resource itself rather than a name parsed from a label.
    Returns None when no vault grants the principal access; access is never
    granted here.
    """
    vaults = fetch_vaults(config, resource_group, resources)
    wanted = principal_id.lower()
    match = next(
        (p for p in flatten_access_policies(vaults) if p.object_id and p.object_id.lower() == wanted),
        None,
    )
    if match is None:
        logger.warning("No vault in '%s' grants access to principal %s", resource_group, principal_id)
        return None

    vault = next(v for v in vaults if v.name == match.vault_name)
    logger.info("Selected destination vault '%s' for principal %s", vault.name, principal_id)
    return DestinationVault(
        id=vault.id,
        name=vault.name,
        resource_group=resource_group,
        vault_uri=vault.properties.vault_uri,
    )
