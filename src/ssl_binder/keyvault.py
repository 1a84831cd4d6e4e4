"""Key Vault data-plane operations — read secrets, read thumbprints, import PFX."""

from __future__ import annotations

import logging
from pathlib import Path

from azure.core.exceptions import ResourceNotFoundError
from azure.keyvault.certificates import CertificateClient
from azure.keyvault.secrets import SecretClient

from ssl_binder.auth import get_credential as _get_credential
from ssl_binder.models import SecretValue

logger = logging.getLogger(__name__)


def get_secret(vault_url: str, name: str) -> SecretValue | None:
    """Fetch the current version of a secret, or None if the vault has no such secret."""
    client = SecretClient(vault_url, _get_credential())
    try:
        secret = client.get_secret(name)
    except ResourceNotFoundError:
        logger.warning("Secret '%s' not found in %s", name, vault_url)
        return None

    logger.info("Fetched secret '%s' from %s", name, vault_url)
    return SecretValue(name=name, value=secret.value, content_type=secret.properties.content_type)


def get_certificate_thumbprint(vault_url: str, name: str) -> str | None:
    """Return the upper-case hex SHA-1 thumbprint of a certificate, or None if absent.

    App Service identifies certificates by this form of the thumbprint.
    """
    client = CertificateClient(vault_url, _get_credential())
    try:
        cert = client.get_certificate(name)
    except ResourceNotFoundError:
        logger.warning("Certificate '%s' not found in %s", name, vault_url)
        return None

    raw = cert.properties.x509_thumbprint
    if not raw:
        logger.warning("Certificate '%s' in %s has no thumbprint", name, vault_url)
        return None
    thumbprint = raw.hex().upper()
    logger.info("Certificate '%s' has thumbprint %s", name, thumbprint)
    return thumbprint


def import_certificate(vault_url: str, name: str, pfx_path: Path, password: str) -> str | None:
    """Import a password-protected PFX file into a vault, creating a new version.

    Returns the id of the imported certificate version. Exceptions propagate
    to the caller.
    """
    client = CertificateClient(vault_url, _get_credential())
    cert = client.import_certificate(
        certificate_name=name,
        certificate_bytes=Path(pfx_path).read_bytes(),
        password=password,
    )
    logger.info("Imported certificate '%s' into %s", name, vault_url)
    return cert.id


def delete_certificate(vault_url: str, name: str) -> None:
    """Delete a certificate, waiting for the (soft) delete to complete."""
    client = CertificateClient(vault_url, _get_credential())
    client.begin_delete_certificate(name).wait()
    logger.info("Deleted certificate '%s' from %s", name, vault_url)
