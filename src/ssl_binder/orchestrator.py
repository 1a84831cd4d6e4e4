"""Binding procedure — from a source vault certificate to an SNI binding on a web app.

The run is linear and fail-fast: every lookup that comes back empty raises a
:class:`~ssl_binder.errors.BindingError` and nothing after it executes.
Completed side effects are not rolled back, except that a certificate
imported into the destination vault can be deleted when the final binding
call fails and ``ORPHANED_CERTIFICATE_POLICY=delete``.
"""

from __future__ import annotations

import logging

from ssl_binder.config import AppConfig
from ssl_binder.errors import (
    AmbiguousApplication,
    ApplicationNotFound,
    CertificateNotFound,
    NoAccessibleVaultFound,
    PasswordNotFound,
    ResourceGroupNotFound,
)
from ssl_binder.keyvault import delete_certificate, get_certificate_thumbprint, get_secret, import_certificate
from ssl_binder.models import BindingResult, DestinationVault, SslBindingRequest, WebApp
from ssl_binder.pfx import repackage_certificate, scratch_file
from ssl_binder.resources import find_web_apps, list_group_resources
from ssl_binder.vaults import find_accessible_vault
from ssl_binder.web import create_sni_binding

logger = logging.getLogger(__name__)

PASSWORD_SUFFIX = "-password"


def password_secret_name(certificate_name: str) -> str:
    """Name of the secret holding a certificate's PFX password."""
    return f"{certificate_name}{PASSWORD_SUFFIX}"


def _resolve_app(config: AppConfig, app_name: str) -> WebApp:
    apps = find_web_apps(config, app_name)
    if not apps:
        raise ApplicationNotFound(f"Web app '{app_name}' not found in subscription {config.subscription_id}")
    if len(apps) > 1:
        ids = ", ".join(a.id for a in apps)
        raise AmbiguousApplication(f"Web app name '{app_name}' matches {len(apps)} resources: {ids}")
    return apps[0]


def _handle_orphan(config: AppConfig, vault: DestinationVault, certificate_name: str) -> None:
    """Apply the orphan policy to a certificate imported before the binding failed."""
    if config.orphaned_certificate_policy == "delete":
        logger.warning("Binding failed — deleting imported certificate '%s' from '%s'", certificate_name, vault.name)
        try:
            delete_certificate(vault.vault_uri, certificate_name)
        except Exception:
            logger.exception("Could not delete orphaned certificate '%s' from '%s'", certificate_name, vault.name)
        return
    logger.warning(
        "Binding failed — certificate '%s' remains imported in vault '%s' without a binding",
        certificate_name,
        vault.name,
    )


def bind_certificate(
    config: AppConfig,
    app_name: str,
    hostname: str,
    vault_name: str,
    certificate_name: str,
) -> BindingResult:
    """Bind ``certificate_name`` from ``vault_name`` to ``hostname`` on web app ``app_name``.

    Inputs are passed through unvalidated; the calling surface ensures they
    are non-empty.

    Raises:
        ApplicationNotFound / AmbiguousApplication: the app name resolves to zero or several sites.
        ResourceGroupNotFound: the app's resource group cannot be listed.
        CertificateNotFound: the source vault lacks the certificate secret or object.
        PasswordNotFound: the source vault lacks ``<certificate_name>-password``.
        NoAccessibleVaultFound: no vault in the group grants the app's identity access.
    """
    app = _resolve_app(config, app_name)
    logger.info("Resolved web app '%s' in resource group '%s'", app.name, app.resource_group)

    resources = list_group_resources(config, app.resource_group) if app.resource_group else None
    if resources is None:
        raise ResourceGroupNotFound(f"Resource group for web app '{app.name}' could not be resolved ({app.id})")

    source_url = config.vault_url(vault_name)
    secret = get_secret(source_url, certificate_name)
    if secret is None:
        raise CertificateNotFound(f"Certificate secret '{certificate_name}' not found in vault '{vault_name}'")
    thumbprint = get_certificate_thumbprint(source_url, certificate_name)
    if thumbprint is None:
        raise CertificateNotFound(f"Certificate '{certificate_name}' not found in vault '{vault_name}'")

    password_name = password_secret_name(certificate_name)
    password = get_secret(source_url, password_name)
    if password is None or not password.value:
        raise PasswordNotFound(f"Password secret '{password_name}' not found in vault '{vault_name}'")

    if not app.principal_id:
        raise NoAccessibleVaultFound(f"Web app '{app.name}' has no managed identity")
    destination = find_accessible_vault(config, app.resource_group, resources, app.principal_id)
    if destination is None:
        raise NoAccessibleVaultFound(
            f"No vault in resource group '{app.resource_group}' grants web app '{app.name}' "
            f"(principal {app.principal_id}) access"
        )

    pfx = repackage_certificate(secret, password.value, friendly_name=certificate_name)
    with scratch_file(pfx, config.scratch_dir) as path:
        imported_id = import_certificate(destination.vault_uri, certificate_name, path, password.value)

    request = SslBindingRequest(
        resource_group=app.resource_group,
        app_name=app.name,
        thumbprint=thumbprint,
        hostname=hostname,
    )
    try:
        binding = create_sni_binding(config, request)
    except Exception:
        _handle_orphan(config, destination, certificate_name)
        raise

    # The SDK returns an SslState enum member or a plain string depending on deserialization
    state = binding.ssl_state
    return BindingResult(
        app_name=app.name,
        resource_group=app.resource_group,
        hostname=hostname,
        thumbprint=thumbprint,
        destination_vault=destination.name,
        imported_certificate_id=imported_id,
        binding_name=binding.name,
        ssl_state=getattr(state, "value", state),
    )
