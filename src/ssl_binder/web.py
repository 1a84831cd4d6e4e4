"""App Service hostname binding via azure-mgmt-web."""

from __future__ import annotations

import logging

from azure.mgmt.web import WebSiteManagementClient
from azure.mgmt.web.models import HostNameBinding, SslState

from ssl_binder.auth import get_credential as _get_credential
from ssl_binder.config import AppConfig
from ssl_binder.models import SslBindingRequest

logger = logging.getLogger(__name__)


def create_sni_binding(config: AppConfig, request: SslBindingRequest) -> HostNameBinding:
    """Bind the certificate identified by ``request.thumbprint`` to the hostname, SNI mode.

    Returns the binding as the platform reports it.
    """
    client = WebSiteManagementClient(_get_credential(), config.subscription_id)
    binding = HostNameBinding(ssl_state=SslState(request.ssl_state), thumbprint=request.thumbprint)
    result = client.web_apps.create_or_update_host_name_binding(
        resource_group_name=request.resource_group,
        name=request.app_name,
        host_name=request.hostname,
        host_name_binding=binding,
    )
    logger.info(
        "Bound %s on '%s' to certificate %s (%s)",
        request.hostname,
        request.app_name,
        request.thumbprint,
        request.ssl_state,
    )
    return result
