"""Resource Manager lookups — locate the web app and enumerate its resource group."""

from __future__ import annotations

import logging
import re

from azure.core.exceptions import ResourceNotFoundError
from azure.mgmt.resource import ResourceManagementClient

from ssl_binder.auth import get_credential as _get_credential
from ssl_binder.config import AppConfig
from ssl_binder.models import GroupResource, WebApp

logger = logging.getLogger(__name__)

WEB_SITE_TYPE = "Microsoft.Web/sites"

_RESOURCE_GROUP_RE = re.compile(r"/resourceGroups/([^/]+)", re.IGNORECASE)


def _resource_group_from_id(resource_id: str | None) -> str | None:
    """Extract the resource group segment from an ARM resource id."""
    if not resource_id:
        return None
    match = _RESOURCE_GROUP_RE.search(resource_id)
    return match.group(1) if match else None


def _client(config: AppConfig) -> ResourceManagementClient:
    return ResourceManagementClient(_get_credential(), config.subscription_id)


def find_web_apps(config: AppConfig, app_name: str) -> list[WebApp]:
    """Return every App Service site in the subscription named ``app_name``.

    The caller decides what zero or several matches mean.
    """
    client = _client(config)
    # Single quotes inside an OData literal are escaped by doubling
    escaped = app_name.replace("'", "''")
    query = f"resourceType eq '{WEB_SITE_TYPE}' and name eq '{escaped}'"

    apps: list[WebApp] = []
    for resource in client.resources.list(filter=query):
        # ARM resource names compare case-insensitively
        if resource.name.lower() != app_name.lower():
            continue
        identity = resource.identity
        apps.append(
            WebApp(
                id=resource.id,
                name=resource.name,
                resource_group=_resource_group_from_id(resource.id),
                principal_id=identity.principal_id if identity else None,
            )
        )

    logger.info("Found %d web app(s) named '%s'", len(apps), app_name)
    return apps


def list_group_resources(config: AppConfig, resource_group: str) -> list[GroupResource] | None:
    """List the resources of a group in enumeration order, or None if the group does not exist."""
    client = _client(config)
    try:
        resources = [
            GroupResource(id=r.id, name=r.name, type=r.type)
            for r in client.resources.list_by_resource_group(resource_group)
        ]
    except ResourceNotFoundError:
        logger.warning("Resource group '%s' not found", resource_group)
        return None

    logger.info("Resource group '%s' holds %d resource(s)", resource_group, len(resources))
    return resources
