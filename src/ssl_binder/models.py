"""Data classes for a single binding run."""

from __future__ import annotations

from dataclasses import dataclass, field

SNI_ENABLED = "SniEnabled"


@dataclass(frozen=True)
class WebApp:
    """An App Service site resolved from Resource Manager."""

    id: str
    name: str
    resource_group: str | None
    principal_id: str | None = None


@dataclass(frozen=True)
class GroupResource:
    """One resource in a resource group listing."""

    id: str
    name: str
    type: str


@dataclass(frozen=True)
class VaultAccessPolicy:
    """An access policy entry, tagged with the vault that holds it."""

    vault_name: str
    object_id: str


@dataclass(frozen=True)
class DestinationVault:
    """The vault the app's managed identity can read, identified by its resource."""

    id: str
    name: str
    resource_group: str
    vault_uri: str


@dataclass(frozen=True)
class SecretValue:
    """A secret read from a vault. ``value`` must never be logged."""

    name: str
    value: str
    content_type: str | None = None

    def __repr__(self) -> str:
        return f"SecretValue(name={self.name!r}, content_type={self.content_type!r})"


@dataclass(frozen=True)
class SslBindingRequest:
    """Parameters of the hostname binding; ``ssl_state`` is always SNI."""

    resource_group: str
    app_name: str
    thumbprint: str
    hostname: str
    ssl_state: str = field(default=SNI_ENABLED, init=False)


@dataclass(frozen=True)
class BindingResult:
    """Outcome of a successful binding run."""

    app_name: str
    resource_group: str
    hostname: str
    thumbprint: str
    destination_vault: str
    imported_certificate_id: str | None
    binding_name: str | None
    ssl_state: str | None

    def to_dict(self) -> dict:
        return {
            "app_name": self.app_name,
            "resource_group": self.resource_group,
            "hostname": self.hostname,
            "thumbprint": self.thumbprint,
            "destination_vault": self.destination_vault,
            "imported_certificate_id": self.imported_certificate_id,
            "binding_name": self.binding_name,
            "ssl_state": self.ssl_state,
        }

