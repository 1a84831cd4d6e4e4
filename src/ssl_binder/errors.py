"""Failures that abort a binding run."""


class BindingError(Exception):
    """Base class for errors that stop the binding procedure."""


class ApplicationNotFound(BindingError):
    pass


class AmbiguousApplication(BindingError):
    """More than one web app in the subscription carries the requested name."""


class ResourceGroupNotFound(BindingError):
    pass


class CertificateNotFound(BindingError):
    pass


class PasswordNotFound(BindingError):
    pass


class NoAccessibleVaultFound(BindingError):
    """No vault in the app's resource group grants the app's managed identity access."""


class InvalidCertificateSecret(BindingError):
    """The certificate secret cannot be decoded into a certificate with its private key."""
